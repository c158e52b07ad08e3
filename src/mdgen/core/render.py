"""Markdown rendering and post-render markup passes"""

import re
from functools import lru_cache
from typing import Callable

from markdown_it import MarkdownIt


Renderer = Callable[[str], str]

EXTERNAL_HREF_RE = re.compile(r'^[a-z][a-z0-9+.-]*://')
ANCHOR_RE = re.compile(r'<a\b([^>]*)>', re.IGNORECASE)
HREF_RE = re.compile(r'\bhref\s*=\s*(?:"([^"]*)"|\'([^\']*)\')', re.IGNORECASE)
TARGET_RE = re.compile(r'\btarget\s*=', re.IGNORECASE)


@lru_cache(maxsize=None)
def make_renderer(preset: str = 'gfm-like') -> Renderer:
    """Return a markdown-to-HTML renderer for the given MarkdownIt preset name (shared per preset)."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    return md.render


def _open_external(m: re.Match) -> str:
    attrs = m.group(1)
    href = HREF_RE.search(attrs)
    if not href or TARGET_RE.search(attrs) or attrs.rstrip().endswith('/'):
        return m.group(0)
    url = href.group(1) if href.group(1) is not None else href.group(2)
    if not EXTERNAL_HREF_RE.match(url):
        return m.group(0)
    return f'<a{attrs} target="_blank">'


def augment_external_links(markup: str) -> str:
    """Open absolute-URI links ('scheme://...') in a new browsing context.

    Relative, fragment and scheme-less links are left untouched, as are
    anchors that already carry a target.
    """
    return ANCHOR_RE.sub(_open_external, markup)
