"""Shared fixtures for core unit tests"""

import pytest

from mdgen.core.models import Document, ImportEntry, ProjectConfig


SAMPLE_MD = """\
---
route: /blog/post
title: My "Post"
using: [System.Text, MyApp.Shared]
layout: MainLayout
---

# Heading 1

A paragraph with an [external link](https://example.com) and an [internal one](/docs).
"""

PLAIN_MD = """\
# No header

Just a body.
"""


@pytest.fixture(name="config")
def config_fixture():
    return ProjectConfig(root_namespace="MyApp", project_root="/proj", default_base_type="Base")


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return Document(path="/proj/Pages/Blog/Post.md", text=SAMPLE_MD)


@pytest.fixture(name="plain_doc")
def plain_doc_fixture():
    return Document(path="/proj/Pages/Plain.md", text=PLAIN_MD)


@pytest.fixture(name="entries")
def entries_fixture():
    """Import files at the project root, under Pages, and in an unrelated directory."""
    return [
        ImportEntry(path="/proj/_Imports.razor", text="@using MyApp.Components\n"),
        ImportEntry(path="/proj/Pages/_Imports.razor", text="@using MyApp.Pages.Shared;\n"),
        ImportEntry(path="/proj/Admin/_Imports.razor", text="@using MyApp.Admin\n"),
    ]


@pytest.fixture(name="fake_render")
def fake_render_fixture():
    """Deterministic stand-in for the markdown renderer."""
    return lambda text: f"<p>{text.strip()}</p>"
