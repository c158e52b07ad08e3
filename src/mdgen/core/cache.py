"""Cache key contract for incremental generation.

A generated unit is a pure function of the fields of CacheKey. The build
driver stores CacheKey.digest next to each generated file and regenerates a
document only when the digest changes. The ProjectConfig fingerprint is part
of every key, so a config change invalidates every document. The renderer
preset is keyed too since it shapes the embedded markup.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from mdgen.core.models import Document, GenerationMode, ImportEntry, ProjectConfig
from mdgen.core.utils.hashing import sha256_parts
from mdgen.core.utils.paths import normalize


CACHE_VERSION = "1"     # bump when generator output changes shape


class CacheKey(BaseModel):
    model_config = ConfigDict(frozen=True)
    path:          str
    content_hash:  str
    config_hash:   str
    import_hashes: tuple[str, ...]
    mode:          GenerationMode
    renderer:      str = ""

    @property
    def digest(self) -> str:
        return sha256_parts([
            CACHE_VERSION,
            self.path,
            self.content_hash,
            self.config_hash,
            *self.import_hashes,
            self.mode.value,
            self.renderer,
        ])


def cache_key(
    document: Document,
    config: ProjectConfig,
    imports: Iterable[ImportEntry],
    mode: GenerationMode,
    renderer: str = "",
    ) -> CacheKey:
    """Build the key for one document; imports are the entries applicable to it (any order)."""
    return CacheKey(
        path=normalize(document.path, "/"),
        content_hash=document.content_hash,
        config_hash=config.fingerprint(),
        import_hashes=tuple(sorted({e.fingerprint for e in imports})),
        mode=mode,
        renderer=renderer,
    )
