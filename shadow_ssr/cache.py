# File: shadow_ssr/cache.py
"""shadow_ssr.cache: content cache for component resources keyed by absolute path."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

from shadow_ssr.exceptions import ResourceNotFound
from shadow_ssr.logger import logger

__all__ = ["CachedFile", "ResourceCache"]


@dataclass(frozen=True, slots=True)
class CachedFile:
    """A resource file read once and kept verbatim."""

    path: Path
    content: str


class ResourceCache:
    """Memoizes resource files for the lifetime of the cache.

    Entries are never invalidated: templates, styles and scripts of a
    deployment are treated as immutable. Hosts that reload resources call
    :meth:`clear` or build a fresh cache.
    """

    def __init__(self) -> None:
        self._entries: Dict[Path, CachedFile] = {}

    @staticmethod
    def _key(path: Union[str, Path]) -> Path:
        return Path(path).expanduser().absolute()

    def load(self, path: Union[str, Path]) -> str:
        """Return the text of *path*, reading the file only on the first call."""
        key = self._key(path)
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached.content

        try:
            content = key.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not load resource %s: %s", key, exc)
            raise ResourceNotFound(key, str(exc)) from exc

        self._entries[key] = CachedFile(path=key, content=content)
        logger.debug("Cached %d characters from %s", len(content), key)
        return content

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self._key(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
