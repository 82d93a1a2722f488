"""Sequence catalog: lists and filters the pictograph PNGs of a dictionary directory.

Expected layout::

    root/
        CAKE/
            CAKE_ver1.png
            CAKE_ver2.png
        MOON/
            MOON_ver1.png

Each catalog is an explicitly constructed instance. It scans lazily, caches
the result on the instance, and drops the cache on ``invalidate()``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from .codec import CodecResult, read_sequence_file
from .types import SequenceData, SequenceMeta

logger = logging.getLogger(__name__)

Decoder = Callable[[Path], CodecResult]

_VERSION_RE = re.compile(r"_ver(\d+)\.png$", re.IGNORECASE)


class LengthBucket(Enum):
    SHORT = "Short (≤5 steps)"
    MEDIUM = "Medium (6-10 steps)"
    LONG = "Long (>10 steps)"

    @classmethod
    def for_count(cls, step_count: int) -> LengthBucket:
        if step_count <= 5:
            return cls.SHORT
        elif step_count <= 10:
            return cls.MEDIUM
        return cls.LONG


@dataclass
class CatalogEntry:
    id: str
    name: str
    file_path: Path
    sequence: SequenceData
    versions: list[str] = field(default_factory=list)

    @property
    def metadata(self) -> SequenceMeta:
        return self.sequence.meta

    @property
    def step_count(self) -> int:
        """Number of moving steps; the start position does not count."""
        return max(0, len(self.sequence.steps) - 1)

    @property
    def length(self) -> LengthBucket:
        return LengthBucket.for_count(self.step_count)

    def categories(self) -> set[str]:
        meta = self.metadata
        cats = {self.length.value}
        if meta.level is not None:
            cats.add(f"Level {meta.level}")
        if meta.prop_type:
            cats.add(meta.prop_type)
        if meta.grid_mode:
            cats.add(meta.grid_mode)
        return cats

    def matches_text(self, query: str) -> bool:
        q = query.strip().lower()
        if not q:
            return True
        fields = (self.name, self.metadata.word, self.metadata.author)
        return any(f and q in f.lower() for f in fields)


def _version_sort_key(path: Path) -> tuple[int, str]:
    m = _VERSION_RE.search(path.name)
    return (int(m.group(1)) if m else 0, path.name)


class SequenceCatalog:
    def __init__(self, root: str | Path, decoder: Decoder = read_sequence_file):
        self.root = Path(root)
        self._decoder = decoder
        self._entries: list[CatalogEntry] | None = None
        self.failures: dict[str, str] = {}

    def invalidate(self) -> None:
        """Drop cached entries; the next access rescans the directory."""
        self._entries = None
        self.failures = {}

    def refresh(self) -> list[CatalogEntry]:
        self.invalidate()
        return self.entries()

    def entries(self) -> list[CatalogEntry]:
        if self._entries is None:
            self._entries = self._scan()
        return self._entries

    def _scan(self) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        if not self.root.is_dir():
            logger.warning("Catalog root %s is not a directory", self.root)
            return entries

        for folder in sorted(p for p in self.root.iterdir() if p.is_dir()):
            versions = sorted(folder.glob("*.png"), key=_version_sort_key)
            if not versions:
                continue
            primary = versions[0]
            result = self._decoder(primary)
            if not result.success or result.data is None:
                reason = result.error.value if result.error else "unknown error"
                logger.warning("Skipping %s: %s", primary, reason)
                self.failures[folder.name] = reason
                continue
            entries.append(CatalogEntry(
                id=folder.name,
                name=folder.name,
                file_path=primary,
                sequence=result.data,
                versions=[p.name for p in versions],
            ))

        logger.info("Catalog %s: %d sequences, %d skipped",
                    self.root, len(entries), len(self.failures))
        return sorted(entries, key=lambda e: e.name.lower())

    def get(self, entry_id: str) -> CatalogEntry | None:
        for entry in self.entries():
            if entry.id == entry_id:
                return entry
        return None

    def categories(self) -> list[str]:
        cats: set[str] = set()
        for entry in self.entries():
            cats |= entry.categories()
        return sorted(cats)

    def search(self, query: str = "", category: str | None = None) -> list[CatalogEntry]:
        """Free-text search over name/word/author, optionally within a category.

        ``category`` is one of the strings returned by ``categories()``;
        ``None`` or ``"All"`` disables the category filter.
        """
        items = self.entries()
        if category and category != "All":
            items = [e for e in items if category in e.categories()]
        return [e for e in items if e.matches_text(query)]

    def filter(
        self,
        word: str | None = None,
        author: str | None = None,
        length: LengthBucket | None = None,
        prop_type: str | None = None,
        grid_mode: str | None = None,
        level: int | str | None = None,
    ) -> list[CatalogEntry]:
        """Structured filter; every given criterion must match.

        ``word`` and ``author`` are case-insensitive substring matches, the
        rest are exact (prop type and grid mode ignore case).
        """
        def _contains(value: str | None, needle: str) -> bool:
            return bool(value) and needle.lower() in value.lower()

        def _same(value: str | None, expected: str) -> bool:
            return bool(value) and value.lower() == expected.lower()

        result = []
        for e in self.entries():
            meta = e.metadata
            if word is not None and not (_contains(meta.word, word) or _contains(e.name, word)):
                continue
            if author is not None and not _contains(meta.author, author):
                continue
            if length is not None and e.length != length:
                continue
            if prop_type is not None and not _same(meta.prop_type, prop_type):
                continue
            if grid_mode is not None and not _same(meta.grid_mode, grid_mode):
                continue
            if level is not None and str(meta.level) != str(level):
                continue
            result.append(e)
        return result
