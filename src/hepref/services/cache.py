"""Cache entries keyed by record directory.

One record directory holds one unpacked record. The core never locks an
entry; callers that need exactly-once downloads wrap resolution in a guard
keyed by :attr:`CacheEntry.key`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hepref.models import RefType, ResourceReference

from .layout import (
    SOURCE_LAYOUTS,
    SUBMISSION_ARCHIVE,
    expected_record_location,
    expected_resource_location,
    yaml_fallback_location,
)

VERSIONED_DIR_PATTERN = re.compile(r"^HEPData-(?P<recordid>.+)-v(?P<recordvers>\d+)$")


class CacheState(str, Enum):
    MISSING = "missing"
    PRESENT = "present"
    YAML_FALLBACK = "yaml_fallback"
    PARTIAL = "partial"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: Path
    resource_path: Path
    state: CacheState
    hit_path: Path | None = None

    @property
    def is_hit(self) -> bool:
        return self.hit_path is not None


@dataclass(frozen=True, slots=True)
class CachedRecord:
    reftype: RefType
    recordid: str
    recordvers: int
    path: Path


class RecordCache:
    """Read-only view over the records stored under a cache root."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def entry(self, ref: ResourceReference) -> CacheEntry:
        """Classify the cache state of the resource ``ref`` points at."""
        record_dir = expected_record_location(ref, self._root)
        resource = expected_resource_location(ref, self._root)
        if resource.exists():
            return CacheEntry(record_dir, resource, CacheState.PRESENT, resource)
        fallback = yaml_fallback_location(resource)
        if fallback.exists():
            return CacheEntry(record_dir, resource, CacheState.YAML_FALLBACK, fallback)
        if (record_dir / SUBMISSION_ARCHIVE).exists():
            return CacheEntry(record_dir, resource, CacheState.PARTIAL)
        return CacheEntry(record_dir, resource, CacheState.MISSING)

    def records(self) -> Iterator[CachedRecord]:
        """Yield every record directory present under the root."""
        for reftype, layout in SOURCE_LAYOUTS.items():
            source_dir = self._root / layout.subdir
            if not source_dir.is_dir():
                continue
            for record_dir in sorted(p for p in source_dir.iterdir() if p.is_dir()):
                if not layout.versioned:
                    yield CachedRecord(reftype, record_dir.name, 0, record_dir)
                    continue
                for version_dir in sorted(p for p in record_dir.iterdir() if p.is_dir()):
                    match = VERSIONED_DIR_PATTERN.match(version_dir.name)
                    if not match or match.group("recordid") != record_dir.name:
                        continue
                    yield CachedRecord(
                        reftype,
                        record_dir.name,
                        int(match.group("recordvers")),
                        version_dir,
                    )
