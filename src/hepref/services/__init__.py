"""Service layer for resolving HEPData references."""

from .archive import ArchiveUnpacker, UnpackResult, ZipArchiveUnpacker
from .cache import CachedRecord, CacheEntry, CacheState, RecordCache
from .endpoints import RECORD_BASE_URL, record_endpoint
from .fetcher import RecordDownloader
from .layout import (
    SOURCE_LAYOUTS,
    SourceLayout,
    expected_record_location,
    expected_resource_location,
    layout_for,
)
from .local import LocalResolver
from .resolver import ReferenceResolver, resolve_reference
from .versions import VersionResolver, resolve_version

__all__ = [
    "ArchiveUnpacker",
    "UnpackResult",
    "ZipArchiveUnpacker",
    "CachedRecord",
    "CacheEntry",
    "CacheState",
    "RecordCache",
    "RECORD_BASE_URL",
    "record_endpoint",
    "RecordDownloader",
    "SOURCE_LAYOUTS",
    "SourceLayout",
    "expected_record_location",
    "expected_resource_location",
    "layout_for",
    "LocalResolver",
    "ReferenceResolver",
    "resolve_reference",
    "VersionResolver",
    "resolve_version",
]
