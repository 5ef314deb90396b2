"""Serve fully qualified references from the cache, downloading on a miss."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

import structlog

from hepref.errors import UnpackError, UnsupportedOperation
from hepref.models import ResourceReference

from .archive import ArchiveUnpacker, ZipArchiveUnpacker
from .cache import CacheState, RecordCache
from .fetcher import RecordDownloader
from .layout import download_location, expected_record_location, layout_for

logger = structlog.get_logger(__name__)

RecordGuard = Callable[[Path], AbstractContextManager]


def _no_guard(record_dir: Path) -> AbstractContextManager:
    return nullcontext()


class LocalResolver:
    """Maps a versioned reference onto a file under the cache root."""

    def __init__(
        self,
        downloader: RecordDownloader,
        unpacker: ArchiveUnpacker | None = None,
        guard: RecordGuard | None = None,
    ) -> None:
        self._downloader = downloader
        self._unpacker = unpacker or ZipArchiveUnpacker()
        self._guard = guard or _no_guard

    def ensure_local_path(self, ref: ResourceReference, cache_root: Path) -> Path:
        cache = RecordCache(cache_root)
        with self._guard(expected_record_location(ref, cache_root)):
            entry = cache.entry(ref)
            logger.debug(
                "cache.lookup",
                ref=str(ref),
                expected=str(entry.resource_path),
                state=entry.state.value,
            )
            if entry.hit_path is not None:
                logger.debug("cache.hit", path=str(entry.hit_path))
                return entry.hit_path

            if not layout_for(ref).downloadable:
                raise UnsupportedOperation(
                    f"Cannot fetch non-local {ref.reftype.value} resources: {ref}"
                )

            if entry.state is CacheState.PARTIAL:
                logger.info("cache.partial_download", record_dir=str(entry.key))

            archive = download_location(ref, cache_root)
            self._downloader.download(ref, archive)
            result = self._unpacker.unpack(archive, entry.key)
            if not result.ok:
                raise UnpackError(
                    f"unpacking {archive} reported error: {result.code}"
                    + (f" ({result.message})" if result.message else ""),
                    code=result.code,
                )
            archive.unlink()

        logger.debug("cache.resolved", path=str(entry.resource_path))
        return entry.resource_path
