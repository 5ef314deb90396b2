"""Single entry point that turns a reference into a local file path."""

from __future__ import annotations

from pathlib import Path

import httpx
import structlog

from hepref.errors import RemoteError
from hepref.models import ResourceReference
from hepref.settings import Settings

from .archive import ArchiveUnpacker
from .fetcher import RecordDownloader
from .layout import layout_for
from .local import LocalResolver, RecordGuard
from .versions import VersionResolver

logger = structlog.get_logger(__name__)


class ReferenceResolver:
    """Coordinates version lookup, cache checks, and record downloads."""

    def __init__(
        self,
        client: httpx.Client,
        settings: Settings | None = None,
        *,
        unpacker: ArchiveUnpacker | None = None,
        guard: RecordGuard | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._versions = VersionResolver(client, self._settings)
        self._local = LocalResolver(
            RecordDownloader(client, self._settings), unpacker=unpacker, guard=guard
        )

    def resolve(
        self, ref: ResourceReference | str, cache_root: Path | None = None
    ) -> Path:
        if isinstance(ref, str):
            ref = ResourceReference.parse(ref)
        root = Path(cache_root) if cache_root is not None else self._settings.cache_root
        logger.debug("resolver.resolve", ref=str(ref), cache_root=str(root))
        try:
            if layout_for(ref).versioned:
                ref = self._versions.resolve(ref)
            return self._local.ensure_local_path(ref, root)
        except httpx.HTTPError as exc:
            raise RemoteError(f"request for {ref} failed: {exc}") from exc


def resolve_reference(
    ref: ResourceReference | str,
    cache_root: Path | None = None,
    *,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> Path:
    """Resolve ``ref`` under ``cache_root``, opening a client if none is given."""
    settings = settings or Settings.load()
    if client is not None:
        return ReferenceResolver(client, settings).resolve(ref, cache_root)
    with httpx.Client(timeout=settings.timeout, follow_redirects=True) as owned:
        return ReferenceResolver(owned, settings).resolve(ref, cache_root)
