"""Latest-version lookup against the HEPData record service."""

from __future__ import annotations

import httpx
import structlog

from hepref.errors import RemoteError
from hepref.models import ResourceReference
from hepref.settings import Settings
from hepref.utils import describe_content_type, media_type

from .endpoints import RECORD_BASE_URL, record_endpoint

logger = structlog.get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


class VersionResolver:
    """Pins unversioned references to the latest published record version."""

    def __init__(self, client: httpx.Client, settings: Settings | None = None) -> None:
        self._client = client
        self._base_url = settings.base_url if settings else RECORD_BASE_URL

    def resolve(self, ref: ResourceReference) -> ResourceReference:
        if ref.is_versioned:
            return ref
        endpoint = record_endpoint(ref, self._base_url)
        logger.debug("version.lookup", ref=str(ref), url=endpoint)
        response = self._client.get(endpoint, params={"format": "json"})
        logger.debug("version.response", status=response.status_code)
        if response.status_code != 200:
            raise RemoteError(
                f"GET {endpoint} response code: {response.status_code}",
                status_code=response.status_code,
            )
        content_type = response.headers.get("content-type")
        if media_type(content_type) != JSON_MEDIA_TYPE:
            raise RemoteError(
                f"GET {endpoint} response content-type: "
                f"{describe_content_type(content_type)}, expected \"{JSON_MEDIA_TYPE}\"",
                status_code=response.status_code,
                content_type=content_type,
            )
        version = _extract_version(response, endpoint)
        resolved = ref.with_version(version)
        logger.debug("version.resolved", ref=str(resolved))
        return resolved


def resolve_version(
    ref: ResourceReference,
    client: httpx.Client,
    base_url: str = RECORD_BASE_URL,
) -> ResourceReference:
    """Functional wrapper around :class:`VersionResolver`."""
    return VersionResolver(client, Settings(base_url=base_url)).resolve(ref)


def _extract_version(response: httpx.Response, endpoint: str) -> int:
    try:
        payload = response.json()
    except ValueError as exc:
        raise RemoteError(f"GET {endpoint} returned an unparseable body: {exc}") from exc
    version = payload.get("version") if isinstance(payload, dict) else None
    if isinstance(version, str) and version.strip().isdigit():
        version = int(version)
    # bool is an int subclass; a JSON true is not a version
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise RemoteError(f"GET {endpoint} returned no usable version: {version!r}")
    return version
