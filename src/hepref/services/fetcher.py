"""Download of original record archives from HEPData."""

from __future__ import annotations

from pathlib import Path

import httpx
import structlog

from hepref.errors import RemoteError
from hepref.models import ResourceReference
from hepref.settings import Settings
from hepref.utils import describe_content_type, media_type

from .endpoints import RECORD_BASE_URL, record_endpoint

logger = structlog.get_logger(__name__)

ZIP_MEDIA_TYPE = "application/zip"


class RecordDownloader:
    """Streams a record's ``format=original`` archive to a local file."""

    def __init__(self, client: httpx.Client, settings: Settings | None = None) -> None:
        self._client = client
        self._base_url = settings.base_url if settings else RECORD_BASE_URL

    def download(self, ref: ResourceReference, target: Path) -> Path:
        endpoint = record_endpoint(ref, self._base_url)
        target.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("download.start", ref=str(ref), url=endpoint, target=str(target))
        # The target is opened first; a failed response leaves it behind.
        with target.open("wb") as fh:
            with self._client.stream(
                "GET", endpoint, params={"format": "original"}
            ) as response:
                logger.debug("download.response", status=response.status_code)
                _check_response(response, endpoint)
                for chunk in response.iter_bytes():
                    fh.write(chunk)
        logger.info("download.finished", ref=str(ref), target=str(target))
        return target


def _check_response(response: httpx.Response, endpoint: str) -> None:
    if response.status_code != 200:
        raise RemoteError(
            f"GET {endpoint} response code: {response.status_code}",
            status_code=response.status_code,
        )
    content_type = response.headers.get("content-type")
    if media_type(content_type) != ZIP_MEDIA_TYPE:
        raise RemoteError(
            f"GET {endpoint} response content-type: "
            f"{describe_content_type(content_type)}, expected \"{ZIP_MEDIA_TYPE}\"",
            status_code=response.status_code,
            content_type=content_type,
        )
