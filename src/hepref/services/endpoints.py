"""Remote record URLs."""

from __future__ import annotations

from hepref.models import ResourceReference
from hepref.settings import DEFAULT_BASE_URL

from .layout import layout_for

RECORD_BASE_URL = DEFAULT_BASE_URL


def record_endpoint(ref: ResourceReference, base_url: str = RECORD_BASE_URL) -> str:
    """Return the HEPData record URL for ``ref``."""
    suffix = layout_for(ref).endpoint_template.format(recordid=ref.recordid)
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url + suffix
