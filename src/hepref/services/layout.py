"""On-disk layout of cached records.

Every source type maps to exactly one :class:`SourceLayout`; path and URL
derivation never branches on the source type anywhere else.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hepref.models import RefType, ResourceReference

SUBMISSION_DOCUMENT = "submission.yaml"
SUBMISSION_ARCHIVE = "submission.zip"


@dataclass(frozen=True, slots=True)
class SourceLayout:
    """Path template and endpoint suffix for one source type."""

    subdir: str
    record_template: str
    endpoint_template: str
    versioned: bool = True
    downloadable: bool = True


SOURCE_LAYOUTS: dict[RefType, SourceLayout] = {
    RefType.HEPDATA: SourceLayout(
        subdir="hepdata",
        record_template="{recordid}/HEPData-{recordid}-v{recordvers}",
        endpoint_template="{recordid}",
    ),
    RefType.HEPDATA_SANDBOX: SourceLayout(
        subdir="hepdata-sandbox",
        record_template="{recordid}/HEPData-{recordid}-v{recordvers}",
        endpoint_template="sandbox/{recordid}",
    ),
    RefType.INSPIREHEP: SourceLayout(
        subdir="INSPIREHEP",
        record_template="{recordid}",
        endpoint_template="ins{recordid}",
        versioned=False,
        downloadable=False,
    ),
}


def layout_for(ref: ResourceReference) -> SourceLayout:
    return SOURCE_LAYOUTS[ref.reftype]


def expected_record_location(ref: ResourceReference, cache_root: Path) -> Path:
    """Directory the unpacked record lives in under ``cache_root``."""
    layout = layout_for(ref)
    relative = layout.record_template.format(
        recordid=ref.recordid, recordvers=ref.recordvers
    )
    return Path(cache_root) / layout.subdir / relative


def expected_resource_location(ref: ResourceReference, cache_root: Path) -> Path:
    """File the reference points at; defaults to the submission document."""
    name = ref.resourcename or SUBMISSION_DOCUMENT
    return expected_record_location(ref, cache_root) / name


def yaml_fallback_location(path: Path) -> Path:
    # Table names are stored as "<name>.yaml"; append, don't replace a suffix.
    return path.with_name(path.name + ".yaml")


def download_location(ref: ResourceReference, cache_root: Path) -> Path:
    return expected_record_location(ref, cache_root) / SUBMISSION_ARCHIVE
