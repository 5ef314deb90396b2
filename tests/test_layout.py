from pathlib import Path

from hepref.models import RefType, ResourceReference
from hepref.services.endpoints import record_endpoint
from hepref.services.layout import (
    SOURCE_LAYOUTS,
    expected_record_location,
    expected_resource_location,
    yaml_fallback_location,
)


def test_every_source_type_has_a_layout() -> None:
    assert set(SOURCE_LAYOUTS) == set(RefType)


def test_hepdata_record_location() -> None:
    ref = ResourceReference(recordid=12345, recordvers=3)
    root = Path("/cache")
    assert expected_record_location(ref, root) == Path("/cache/hepdata/12345/HEPData-12345-v3")
    assert expected_record_location(ref, root) == expected_record_location(ref, root)


def test_sandbox_and_inspire_locations() -> None:
    root = Path("/cache")
    sandbox = ResourceReference(reftype="hepdata-sandbox", recordid="77", recordvers=1)
    inspire = ResourceReference(reftype="inspirehep", recordid="1234")
    assert expected_record_location(sandbox, root) == Path(
        "/cache/hepdata-sandbox/77/HEPData-77-v1"
    )
    assert expected_record_location(inspire, root) == Path("/cache/INSPIREHEP/1234")


def test_resource_location_defaults_to_submission_document() -> None:
    root = Path("/cache")
    ref = ResourceReference(recordid=1, recordvers=2)
    named = ref.model_copy(update={"resourcename": "Table 1"})
    assert expected_resource_location(ref, root).name == "submission.yaml"
    assert expected_resource_location(named, root) == Path(
        "/cache/hepdata/1/HEPData-1-v2/Table 1"
    )


def test_yaml_fallback_appends_suffix() -> None:
    assert yaml_fallback_location(Path("/a/Table 1")) == Path("/a/Table 1.yaml")
    assert yaml_fallback_location(Path("/a/data.csv")) == Path("/a/data.csv.yaml")


def test_record_endpoints() -> None:
    assert (
        record_endpoint(ResourceReference(recordid=12345))
        == "https://www.hepdata.net/record/12345"
    )
    assert (
        record_endpoint(ResourceReference(reftype="hepdata-sandbox", recordid=9))
        == "https://www.hepdata.net/record/sandbox/9"
    )
    assert (
        record_endpoint(ResourceReference(reftype="inspirehep", recordid=1234))
        == "https://www.hepdata.net/record/ins1234"
    )


def test_record_endpoint_with_custom_base() -> None:
    ref = ResourceReference(recordid=5)
    assert record_endpoint(ref, "http://mirror.local/record") == "http://mirror.local/record/5"
