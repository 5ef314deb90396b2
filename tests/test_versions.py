import httpx
import pytest

from hepref.errors import RemoteError
from hepref.models import ResourceReference
from hepref.services.versions import VersionResolver, resolve_version


def _client(handler, calls: list[httpx.Request]) -> httpx.Client:
    def record(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return handler(request)

    return httpx.Client(transport=httpx.MockTransport(record))


def test_versioned_reference_skips_lookup() -> None:
    calls: list[httpx.Request] = []
    client = _client(lambda request: httpx.Response(500), calls)
    ref = ResourceReference(recordid=1, recordvers=4)
    assert VersionResolver(client).resolve(ref) is ref
    assert calls == []


def test_lookup_pins_latest_version() -> None:
    calls: list[httpx.Request] = []
    client = _client(lambda request: httpx.Response(200, json={"version": 3}), calls)
    resolved = resolve_version(ResourceReference(recordid=12345), client)
    assert resolved.recordvers == 3
    assert len(calls) == 1
    assert calls[0].url.params["format"] == "json"
    assert calls[0].url.path == "/record/12345"


def test_lookup_rejects_error_status() -> None:
    client = _client(lambda request: httpx.Response(404), [])
    with pytest.raises(RemoteError, match="404") as info:
        VersionResolver(client).resolve(ResourceReference(recordid=1))
    assert info.value.status_code == 404


def test_lookup_rejects_wrong_content_type() -> None:
    client = _client(
        lambda request: httpx.Response(
            200, text="<html></html>", headers={"content-type": "text/html"}
        ),
        [],
    )
    with pytest.raises(RemoteError, match="text/html"):
        VersionResolver(client).resolve(ResourceReference(recordid=1))


def test_lookup_rejects_payload_without_version() -> None:
    client = _client(lambda request: httpx.Response(200, json={"record": {}}), [])
    with pytest.raises(RemoteError, match="version"):
        VersionResolver(client).resolve(ResourceReference(recordid=1))
