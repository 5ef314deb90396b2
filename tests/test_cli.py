from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from hepref import cli

runner = CliRunner()


def _env(monkeypatch, cache_root: Path) -> None:
    monkeypatch.setenv("HEPREF_CACHE_ROOT", str(cache_root))
    monkeypatch.setenv("HEPREF_LOG_LEVEL", "WARNING")


def test_config_json_flag(tmp_path, monkeypatch):
    cache_root = tmp_path / "hepref-cache"
    _env(monkeypatch, cache_root)
    monkeypatch.setenv("HEPREF_TIMEOUT", "5")

    result = runner.invoke(cli.app, ["config", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert Path(payload["cache_root"]) == cache_root
    assert payload["timeout"] == 5.0
    assert payload["log_level"] == "WARNING"


def test_resolve_serves_cached_file(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)
    cached = tmp_path / "hepdata" / "12345" / "HEPData-12345-v2" / "submission.yaml"
    cached.parent.mkdir(parents=True)
    cached.write_text("cached")

    result = runner.invoke(cli.app, ["resolve", "hepdata:12345:v2", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert Path(payload["path"]) == cached
    assert payload["reference"] == "hepdata:12345:v2"


def test_resolve_uncached_inspire_reference_fails(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)

    result = runner.invoke(cli.app, ["resolve", "inspirehep:1234"])

    assert result.exit_code == 1


def test_locate_rejects_malformed_reference(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)

    result = runner.invoke(cli.app, ["locate", "hepdata:"])

    assert result.exit_code != 0


def test_cached_handles_empty_cache(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)

    result = runner.invoke(cli.app, ["cached"])

    assert result.exit_code == 0
    assert "No cached records found" in result.stdout


def test_cache_root_option_leaves_default_root_alone(tmp_path, monkeypatch):
    default_root = tmp_path / "default-root"
    other_root = tmp_path / "other-root"
    _env(monkeypatch, default_root)

    result = runner.invoke(cli.app, ["locate", "hepdata:1:v1", "--cache-root", str(other_root)])

    assert result.exit_code == 0
    assert other_root.is_dir()
    assert not default_root.exists()


def test_cached_lists_unversioned_records_with_plain_placeholder(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)
    record = tmp_path / "INSPIREHEP" / "1234" / "submission.yaml"
    record.parent.mkdir(parents=True)
    record.write_text("local")

    result = runner.invoke(cli.app, ["cached"])

    assert result.exit_code == 0
    assert "1234" in result.stdout
    assert "—" not in result.stdout


def test_locate_rejects_resource_outside_record(tmp_path, monkeypatch):
    _env(monkeypatch, tmp_path)

    result = runner.invoke(cli.app, ["locate", "hepdata:1:v1//etc/passwd"])

    assert result.exit_code == 2
