"""Tests for the catalog report command line."""
from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from src.catalog_graph import cli
from src.catalog_graph.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    for name in ("SERVICE_METADATA_PATH", "SERVICE_METADATA_URL", "TOP_N_LIMIT"):
        monkeypatch.delenv(name, raising=False)


class TestReportCommand:
    def test_json_output(self, metadata_file) -> None:
        result = runner.invoke(app, [str(metadata_file), "--json", "--limit", "2"])
        assert result.exit_code == 0

        payload = json.loads(result.output)
        node_ids = [n["id"] for n in payload["graph"]["nodes"]]
        assert "user-db" in node_ids
        top = payload["analytics"]["top_by_dependency_consumers"]
        assert [r["id"] for r in top] == ["auth", "metrics-sink"]

    def test_table_output(self, metadata_file) -> None:
        result = runner.invoke(app, [str(metadata_file)])
        assert result.exit_code == 0
        assert "Most depended upon" in result.output
        assert "auth" in result.output

    def test_path_from_environment(self, metadata_file, monkeypatch) -> None:
        monkeypatch.setenv("SERVICE_METADATA_PATH", str(metadata_file))
        result = runner.invoke(app, ["--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["graph"]["nodes"]

    def test_missing_file_exits_non_zero(self, tmp_path) -> None:
        result = runner.invoke(app, [str(tmp_path / "absent.json")])
        assert result.exit_code == 1
        assert "error" in result.output

    def test_limit_must_be_positive(self, metadata_file) -> None:
        result = runner.invoke(app, [str(metadata_file), "--limit", "0"])
        assert result.exit_code != 0

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--json" in result.output
