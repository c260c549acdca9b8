"""Tests for the graph CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from infracascade.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestGraphStats:
    def test_json(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--catalog-dir", str(catalog_dir), "graph", "stats"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["nodes"] == 18
        assert data["edges"] == 23
        assert data["countries"] == 11
        assert data["builds"] == 1

    def test_rich(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["--catalog-dir", str(catalog_dir), "graph", "stats"])
        assert result.exit_code == 0
        assert "graph_stats" in result.stdout
        assert "pipelines" in result.stdout


@pytest.mark.usefixtures("_isolated_cwd")
class TestGraphNode:
    def test_json(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--catalog-dir", str(catalog_dir), "graph", "node", "cable:atlantic_1"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["node"]["id"] == "cable:atlantic_1"
        assert data["asset"]["id"] == "atlantic_1"
        assert {e["target"] for e in data["outgoing"]} == {"country:US", "country:ES"}

    def test_rich(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--catalog-dir", str(catalog_dir), "graph", "node", "country:JP"]
        )
        assert result.exit_code == 0, result.output
        assert "Depends on (4):" in result.stdout

    def test_depth_option(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        args = ["--json", "--catalog-dir", str(catalog_dir), "graph", "node"]
        result = cli_runner.invoke(cli, [*args, "chokepoint:hormuz_strait", "--depth", "1"])
        assert json.loads(result.stdout)["data"]["depth"] == 1

    def test_invalid_depth(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        args = ["--json", "--catalog-dir", str(catalog_dir), "graph", "node"]
        result = cli_runner.invoke(cli, [*args, "country:JP", "--depth", "0"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_ARGUMENT"

    def test_unknown(self, cli_runner: CliRunner, catalog_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--catalog-dir", str(catalog_dir), "graph", "node", "port:atlantis"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"
