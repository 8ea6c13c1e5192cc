"""Tests for the command-line entry point."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from atlas_common.models import Country
from atlas_service import main as cli
from atlas_service.view_state import LoadState, LoadStatus


def _state(status=LoadStatus.READY, error=None) -> LoadState:
    countries = (
        Country(
            name="United States",
            category="North America",
            flag="\U0001f1fa\U0001f1f8",
            iso2_code="US",
            population=330_000_000,
            gdp=2.5e13,
        ),
        Country(name="France", category="Europe & Central Asia", flag="F", iso2_code="FR"),
    )
    return LoadState(status=status, countries=countries, error=error, generation=1)


class _FakeViewModel:
    result: LoadState = _state()

    def __init__(self, config=None):
        self.config = config

    async def load(self) -> LoadState:
        return self.result


def test_state_to_dict_groups_by_region():
    data = cli.state_to_dict(_state())

    assert data["status"] == "ready"
    assert data["error"] is None
    assert list(data["regions"]) == ["Europe & Central Asia", "North America"]
    us = data["regions"]["North America"][0]
    assert us == {
        "name": "United States",
        "flag": "\U0001f1fa\U0001f1f8",
        "iso2_code": "US",
        "population": 330_000_000,
        "gdp": 2.5e13,
    }


def test_state_to_dict_region_filter():
    data = cli.state_to_dict(_state(), region="North America")

    assert list(data["regions"]) == ["North America"]


def test_render_listing_shows_raw_numbers_and_gaps():
    text = cli.render_listing(_state())

    lines = text.splitlines()
    assert lines[0] == "Europe & Central Asia"
    assert "France (FR) population=- gdp_usd=-" in lines[1]
    assert lines[2] == "North America"
    assert "population=330000000 gdp_usd=25000000000000" in lines[3]


def test_parser_defaults():
    args = cli.build_parser().parse_args([])

    assert args.region is None
    assert args.json is False


class TestRun:
    @pytest.mark.asyncio
    async def test_ready_prints_listing(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "CountriesViewModel", _FakeViewModel)

        code = await cli.run(cli.build_parser().parse_args(["--region", "North America"]))

        out = capsys.readouterr().out
        assert code == 0
        assert "United States (US)" in out
        assert "France" not in out

    @pytest.mark.asyncio
    async def test_json_output(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "CountriesViewModel", _FakeViewModel)

        code = await cli.run(cli.build_parser().parse_args(["--json"]))

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "ready"

    @pytest.mark.asyncio
    async def test_failed_load_exits_nonzero(self, monkeypatch, capsys):
        class _Failing(_FakeViewModel):
            result = LoadState(status=LoadStatus.FAILED, error="Network error: offline")

        monkeypatch.setattr(cli, "CountriesViewModel", _Failing)

        code = await cli.run(cli.build_parser().parse_args([]))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "Error: Network error: offline" in captured.err

    @pytest.mark.asyncio
    @pytest.mark.parametrize("debug,expected_calls", [(True, 1), (False, 0)])
    async def test_debug_setting_logs_enrichment_configuration(
        self, monkeypatch, capsys, debug, expected_calls
    ):
        enrichment_config = MagicMock(verbose_logging=False)
        monkeypatch.setattr(cli, "CountriesViewModel", _FakeViewModel)
        monkeypatch.setattr(cli, "EnrichmentConfig", lambda: enrichment_config)
        monkeypatch.setattr(cli, "get_settings", lambda: SimpleNamespace(debug=debug))

        await cli.run(cli.build_parser().parse_args([]))

        assert enrichment_config.log_configuration.call_count == expected_calls
