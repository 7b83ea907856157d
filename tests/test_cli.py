"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from unittest.mock import AsyncMock, Mock, patch

import pytest

from birdbrain.cli import cmd_health, cmd_info, cmd_search, create_parser, main
from birdbrain.config import Settings
from birdbrain.errors import ConfigurationError, NotFound
from birdbrain.schemas import (
    ActivitySummary,
    Mode,
    Origin,
    RankedHotspotsResponse,
    RankedResult,
)


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"ebird_api_key": "test-token", **overrides}
    return Settings(**values)  # type: ignore[arg-type]


def _top_response() -> RankedHotspotsResponse:
    return RankedHotspotsResponse(
        mode=Mode.TOP,
        distance_km=25,
        origin=Origin(lat=45.5, lng=-122.6),
        hotspots=[
            RankedResult(
                loc_id="L1",
                name="Oaks Bottom",
                latitude=45.47,
                longitude=-122.65,
                distance_km=3.4,
                url="https://ebird.org/hotspot/L1",
                activity=ActivitySummary(checklist_count=2, observation_count=5),
            )
        ],
    )


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "birdbrain"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    @pytest.mark.parametrize("mode", ["random", "top", "notable"])
    def test_mode_commands(self, mode: str) -> None:
        """Each mode accepts location and distance options."""
        args = create_parser().parse_args(
            [mode, "--lat", "45.5", "--lng", "-122.6", "--distance-km", "16.1"]
        )
        assert args.command == mode
        assert args.lat == "45.5"
        assert args.lng == "-122.6"
        assert args.distance_km == "16.1"
        assert args.postal_code is None

    def test_postal_code_option(self) -> None:
        """Postal code is accepted instead of coordinates."""
        args = create_parser().parse_args(["top", "--postal-code", "97201"])
        assert args.postal_code == "97201"
        assert args.lat is None


class TestCmdSearch:
    """Tests for the mode commands."""

    def _args(self, command: str = "top", **overrides: object) -> argparse.Namespace:
        values = {
            "command": command,
            "lat": "45.5",
            "lng": "-122.6",
            "postal_code": None,
            "distance_km": None,
            **overrides,
        }
        return argparse.Namespace(**values)

    def test_prints_payload(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Successful search prints the JSON envelope."""
        finder = Mock()
        finder.search = AsyncMock(return_value=_top_response())
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings()),
            patch("birdbrain.cli.HotspotFinder.from_settings", return_value=finder),
        ):
            result = cmd_search(self._args())

        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["mode"] == "top"
        assert payload["hotspots"][0]["activity"]["score"] == 9
        finder.search.assert_awaited_once_with(
            "top", lat="45.5", lng="-122.6", postal_code=None, distance_km=None
        )

    def test_error_payload_on_failure(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Pipeline errors become a structured payload on stderr."""
        finder = Mock()
        finder.search = AsyncMock(side_effect=NotFound("No hotspots found for the provided criteria."))
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings()),
            patch("birdbrain.cli.HotspotFinder.from_settings", return_value=finder),
        ):
            result = cmd_search(self._args())

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err) == {
            "message": "No hotspots found for the provided criteria.",
            "status": 404,
        }

    def test_unexpected_error_hidden(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Internal errors do not leak details."""
        finder = Mock()
        finder.search = AsyncMock(side_effect=KeyError("secret internals"))
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings()),
            patch("birdbrain.cli.HotspotFinder.from_settings", return_value=finder),
        ):
            result = cmd_search(self._args())

        assert result == 1
        err_lines = [line for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
        assert json.loads(err_lines[-1]) == {"message": "Unexpected server error", "status": 500}

    def test_missing_api_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Missing credential is a fatal configuration error."""
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings(ebird_api_key=None)),
            patch(
                "birdbrain.cli.HotspotFinder.from_settings",
                side_effect=ConfigurationError("Missing EBIRD_API_KEY"),
            ),
        ):
            result = cmd_search(self._args())

        assert result == 2
        assert "EBIRD_API_KEY" in capsys.readouterr().err


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_info_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Info command prints application info without the key itself."""
        with patch("birdbrain.cli.get_settings", return_value=_settings()):
            result = cmd_info(argparse.Namespace())

        assert result == 0
        output = capsys.readouterr().out
        assert "Application: birdbrain" in output
        assert "Version:" in output
        assert "eBird API key: set" in output
        assert "test-token" not in output


class TestCmdHealth:
    """Tests for cmd_health function."""

    def test_health_payload(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cmd_health(argparse.Namespace()) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "ok"


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No command prints help and returns 0."""
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out

    def test_dispatches_info(self) -> None:
        """Info command is dispatched."""
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings()),
            patch("birdbrain.cli.configure_logging"),
            patch("birdbrain.cli.cmd_info", return_value=0) as mock_info,
        ):
            assert main(["info"]) == 0
        mock_info.assert_called_once()

    def test_dispatches_search(self) -> None:
        """Mode commands go to cmd_search."""
        with (
            patch("birdbrain.cli.get_settings", return_value=_settings()),
            patch("birdbrain.cli.configure_logging"),
            patch("birdbrain.cli.cmd_search", return_value=0) as mock_search,
        ):
            assert main(["notable", "--postal-code", "97201"]) == 0
        args = mock_search.call_args.args[0]
        assert args.command == "notable"
        assert args.postal_code == "97201"
