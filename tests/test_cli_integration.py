"""Integration tests for the CLI.

These tests verify CLI behavior by executing the actual command against the
live MVG API and asserting on output. They require network access and are
marked with @pytest.mark.integration.

Run with: pytest -m integration
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest

# Get the project root directory
PROJECT_ROOT = Path(__file__).parent.parent
UNIVERSITAET = "de:09162:70"


def _run_cli_command(command: list[str], timeout: int = 30) -> tuple[str, str, int]:
    """Run a CLI command and return stdout, stderr, and exit code.

    Args:
        command: Command and arguments as list.
        timeout: Timeout in seconds.

    Returns:
        Tuple of (stdout, stderr, exit_code).
    """
    try:
        result = subprocess.run(
            [sys.executable, "-m", "mvg_home.cli", *command],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return result.stdout, result.stderr, result.returncode
    except subprocess.TimeoutExpired:
        return "", "Command timed out", 124


@pytest.mark.integration
class TestCliIntegration:
    """Integration tests against the live MVG API."""

    def test_departures_as_json(self) -> None:
        """Given a real station, when asking for JSON, then a list of departures is printed."""
        stdout, stderr, exit_code = _run_cli_command(
            ["--station", UNIVERSITAET, "--json", "-n", "3"]
        )

        assert exit_code == 0, f"Command failed with stderr: {stderr}"
        data = json.loads(stdout)
        assert isinstance(data, list)
        assert len(data) <= 3
        for entry in data:
            assert "line" in entry
            assert "destination" in entry

    def test_unknown_station_exits_with_error(self) -> None:
        """Given a station id that does not exist, when running, then exits with error."""
        stdout, stderr, exit_code = _run_cli_command(["--station", "de:00000:0"])

        assert exit_code != 0 or "No catchable departures." in stdout
