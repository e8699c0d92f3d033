"""Test main CLI functionality."""

from typer.testing import CliRunner

from buddy_exchange.cli.main import app

runner = CliRunner()


def test_version_command() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Buddy Exchange v" in result.stdout


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["-h"])
    assert result.exit_code == 0
    for command in ("available", "leaderboard", "buddies", "next-id", "report"):
        assert command in result.stdout
