"""Tests for CLI main entry point."""

from __future__ import annotations

from unittest.mock import patch
import sys

import pytest
import structlog
from typer.testing import CliRunner

from jsonrpc_socket import __version__
from jsonrpc_socket.main import app, cli_main, configure_logging

runner = CliRunner()


def test_cli_help() -> None:
    """Test that --help flag works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "jsonrpc-socket" in result.stdout
    assert "call" in result.stdout
    assert "config" in result.stdout


def test_cli_version() -> None:
    """Test that --version flag works."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
    assert "jsonrpc-socket version" in result.stdout


def test_cli_version_short() -> None:
    """Test that -v flag works for version."""
    result = runner.invoke(app, ["-v"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_cli_no_args() -> None:
    """Test that CLI shows help when no arguments provided."""
    result = runner.invoke(app, [])
    # Typer exits with code 2 when no_args_is_help=True
    assert result.exit_code in (0, 2)
    assert "Usage:" in result.stdout


def test_cli_main_keyboard_interrupt() -> None:
    """Test that KeyboardInterrupt is handled gracefully in cli_main()."""
    with patch("jsonrpc_socket.main.app") as mock_app:
        mock_app.side_effect = KeyboardInterrupt()
        with patch.object(sys, "exit") as mock_exit:
            cli_main()
            mock_exit.assert_called_once_with(130)


def test_configure_logging_writes_warnings_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()
    log = structlog.get_logger().bind(host_port="127.0.0.1:1")

    log.debug("rpc_request_sent")
    log.warning("rpc_connect_failed")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "rpc_connect_failed" in captured.err
    assert "rpc_request_sent" not in captured.err


def test_configure_logging_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)

    structlog.get_logger().debug("rpc_request_sent", bytes=42)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "rpc_request_sent" in captured.err
