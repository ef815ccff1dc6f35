from __future__ import annotations

from typer.testing import CliRunner

from knob import cli


def test_options_loads_trailing_args():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["options", "-p", "3000", "--environment", "staging"])
    assert result.exit_code == 0
    assert "port=3000" in result.stdout
    assert "environment=staging" in result.stdout


def test_options_prints_usage_on_failure():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["options", "--bogus"])
    assert result.exit_code == 2
    assert "Try one of these:" in result.stdout
    assert "--port" in result.stdout
    assert "--environment" in result.stdout


def test_socket_from_parts():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["socket", "-p", "12345", "-i", "127.0.0.1"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "127.0.0.1:12345"


def test_socket_addr_override():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["socket", "-p", "1", "--addr", "0.0.0.0:4567"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0.0.0.0:4567"


def test_socket_bad_port():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["socket", "--port", "http"])
    assert result.exit_code == 2
    assert "does not parse" in result.output


def test_verbose_prints_effective_config():
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--verbose", "options"])
    assert result.exit_code == 0
    assert '"usage_width"' in result.output
    assert "port=" in result.stdout
