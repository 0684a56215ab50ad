"""Tests for the gofmt post-processor."""

from __future__ import annotations

import subprocess

import pytest

from yamlenums.errors import FormatError
from yamlenums.postproc import GoFormatter


def test_formatter_returns_runner_output() -> None:
    calls = []

    def runner(args, source):
        calls.append((list(args), source))
        return "formatted\n"

    formatter = GoFormatter("gofmt", runner=runner)

    assert formatter.format("package x\n") == "formatted\n"
    assert calls == [(["gofmt"], "package x\n")]


def test_formatter_reports_missing_binary() -> None:
    def runner(args, source):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    formatter = GoFormatter("gofmt-missing", runner=runner)

    with pytest.raises(FormatError) as excinfo:
        formatter.format("package x\n")

    assert "gofmt-missing" in str(excinfo.value)


def test_formatter_reports_rejected_source() -> None:
    def runner(args, source):
        raise subprocess.CalledProcessError(2, list(args), output="", stderr="<standard input>:1:1: expected 'package'")

    formatter = GoFormatter(runner=runner)

    with pytest.raises(FormatError) as excinfo:
        formatter.format("not go\n")

    assert "expected 'package'" in str(excinfo.value)


def test_formatter_reports_unrunnable_command() -> None:
    def runner(args, source):
        raise PermissionError(13, "Permission denied", args[0])

    formatter = GoFormatter("/opt/go", runner=runner)

    with pytest.raises(FormatError) as excinfo:
        formatter.format("package x\n")

    assert "cannot run /opt/go" in str(excinfo.value)


def test_formatter_reports_directory_given_as_command(tmp_path) -> None:
    formatter = GoFormatter(str(tmp_path))

    with pytest.raises(FormatError) as excinfo:
        formatter.format("package x\n")

    assert str(tmp_path) in str(excinfo.value)
