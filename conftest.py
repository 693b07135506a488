"""Shared pytest fixtures: throwaway executables standing in for the native tools."""

import shlex

import pytest

from backends import BackendConfig


def write_executable(path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def fake_reader(tmp_path):
    """Factory for a reader that records its arguments and prints a report.

    Returns (BackendConfig, args_file). Lines of args_file are the argv seen
    by the fake reader, one per line.
    """
    counter = {"n": 0}

    def make(report: str = "", exit_code: int = 0, stderr: str = "", sleep: float = 0,
             timeout: float = 5.0):
        counter["n"] += 1
        report_file = tmp_path / f"report{counter['n']}.txt"
        report_file.write_text(report)
        args_file = tmp_path / f"args{counter['n']}.txt"
        body = f'printf "%s\\n" "$@" > {shlex.quote(str(args_file))}\n'
        if sleep:
            body += f"exec sleep {sleep}\n"
        body += f"cat {shlex.quote(str(report_file))}\n"
        if stderr:
            body += f"printf %s {shlex.quote(stderr)} >&2\n"
        body += f"exit {exit_code}\n"
        path = write_executable(tmp_path / f"GetReminders{counter['n']}", body)
        return BackendConfig(reader_path=path, reader_timeout=timeout), args_file

    return make


@pytest.fixture
def fake_osascript(tmp_path):
    """Factory for an osascript stand-in that saves the script it was given.

    Returns (BackendConfig, script_file).
    """
    def make(exit_code: int = 0, stderr: str = ""):
        script_file = tmp_path / "script.applescript"
        body = f'[ "$1" = "-e" ] || exit 64\nprintf %s "$2" > {shlex.quote(str(script_file))}\n'
        if stderr:
            body += f"printf %s {shlex.quote(stderr)} >&2\n"
        body += f"exit {exit_code}\n"
        path = write_executable(tmp_path / "osascript", body)
        config = BackendConfig(
            reader_path=str(tmp_path / "missing-reader"),
            osascript_path=path,
            writer_timeout=5.0,
        )
        return config, script_file

    return make
