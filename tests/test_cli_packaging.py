from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from favqsCli import __version__

ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str, **env: str) -> subprocess.CompletedProcess:
    environ = {**os.environ, **env}
    return subprocess.run(
        [sys.executable, "-m", "favqsCli.cli", *args],
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=environ,
    )


def test_python_module_version():
    out = _run("--version")
    assert out.returncode == 0
    assert __version__ in out.stdout.strip()


def test_python_module_help_lists_commands():
    out = _run("--help")
    assert out.returncode == 0
    assert "single" in out.stdout
    assert "many" in out.stdout


def test_python_module_missing_key_fails():
    out = _run("single", FAVQS_APIKEY="")
    assert out.returncode == 1
    assert out.stderr == "Error: FAVQS_APIKEY is missing from the environment\n"


def test_python_module_verbose_failure_logs_kind():
    out = _run("--verbose", "single", FAVQS_APIKEY="")
    assert out.returncode == 1
    lines = out.stderr.splitlines()
    assert lines[-1] == "Error: FAVQS_APIKEY is missing from the environment"
    events = [json.loads(line) for line in lines[:-1]]
    failed = [e for e in events if e["event"] == "cli.command_failed"]
    assert failed[0]["kind"] == "MissingCredentialError"
