"""Console script entry for the ``favqs`` command.

``__main__`` is imported lazily so ``python -m favqsCli.cli`` does not load the
command module twice.
"""
from __future__ import annotations

from typing import Any

PROG_NAME = "favqs"

__all__ = ["PROG_NAME", "cli", "main"]


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    if name != "cli":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from .__main__ import cli

    return cli


def main(argv: list[str] | None = None) -> None:
    from .__main__ import cli

    cli.main(args=argv, prog_name=PROG_NAME)
