"""
CLI for ninja-import.

Command-line interface for normalizing and inspecting CSV uploads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ninja_import.cli.context import ExitCode, get_exit_code

if TYPE_CHECKING:
    from typer import Typer

    app: Typer


def __getattr__(name: str) -> Any:
    if name == "app":
        from ninja_import.cli.main import app as _app

        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ExitCode",
    "app",
    "get_exit_code",
]
