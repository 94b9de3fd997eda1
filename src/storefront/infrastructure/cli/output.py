"""Output helpers shared by the CLI commands.

With ``--json`` every command prints the response envelope
``{"status": "success"|"error", "payload"?, "message"?}`` instead of a
human-readable table.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from typing import Any

import click

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ValidationError,
)

# Exit codes per error kind, loosely mirroring HTTP semantics.
_EXIT_CODES: dict[type[DomainException], int] = {
    ValidationError: 2,
    EntityNotFoundError: 3,
    ConflictError: 4,
}


def _wants_json() -> bool:
    ctx = click.get_current_context(silent=True)
    return bool(ctx and ctx.find_root().obj and ctx.find_root().obj.get("json"))


class CommandError(click.ClickException):
    """A DomainException surfaced to the CLI user."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.exit_code = next(
            (code for kind, code in _EXIT_CODES.items() if isinstance(exc, kind)),
            1,
        )
        self._as_json = _wants_json()

    def show(self, file: Any = None) -> None:
        if self._as_json:
            click.echo(json.dumps({"status": "error", "message": self.message}))
        else:
            super().show(file)


def emit(
    payload: Any,
    render: Callable[[], None],
    message: str | None = None,
) -> None:
    """Print a successful result as the JSON envelope or via ``render``."""
    if not _wants_json():
        render()
        return

    envelope: dict[str, Any] = {"status": "success"}
    if payload is not None:
        envelope["payload"] = asdict(payload) if is_dataclass(payload) else payload
    if message:
        envelope["message"] = message
    click.echo(json.dumps(envelope))
