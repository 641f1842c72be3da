# src/logging/context.py - v1
"""Contextual logging support: attach run_id, phase and pass index to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_input_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_path", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)
_pass_index: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "pass_index", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    run_id: str | None = None
    input_path: str | None = None
    phase: str | None = None
    pass_index: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        input_path=_input_path.get(),
        phase=_phase.get(),
        pass_index=_pass_index.get(),
    )


def set_run_context(run_id: str, input_path: str | None = None) -> None:
    """Set run-level context (once per analyzed graph)."""
    _run_id.set(run_id)
    _input_path.set(input_path)


def set_phase_context(phase: str, pass_index: int | None = None) -> None:
    """Set the current pipeline phase and, inside the ensemble, the pass."""
    _phase.set(phase)
    _pass_index.set(pass_index)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _input_path.set(None)
    _phase.set(None)
    _pass_index.set(None)
