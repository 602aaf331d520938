"""Diagnostic abstractions shared across page generation."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface soft failures and structured events."""

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module.

    Pages and style resolvers use it when no emitter is supplied, bound to their
    own module logger.
    """

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.debug(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "document_generated":
        target = data.get("file_name") or "<unnamed>"
        styles = data.get("styles", 0)
        mode = "embedded" if data.get("embedded") else "linked"
        failed = data.get("failed", 0)
        suffix = f", {failed} failed" if failed else ""
        return f"Generated {target} ({styles} {mode} stylesheet(s){suffix})"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "format_event_message",
]
