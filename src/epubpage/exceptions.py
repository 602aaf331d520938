"""Exception hierarchy for the page generation pipeline."""

from __future__ import annotations

from collections.abc import Iterable


class EPubPageError(RuntimeError):
    """Base exception for page generation failures."""


class MissingConfigurationError(EPubPageError):
    """Raised when a required document property has not been set."""


class StructuralValidationError(EPubPageError):
    """Raised when a generated tree fails the structural checks."""

    def __init__(self, message: str, problems: Iterable[str] = ()) -> None:
        self.problems: list[str] = list(problems)
        if self.problems:
            message = f"{message}: {'; '.join(self.problems)}"
        super().__init__(message)


__all__ = [
    "EPubPageError",
    "MissingConfigurationError",
    "StructuralValidationError",
]
