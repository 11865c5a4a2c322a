"""Error types raised while reading FML access transformers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location of the line that failed to parse.

    Attributes:
        source: File name or other label of the line source, if known
        line_number: Line number (1-indexed)
        line: The offending line, comment stripped and trimmed
    """

    source: str | None
    line_number: int
    line: str

    def format(self) -> str:
        """Format as ``source:12: line`` (``<input>`` when the source is unknown)."""
        return f"{self.source or '<input>'}:{self.line_number}: {self.line}"


class AccessTransformError(ValueError):
    """Base exception for all access transformer parse errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class MalformedLineError(AccessTransformError):
    """Raised when a line does not have two or three tokens."""


class InvalidAccessSpecError(AccessTransformError):
    """
    Raised when the access spec token cannot be decoded.

    Subclasses narrow the cause down to the visibility keyword or the
    sign in front of the trailing ``f``.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        token: str | None = None,
    ):
        self.token = token
        super().__init__(message, context)

    def with_context(self, context: ErrorContext) -> InvalidAccessSpecError:
        """Return the same error located at *context*."""
        return type(self)(self.message, context, token=self.token)


class UnknownVisibilityError(InvalidAccessSpecError):
    """Raised for a visibility keyword outside public/protected/default/private."""


class InvalidFinalSignError(InvalidAccessSpecError):
    """Raised when the character before a trailing ``f`` is not ``+`` or ``-``."""
