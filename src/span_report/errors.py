from __future__ import annotations

from span_report.models import Span


class EmitError(Exception):
    """Base class for failures that abort a single ``emit`` call."""


class InvalidSpan(EmitError):
    """A label's span does not fit its file, or names a file the provider does not know."""

    def __init__(self, span: Span, reason: str) -> None:
        super().__init__(f"invalid span {span.start}..{span.end} in file {span.file_id}: {reason}")
        self.span = span
        self.reason = reason


class WriteFailure(EmitError):
    """The output sink raised while the diagnostic was being written."""
