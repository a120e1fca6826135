"""Diagnostic value types.

These are frozen Pydantic models so that a diagnostic can be built fluently
in code or loaded from JSON (``Diagnostic.model_validate_json``) and is never
mutated once handed to the emitter.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Severity(Enum):
    """Severity of a diagnostic, ordered ``BUG > ERROR > WARNING > NOTE > HELP``."""

    BUG = "bug"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANK = {
    Severity.BUG: 5,
    Severity.ERROR: 4,
    Severity.WARNING: 3,
    Severity.NOTE: 2,
    Severity.HELP: 1,
}


class LabelStyle(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"

    def __str__(self) -> str:
        return self.value


class Span(BaseModel):
    """Half-open range of UTF-8 byte offsets ``[start, end)`` within one file."""

    model_config = ConfigDict(frozen=True)

    file_id: int = Field(ge=0)
    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> Span:
        if self.start > self.end:
            raise ValueError(f"span end {self.end} must not be before start {self.start}")
        return self

    @classmethod
    def from_offset(cls, file_id: int, start: int, length: int) -> Span:
        return cls(file_id=file_id, start=start, end=start + length)

    def with_start(self, start: int) -> Span:
        return Span(file_id=self.file_id, start=start, end=self.end)

    def with_end(self, end: int) -> Span:
        return Span(file_id=self.file_id, start=self.start, end=end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start


class Label(BaseModel):
    """An annotated region of source attached to a diagnostic."""

    model_config = ConfigDict(frozen=True)

    style: LabelStyle
    span: Span
    message: str | None = None

    @classmethod
    def primary(cls, span: Span, message: str | None = None) -> Label:
        return cls(style=LabelStyle.PRIMARY, span=span, message=message)

    @classmethod
    def secondary(cls, span: Span, message: str | None = None) -> Label:
        return cls(style=LabelStyle.SECONDARY, span=span, message=message)

    def with_message(self, message: str) -> Label:
        return self.model_copy(update={"message": message})


class Diagnostic(BaseModel):
    """One reportable message: severity, optional code, labels and trailing notes."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    code: str | None = None
    labels: tuple[Label, ...] = ()
    notes: tuple[str, ...] = ()

    @classmethod
    def bug(cls, message: str) -> Diagnostic:
        return cls(severity=Severity.BUG, message=message)

    @classmethod
    def error(cls, message: str) -> Diagnostic:
        return cls(severity=Severity.ERROR, message=message)

    @classmethod
    def warning(cls, message: str) -> Diagnostic:
        return cls(severity=Severity.WARNING, message=message)

    @classmethod
    def note(cls, message: str) -> Diagnostic:
        return cls(severity=Severity.NOTE, message=message)

    @classmethod
    def help(cls, message: str) -> Diagnostic:
        return cls(severity=Severity.HELP, message=message)

    def with_code(self, code: str) -> Diagnostic:
        return self.model_copy(update={"code": code})

    def with_label(self, label: Label) -> Diagnostic:
        return self.model_copy(update={"labels": (*self.labels, label)})

    def with_labels(self, labels: list[Label] | tuple[Label, ...]) -> Diagnostic:
        return self.model_copy(update={"labels": (*self.labels, *labels)})

    def with_note(self, note: str) -> Diagnostic:
        return self.model_copy(update={"notes": (*self.notes, note)})
