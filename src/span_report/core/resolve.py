"""Turn byte-offset spans into line and display-column positions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from span_report.config import RenderConfig
from span_report.core.ports.files import ReportingFiles
from span_report.errors import InvalidSpan
from span_report.models import Label, LabelStyle, Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Location:
    line: int  # 1-indexed
    column: int  # 1-indexed display column


@dataclass(frozen=True)
class ResolvedLabel:
    file_id: int
    order: int
    style: LabelStyle
    message: str | None
    start: Location
    end: Location

    @property
    def is_multiline(self) -> bool:
        return self.start.line != self.end.line


def display_width(text: str, tab_width: int) -> int:
    """Width of ``text`` in code points, with tabs advanced to the next tab stop."""
    return len(text.expandtabs(tab_width))


class SourceCache:
    """Encoded sources of the files touched by a single render call."""

    def __init__(self, files: ReportingFiles) -> None:
        self._files = files
        self._encoded: dict[int, bytes] = {}

    def encoded(self, file_id: int) -> bytes:
        if file_id not in self._encoded:
            self._encoded[file_id] = self._files.source(file_id).encode("utf-8")
        return self._encoded[file_id]

    def line_count(self, file_id: int) -> int:
        return self.encoded(file_id).count(b"\n") + 1

    def line_text(self, file_id: int, line: int) -> str:
        start, end = self._files.line_span(file_id, line)
        return self.encoded(file_id)[start:end].decode("utf-8", errors="replace")


def _locate(
    span: Span, offset: int, files: ReportingFiles, sources: SourceCache, config: RenderConfig
) -> Location:
    try:
        line, byte_column = files.offset_to_line_col(span.file_id, offset)
    except LookupError as exc:
        raise InvalidSpan(span, str(exc)) from None

    line_start = offset - byte_column
    try:
        prefix = sources.encoded(span.file_id)[line_start:offset].decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidSpan(span, f"offset {offset} is not on a character boundary") from None
    return Location(line, display_width(prefix, config.tab_width) + 1)


def resolve_label(
    label: Label,
    order: int,
    files: ReportingFiles,
    sources: SourceCache,
    config: RenderConfig,
) -> ResolvedLabel:
    span = label.span
    try:
        length = len(sources.encoded(span.file_id))
    except LookupError:
        logger.debug("Label %d refers to unknown file %d", order, span.file_id)
        raise InvalidSpan(span, "unknown file id") from None

    if span.end > length:
        logger.debug("Label %d ends at %d, past the %d bytes of file %d", order, span.end, length, span.file_id)
        raise InvalidSpan(span, f"end is past the end of the source ({length} bytes)")

    return ResolvedLabel(
        file_id=span.file_id,
        order=order,
        style=label.style,
        message=label.message,
        start=_locate(span, span.start, files, sources, config),
        end=_locate(span, span.end, files, sources, config),
    )


def resolve_labels(
    labels: Sequence[Label],
    files: ReportingFiles,
    sources: SourceCache,
    config: RenderConfig,
) -> list[ResolvedLabel]:
    """Resolve every label, failing on the first invalid span."""
    return [resolve_label(label, order, files, sources, config) for order, label in enumerate(labels)]
