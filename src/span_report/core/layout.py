"""Per-file layout of resolved labels.

The layout decides which source lines are shown, where each marker goes and
on which row, which connector column every multi-line span owns, and where
label messages are placed. It produces plain data; turning it into styled
text is the emitter's job.
"""

from __future__ import annotations

import itertools
import logging
import textwrap
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from span_report.config import RenderConfig
from span_report.core.ports.files import ReportingFiles
from span_report.core.resolve import Location, ResolvedLabel, SourceCache, display_width
from span_report.models import LabelStyle

logger = logging.getLogger(__name__)

CONNECTOR_GLYPH = "|"
ELISION_MARK = "..."

_MARKER_GLYPHS = {
    LabelStyle.PRIMARY: "^",
    LabelStyle.SECONDARY: "-",
}


def marker_glyph(style: LabelStyle) -> str:
    return _MARKER_GLYPHS[style]


@dataclass(frozen=True)
class Marker:
    """Horizontal marker range ``[start_col, end_col)`` on one displayed line."""

    start_col: int
    end_col: int
    style: LabelStyle
    message: str | None
    order: int

    @property
    def width(self) -> int:
        return self.end_col - self.start_col

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.start_col, 0 if self.style is LabelStyle.PRIMARY else 1, self.order)


@dataclass(frozen=True)
class Annotation:
    """Text placed at a display column on an annotation row."""

    column: int
    text: str
    style: LabelStyle


AnnotationRow = tuple[Annotation, ...]


@dataclass(frozen=True)
class SourceLineBlock:
    line_number: int
    text: str
    marker_rows: tuple[tuple[Marker, ...], ...]
    rows: tuple[AnnotationRow, ...]


@dataclass(frozen=True)
class ElidedBlock:
    after_line: int
    before_line: int


Block = SourceLineBlock | ElidedBlock


@dataclass(frozen=True)
class Connector:
    column: int
    start_line: int
    end_line: int
    style: LabelStyle
    order: int

    def covers(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def crosses(self, after_line: int, before_line: int) -> bool:
        return self.start_line <= after_line and self.end_line >= before_line


@dataclass(frozen=True)
class FileLayout:
    file_id: int
    name: str
    location: Location
    gutter_width: int
    connectors: tuple[Connector, ...]
    blocks: tuple[Block, ...]

    @property
    def connector_width(self) -> int:
        return max((c.column for c in self.connectors), default=-1) + 1

    def connectors_on_line(self, line: int) -> list[Connector | None]:
        return self._cells(lambda c: c.covers(line))

    def connectors_across(self, block: ElidedBlock) -> list[Connector | None]:
        return self._cells(lambda c: c.crosses(block.after_line, block.before_line))

    def _cells(self, active: Callable[[Connector], bool]) -> list[Connector | None]:
        cells: list[Connector | None] = [None] * self.connector_width
        for connector in self.connectors:
            if active(connector):
                cells[connector.column] = connector
        return cells


# ---------------------------------------------------------------------------
# Row assignment
# ---------------------------------------------------------------------------


def sort_markers(markers: Iterable[Marker]) -> list[Marker]:
    return sorted(markers, key=lambda m: m.sort_key)


def assign_rows(markers: Sequence[Marker]) -> list[list[Marker]]:
    """Greedy interval scheduling: each marker goes to the first row it does not overlap."""
    rows: list[list[Marker]] = []
    for marker in markers:
        for row in rows:
            if row[-1].end_col <= marker.start_col:
                row.append(marker)
                break
        else:
            rows.append([marker])
    return rows


def _message_lines(message: str | None, column: int, tab_width: int, max_width: int | None) -> list[str]:
    """Lines of ``message`` placed at ``column``, wrapped so none runs past ``max_width``."""
    if not message:
        return []
    room = None if max_width is None else max(max_width - column + 1, 1)
    lines: list[str] = []
    for raw in message.split("\n"):
        text = raw.expandtabs(tab_width)
        if room is None or len(text) <= room:
            lines.append(text)
        else:
            lines.extend(textwrap.wrap(text, width=room) or [""])
    return lines


def annotate_rows(
    marker_rows: Sequence[Sequence[Marker]],
    tab_width: int = 4,
    max_width: int | None = None,
) -> list[AnnotationRow]:
    """Lay out marker glyphs and messages for the marker rows of one line.

    The last marker of a row gets its message inline. Messages of the other
    markers follow on their own rows, right-most first, starting under the
    marker they belong to. Extra lines of a message, and the pieces of a
    message too long for ``max_width``, stay at its offset.
    """
    rows: list[AnnotationRow] = []
    for group in marker_rows:
        placed = [Annotation(m.start_col, marker_glyph(m.style) * m.width, m.style) for m in group]
        last = group[-1]
        message_col = last.end_col + 1
        continuation: list[AnnotationRow] = []
        inline = _message_lines(last.message, message_col, tab_width, max_width)
        if inline:
            placed.append(Annotation(message_col, inline[0], last.style))
            continuation = [(Annotation(message_col, text, last.style),) for text in inline[1:]]
        rows.append(tuple(placed))
        rows.extend(continuation)

        for marker in reversed(group[:-1]):
            for text in _message_lines(marker.message, marker.start_col, tab_width, max_width):
                rows.append((Annotation(marker.start_col, text, marker.style),))
    return rows


# ---------------------------------------------------------------------------
# Connectors
# ---------------------------------------------------------------------------


def assign_connectors(labels: Iterable[ResolvedLabel]) -> list[Connector]:
    """Give each multi-line span the smallest column free over its line range."""
    placed: list[Connector] = []
    multiline = sorted((label for label in labels if label.is_multiline), key=lambda lb: (lb.start.line, lb.order))
    for label in multiline:
        used = {
            c.column for c in placed if c.start_line <= label.end.line and label.start.line <= c.end_line
        }
        column = next(col for col in itertools.count() if col not in used)
        placed.append(Connector(column, label.start.line, label.end.line, label.style, label.order))
    return placed


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


def displayed_lines(labels: Sequence[ResolvedLabel], line_count: int, config: RenderConfig) -> list[int]:
    lines: set[int] = set()
    for label in labels:
        lines.add(label.start.line)
        lines.add(label.end.line)
        interior = label.end.line - label.start.line - 1
        if 0 < interior <= config.elision_threshold:
            lines.update(range(label.start.line + 1, label.end.line))

    first, last = min(lines), max(lines)
    lines.update(range(max(1, first - config.lines_before), first))
    lines.update(range(last + 1, min(line_count, last + config.lines_after) + 1))
    return sorted(lines)


def line_markers(labels: Sequence[ResolvedLabel], line_number: int, line_width: int) -> list[Marker]:
    markers: list[Marker] = []
    for label in labels:
        start, end = label.start, label.end
        if not label.is_multiline:
            if start.line == line_number:
                markers.append(
                    Marker(start.column, max(end.column, start.column + 1), label.style, label.message, label.order)
                )
        elif start.line == line_number:
            line_end = max(line_width + 1, start.column + 1)
            markers.append(Marker(start.column, line_end, label.style, None, label.order))
        elif end.line == line_number:
            markers.append(Marker(1, max(end.column, 2), label.style, label.message, label.order))
    return sort_markers(markers)


def _location(labels: Sequence[ResolvedLabel]) -> Location:
    for label in labels:
        if label.style is LabelStyle.PRIMARY:
            return label.start
    return labels[0].start


def layout_file(
    file_id: int,
    labels: Sequence[ResolvedLabel],
    files: ReportingFiles,
    sources: SourceCache,
    config: RenderConfig,
) -> FileLayout:
    lines = displayed_lines(labels, sources.line_count(file_id), config)

    blocks: list[Block] = []
    previous: int | None = None
    for number in lines:
        if previous is not None and number > previous + 1:
            blocks.append(ElidedBlock(previous, number))
        text = sources.line_text(file_id, number).expandtabs(config.tab_width)
        marker_rows = assign_rows(line_markers(labels, number, display_width(text, config.tab_width)))
        blocks.append(
            SourceLineBlock(
                line_number=number,
                text=text,
                marker_rows=tuple(tuple(row) for row in marker_rows),
                rows=tuple(annotate_rows(marker_rows, config.tab_width, config.max_width)),
            )
        )
        previous = number

    layout = FileLayout(
        file_id=file_id,
        name=files.name(file_id),
        location=_location(labels),
        gutter_width=len(str(lines[-1])),
        connectors=tuple(assign_connectors(labels)),
        blocks=tuple(blocks),
    )
    logger.debug(
        "Laid out file %d: %d block(s), %d connector column(s)",
        file_id,
        len(layout.blocks),
        layout.connector_width,
    )
    return layout


def group_by_file(labels: Iterable[ResolvedLabel]) -> dict[int, list[ResolvedLabel]]:
    """Group labels by file, keeping files in order of their first label."""
    groups: dict[int, list[ResolvedLabel]] = {}
    for label in labels:
        groups.setdefault(label.file_id, []).append(label)
    return groups


def layout_diagnostic(
    labels: Sequence[ResolvedLabel],
    files: ReportingFiles,
    sources: SourceCache,
    config: RenderConfig,
) -> list[FileLayout]:
    return [
        layout_file(file_id, group, files, sources, config) for file_id, group in group_by_file(labels).items()
    ]
