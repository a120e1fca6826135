"""Build and write the document for a single diagnostic.

Plain-text shape of the output::

    error[E0001]: unexpected token
     --> main.lang:3:5
      |
    3 | let x = 1;
      |     ^^^^ here
      = some note
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from span_report.config import RenderConfig
from span_report.core.layout import (
    CONNECTOR_GLYPH,
    ELISION_MARK,
    AnnotationRow,
    Connector,
    ElidedBlock,
    FileLayout,
    SourceLineBlock,
    layout_diagnostic,
)
from span_report.core.ports.files import ReportingFiles
from span_report.core.ports.writer import StyleWriter
from span_report.core.resolve import SourceCache, resolve_labels
from span_report.errors import WriteFailure
from span_report.models import Diagnostic, Severity
from span_report.render.renderer import render
from span_report.render.theme import (
    GUTTER_STYLE,
    HEADER_MESSAGE_STYLE,
    LOCATION_STYLE,
    NOTE_STYLE,
    header_style,
    label_style,
)
from span_report.render.tree import Node, Styled, debug_format, document, line, styled
from span_report.render.writers import RecordingWriter

logger = logging.getLogger(__name__)


class _Row:
    """Pieces of one output line.

    Trailing whitespace the emitter added is dropped when the row is finished;
    ``verbatim`` pieces (source text) are kept as they are.
    """

    def __init__(self) -> None:
        self._pieces: list[tuple[str | None, str, bool]] = []

    def add(self, text: str, style: str | None = None, verbatim: bool = False) -> None:
        if text:
            self._pieces.append((style, text, verbatim))

    def finish(self) -> Styled:
        pieces = list(self._pieces)
        while pieces:
            style, text, verbatim = pieces[-1]
            if verbatim:
                break
            stripped = text.rstrip()
            if stripped:
                pieces[-1] = (style, stripped, verbatim)
                break
            pieces.pop()
        return line(*(text if style is None else styled(style, text) for style, text, _ in pieces))


class _FileSection:
    def __init__(self, layout: FileLayout, severity: Severity) -> None:
        self.layout = layout
        self.severity = severity

    def _start_row(self, gutter: str, cells: Sequence[Connector | None]) -> _Row:
        row = _Row()
        row.add(f"{gutter:>{self.layout.gutter_width}} |", GUTTER_STYLE)
        row.add(" ")
        for cell in cells:
            if cell is None:
                row.add(" ")
            else:
                row.add(CONNECTOR_GLYPH, label_style(cell.style, self.severity))
        if cells:
            row.add(" ")
        return row

    def location(self) -> Styled:
        loc = self.layout.location
        return line(
            " " * self.layout.gutter_width,
            styled(GUTTER_STYLE, "-->"),
            " ",
            styled(LOCATION_STYLE, f"{self.layout.name}:{loc.line}:{loc.column}"),
        )

    def blank(self) -> Styled:
        return self._start_row("", []).finish()

    def source_line(self, block: SourceLineBlock) -> list[Node]:
        cells = self.layout.connectors_on_line(block.line_number)
        row = self._start_row(str(block.line_number), cells)
        self._add_source_text(row, block)
        nodes: list[Node] = [row.finish()]
        nodes.extend(self._annotation_row(annotations, cells) for annotations in block.rows)
        return nodes

    def _add_source_text(self, row: _Row, block: SourceLineBlock) -> None:
        """Add the line text, styling the slices under the first marker row."""
        text = block.text
        cursor = 0
        for marker in block.marker_rows[0] if block.marker_rows else ():
            start = min(marker.start_col - 1, len(text))
            end = min(marker.end_col - 1, len(text))
            row.add(text[cursor:start], verbatim=True)
            row.add(text[start:end], label_style(marker.style, self.severity), verbatim=True)
            cursor = end
        row.add(text[cursor:], verbatim=True)

    def _annotation_row(self, annotations: AnnotationRow, cells: Sequence[Connector | None]) -> Styled:
        row = self._start_row("", cells)
        cursor = 1
        for annotation in annotations:
            row.add(" " * (annotation.column - cursor))
            row.add(annotation.text, label_style(annotation.style, self.severity))
            cursor = annotation.column + len(annotation.text)
        return row.finish()

    def elided(self, block: ElidedBlock) -> Styled:
        row = self._start_row("", self.layout.connectors_across(block))
        row.add(ELISION_MARK, GUTTER_STYLE)
        return row.finish()

    def build(self) -> Styled:
        nodes: list[Node] = [self.location(), self.blank()]
        for block in self.layout.blocks:
            if isinstance(block, SourceLineBlock):
                nodes.extend(self.source_line(block))
            else:
                nodes.append(self.elided(block))
        return Styled(None, tuple(nodes))


def _header(diagnostic: Diagnostic, tab_width: int) -> Styled:
    code = f"[{diagnostic.code}]" if diagnostic.code else ""
    return line(
        styled(header_style(diagnostic.severity), str(diagnostic.severity), code),
        styled(HEADER_MESSAGE_STYLE, ": ", diagnostic.message.expandtabs(tab_width)),
    )


def _notes(notes: Sequence[str], pad: int, tab_width: int) -> list[Node]:
    nodes: list[Node] = []
    for note in notes:
        first, *rest = note.expandtabs(tab_width).split("\n")
        nodes.append(line(" " * pad, " ", styled(GUTTER_STYLE, "="), " ", styled(NOTE_STYLE, first)))
        nodes.extend(line(" " * (pad + 3), styled(NOTE_STYLE, text)) for text in rest)
    return nodes


def diagnostic_tree(diagnostic: Diagnostic, layouts: Sequence[FileLayout], tab_width: int = 4) -> Styled:
    """Assemble the document. Tabs in the header and notes are expanded so every writer prints the same text."""
    sections = [_FileSection(layout, diagnostic.severity).build() for layout in layouts]
    pad = max((layout.gutter_width for layout in layouts), default=0)
    return document(
        _header(diagnostic, tab_width),
        *sections,
        *_notes(diagnostic.notes, pad, tab_width),
    )


def build_document(
    diagnostic: Diagnostic,
    files: ReportingFiles,
    config: RenderConfig | None = None,
) -> Styled:
    """Resolve, lay out and assemble ``diagnostic`` without writing anything.

    Raises ``InvalidSpan`` if any label does not fit its file.
    """
    config = config or RenderConfig()
    sources = SourceCache(files)
    resolved = resolve_labels(diagnostic.labels, files, sources, config)
    layouts = layout_diagnostic(resolved, files, sources, config)
    return diagnostic_tree(diagnostic, layouts, config.tab_width)


def emit(
    writer: StyleWriter,
    diagnostic: Diagnostic,
    files: ReportingFiles,
    config: RenderConfig | None = None,
) -> None:
    """Render ``diagnostic`` to ``writer``.

    Every label is resolved before the first write, so an ``InvalidSpan``
    leaves the writer untouched. An ``OSError`` from the writer is raised
    as ``WriteFailure``.
    """
    tree = build_document(diagnostic, files, config)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Document for %s %r:\n%s", diagnostic.severity, diagnostic.message, debug_format(tree))

    try:
        render(tree, writer)
    except OSError as exc:
        raise WriteFailure(f"failed to write diagnostic: {exc}") from exc


def format_diagnostic(
    diagnostic: Diagnostic,
    files: ReportingFiles,
    config: RenderConfig | None = None,
) -> str:
    """Render ``diagnostic`` to a plain string."""
    writer = RecordingWriter(supports_color=False)
    emit(writer, diagnostic, files, config)
    return writer.getvalue()


__all__ = ["build_document", "diagnostic_tree", "emit", "format_diagnostic"]
