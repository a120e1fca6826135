"""Unit tests for span resolution."""

import pytest
from sources import CALL_SOURCE, FIVE_LINES

from span_report.config import RenderConfig
from span_report.core.resolve import (
    Location,
    ResolvedLabel,
    SourceCache,
    display_width,
    resolve_label,
    resolve_labels,
)
from span_report.errors import InvalidSpan
from span_report.files import SimpleFiles
from span_report.models import Label, LabelStyle, Span


def _resolve(files: SimpleFiles, label: Label, config: RenderConfig | None = None) -> ResolvedLabel:
    return resolve_label(label, 0, files, SourceCache(files), config or RenderConfig())


@pytest.mark.parametrize(
    ("text", "tab_width", "expected"),
    [("abc", 4, 3), ("\tx", 4, 5), ("\tx", 8, 9), ("ab\tc", 4, 5), ("", 2, 0)],
)
def test_display_width(text: str, tab_width: int, expected: int) -> None:
    assert display_width(text, tab_width) == expected


def test_single_line_label(files: SimpleFiles) -> None:
    file_id = files.add("main.lang", FIVE_LINES)
    resolved = _resolve(files, Label.primary(Span(file_id=file_id, start=15, end=19), "here"))
    assert resolved.start == Location(3, 5)
    assert resolved.end == Location(3, 9)
    assert not resolved.is_multiline
    assert resolved.style is LabelStyle.PRIMARY
    assert resolved.message == "here"


def test_multi_line_label(files: SimpleFiles) -> None:
    file_id = files.add("main.lang", CALL_SOURCE)
    resolved = _resolve(files, Label.primary(Span(file_id=file_id, start=6, end=27)))
    assert resolved.start == Location(2, 1)
    assert resolved.end == Location(4, 7)
    assert resolved.is_multiline


def test_columns_count_characters_not_bytes(files: SimpleFiles) -> None:
    file_id = files.add("utf8", "ééx\n")
    resolved = _resolve(files, Label.primary(Span(file_id=file_id, start=4, end=5)))
    assert resolved.start == Location(1, 3)
    assert resolved.end == Location(1, 4)


def test_tabs_expand_to_tab_stops(files: SimpleFiles) -> None:
    file_id = files.add("tabs", "\tx = 1\n")
    label = Label.primary(Span(file_id=file_id, start=1, end=2))
    assert _resolve(files, label, RenderConfig(tab_width=4)).start == Location(1, 5)
    assert _resolve(files, label, RenderConfig(tab_width=8)).start == Location(1, 9)


def test_unknown_file_id(files: SimpleFiles) -> None:
    with pytest.raises(InvalidSpan, match="unknown file id") as excinfo:
        _resolve(files, Label.primary(Span(file_id=3, start=0, end=1)))
    assert excinfo.value.span.file_id == 3


def test_end_past_source(files: SimpleFiles) -> None:
    file_id = files.add("short", "abc")
    with pytest.raises(InvalidSpan, match="past the end"):
        _resolve(files, Label.primary(Span(file_id=file_id, start=1, end=4)))


def test_offset_inside_character(files: SimpleFiles) -> None:
    file_id = files.add("utf8", "é")
    with pytest.raises(InvalidSpan, match="character boundary"):
        _resolve(files, Label.primary(Span(file_id=file_id, start=1, end=2)))


def test_resolve_labels_numbers_labels_in_order(files: SimpleFiles) -> None:
    file_id = files.add("main.lang", FIVE_LINES)
    labels = [
        Label.secondary(Span(file_id=file_id, start=0, end=5)),
        Label.primary(Span(file_id=file_id, start=15, end=19)),
    ]
    resolved = resolve_labels(labels, files, SourceCache(files), RenderConfig())
    assert [label.order for label in resolved] == [0, 1]
    assert [label.start.line for label in resolved] == [1, 3]


def test_source_cache_lines(files: SimpleFiles) -> None:
    file_id = files.add("main.lang", FIVE_LINES)
    cache = SourceCache(files)
    assert cache.line_count(file_id) == 6
    assert cache.line_text(file_id, 3) == "let loop = 1;"
    assert cache.line_text(file_id, 6) == ""
