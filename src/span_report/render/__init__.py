from span_report.render.renderer import render
from span_report.render.theme import DEFAULT_THEME
from span_report.render.tree import (
    Run,
    Styled,
    Text,
    debug_format,
    document,
    flatten,
    line,
    plain_text,
    styled,
)
from span_report.render.writers import ConsoleWriter, RecordingWriter

__all__ = [
    "DEFAULT_THEME",
    "ConsoleWriter",
    "RecordingWriter",
    "Run",
    "Styled",
    "Text",
    "debug_format",
    "document",
    "flatten",
    "line",
    "plain_text",
    "render",
    "styled",
]
