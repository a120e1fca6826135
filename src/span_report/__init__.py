from span_report.config import RenderConfig
from span_report.core.emitter import build_document, emit, format_diagnostic
from span_report.core.ports import ReportingFiles, StyleWriter
from span_report.errors import EmitError, InvalidSpan, WriteFailure
from span_report.files import SimpleFiles
from span_report.models import Diagnostic, Label, LabelStyle, Severity, Span
from span_report.render import DEFAULT_THEME, ConsoleWriter, RecordingWriter

__all__ = [
    "DEFAULT_THEME",
    "ConsoleWriter",
    "Diagnostic",
    "EmitError",
    "InvalidSpan",
    "Label",
    "LabelStyle",
    "RecordingWriter",
    "RenderConfig",
    "ReportingFiles",
    "Severity",
    "SimpleFiles",
    "Span",
    "StyleWriter",
    "WriteFailure",
    "build_document",
    "emit",
    "format_diagnostic",
]
