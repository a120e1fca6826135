from span_report.core.ports.files import ReportingFiles
from span_report.core.ports.writer import StyleWriter

__all__ = ["ReportingFiles", "StyleWriter"]
