from span_report.files.memory import InMemoryFile, SimpleFiles

__all__ = ["InMemoryFile", "SimpleFiles"]
