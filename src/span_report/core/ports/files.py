from typing import Protocol


class ReportingFiles(Protocol):
    """Read-only access to source files, keyed by integer file id.

    Lines are 1-based. Byte columns are 0-based offsets from the start of the
    line. Unknown file ids or out-of-range lines raise ``LookupError``.
    """

    def name(self, file_id: int) -> str: ...

    def source(self, file_id: int) -> str: ...

    def line_span(self, file_id: int, line: int) -> tuple[int, int]: ...

    def offset_to_line_col(self, file_id: int, offset: int) -> tuple[int, int]: ...
