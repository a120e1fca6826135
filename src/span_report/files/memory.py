from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class InMemoryFile:
    name: str
    source: str
    encoded: bytes = field(repr=False)
    line_starts: tuple[int, ...] = field(repr=False)


def _line_starts(encoded: bytes) -> tuple[int, ...]:
    starts = [0]
    index = encoded.find(b"\n")
    while index != -1:
        starts.append(index + 1)
        index = encoded.find(b"\n", index + 1)
    return tuple(starts)


class SimpleFiles:
    """In-memory file store implementing the ``ReportingFiles`` protocol.

    File ids are assigned sequentially by :meth:`add`. The line index is built
    once per file, so lookups are ``O(log lines)``.
    """

    def __init__(self) -> None:
        self.files: list[InMemoryFile] = []

    def add(self, name: str, source: str) -> int:
        encoded = source.encode("utf-8")
        self.files.append(InMemoryFile(name, source, encoded, _line_starts(encoded)))
        return len(self.files) - 1

    def add_path(self, path: str | Path) -> int:
        file_path = Path(path)
        try:
            source = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
        return self.add(str(file_path), source)

    def _get(self, file_id: int) -> InMemoryFile:
        if file_id < 0 or file_id >= len(self.files):
            raise KeyError(f"unknown file id {file_id}")
        return self.files[file_id]

    def name(self, file_id: int) -> str:
        return self._get(file_id).name

    def source(self, file_id: int) -> str:
        return self._get(file_id).source

    def line_span(self, file_id: int, line: int) -> tuple[int, int]:
        file = self._get(file_id)
        if line < 1 or line > len(file.line_starts):
            raise IndexError(f"line {line} out of range for {file.name}")
        start = file.line_starts[line - 1]
        if line < len(file.line_starts):
            end = file.line_starts[line] - 1
        else:
            end = len(file.encoded)
        if end > start and file.encoded[end - 1 : end] == b"\r":
            end -= 1
        return start, end

    def offset_to_line_col(self, file_id: int, offset: int) -> tuple[int, int]:
        file = self._get(file_id)
        if offset < 0 or offset > len(file.encoded):
            raise IndexError(f"offset {offset} out of range for {file.name}")
        line_index = bisect_right(file.line_starts, offset) - 1
        return line_index + 1, offset - file.line_starts[line_index]
