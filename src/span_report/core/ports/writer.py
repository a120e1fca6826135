from typing import Protocol


class StyleWriter(Protocol):
    """Output sink for rendered documents. Sink failures surface as ``OSError``."""

    @property
    def supports_color(self) -> bool: ...

    def set_style(self, style: str) -> None: ...

    def write_text(self, text: str) -> None: ...

    def reset_style(self) -> None: ...
