from __future__ import annotations

from rich.console import Console
from rich.style import Style
from rich.text import Text
from rich.theme import Theme

from span_report.render.theme import DEFAULT_THEME


class ConsoleWriter:
    """Write styled runs through a rich ``Console``.

    Style tokens are looked up in ``theme``. Color support follows the color
    system the console detected (or was forced to), so a console writing to a
    pipe produces plain text.

    Implements the ``StyleWriter`` protocol.
    """

    def __init__(self, console: Console | None = None, theme: Theme = DEFAULT_THEME) -> None:
        self.console = console or Console(stderr=True)
        self._styles: dict[str, Style] = dict(theme.styles)
        self._style: Style | None = None

    @property
    def supports_color(self) -> bool:
        return self.console.color_system is not None and not self.console.no_color

    def set_style(self, style: str) -> None:
        resolved = self._styles.get(style)
        if resolved is None:
            resolved = self.console.get_style(style, default="none")
        self._style = resolved

    def write_text(self, text: str) -> None:
        self.console.print(Text(text, style=self._style or ""), end="", soft_wrap=True, highlight=False)

    def reset_style(self) -> None:
        self._style = None


class RecordingWriter:
    """Keep every writer call in memory.

    ``getvalue()`` returns the plain text; ``markup()`` returns the text with
    ``{token}`` where a style is set and ``{/}`` where it is reset.
    """

    def __init__(self, supports_color: bool = True) -> None:
        self._supports_color = supports_color
        self.events: list[tuple[str, str | None]] = []

    @property
    def supports_color(self) -> bool:
        return self._supports_color

    def set_style(self, style: str) -> None:
        self.events.append(("style", style))

    def write_text(self, text: str) -> None:
        self.events.append(("text", text))

    def reset_style(self) -> None:
        self.events.append(("reset", None))

    def getvalue(self) -> str:
        return "".join(value or "" for kind, value in self.events if kind == "text")

    def markup(self) -> str:
        parts: list[str] = []
        for kind, value in self.events:
            if kind == "style":
                parts.append(f"{{{value}}}")
            elif kind == "reset":
                parts.append("{/}")
            else:
                parts.append(value or "")
        return "".join(parts)
