from rich.theme import Theme

from span_report.models import LabelStyle, Severity

SEVERITY_COLORS = {
    Severity.BUG: "red",
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.NOTE: "green",
    Severity.HELP: "cyan",
}

SECONDARY_COLOR = "blue"
GUTTER_STYLE = "gutter"
LOCATION_STYLE = "location"
NOTE_STYLE = "note"
HEADER_MESSAGE_STYLE = "header.message"


def header_style(severity: Severity) -> str:
    return f"header.{severity}"


def label_style(style: LabelStyle, severity: Severity) -> str:
    if style is LabelStyle.SECONDARY:
        return "secondary"
    return f"primary.{severity}"


def _build_default_theme() -> Theme:
    styles: dict[str, str] = {
        HEADER_MESSAGE_STYLE: "bold",
        "secondary": SECONDARY_COLOR,
        GUTTER_STYLE: "blue",
        LOCATION_STYLE: "none",
        NOTE_STYLE: "bold",
    }
    for severity, color in SEVERITY_COLORS.items():
        styles[header_style(severity)] = f"bold {color}"
        styles[label_style(LabelStyle.PRIMARY, severity)] = color
    return Theme(styles, inherit=False)


DEFAULT_THEME = _build_default_theme()
