"""Options shared by the rendering commands."""

import logging
from enum import Enum

from rich.console import Console
from rich.logging import RichHandler

from span_report.config import RenderConfig


class ColorChoice(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def console(self) -> Console:
        """Console for diagnostic output; ``auto`` colors only when writing to a terminal."""
        if self is ColorChoice.ALWAYS:
            return Console(force_terminal=True)
        if self is ColorChoice.NEVER:
            return Console(color_system=None, no_color=True)
        return Console()


def configure_logging(verbose: bool) -> None:
    """Send the package's DEBUG records to stderr through rich when ``verbose`` is set."""
    if not verbose:
        return
    package_logger = logging.getLogger("span_report")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def build_config(
    tab_width: int | None = None,
    context_lines: int | None = None,
    elision_threshold: int | None = None,
    max_width: int | None = None,
) -> RenderConfig:
    """Environment config with the given command-line values layered on top."""
    base = RenderConfig.from_env()
    overrides = {
        "tab_width": tab_width,
        "context_lines": context_lines,
        "elision_threshold": elision_threshold,
        "max_width": max_width,
    }
    values = base.model_dump()
    values.update({key: value for key, value in overrides.items() if value is not None})
    return RenderConfig.model_validate(values)
