from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from span_report.cli.options import ColorChoice, configure_logging
from span_report.core.emitter import emit
from span_report.errors import InvalidSpan
from span_report.files import SimpleFiles
from span_report.models import Diagnostic, Label, Span
from span_report.render.writers import ConsoleWriter

DEMO_SOURCE = '\n(define test 123)\n(+ test "")\n()\n'

_error_console = Console(stderr=True)


def demo_diagnostics(file_id: int) -> list[Diagnostic]:
    """Sample diagnostics over ``DEMO_SOURCE``; the last one has a span past the end of the file."""
    string_literal = Span.from_offset(file_id, 27, 2)
    whole_call = Span.from_offset(file_id, 19, 11)
    return [
        Diagnostic.error("Unexpected type in `+` application")
        .with_label(Label.primary(string_literal, "Expected integer but got string"))
        .with_label(Label.secondary(string_literal, "Expected integer but got string"))
        .with_code("E0001"),
        Diagnostic.warning("`+` function has no effect unless its result is used").with_label(
            Label.primary(whole_call)
        ),
        Diagnostic.help("Great job!"),
        Diagnostic.bug("Something really bad went wrong").with_label(
            Label.primary(Span.from_offset(file_id, 150, 250), "YIKES")
        ),
    ]


def demo(
    color: Annotated[ColorChoice, typer.Option(help="When to color the output.")] = ColorChoice.AUTO,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log layout details to stderr.")] = False,
) -> None:
    """Render a few sample diagnostics."""
    configure_logging(verbose)
    files = SimpleFiles()
    file_id = files.add("test", DEMO_SOURCE)

    console = color.console()
    writer = ConsoleWriter(console)
    for diagnostic in demo_diagnostics(file_id):
        try:
            emit(writer, diagnostic, files)
        except InvalidSpan as exc:
            _error_console.print(f"[red]error: {escape(str(exc))}[/red]")
        console.print()
