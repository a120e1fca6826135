from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from span_report.cli.options import ColorChoice, build_config, configure_logging
from span_report.core.emitter import emit
from span_report.errors import EmitError
from span_report.files import SimpleFiles
from span_report.models import Diagnostic
from span_report.render.writers import ConsoleWriter

_error_console = Console(stderr=True)


def _load_files(sources: list[Path]) -> SimpleFiles:
    files = SimpleFiles()
    for path in sources:
        try:
            files.add_path(path)
        except (OSError, UnicodeDecodeError) as exc:
            _error_console.print(f"[red]Cannot read source {escape(str(path))}: {escape(str(exc))}[/red]")
            raise typer.Exit(1) from exc
    return files


def _load_diagnostic(path: Path) -> Diagnostic:
    try:
        return Diagnostic.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        _error_console.print(f"[red]Cannot read diagnostic {escape(str(path))}: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    except ValidationError as exc:
        _error_console.print(f"[red]Invalid diagnostic {escape(str(path))}:[/red]\n{escape(str(exc))}")
        raise typer.Exit(1) from exc


def render(
    diagnostic_json: Annotated[Path, typer.Argument(help="JSON file holding one diagnostic.")],
    source: Annotated[
        list[Path] | None,
        typer.Option("--source", "-s", help="Source file; the n-th --source is file id n."),
    ] = None,
    color: Annotated[ColorChoice, typer.Option(help="When to color the output.")] = ColorChoice.AUTO,
    tab_width: Annotated[int | None, typer.Option(min=1, help="Columns per tab stop.")] = None,
    context_lines: Annotated[
        int | None, typer.Option(min=0, help="Unlabeled lines shown around the labeled ones.")
    ] = None,
    elision_threshold: Annotated[
        int | None, typer.Option(min=0, help="Most interior lines of a span shown before eliding.")
    ] = None,
    max_width: Annotated[
        int | None, typer.Option(min=1, help="Columns of source width after which label messages wrap.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log layout details to stderr.")] = False,
) -> None:
    """Render a diagnostic stored as JSON against the given source files."""
    configure_logging(verbose)
    try:
        config = build_config(tab_width, context_lines, elision_threshold, max_width)
    except ValidationError as exc:
        _error_console.print(f"[red]Invalid configuration:[/red]\n{escape(str(exc))}")
        raise typer.Exit(1) from exc
    files = _load_files(source or [])
    diagnostic = _load_diagnostic(diagnostic_json)

    writer = ConsoleWriter(color.console())
    try:
        emit(writer, diagnostic, files, config)
    except EmitError as exc:
        _error_console.print(f"[red]error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
