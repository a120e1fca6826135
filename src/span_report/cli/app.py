import typer

from span_report.cli.demo import demo
from span_report.cli.render import render

app = typer.Typer(
    name="span-report",
    help="span-report CLI: render compiler-style diagnostics over source files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("render")(render)
app.command("demo")(demo)


def main() -> None:
    app()
