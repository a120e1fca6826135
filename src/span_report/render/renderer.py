from span_report.core.ports.writer import StyleWriter
from span_report.render.tree import Node, flatten


def render(node: Node, writer: StyleWriter) -> None:
    """Write ``node`` to ``writer``, switching styles only where the effective style changes.

    Writers without color support receive the same text and no style calls.
    A styled stream always ends with a reset.
    """
    color = writer.supports_color
    current: str | None = None

    for run in flatten(node):
        if color and run.style != current:
            if run.style is None:
                writer.reset_style()
            else:
                writer.set_style(run.style)
            current = run.style
        writer.write_text(run.text)

    if color and current is not None:
        writer.reset_style()
