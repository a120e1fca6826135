"""A small styled document tree.

A document is a tree of ``Text`` leaves and ``Styled`` regions. A region's
style token applies to everything below it until a nested region names its
own token; ``Styled(None, ...)`` groups children without changing the style.
The tree knows nothing about diagnostics: style tokens are opaque strings
that the writer resolves.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Styled:
    style: str | None
    children: tuple[Node, ...] = ()


Node = Text | Styled
Child = Node | str


@dataclass(frozen=True)
class Run:
    """A chunk of text together with its effective style."""

    style: str | None
    text: str


def _to_node(child: Child) -> Node:
    return Text(child) if isinstance(child, str) else child


def styled(style: str | None, *children: Child) -> Styled:
    return Styled(style, tuple(_to_node(child) for child in children))


def line(*children: Child) -> Styled:
    """Group children and terminate them with a newline."""
    return Styled(None, (*(_to_node(child) for child in children), Text("\n")))


def document(*children: Child) -> Styled:
    return styled(None, *children)


def _walk(node: Node, inherited: str | None) -> Iterator[Run]:
    if isinstance(node, Text):
        if node.text:
            yield Run(inherited, node.text)
        return
    effective = inherited if node.style is None else node.style
    for child in node.children:
        yield from _walk(child, effective)


def flatten(node: Node) -> list[Run]:
    """Depth-first runs of ``node`` with adjacent same-style runs coalesced."""
    runs: list[Run] = []
    for run in _walk(node, None):
        if runs and runs[-1].style == run.style:
            runs[-1] = Run(run.style, runs[-1].text + run.text)
        else:
            runs.append(run)
    return runs


def plain_text(node: Node) -> str:
    return "".join(run.text for run in flatten(node))


def debug_format(node: Node, indent: str = "  ") -> str:
    """Indented outline of the tree, one node per line, for debug logging."""
    out: list[str] = []

    def visit(current: Node, depth: int) -> None:
        pad = indent * depth
        if isinstance(current, Text):
            out.append(f"{pad}{current.text!r}")
            return
        out.append(f"{pad}<{current.style or '-'}>")
        for child in current.children:
            visit(child, depth + 1)

    visit(node, 0)
    return "\n".join(out)
