"""CLI entry point for regex railroad diagrams."""

import sys
from collections import Counter
from pathlib import Path
from typing import Optional

import click

from .ast import Node
from .debug import ast_stats, dump_ast
from .errors import PatternSyntaxError
from .layout import LayoutConfig, LayoutEngine
from .parser import parse
from .unparse import to_pattern

# Longest pattern the CLI will hand to the parser
DEFAULT_MAX_LENGTH = 500


def _parse_or_exit(pattern: str, max_length: int = DEFAULT_MAX_LENGTH) -> Node:
    if len(pattern) > max_length:
        click.echo(f"❌ Pattern too long ({len(pattern)} characters, maximum {max_length})", err=True)
        sys.exit(1)
    try:
        return parse(pattern)
    except PatternSyntaxError as e:
        click.echo(f"❌ Syntax error:\n{e}", err=True)
        sys.exit(1)


@click.group()
def cli() -> None:
    """Regex railroad diagrams - parse patterns and lay them out as drawing primitives."""
    pass


@cli.command("parse")
@click.argument("pattern")
def parse_command(pattern: str) -> None:
    """Print the syntax tree of PATTERN."""
    ast = _parse_or_exit(pattern)
    dump_ast(ast, file=sys.stdout)


@cli.command("layout")
@click.argument("pattern")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write JSON here instead of stdout")
@click.option("--font-size", type=float, default=14.0, help="Box label font size (default: 14)")
@click.option("--max-length", type=int, default=DEFAULT_MAX_LENGTH, help="Reject longer patterns")
@click.option("--max-width", type=float, default=1200.0, help="Warn when the diagram is wider")
@click.option("--debug", is_flag=True, help="Dump the syntax tree to stderr")
def layout_command(
    pattern: str,
    output_file: Optional[str],
    font_size: float,
    max_length: int,
    max_width: float,
    debug: bool,
) -> None:
    """Lay out PATTERN and emit the diagram as JSON."""
    ast = _parse_or_exit(pattern, max_length)
    if debug:
        dump_ast(ast)

    # Configure
    config = LayoutConfig()
    config.FONT_SIZE = font_size

    diagram = LayoutEngine(config).layout(ast)

    if diagram.bounds.width > max_width:
        click.echo(
            f"⚠ Warning: Diagram width {diagram.bounds.width:.0f} exceeds {max_width:.0f}",
            err=True,
        )

    content = diagram.model_dump_json(indent=2)
    if output_file is None:
        click.echo(content)
        return

    Path(output_file).write_text(content)

    # Summary
    click.echo(f"✓ {output_file}", err=True)
    click.echo(f"  Primitives: {len(diagram.primitives)}", err=True)
    click.echo(f"  Diagram size: {diagram.bounds.width:.0f}×{diagram.bounds.height:.0f}", err=True)


@cli.command()
@click.argument("pattern")
def info(pattern: str) -> None:
    """Display information about PATTERN and its diagram."""
    ast = _parse_or_exit(pattern)
    stats = ast_stats(ast)
    diagram = LayoutEngine().layout(ast)

    click.echo(f"Pattern: {to_pattern(ast)}")
    click.echo(f"Nodes: {stats.nodes}")
    click.echo(f"Depth: {stats.depth}")

    click.echo("\nNode types:")
    for node_type, count in sorted(stats.types.items()):
        click.echo(f"  {node_type}: {count}")

    primitive_counts = Counter(p.kind for p in diagram.primitives)
    click.echo("\nPrimitives:")
    for kind, count in sorted(primitive_counts.items()):
        click.echo(f"  {kind}: {count}")

    click.echo(f"\nDiagram size: {diagram.bounds.width:.0f}×{diagram.bounds.height:.0f}")


if __name__ == "__main__":
    cli()
