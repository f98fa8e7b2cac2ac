"""CLI command: scopedcss check -- parse a stylesheet and report errors."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from scopedcss.errors import SelectorParseError
from scopedcss.stylesheet import parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def check(cssfile: str) -> None:
    """Parse CSSFILE and report the first malformed selector, if any.

    Exits with code 0 when the stylesheet can be scoped, 1 otherwise.
    """
    css_path = Path(cssfile)

    try:
        stylesheet = parse_stylesheet(css_path.read_text(encoding="utf-8"))
    except SelectorParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    count = sum(1 for _ in stylesheet.qualified_rules())
    click.echo(f"OK: {css_path.name} ({count} rule(s))")
