"""CLI command: scopedcss rewrite -- scope a stylesheet to one component."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from scopedcss.compiler import StyleBlock, StyleCompiler, concatenate
from scopedcss.config import ScopeConfig
from scopedcss.errors import InvalidIdentity, SelectorParseError
from scopedcss.scope_id import ComponentIdentity, ScopeId
from scopedcss.stylesheet import parse_stylesheet, serialize
from scopedcss.transforms import rewrite as rewrite_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--id", "scope_id", default=None, help="Use this scope id as-is")
@click.option(
    "--component",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Component file the id is derived from (defaults to CSSFILE)",
)
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Project root")
@click.option("--hash-content", is_flag=True, help="Include file content in the id")
@click.option("--prefix", default="data-v-", show_default=True, help="Attribute prefix")
@click.option(
    "--global-css",
    "global_css",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Unscoped stylesheet appended as-is (repeatable)",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None)
def rewrite(
    cssfile: str,
    scope_id: str | None,
    component: str | None,
    root: str | None,
    hash_content: bool,
    prefix: str,
    global_css: tuple[str, ...],
    output: str | None,
) -> None:
    """Rewrite CSSFILE so its selectors only match the component's elements.

    Prints the scoped CSS, followed by any --global-css files unchanged.
    """
    if scope_id and component:
        raise click.UsageError("--id and --component are mutually exclusive")

    try:
        config = ScopeConfig(attribute_prefix=prefix, hash_content=hash_content)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--prefix") from exc

    source = Path(cssfile).read_text(encoding="utf-8")
    globals_ = [StyleBlock(Path(p).read_text(encoding="utf-8")) for p in global_css]

    try:
        if scope_id:
            scoped = serialize(
                rewrite_stylesheet(parse_stylesheet(source, config), ScopeId(scope_id), config)
            )
            css = concatenate([scoped, *(block.content for block in globals_)])
        else:
            identity = ComponentIdentity.from_file(component or cssfile, root=root)
            css = StyleCompiler(config).compile(
                identity, [StyleBlock(source, scoped=True), *globals_]
            ).css
    except SelectorParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except InvalidIdentity as exc:
        click.echo(f"Invalid identity: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(css, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(css, nl=not css.endswith("\n"))
