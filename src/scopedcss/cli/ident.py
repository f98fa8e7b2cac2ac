"""CLI command: scopedcss scope-id -- print the scope id of a component."""

from __future__ import annotations

import sys

import click

from scopedcss.config import ScopeConfig
from scopedcss.errors import InvalidIdentity
from scopedcss.scope_id import ComponentIdentity, allocate
from scopedcss.template import markers


@click.command("scope-id")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Project root")
@click.option("--hash-content", is_flag=True, help="Include file content in the id")
@click.option("--prefix", default="data-v-", show_default=True, help="Attribute prefix")
def scope_id(path: str, root: str | None, hash_content: bool, prefix: str) -> None:
    """Print the scope id and attribute name for the component at PATH."""
    try:
        config = ScopeConfig(attribute_prefix=prefix, hash_content=hash_content)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--prefix") from exc

    try:
        identity = ComponentIdentity.from_file(path, root=root)
        sid = allocate(identity, config)
    except InvalidIdentity as exc:
        click.echo(f"Invalid identity: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Scope id:  {sid}")
    click.echo(f"Attribute: {markers(sid, config).name}")
