"""scopedcss CLI entry point: Click group with subcommands."""

import logging

import click

from scopedcss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="scopedcss")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """scopedcss - scope component stylesheets with data attributes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from scopedcss.cli.rewrite import rewrite  # noqa: E402
from scopedcss.cli.check import check  # noqa: E402
from scopedcss.cli.ident import scope_id  # noqa: E402

cli.add_command(rewrite)
cli.add_command(check)
cli.add_command(scope_id)
