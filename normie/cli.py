#!/usr/bin/env python3


import logging
import sys
from pathlib import Path

import click
import rich

from . import __version__
from .normalize_files import ask_confirmation, normalize_files
from .types import CliOptions, RenameOptions
from .utils import SPECIAL_CHARS


def validate_text(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and not value:
        raise click.BadParameter("text must not be empty")
    return value


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "-a",
    "append_suffix",
    metavar="TEXT",
    callback=validate_text,
    help="Append the specified text at the end of the filename.",
)
@click.option(
    "-i",
    "insert_prefix",
    metavar="TEXT",
    callback=validate_text,
    help="Insert the specified text at the beginning of the filename.",
)
@click.option("-l", "lowercase", is_flag=True, help="Transform the resulting filename into all lowercase characters.")
@click.option("-u", "uppercase", is_flag=True, help="Transform the resulting filename into all uppercase characters.")
@click.option(
    "-r",
    "remove_special",
    is_flag=True,
    help=f"Remove these characters: {SPECIAL_CHARS}",
)
@click.option("-t", "interactive", is_flag=True, help="Interactively ask for confirmation of each action.")
@click.option("-v", "verbose", is_flag=True, help="Show information about the performed actions.")
@click.option("-n", "--dry-run", is_flag=True, help="Show changes without renaming.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level (default: WARNING)",
)
@click.version_option(__version__, prog_name="normie")
def main(
    paths: tuple[Path, ...],
    append_suffix: str | None,
    insert_prefix: str | None,
    lowercase: bool,
    uppercase: bool,
    remove_special: bool,
    interactive: bool,
    verbose: bool,
    dry_run: bool,
    log_level: str,
) -> None:
    """Recursively normalize directory and file names to a Unix-friendly standard.

    Spaces always become underscores. Use -t if you are unsure of the results.
    """
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if lowercase and uppercase:
        raise click.UsageError("options -l and -u are not allowed at the same time")

    rename_options = RenameOptions(
        lowercase=lowercase,
        uppercase=uppercase,
        remove_special=remove_special,
        insert_prefix=insert_prefix,
        append_suffix=append_suffix,
    )
    options = CliOptions(
        rename_options=rename_options,
        interactive=interactive,
        verbose=verbose,
        dry_run=dry_run,
    )

    summary = normalize_files(paths, options=options, confirm=ask_confirmation)

    if verbose or dry_run:
        rich.print(summary.describe(dry_run=dry_run))
    if summary.failed:
        rich.print(
            "[bold]normie[/bold]: [bold red]error[/bold red], some actions could not be performed",
            file=sys.stderr,
        )
    sys.exit(summary.exit_code)


if __name__ == "__main__":
    main()
