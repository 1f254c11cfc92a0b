import sys
from pathlib import Path

import click

from constants import DEFAULT_SHARED_IMPORT_PATH, DEFAULT_SHARED_TYPE_PREFIX, LOG_PREFIX
import cli_subcommands


@click.group()
def cli():
    pass


@cli.command()
@click.argument(
    "input_dir", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path)
)
@click.argument(
    "output_dir", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path)
)
@click.option(
    "--substitutions",
    "substitutions_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="XJ_SHARED_TYPES_SUBSTITUTIONS",
    help="File of `AutoName->ChosenName` lines overriding generated shared type names.",
)
@click.option(
    "--prefix",
    default=DEFAULT_SHARED_TYPE_PREFIX,
    envvar="XJ_SHARED_TYPES_PREFIX",
    show_default=True,
    help="Prefix of generated shared type names.",
)
@click.option(
    "--shared-import",
    default=DEFAULT_SHARED_IMPORT_PATH,
    show_default=True,
    help="Module path through which rewritten modules import the shared types.",
)
@click.option(
    "--report",
    "report_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON summary of the shared types to this path.",
)
@click.option("--verbose", is_flag=True, help="Trace struct classification and renaming.")
def dedupe(input_dir, output_dir, substitutions_path, prefix, shared_import, report_path, verbose):
    """Move structs duplicated across the modules of INPUT_DIR into a shared module."""
    try:
        cli_subcommands.do_dedupe(
            input_dir,
            output_dir,
            substitutions_path,
            prefix,
            shared_import,
            report_path=report_path,
            verbose=verbose,
        )
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"{LOG_PREFIX} error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("identifiers", nargs=-1, required=True)
def split_words(identifiers: list[str]):
    """Show how type names are broken into words when naming shared types."""
    cli_subcommands.do_split_words(identifiers)


if __name__ == "__main__":
    cli()
