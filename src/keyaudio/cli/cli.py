import logging
from pathlib import Path

import click

from keyaudio.cli.play import loop, play, sequence
from keyaudio.logging_config import configure_logging

_CONSOLE_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to additionally write a debug log (keyaudio.log) to.",
)
@click.option("-v", "--verbose", count=True, help="Log more to the console: -v for info, -vv for debug messages.")
def cli(log_dir: Path | None, verbose: int) -> None:
    """Play, loop and sequence sound files by key."""
    configure_logging(log_dir, console_level=_CONSOLE_LEVELS[min(verbose, len(_CONSOLE_LEVELS) - 1)])


cli.add_command(play)
cli.add_command(sequence)
cli.add_command(loop)
