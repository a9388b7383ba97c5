import threading

import click

from keyaudio.cli.common import add_assets, orchestrator_options, wait_for
from keyaudio.orchestrator import Orchestrator

_extension_option = click.option(
    "-e",
    "--extension",
    default=None,
    help="File extension of the sound files (e.g. 'mp3'). If omitted, the first file named like the key is used.",
)
_volume_option = click.option(
    "--volume", type=click.FloatRange(0, 1), default=1.0, show_default=True, help="Volume to play at."
)


@click.command()
@click.argument("keys", nargs=-1, required=True)
@_extension_option
@_volume_option
@orchestrator_options
def play(orchestrator: Orchestrator, keys: tuple[str, ...], extension: str | None, volume: float) -> None:
    """Play the sound files named KEYS one after the other, each once."""
    add_assets(orchestrator, keys, extension)

    for key in keys:
        done = threading.Event()
        orchestrator.set_volume(key, volume)
        orchestrator.play(key, on_done=done.set)
        click.echo(f"Playing {key}")
        wait_for(done)


@click.command()
@click.argument("keys", nargs=-1, required=True)
@click.option(
    "-i",
    "--interval",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait between two sounds. If omitted, the next sound starts right away.",
)
@_extension_option
@_volume_option
@orchestrator_options
def sequence(
    orchestrator: Orchestrator, keys: tuple[str, ...], interval: float | None, extension: str | None, volume: float
) -> None:
    """Play the sound files named KEYS in sequence. A key may be given more than once."""
    unique_keys = list(dict.fromkeys(keys))
    add_assets(orchestrator, unique_keys, extension)
    for key in unique_keys:
        orchestrator.set_volume(key, volume)

    finished = threading.Event()
    orchestrator.start_sequence(keys, interval, on_finished=finished.set)
    wait_for(finished)


@click.command()
@click.argument("key")
@click.option(
    "-i",
    "--interval",
    type=click.FloatRange(min=0),
    default=0.0,
    show_default=True,
    help="Seconds to wait between two iterations.",
)
@_extension_option
@_volume_option
@orchestrator_options
def loop(orchestrator: Orchestrator, key: str, interval: float, extension: str | None, volume: float) -> None:
    """Play the sound file named KEY over and over, until interrupted with Ctrl-C."""
    add_assets(orchestrator, [key], extension)
    orchestrator.set_volume(key, volume)

    orchestrator.start_loop(key, interval)
    click.echo(f"Looping {key}, press Ctrl-C to stop")
    try:
        wait_for(threading.Event())
    except KeyboardInterrupt:
        # stopping a loop doesn't cut the current iteration short, so stop that explicitly
        orchestrator.stop_loop(key)
        orchestrator.stop(key)
