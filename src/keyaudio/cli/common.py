import functools
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Literal, TypeAlias

import click

from keyaudio.exceptions import BaseKeyAudioError
from keyaudio.interfaces.playable import PlaybackEngine
from keyaudio.orchestrator import Orchestrator
from keyaudio.resources import DirectoryResolver

BackendParameter: TypeAlias = Literal["pygame", "playsound3"]


def orchestrator_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Add the options needed to assemble an `Orchestrator`, passing it to the command as `orchestrator`."""

    @click.option(
        "-d",
        "--sounds-dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        multiple=True,
        default=(Path(),),
        show_default=True,
        help="Directory to look up sound files in. Can be specified multiple times; searched in order.",
    )
    @click.option(
        "-b",
        "--backend",
        type=click.Choice(["pygame", "playsound3"], case_sensitive=False),
        default="pygame",
        show_default=True,
        help="Audio backend to play sounds with. playsound3 supports neither pausing nor volume control.",
    )
    @functools.wraps(command)
    def wrapper(
        *args: Any,  # noqa: ANN401
        sounds_dir: tuple[Path, ...],
        backend: BackendParameter,
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        orchestrator = Orchestrator(_create_engine(backend), DirectoryResolver(*sounds_dir))
        return command(*args, orchestrator=orchestrator, **kwargs)

    return wrapper


def add_assets(orchestrator: Orchestrator, keys: Iterable[str], extension: str | None) -> None:
    for key in keys:
        try:
            orchestrator.add_asset(key, key, extension)
        except BaseKeyAudioError as e:
            raise click.ClickException(str(e)) from e


def wait_for(event: threading.Event) -> None:
    # wait in slices, so that Ctrl-C is handled promptly on every platform
    while not event.wait(0.1):
        pass


def _create_engine(backend: BackendParameter) -> PlaybackEngine:
    # imported lazily, since importing pygame initializes parts of SDL
    match backend:
        case "pygame":
            from keyaudio.engines.pygame import PygamePlaybackEngine

            return PygamePlaybackEngine()
        case "playsound3":
            from keyaudio.engines.playsound3 import Playsound3PlaybackEngine

            return Playsound3PlaybackEngine()
