from collections.abc import Callable
from pathlib import Path
from typing import Protocol


class Playable(Protocol):
    """One decoded audio asset. All methods are non-blocking and return immediately."""

    def play(self) -> None:
        """Start playback, or resume it if paused. Does nothing if already playing."""

    def play_at(self, device_time: float) -> bool:
        """Start playback at the given point of the engine's device clock.

        Return whether playback was scheduled, which it is not if `device_time` doesn't lie in the future.
        """

    def pause(self) -> None:
        """Pause playback, keeping the position so that `play` resumes from it."""

    def stop(self) -> None:
        """Stop playback. A stopped run never signals completion."""

    def set_volume(self, volume: float) -> None:
        """Set the volume, from 0.0 (silent) to 1.0 (full volume)."""

    def is_playing(self) -> bool: ...

    def set_completion_handler(self, handler: Callable[[], None] | None) -> None:
        """Install the handler that is called once per run that finished on its own (i.e. was not stopped)."""


class PlaybackEngine(Protocol):
    def open(self, resource: Path) -> Playable:
        """Decode the given resource, raising `AssetUnreadableError` if it is not a readable audio file."""
