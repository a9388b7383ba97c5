import logging
from pathlib import Path
from typing_extensions import override

from playsound3 import playsound
from playsound3.playsound3 import Sound

from keyaudio.engines.base import MonitoredPlayable, PlaybackMonitor
from keyaudio.exceptions import AssetUnreadableError

_LOGGER = logging.getLogger(__name__)


class Playsound3Playable(MonitoredPlayable):
    """Plays a file with playsound3. Doesn't support pausing or volume control!"""

    def __init__(self, path: Path, monitor: PlaybackMonitor) -> None:
        super().__init__(monitor)

        self._path = path
        self._sound: Sound | None = None

    @override
    def set_volume(self, volume: float) -> None:
        if volume != 1:
            _LOGGER.warning("Volume control is not supported. Ignoring volume of %s for %s.", volume, self._path)

    @override
    def _start_locked(self) -> bool:
        self._sound = playsound(self._path, block=False)
        return True

    @override
    def _is_running_locked(self) -> bool:
        return self._sound is not None and self._sound.is_alive()

    @override
    def _pause_locked(self) -> bool:
        _LOGGER.warning("Pausing is not supported. Ignoring pause of %s.", self._path)
        return False

    @override
    def _resume_locked(self) -> None:
        # never paused, see `_pause_locked`
        pass

    @override
    def _stop_locked(self) -> None:
        if self._sound is not None:
            self._sound.stop()
        self._sound = None

    @override
    def _clear_locked(self) -> None:
        self._sound = None


class Playsound3PlaybackEngine:
    """A playback engine that uses the playsound3 module to play sounds."""

    SUPPORTED_SUFFIXES = frozenset({".wav", ".mp3", ".ogg", ".flac", ".aac", ".m4a"})

    def __init__(self, monitor: PlaybackMonitor | None = None) -> None:
        self._monitor = monitor or PlaybackMonitor()

    def open(self, resource: Path) -> Playsound3Playable:
        # playsound3 decodes lazily in a subprocess, so this is the best we can check upfront
        if not resource.is_file():
            msg = f"Audio file {resource} is not a readable file."
            raise AssetUnreadableError(msg)

        if resource.suffix.lower() not in self.SUPPORTED_SUFFIXES:
            msg = f"Unsupported audio format {resource.suffix or '(none)'} of {resource}."
            raise AssetUnreadableError(msg)

        return Playsound3Playable(resource, self._monitor)
