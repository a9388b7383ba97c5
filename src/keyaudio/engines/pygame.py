import logging
from pathlib import Path
from typing_extensions import override

import pygame

from keyaudio.engines.base import MonitoredPlayable, PlaybackMonitor
from keyaudio.exceptions import AssetUnreadableError

_LOGGER = logging.getLogger(__name__)


class PygamePlayable(MonitoredPlayable):
    def __init__(self, sound: pygame.mixer.Sound, monitor: PlaybackMonitor) -> None:
        super().__init__(monitor)

        self._sound = sound
        self._channel: pygame.mixer.Channel | None = None
        self._volume = 1.0

    @override
    def set_volume(self, volume: float) -> None:
        with self._lock:
            self._volume = volume
            if self._channel is not None:
                self._channel.set_volume(volume)

    @override
    def _start_locked(self) -> bool:
        channel = self._sound.play()
        if channel is None:
            _LOGGER.warning("No free mixer channel, dropping playback. Consider raising the number of channels.")
            return False

        channel.set_volume(self._volume)
        self._channel = channel
        return True

    @override
    def _is_running_locked(self) -> bool:
        # channels are shared: once our sound is done, the channel may already play something else
        return (
            self._channel is not None and self._channel.get_busy() and self._channel.get_sound() is self._sound
        )

    @override
    def _pause_locked(self) -> bool:
        if self._channel is None:
            return False

        self._channel.pause()
        return True

    @override
    def _resume_locked(self) -> None:
        if self._channel is not None:
            self._channel.unpause()

    @override
    def _stop_locked(self) -> None:
        if self._channel is not None and self._channel.get_sound() is self._sound:
            self._channel.stop()
        self._channel = None

    @override
    def _clear_locked(self) -> None:
        self._channel = None


class PygamePlaybackEngine:
    """A playback engine that uses pygame.mixer to decode and play sounds."""

    def __init__(self, num_channels: int = 64, monitor: PlaybackMonitor | None = None) -> None:
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        # high number of channels to allow high number of overlapping sounds without any being dropped
        pygame.mixer.set_num_channels(num_channels)

        self._monitor = monitor or PlaybackMonitor()

    def open(self, resource: Path) -> PygamePlayable:
        try:
            sound = pygame.mixer.Sound(str(resource))
        except (pygame.error, OSError) as e:
            msg = f"Could not load audio file {resource}: {e}"
            raise AssetUnreadableError(msg) from e

        return PygamePlayable(sound, self._monitor)
