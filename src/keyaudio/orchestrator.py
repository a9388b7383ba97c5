import logging
import math
import threading
from collections.abc import Callable, Iterable

from keyaudio.completion_router import CompletionRouter
from keyaudio.interfaces.playable import Playable, PlaybackEngine
from keyaudio.interfaces.resolver import ResourceResolver
from keyaudio.interfaces.timer import Timer
from keyaudio.loop_controller import LoopController
from keyaudio.registry import AssetRegistry, AudioInformation
from keyaudio.sequence_controller import SequenceController
from keyaudio.timers import ThreadingTimer

_LOGGER = logging.getLogger(__name__)


class Orchestrator:
    """Plays audio assets by key.

    Register assets with `add_asset`, then control them with `play`, `pause`, `stop`, `set_volume`, `start_loop` and
    `start_sequence`. All by-key operations silently do nothing if the key is unknown; only `add_asset` raises.

    Completion actions (of `play`, loops and sequences) are tracked per key and the last one installed wins: playing a
    key with an `on_done` action while a loop or sequence is waiting for the same key takes over that key's completion,
    and the loop/sequence then never advances.

    `stop_loop` does not stop audio that is currently playing. It only prevents the loop's next iteration, and takes
    effect once the current iteration has completed.
    """

    def __init__(self, engine: PlaybackEngine, resolver: ResourceResolver, timer: Timer | None = None) -> None:
        self._lock = threading.RLock()
        self._registry = AssetRegistry(engine, resolver)
        self._router = CompletionRouter(self._registry, self._lock)

        timer = timer or ThreadingTimer()
        self._loops = LoopController(self._registry, self._router, timer, self._lock)
        self._sequences = SequenceController(self._registry, self._router, timer, self._lock)

    @property
    def asset_count(self) -> int:
        with self._lock:
            return self._registry.size()

    @property
    def keys(self) -> list[str]:
        with self._lock:
            return self._registry.keys()

    def add_asset(self, key: str, file_name: str, file_extension: str | None = None) -> None:
        """Register the given file under `key`, replacing (and stopping) any asset already registered under it.

        Raises `AssetNotFoundError` if the file can't be found and `AssetUnreadableError` if it can't be decoded.
        """
        with self._lock:
            replaces = key in self._registry
            self._registry.add(key, file_name, file_extension)
            if replaces:
                self._forget(key)

    def add_asset_info(self, info: AudioInformation) -> None:
        self.add_asset(info.key, info.file_name, info.file_extension)

    def remove_asset(self, key: str) -> None:
        with self._lock:
            self._forget(key)
            self._registry.remove(key)

    def play(self, key: str, on_done: Callable[[], None] | None = None) -> None:
        """Start (or resume) playing `key`, calling `on_done` once it has finished playing on its own."""
        with self._lock:
            if (playable := self._lookup(key, "play")) is None:
                return

            if on_done is not None:
                self._router.on_complete(key, on_done)
            playable.play()

    def play_at(self, key: str, device_time: float, on_done: Callable[[], None] | None = None) -> None:
        """Start playing `key` at the given time of the playback engine's device clock."""
        with self._lock:
            if (playable := self._lookup(key, "schedule")) is None:
                return

            # a rejected start never completes
            if playable.play_at(device_time) and on_done is not None:
                self._router.on_complete(key, on_done)

    def pause(self, key: str) -> None:
        with self._lock:
            if (playable := self._lookup(key, "pause")) is not None:
                playable.pause()

    def stop(self, key: str) -> None:
        with self._lock:
            if (playable := self._lookup(key, "stop")) is not None:
                playable.stop()

    def stop_all(self) -> None:
        with self._lock:
            for entry in self._registry.entries():
                if entry.playable.is_playing():
                    entry.playable.stop()

    def is_playing(self, key: str) -> bool:
        with self._lock:
            playable = self._registry.lookup(key)
            return playable is not None and playable.is_playing()

    def set_volume(self, key: str, volume: float) -> None:
        with self._lock:
            if (entry := self._registry.entry(key)) is None:
                _LOGGER.debug("Cannot set volume of unknown audio asset '%s'", key)
                return

            if math.isnan(volume):
                msg = "Volume must be a number between 0.0 and 1.0, got NaN"
                raise ValueError(msg)

            if not 0 <= volume <= 1:
                _LOGGER.debug("Clamping volume %s of '%s' into [0, 1]", volume, key)
                volume = min(max(volume, 0.0), 1.0)

            entry.volume = volume
            entry.playable.set_volume(volume)

    def volume(self, key: str) -> float | None:
        with self._lock:
            entry = self._registry.entry(key)
            return entry.volume if entry is not None else None

    def start_loop(self, key: str, interval: float = 0) -> None:
        """Play `key` over and over, waiting `interval` seconds after each iteration before starting the next."""
        self._loops.start_loop(key, interval)

    def stop_loop(self, key: str) -> None:
        """Prevent the next iteration of the loop of `key`. Does not stop the audio if it's currently playing."""
        self._loops.stop_loop(key)

    def is_looping(self, key: str) -> bool:
        return self._loops.is_looping(key)

    def start_sequence(
        self,
        keys: Iterable[str],
        interval: float | None = None,
        *,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        """Play the given keys one after the other, replacing any sequence that is still running.

        Unknown keys are skipped. If `interval` is given, wait that many seconds between two items.
        """
        self._sequences.start_sequence(keys, interval, on_finished=on_finished)

    @property
    def is_sequence_active(self) -> bool:
        return self._sequences.is_active

    def _lookup(self, key: str, operation: str) -> Playable | None:
        playable = self._registry.lookup(key)
        if playable is None:
            _LOGGER.debug("Cannot %s unknown audio asset '%s'", operation, key)
        return playable

    def _forget(self, key: str) -> None:
        self._router.discard(key)
        self._loops.discard(key)
