import functools
import logging
import math
import threading
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from keyaudio.completion_router import CompletionRouter
from keyaudio.interfaces.timer import Timer
from keyaudio.registry import AssetRegistry

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class SequenceState:
    remaining_keys: deque[str] = field(default_factory=deque)
    interval: float | None = None
    on_finished: Callable[[], None] | None = None


class SequenceController:
    """Plays a list of keys one after the other. Only one sequence is active at a time."""

    def __init__(
        self, registry: AssetRegistry, router: CompletionRouter, timer: Timer, lock: "threading.RLock | None" = None
    ) -> None:
        self._registry = registry
        self._router = router
        self._timer = timer
        self._lock = lock or threading.RLock()
        self._state: SequenceState | None = None

    def start_sequence(
        self,
        keys: Iterable[str],
        interval: float | None = None,
        *,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        remaining_keys = deque(keys)
        if not remaining_keys:
            _LOGGER.debug("Ignoring empty sequence")
            return

        with self._lock:
            # a sequence of unknown keys never waits, so its interval is irrelevant
            if (
                interval is not None
                and (not math.isfinite(interval) or interval < 0)
                and any(key in self._registry for key in remaining_keys)
            ):
                msg = f"Sequence interval must be a non-negative number of seconds, got {interval}"
                raise ValueError(msg)

            if self._state is not None:
                _LOGGER.debug("Replacing active sequence (%d keys left)", len(self._state.remaining_keys))

            state = SequenceState(remaining_keys=remaining_keys, interval=interval, on_finished=on_finished)
            self._state = state
            _LOGGER.info("Starting sequence of %d keys", len(remaining_keys))
            self._advance(state)

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._state is not None

    @property
    def remaining(self) -> list[str]:
        """Keys that have not been started yet."""
        with self._lock:
            return list(self._state.remaining_keys) if self._state is not None else []

    def _advance(self, state: SequenceState) -> None:
        if self._state is not state:
            return

        while state.remaining_keys:
            key = state.remaining_keys.popleft()

            playable = self._registry.lookup(key)
            if playable is None or not self._router.on_complete(key, functools.partial(self._on_item_complete, state)):
                _LOGGER.debug("Skipping unplayable audio asset '%s' in sequence", key)
                continue

            playable.play()
            return

        self._finish(state)

    def _on_item_complete(self, state: SequenceState) -> None:
        if self._state is not state:
            return

        if not state.remaining_keys:
            self._finish(state)
        elif state.interval is not None:
            self._timer.after(state.interval, functools.partial(self._resume, state))
        else:
            self._advance(state)

    def _resume(self, state: SequenceState) -> None:
        with self._lock:
            self._advance(state)

    def _finish(self, state: SequenceState) -> None:
        self._state = None
        _LOGGER.info("Sequence finished")
        if state.on_finished is not None:
            state.on_finished()
