"""Repeated playback of a single key.

Stopping a loop is a request, not an immediate action: the flag is checked when the iteration that is currently playing
completes (or when the wait after it elapses), and only prevents the *next* iteration from starting. Audio that is
playing when `stop_loop` is called keeps playing until it ends. Use `Orchestrator.stop` in addition to cut it short.
"""

import functools
import logging
import math
import threading
from dataclasses import dataclass

from keyaudio.completion_router import CompletionRouter
from keyaudio.interfaces.timer import Timer
from keyaudio.registry import AssetRegistry

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class LoopState:
    key: str
    interval: float
    cancel_requested: bool = False


class LoopController:
    def __init__(
        self, registry: AssetRegistry, router: CompletionRouter, timer: Timer, lock: "threading.RLock | None" = None
    ) -> None:
        self._registry = registry
        self._router = router
        self._timer = timer
        self._lock = lock or threading.RLock()
        self._loops: dict[str, LoopState] = {}

    def start_loop(self, key: str, interval: float = 0) -> None:
        with self._lock:
            if key not in self._registry:
                _LOGGER.debug("Cannot loop unknown audio asset '%s'", key)
                return

            if not math.isfinite(interval) or interval < 0:
                msg = f"Loop interval must be a non-negative number of seconds, got {interval}"
                raise ValueError(msg)

            if key in self._loops:
                _LOGGER.debug("Superseding running loop of '%s'", key)

            state = LoopState(key=key, interval=interval)
            self._loops[key] = state
            _LOGGER.info("Starting loop of '%s' with an interval of %ss", key, interval)
            self._iterate(state)

    def stop_loop(self, key: str) -> None:
        with self._lock:
            if (state := self._loops.get(key)) is None:
                _LOGGER.debug("No loop of '%s' to stop", key)
                return

            state.cancel_requested = True

    def discard(self, key: str) -> None:
        """Forget the loop of `key` right away, e.g. because its asset was removed."""
        with self._lock:
            self._loops.pop(key, None)

    def is_looping(self, key: str) -> bool:
        with self._lock:
            return key in self._loops

    def _iterate(self, state: LoopState) -> None:
        if not self._is_current(state):
            return

        if state.cancel_requested:
            self._finish(state)
            return

        playable = self._registry.lookup(state.key)
        if playable is None or not self._router.on_complete(
            state.key, functools.partial(self._on_iteration_complete, state)
        ):
            self._finish(state)
            return

        playable.play()

    def _on_iteration_complete(self, state: LoopState) -> None:
        if not self._is_current(state):
            return

        if state.cancel_requested:
            self._finish(state)
            return

        self._timer.after(state.interval, functools.partial(self._resume, state))

    def _resume(self, state: LoopState) -> None:
        with self._lock:
            self._iterate(state)

    def _is_current(self, state: LoopState) -> bool:
        return self._loops.get(state.key) is state

    def _finish(self, state: LoopState) -> None:
        del self._loops[state.key]
        _LOGGER.info("Loop of '%s' ended", state.key)
