import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from queue import Empty, SimpleQueue

_LOGGER = logging.getLogger(__name__)


def device_time() -> float:
    """The clock that `play_at` times refer to."""
    return time.monotonic()


class RunState(Enum):
    RUNNING = auto()
    FINISHED = auto()
    INTERRUPTED = auto()


@dataclass(slots=True, frozen=True)
class Run:
    playable: "MonitoredPlayable"
    run_id: int


class PlaybackMonitor:
    """Watches playback runs on a daemon thread and signals completion of runs that finished on their own."""

    def __init__(self, poll_interval: float = 0.01) -> None:
        self._poll_interval = poll_interval
        self._runs: SimpleQueue[Run] = SimpleQueue()
        self._closed = threading.Event()

        self._manager_thread = threading.Thread(target=self._manage_runs, name="PlaybackMonitor", daemon=True)
        self._manager_thread.start()

    def watch(self, run: Run) -> None:
        self._runs.put_nowait(run)

    def close(self) -> None:
        self._closed.set()
        self._manager_thread.join()

    def _manage_runs(self) -> None:
        while not self._closed.wait(self._poll_interval):
            for _ in range(self._runs.qsize()):
                try:
                    run = self._runs.get_nowait()
                except Empty:
                    break

                match run.playable.poll(run.run_id):
                    case RunState.RUNNING:
                        self._runs.put_nowait(run)
                    case RunState.FINISHED:
                        self._complete(run)
                    case RunState.INTERRUPTED:
                        pass

    @staticmethod
    def _complete(run: Run) -> None:
        # keep watching the other runs even if a completion handler fails
        try:
            run.playable.complete(run.run_id)
        except Exception:
            _LOGGER.exception("Completion handler failed")


class MonitoredPlayable(ABC):
    """Base for playables whose end of playback is detected by polling the backend."""

    def __init__(self, monitor: PlaybackMonitor) -> None:
        self._monitor = monitor
        self._lock = threading.Lock()
        self._handler: Callable[[], None] | None = None
        self._paused = False
        self._run_id = 0
        self._scheduled_start: threading.Timer | None = None

    def play(self) -> None:
        with self._lock:
            self._cancel_scheduled_start()

            if self._paused:
                self._resume_locked()
                self._paused = False
                return

            if self._is_running_locked() or not self._start_locked():
                return

            self._run_id += 1
            run = Run(self, self._run_id)

        self._monitor.watch(run)

    def play_at(self, device_time: float) -> bool:
        delay = device_time - time.monotonic()
        if delay <= 0:
            _LOGGER.warning("Cannot schedule playback at %s, which is not in the future. Ignoring.", device_time)
            return False

        with self._lock:
            self._cancel_scheduled_start()
            self._scheduled_start = threading.Timer(delay, self.play)
            self._scheduled_start.daemon = True
            self._scheduled_start.start()

        return True

    def pause(self) -> None:
        with self._lock:
            self._cancel_scheduled_start()
            if not self._paused and self._is_running_locked():
                self._paused = self._pause_locked()

    def stop(self) -> None:
        with self._lock:
            self._cancel_scheduled_start()
            self._stop_locked()
            self._paused = False
            # orphans the current run, so it is reported as interrupted
            self._run_id += 1

    def is_playing(self) -> bool:
        with self._lock:
            return not self._paused and self._is_running_locked()

    def set_completion_handler(self, handler: Callable[[], None] | None) -> None:
        with self._lock:
            self._handler = handler

    def poll(self, run_id: int) -> RunState:
        with self._lock:
            if run_id != self._run_id:
                return RunState.INTERRUPTED
            if self._paused or self._is_running_locked():
                return RunState.RUNNING

            self._clear_locked()
            return RunState.FINISHED

    def complete(self, run_id: int) -> None:
        with self._lock:
            if run_id != self._run_id:
                return
            handler = self._handler

        # never call out while holding the lock: the handler typically calls `play` again
        if handler is not None:
            handler()

    def _cancel_scheduled_start(self) -> None:
        if self._scheduled_start is not None:
            self._scheduled_start.cancel()
            self._scheduled_start = None

    @abstractmethod
    def set_volume(self, volume: float) -> None: ...

    @abstractmethod
    def _start_locked(self) -> bool:
        """Start a new run from the beginning. Return whether it could be started."""

    @abstractmethod
    def _is_running_locked(self) -> bool: ...

    @abstractmethod
    def _pause_locked(self) -> bool:
        """Pause the current run. Return whether it could be paused."""

    @abstractmethod
    def _resume_locked(self) -> None: ...

    @abstractmethod
    def _stop_locked(self) -> None: ...

    @abstractmethod
    def _clear_locked(self) -> None:
        """Drop the backend handle of a run that has finished."""
