import threading
from collections.abc import Callable


class ThreadingTimer:
    """Runs each action on its own daemon `threading.Timer` thread. Best effort, no clock synchronization."""

    def after(self, duration: float, action: Callable[[], None]) -> None:
        timer = threading.Timer(max(duration, 0), action)
        timer.daemon = True
        timer.start()
