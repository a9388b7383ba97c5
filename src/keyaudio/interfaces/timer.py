from collections.abc import Callable
from typing import Protocol


class Timer(Protocol):
    def after(self, duration: float, action: Callable[[], None]) -> None:
        """Call `action` once, roughly `duration` seconds from now. Immediately return."""
