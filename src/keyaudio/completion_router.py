"""Per-key, single-use completion subscriptions.

Each key has at most one pending subscription. Installing a new one for a key replaces the previous one, which is then
never invoked ("last writer wins"). A subscription is bound to the playable that was registered under its key at the
time it was installed, so that a playable replaced by re-adding the key can never trigger it.
"""

import functools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from keyaudio.interfaces.playable import Playable
from keyaudio.registry import AssetRegistry

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class CompletionSubscription:
    key: str
    playable: Playable
    action: Callable[[], None]


class CompletionRouter:
    def __init__(self, registry: AssetRegistry, lock: "threading.RLock | None" = None) -> None:
        self._registry = registry
        self._lock = lock or threading.RLock()
        self._subscriptions: dict[str, CompletionSubscription] = {}

    def on_complete(self, key: str, action: Callable[[], None]) -> bool:
        """Run `action` once the playable currently registered under `key` completes its next run.

        Returns False (and installs nothing) if the key is unknown or its playable can't signal completion.
        """
        with self._lock:
            playable = self._registry.lookup(key)
            if playable is None or not callable(getattr(playable, "set_completion_handler", None)):
                _LOGGER.debug("No completion support for audio asset '%s'", key)
                return False

            subscription = CompletionSubscription(key=key, playable=playable, action=action)
            if key in self._subscriptions:
                _LOGGER.debug("Superseding pending completion action for '%s'", key)
            self._subscriptions[key] = subscription

            playable.set_completion_handler(functools.partial(self._fire, subscription))
            return True

    def discard(self, key: str) -> None:
        with self._lock:
            if (subscription := self._subscriptions.pop(key, None)) is not None:
                subscription.playable.set_completion_handler(None)

    def is_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._subscriptions

    def _fire(self, subscription: CompletionSubscription) -> None:
        with self._lock:
            if self._subscriptions.get(subscription.key) is not subscription:
                # already fired, superseded or discarded
                return

            del self._subscriptions[subscription.key]

            if self._registry.lookup(subscription.key) is not subscription.playable:
                _LOGGER.debug("Dropping completion action for '%s' bound to a replaced asset", subscription.key)
                return

            _LOGGER.debug("Audio asset '%s' completed", subscription.key)
            subscription.action()
