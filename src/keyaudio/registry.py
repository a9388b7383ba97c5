import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from keyaudio.interfaces.playable import Playable, PlaybackEngine
from keyaudio.interfaces.resolver import ResourceResolver

_LOGGER = logging.getLogger(__name__)


class AudioInformation(NamedTuple):
    key: str
    file_name: str
    file_extension: str | None = None


@dataclass(slots=True, eq=False)
class AssetEntry:
    key: str
    playable: Playable
    volume: float = 1.0


class AssetRegistry:
    """Owns the key -> playable bindings. Nothing else keeps a playable beyond a single lookup."""

    def __init__(self, engine: PlaybackEngine, resolver: ResourceResolver) -> None:
        self._engine = engine
        self._resolver = resolver
        self._entries: dict[str, AssetEntry] = {}

    def add(self, key: str, file_name: str, file_extension: str | None = None) -> AssetEntry:
        # both of these raise; the existing binding (if any) stays untouched in that case
        resource = self._resolver.resolve(file_name, file_extension)
        playable = self._engine.open(resource)

        if (displaced := self._entries.get(key)) is not None:
            _LOGGER.info("Replacing audio asset '%s'", key)
            self._release(displaced)
        else:
            _LOGGER.info("Adding audio asset '%s' from %s", key, resource)

        entry = AssetEntry(key=key, playable=playable)
        self._entries[key] = entry
        return entry

    def remove(self, key: str) -> None:
        if (entry := self._entries.pop(key, None)) is None:
            _LOGGER.debug("Cannot remove unknown audio asset '%s'", key)
            return

        _LOGGER.info("Removing audio asset '%s'", key)
        self._release(entry)

    def lookup(self, key: str) -> Playable | None:
        if (entry := self._entries.get(key)) is None:
            return None
        return entry.playable

    def entry(self, key: str) -> AssetEntry | None:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> Iterator[AssetEntry]:
        # iterate over a snapshot so that callers may add/remove while iterating
        return iter(list(self._entries.values()))

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @staticmethod
    def _release(entry: AssetEntry) -> None:
        entry.playable.set_completion_handler(None)
        entry.playable.stop()
