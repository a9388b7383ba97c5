from unittest.mock import Mock

import pytest

from keyaudio.exceptions import AssetNotFoundError, AssetUnreadableError
from keyaudio.registry import AssetRegistry

from tests.fakes import FakeEngine


def test_add_binds_playable_to_key(registry: AssetRegistry, engine: FakeEngine) -> None:
    entry = registry.add("intro", "music", "mp3")

    assert registry.lookup("intro") is engine.last_opened("music.mp3")
    assert entry.volume == 1.0
    assert registry.size() == 1
    assert "intro" in registry


def test_lookup_of_unknown_key_returns_none(registry: AssetRegistry) -> None:
    assert registry.lookup("missing") is None
    assert registry.entry("missing") is None


def test_adding_same_key_twice_replaces_and_releases_previous_playable(
    registry: AssetRegistry, engine: FakeEngine
) -> None:
    # GIVEN a key bound to a playable which has a completion handler installed
    registry.add("sfx", "a")
    first = engine.last_opened("a")
    first.set_completion_handler(Mock())

    # WHEN adding the same key again
    registry.add("sfx", "b")

    # THEN the new playable is bound, and the old one is stopped and detached
    assert registry.lookup("sfx") is engine.last_opened("b")
    assert registry.size() == 1
    assert first.calls == ["stop"]
    assert first.handler is None


@pytest.mark.parametrize(
    ("file_name", "expected_error"), [("nonexistent", AssetNotFoundError), ("broken", AssetUnreadableError)]
)
def test_failed_add_keeps_existing_binding(
    registry: AssetRegistry, engine: FakeEngine, file_name: str, expected_error: type[Exception]
) -> None:
    engine.unreadable.add("broken")
    registry.add("sfx", "a")

    with pytest.raises(expected_error):
        registry.add("sfx", file_name)

    assert registry.lookup("sfx") is engine.last_opened("a")
    assert engine.last_opened("a").calls == []


def test_remove_stops_playable_and_unbinds_key(registry: AssetRegistry, engine: FakeEngine) -> None:
    registry.add("sfx", "a")

    registry.remove("sfx")

    assert registry.lookup("sfx") is None
    assert len(registry) == 0
    assert engine.last_opened("a").calls == ["stop"]


def test_remove_of_unknown_key_is_noop(registry: AssetRegistry) -> None:
    registry.add("sfx", "a")

    registry.remove("missing")

    assert registry.keys() == ["sfx"]


def test_entries_can_be_modified_while_iterating(registry: AssetRegistry) -> None:
    registry.add("x", "a")
    registry.add("y", "b")

    for entry in registry.entries():
        registry.remove(entry.key)

    assert registry.size() == 0
