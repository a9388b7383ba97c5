from unittest.mock import Mock

from keyaudio.completion_router import CompletionRouter
from keyaudio.registry import AssetRegistry
from tests.fakes import FakeEngine


def test_action_fires_once_on_completion(registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine) -> None:
    # GIVEN a completion action for a key
    registry.add("a", "a")
    action = Mock()
    assert router.on_complete("a", action)
    assert router.is_pending("a")

    # WHEN the playable completes twice
    engine.last_opened("a").finish()
    engine.last_opened("a").finish()

    # THEN the action was only invoked once, and the subscription is gone
    action.assert_called_once_with()
    assert not router.is_pending("a")


def test_on_complete_for_unknown_key_installs_nothing(router: CompletionRouter) -> None:
    assert not router.on_complete("missing", Mock())
    assert not router.is_pending("missing")


def test_new_subscription_supersedes_pending_one(
    registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine
) -> None:
    registry.add("a", "a")
    first_action = Mock()
    second_action = Mock()

    router.on_complete("a", first_action)
    router.on_complete("a", second_action)
    engine.last_opened("a").finish()

    first_action.assert_not_called()
    second_action.assert_called_once_with()


def test_subscriptions_of_different_keys_are_independent(
    registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine
) -> None:
    registry.add("a", "a")
    registry.add("b", "b")
    action_a = Mock()
    action_b = Mock()
    router.on_complete("a", action_a)
    router.on_complete("b", action_b)

    engine.last_opened("b").finish()

    action_a.assert_not_called()
    action_b.assert_called_once_with()
    assert router.is_pending("a")


def test_action_may_resubscribe_same_key(registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine) -> None:
    # GIVEN an action that installs another action for the same key when fired
    registry.add("a", "a")
    second_action = Mock()
    router.on_complete("a", lambda: router.on_complete("a", second_action))

    # WHEN completing once
    engine.last_opened("a").finish()

    # THEN the new subscription is pending, and fires on the next completion
    assert router.is_pending("a")
    second_action.assert_not_called()

    engine.last_opened("a").finish()
    second_action.assert_called_once_with()


def test_stale_playable_cannot_fire_after_key_is_rebound(
    registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine
) -> None:
    # GIVEN a subscription bound to the playable of "a", whose handler is kept by someone
    registry.add("sfx", "a")
    old_playable = engine.last_opened("a")
    action = Mock()
    router.on_complete("sfx", action)
    stale_handler = old_playable.handler
    assert stale_handler is not None

    # WHEN the key is rebound to another asset, and the old handler fires
    registry.add("sfx", "b")
    stale_handler()

    # THEN the action is not invoked
    action.assert_not_called()


def test_discard_drops_pending_subscription(
    registry: AssetRegistry, router: CompletionRouter, engine: FakeEngine
) -> None:
    registry.add("a", "a")
    action = Mock()
    router.on_complete("a", action)

    router.discard("a")
    engine.last_opened("a").finish()

    action.assert_not_called()
    assert not router.is_pending("a")


def test_playable_without_completion_support_is_rejected(registry: AssetRegistry, router: CompletionRouter) -> None:
    registry.add("a", "a")
    registry._entries["a"].playable = Mock(spec=["play", "stop"])

    assert not router.on_complete("a", Mock())
