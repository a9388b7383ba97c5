import pytest

from keyaudio.completion_router import CompletionRouter
from keyaudio.orchestrator import Orchestrator
from keyaudio.registry import AssetRegistry
from tests.fakes import FakeEngine, FakeResolver, ManualTimer


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver("a", "b", "c", "music.mp3", "broken")


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def registry(engine: FakeEngine, resolver: FakeResolver) -> AssetRegistry:
    return AssetRegistry(engine, resolver)


@pytest.fixture
def router(registry: AssetRegistry) -> CompletionRouter:
    return CompletionRouter(registry)


@pytest.fixture
def orchestrator(engine: FakeEngine, resolver: FakeResolver, timer: ManualTimer) -> Orchestrator:
    return Orchestrator(engine, resolver, timer)
