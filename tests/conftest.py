import pytest

from tests.components import MemoryRepository, Settings
from wirechain import Scope


@pytest.fixture
def scope() -> Scope:
    return Scope(name="test")


@pytest.fixture
def root() -> Scope:
    return Scope(name="root").map_value(Settings()).map_provider(MemoryRepository)


@pytest.fixture
def child(root: Scope) -> Scope:
    return root.child(name="child")
