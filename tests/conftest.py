"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from invoker import ComponentRegistry, DispatchEngine, InvokerSettings

from deferred_components import Ledger
from sample_components import (
    OverridingChild,
    PrimitiveService,
    ShadowingChild,
    TestService,
)

# =============================================================================
# Fixtures: Fresh Registries and Engines
# =============================================================================


@pytest.fixture
def fresh_registry():
    """Create a fresh, empty ComponentRegistry subclass for each test."""

    class TestComponents(ComponentRegistry):
        pass

    yield TestComponents
    TestComponents.clear_registry()


@pytest.fixture
def test_service():
    return TestService()


@pytest.fixture
def registry(fresh_registry, test_service):
    """A registry holding one instance of every sample component."""
    fresh_registry.register_component(test_service, "testService")
    fresh_registry.register_component(OverridingChild())
    fresh_registry.register_component(ShadowingChild())
    fresh_registry.register_component(PrimitiveService())
    fresh_registry.register_component(Ledger())
    return fresh_registry


@pytest.fixture
def settings():
    return InvokerSettings(
        cache_methods=True, search_non_public=True, log_arguments=False
    )


@pytest.fixture
def engine(registry, settings):
    """A DispatchEngine with an empty method cache."""
    engine = DispatchEngine(registry, settings)
    yield engine
    engine.clear_cache()
