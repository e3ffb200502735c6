"""
test_registry.py — Tests for the tree adapter registry

Tests cover:
- Programmatic registration and lookup
- Name collision handling
- Adapter discovery via entry_points (mocked)
- Broken entry points are skipped
- resolve_adapter argument forms
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from treejcs.adapters import NATIVE
from treejcs.errors import UnknownAdapterError
from treejcs.registry import AdapterRegistry, registry, resolve_adapter


# ---------------------------------------------------------------------------
# Test Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fresh_registry():
    """Return a fresh AdapterRegistry instance for each test."""
    return AdapterRegistry()


def _entry_point(name, loaded=None, error=None):
    ep = MagicMock()
    ep.name = name
    ep.value = f"example_pkg:{name}"
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = loaded
    return ep


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class TestRegistration:

    def test_register_and_get(self, fresh_registry, tagged_adapter):
        fresh_registry.register("tagged", tagged_adapter)
        assert fresh_registry.get("tagged") is tagged_adapter
        assert fresh_registry.names() == ["tagged"]

    def test_get_missing_returns_none(self, fresh_registry):
        assert fresh_registry.get("missing") is None

    def test_name_collision(self, fresh_registry, tagged_adapter):
        fresh_registry.register("tagged", tagged_adapter)
        with pytest.raises(ValueError, match="collision"):
            fresh_registry.register("tagged", NATIVE)

    def test_adapter_info(self, fresh_registry, tagged_adapter):
        fresh_registry.register("tagged", tagged_adapter)
        info = fresh_registry.get_adapter_info()
        assert [entry["name"] for entry in info] == ["tagged"]
        assert info[0]["source"].endswith(":TaggedAdapter")

    def test_global_registry_has_native(self):
        assert registry.get("native") is NATIVE


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestDiscovery:

    def test_discovers_adapter_class(self, fresh_registry, tagged_adapter):
        eps = [_entry_point("tagged", loaded=type(tagged_adapter))]
        with patch("treejcs.registry.importlib.metadata.entry_points", return_value=eps) as mock_eps:
            fresh_registry.discover_adapters()
        mock_eps.assert_called_once_with(group="treejcs.adapters")
        assert isinstance(fresh_registry.get("tagged"), type(tagged_adapter))
        assert fresh_registry.get_adapter_info() == [{"name": "tagged", "source": "example_pkg:tagged"}]

    def test_discovers_adapter_instance(self, fresh_registry, tagged_adapter):
        eps = [_entry_point("tagged", loaded=tagged_adapter)]
        with patch("treejcs.registry.importlib.metadata.entry_points", return_value=eps):
            fresh_registry.discover_adapters()
        assert fresh_registry.get("tagged") is tagged_adapter

    def test_discovery_is_idempotent(self, fresh_registry, tagged_adapter):
        eps = [_entry_point("tagged", loaded=tagged_adapter)]
        with patch("treejcs.registry.importlib.metadata.entry_points", return_value=eps) as mock_eps:
            fresh_registry.discover_adapters()
            fresh_registry.discover_adapters()
        assert mock_eps.call_count == 1

    def test_broken_entry_point_is_skipped(self, fresh_registry, tagged_adapter, caplog):
        eps = [
            _entry_point("broken", error=ImportError("no module named example_pkg")),
            _entry_point("tagged", loaded=tagged_adapter),
        ]
        with caplog.at_level(logging.WARNING, logger="treejcs.registry"):
            with patch("treejcs.registry.importlib.metadata.entry_points", return_value=eps):
                fresh_registry.discover_adapters()
        assert fresh_registry.get("broken") is None
        assert fresh_registry.get("tagged") is tagged_adapter
        assert "Failed to load tree adapter 'broken'" in caplog.text

    def test_reload_keeps_native(self, fresh_registry, tagged_adapter):
        fresh_registry.register("tagged", tagged_adapter)
        with patch("treejcs.registry.importlib.metadata.entry_points", return_value=[]):
            fresh_registry.reload()
        assert fresh_registry.names() == ["native"]


# ---------------------------------------------------------------------------
# resolve_adapter
# ---------------------------------------------------------------------------

class TestResolveAdapter:

    def test_none_is_native(self):
        assert resolve_adapter() is NATIVE
        assert resolve_adapter(None) is NATIVE

    def test_name_lookup(self):
        assert resolve_adapter("native") is NATIVE

    def test_object_passes_through(self, tagged_adapter):
        assert resolve_adapter(tagged_adapter) is tagged_adapter

    def test_unknown_name(self):
        with pytest.raises(UnknownAdapterError) as exc_info:
            resolve_adapter("does-not-exist")
        assert "does-not-exist" in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)
