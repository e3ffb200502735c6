"""
registry.py — Tree adapter registry

Adapters for other object models are discovered via entry points:

    [project.entry-points."treejcs.adapters"]
    my_model = "my_package:MyModelAdapter"

Usage:
    from treejcs.registry import registry

    registry.discover_adapters()
    adapter = registry.get("my_model")

    # or register programmatically
    registry.register("my_model", MyModelAdapter())
"""

from __future__ import annotations
import importlib.metadata
import logging
from typing import Any, Dict, List, Optional

from .adapters import NATIVE, TreeAdapter
from .errors import UnknownAdapterError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "treejcs.adapters"


class AdapterRegistry:
    """Name → adapter mapping.

    Thread-safe for reads after initialization. Discovery should complete
    before concurrent access.
    """

    def __init__(self) -> None:
        self._adapters: Dict[str, TreeAdapter] = {}
        self._sources: Dict[str, str] = {}  # name -> module:qualname
        self._discovered: bool = False

    def register(self, name: str, adapter: TreeAdapter) -> None:
        """Register ``adapter`` under ``name``.

        Raises:
            ValueError: If ``name`` is already taken.
        """
        if name in self._adapters:
            existing = self._adapters[name]
            raise ValueError(
                f"Adapter name collision for '{name}'. "
                f"Existing: {existing.__class__.__module__}.{existing.__class__.__name__}. "
                f"New: {adapter.__class__.__module__}.{adapter.__class__.__name__}."
            )

        self._adapters[name] = adapter
        self._sources[name] = f"{adapter.__class__.__module__}:{adapter.__class__.__name__}"
        logger.debug("registered tree adapter %r (%s)", name, self._sources[name])

    def get(self, name: str) -> Optional[TreeAdapter]:
        """Return the adapter registered under ``name``, or None."""
        return self._adapters.get(name)

    def names(self) -> List[str]:
        """Return the registered adapter names, sorted."""
        return sorted(self._adapters)

    def discover_adapters(self) -> None:
        """Load adapters from the ``treejcs.adapters`` entry-point group.

        Idempotent. An entry point that fails to load is logged and skipped.
        """
        if self._discovered:
            return

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._adapters:
                continue
            try:
                loaded = ep.load()
                adapter = loaded() if isinstance(loaded, type) else loaded
                self.register(ep.name, adapter)
                self._sources[ep.name] = ep.value
            except Exception as e:
                logger.warning("Failed to load tree adapter '%s': %s", ep.name, e)

        self._discovered = True

    def reload(self) -> None:
        """Drop discovered adapters and run discovery again.

        The built-in ``native`` adapter stays registered.
        """
        self._adapters.clear()
        self._sources.clear()
        self._discovered = False
        self.register(NATIVE.name, NATIVE)
        self.discover_adapters()

    def get_adapter_info(self) -> List[Dict[str, str]]:
        """Return ``{"name", "source"}`` for every registered adapter."""
        return [
            {"name": name, "source": self._sources.get(name, "unknown")}
            for name in self.names()
        ]


# ---------------------------------------------------------------------------
# Global Registry Instance
# ---------------------------------------------------------------------------

registry = AdapterRegistry()
registry.register(NATIVE.name, NATIVE)


def resolve_adapter(adapter: Any = None) -> TreeAdapter:
    """Turn an adapter argument into an adapter.

    ``None`` selects the native adapter, a string is looked up in the global
    registry (running discovery first), anything else is used as given.

    Raises:
        UnknownAdapterError: If a name is not registered.
    """
    if adapter is None:
        return NATIVE
    if isinstance(adapter, str):
        found = registry.get(adapter)
        if found is None:
            registry.discover_adapters()
            found = registry.get(adapter)
        if found is None:
            raise UnknownAdapterError(
                f"name={adapter!r}, registered={registry.names()}"
            )
        return found
    return adapter
