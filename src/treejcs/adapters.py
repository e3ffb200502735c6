"""
adapters.py — Tree capability contract

The generator and the comparator never look at concrete Python types.
They see a tree only through a ``TreeAdapter``: something that can
classify a node handle and hand out its scalar value or its children.

Writing an adapter for another object model:

    class MyModelAdapter:
        name = "my-model"

        def node_type(self, node): ...
        def string_value(self, node): ...
        def number_value(self, node): ...
        def elements(self, node): ...
        def entries(self, node): ...
        def size(self, node): ...

and register it with ``treejcs.registry`` (directly or through the
``treejcs.adapters`` entry-point group).
"""

from __future__ import annotations
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Protocol, Tuple, runtime_checkable

from .errors import UnsupportedNodeError
from .numbers import Number


class NodeType(Enum):
    """Node classification. ``BINARY`` exists so adapters can report raw
    bytes; nothing in the core canonicalizes it."""
    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    STRING = "string"
    NUMBER = "number"
    SEQUENCE = "sequence"
    MAP = "map"
    BINARY = "binary"


SCALAR_TYPES = frozenset({
    NodeType.NULL, NodeType.TRUE, NodeType.FALSE, NodeType.STRING, NodeType.NUMBER,
})


# ---------------------------------------------------------------------------
# Protocol Definition
# ---------------------------------------------------------------------------

@runtime_checkable
class TreeAdapter(Protocol):
    """Read-only view over one tree representation.

    Implementations must be deterministic and free of side effects for
    repeated queries on the same handle within one call.
    """

    def node_type(self, node: Any) -> NodeType:
        """Classify ``node``."""
        ...

    def string_value(self, node: Any) -> str:
        """Return the text of a ``STRING`` node."""
        ...

    def number_value(self, node: Any) -> Number:
        """Return the value of a ``NUMBER`` node as an exact number."""
        ...

    def elements(self, node: Any) -> Iterable[Any]:
        """Return the children of a ``SEQUENCE`` node, in order."""
        ...

    def entries(self, node: Any) -> Iterable[Tuple[str, Any]]:
        """Return the ``(key, child)`` members of a ``MAP`` node, any order."""
        ...

    def size(self, node: Any) -> int:
        """Return the number of children of a container node."""
        ...


# ---------------------------------------------------------------------------
# Native Python values
# ---------------------------------------------------------------------------

class NativeAdapter:
    """Adapter for plain Python values as produced by ``json.loads``.

    ``Decimal`` is accepted alongside ``int`` and ``float`` so that parsers
    configured with ``parse_float=Decimal`` keep full precision.
    """

    name = "native"

    def node_type(self, node: Any) -> NodeType:
        if node is None:
            return NodeType.NULL
        if node is True:
            return NodeType.TRUE
        if node is False:
            return NodeType.FALSE
        if isinstance(node, str):
            return NodeType.STRING
        if isinstance(node, (int, float, Decimal)):
            return NodeType.NUMBER
        if isinstance(node, Mapping):
            return NodeType.MAP
        if isinstance(node, (list, tuple)):
            return NodeType.SEQUENCE
        if isinstance(node, (bytes, bytearray, memoryview)):
            return NodeType.BINARY
        raise UnsupportedNodeError(f"Python type {type(node).__name__} is not a JSON value")

    def string_value(self, node: str) -> str:
        return node

    def number_value(self, node: Number) -> Number:
        return node

    def elements(self, node: Any) -> Iterable[Any]:
        return node

    def entries(self, node: Mapping) -> Iterable[Tuple[str, Any]]:
        return node.items()

    def size(self, node: Any) -> int:
        return len(node)


NATIVE = NativeAdapter()
