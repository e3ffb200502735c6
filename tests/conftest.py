"""Shared fixtures: a second tree representation for adapter-level tests."""

from decimal import Decimal
from typing import Any, Iterable, Tuple

import pytest

from treejcs.adapters import NodeType


class TaggedAdapter:
    """Adapter for trees of tagged tuples, e.g. ``("number", "1.50")``.

    Numbers are kept as their literal text, members as ``(key, node)``
    lists in whatever order they were built.
    """

    name = "tagged"

    _TYPES = {
        "null": NodeType.NULL,
        "true": NodeType.TRUE,
        "false": NodeType.FALSE,
        "string": NodeType.STRING,
        "number": NodeType.NUMBER,
        "seq": NodeType.SEQUENCE,
        "map": NodeType.MAP,
        "binary": NodeType.BINARY,
    }

    def node_type(self, node: Tuple) -> NodeType:
        return self._TYPES[node[0]]

    def string_value(self, node: Tuple) -> str:
        return node[1]

    def number_value(self, node: Tuple) -> Decimal:
        return Decimal(node[1])

    def elements(self, node: Tuple) -> Iterable[Any]:
        return iter(node[1])

    def entries(self, node: Tuple) -> Iterable[Tuple[str, Any]]:
        return iter(node[1])

    def size(self, node: Tuple) -> int:
        return len(node[1])


def tag(value: Any) -> Tuple:
    """Build a tagged tree from a plain Python value."""
    if value is None:
        return ("null",)
    if value is True:
        return ("true",)
    if value is False:
        return ("false",)
    if isinstance(value, str):
        return ("string", value)
    if isinstance(value, (int, float, Decimal)):
        return ("number", str(value))
    if isinstance(value, dict):
        return ("map", [(k, tag(v)) for k, v in value.items()])
    if isinstance(value, (bytes, bytearray)):
        return ("binary", bytes(value))
    return ("seq", [tag(v) for v in value])


@pytest.fixture
def tagged_adapter():
    return TaggedAdapter()


@pytest.fixture
def tagged():
    """The ``tag`` builder."""
    return tag
