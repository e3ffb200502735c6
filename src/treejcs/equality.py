"""
equality.py — Canonical equality without generating text

Two trees are equal when their canonical forms would be identical. The
comparison walks both trees in lock-step, each through its own adapter,
and stops at the first difference.
"""

from __future__ import annotations
from typing import Any, List, Tuple

from .adapters import NodeType, TreeAdapter
from .errors import UnsupportedNodeError
from .escaping import check_text
from .numbers import canonicalize_number
from .ordering import sorted_entries
from .registry import resolve_adapter

_TRIVIAL_TYPES = frozenset({NodeType.NULL, NodeType.TRUE, NodeType.FALSE})


def canonical_equals(a: Any, b: Any, adapter: Any = None, other_adapter: Any = None) -> bool:
    """Return True if ``a`` and ``b`` have the same canonical form.

    Args:
        a: Root of the first tree. ``None`` counts as null.
        b: Root of the second tree. ``None`` counts as null.
        adapter: Adapter (or registered name) for ``a``; native by default.
        other_adapter: Adapter for ``b``; defaults to ``adapter``.

    Raises:
        UnsupportedNodeError: If either tree holds a node outside the JSON
            data model at a position reached by the comparison.
        InvalidStringError: If a compared string or member name holds a
            lone surrogate.
    """
    left = resolve_adapter(adapter)
    right = left if other_adapter is None else resolve_adapter(other_adapter)

    pending: List[Tuple[Any, Any]] = [(a, b)]
    while pending:
        x, y = pending.pop()
        x_type = _node_type(x, left)
        y_type = _node_type(y, right)

        if x_type is not y_type:
            return False

        if x_type in _TRIVIAL_TYPES:
            continue

        if x_type is NodeType.STRING:
            if check_text(left.string_value(x)) != check_text(right.string_value(y)):
                return False

        elif x_type is NodeType.NUMBER:
            if canonicalize_number(left.number_value(x)) != canonicalize_number(right.number_value(y)):
                return False

        elif x_type is NodeType.SEQUENCE:
            if left.size(x) != right.size(y):
                return False
            pairs = list(zip(left.elements(x), right.elements(y)))
            pending.extend(reversed(pairs))

        else:
            if left.size(x) != right.size(y):
                return False
            x_entries = sorted_entries(left.entries(x))
            y_entries = sorted_entries(right.entries(y))
            if len(x_entries) != len(y_entries):
                return False
            for (x_key, _), (y_key, _) in zip(x_entries, y_entries):
                if check_text(x_key) != check_text(y_key):
                    return False
            pending.extend(
                (x_value, y_value)
                for (_, x_value), (_, y_value) in reversed(list(zip(x_entries, y_entries)))
            )

    return True


def _node_type(node: Any, adapter: TreeAdapter) -> NodeType:
    node_type = NodeType.NULL if node is None else adapter.node_type(node)
    if node_type is NodeType.BINARY or not isinstance(node_type, NodeType):
        raise UnsupportedNodeError(f"node type {node_type!r} cannot be compared")
    return node_type
