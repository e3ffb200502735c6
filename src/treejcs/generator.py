"""
generator.py — Streaming canonical JSON generator

Walks a tree through a ``TreeAdapter`` and writes its canonical form to a
text sink. Open containers live on an explicit stack of cursors instead of
the Python call stack, so nesting depth is limited by memory only.

Comma placement peeks the enclosing cursor: a separator is written after a
value exactly when its parent still has another child. Empty, single and
multi-element containers need no special cases.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Iterable, List, Optional, Protocol, Tuple

from .adapters import NodeType, SCALAR_TYPES, TreeAdapter
from .errors import MalformedTreeError, SinkWriteError, UnsupportedNodeError
from .escaping import quote
from .numbers import canonicalize_number
from .ordering import sorted_entries

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, text: str) -> Any:
        ...


class GeneratorState(Enum):
    SCALAR = "scalar"
    BEGIN_MAP = "begin_map"
    MAP_KEY = "map_key"
    MAP_VALUE = "map_value"
    BEGIN_SEQUENCE = "begin_sequence"
    SEQUENCE_ELEMENT = "sequence_element"
    END = "end"


_EXHAUSTED = object()


class Cursor:
    """Look-ahead iterator over the children of one open container."""

    __slots__ = ("node_type", "_items", "_pending")

    def __init__(self, node_type: NodeType, items: Iterable[Any]):
        self.node_type = node_type
        self._items = iter(items)
        self._pending = next(self._items, _EXHAUSTED)

    def has_next(self) -> bool:
        return self._pending is not _EXHAUSTED

    def next(self) -> Any:
        item = self._pending
        if item is _EXHAUSTED:
            raise MalformedTreeError(f"read past the end of a {self.node_type.value}")
        self._pending = next(self._items, _EXHAUSTED)
        return item


class CanonicalGenerator:
    """Writes the canonical text of one tree per ``generate`` call.

    The instance holds only the sink and the adapter; the traversal stack is
    created per call.
    """

    def __init__(self, sink: TextSink, adapter: TreeAdapter):
        self.sink = sink
        self.adapter = adapter

    def generate(self, root: Any) -> None:
        """Write the canonical form of ``root`` to the sink.

        Raises:
            MalformedTreeError: If the adapter's iteration leaves the
                traversal in an inconsistent state.
            UnsupportedNodeError: If a node outside the JSON data model is
                reached.
            InvalidStringError: If a string or member name holds a lone
                surrogate.
            SinkWriteError: If the sink raises ``OSError``.
        """
        adapter = self.adapter
        stack: List[Cursor] = []
        containers = 0
        max_depth = 0

        node = root
        node_type, state = self._visit(node)

        while state is not None:
            if state is GeneratorState.SCALAR:
                self._write(self._scalar_text(node, node_type))
                state = self._after_value(stack)

            elif state is GeneratorState.BEGIN_MAP:
                self._write("{")
                stack.append(Cursor(NodeType.MAP, sorted_entries(adapter.entries(node))))
                containers += 1
                max_depth = max(max_depth, len(stack))
                state = GeneratorState.MAP_KEY

            elif state is GeneratorState.BEGIN_SEQUENCE:
                self._write("[")
                stack.append(Cursor(NodeType.SEQUENCE, adapter.elements(node)))
                containers += 1
                max_depth = max(max_depth, len(stack))
                state = GeneratorState.SEQUENCE_ELEMENT

            elif state is GeneratorState.MAP_KEY:
                cursor = stack[-1]
                if not cursor.has_next():
                    state = GeneratorState.END
                else:
                    key, node = cursor.next()
                    self._write(quote(key) + ":")
                    state = GeneratorState.MAP_VALUE

            elif state is GeneratorState.MAP_VALUE:
                node_type, state = self._visit(node)

            elif state is GeneratorState.SEQUENCE_ELEMENT:
                cursor = stack[-1]
                if not cursor.has_next():
                    state = GeneratorState.END
                else:
                    node = cursor.next()
                    node_type, state = self._visit(node)

            elif state is GeneratorState.END:
                if not stack:
                    raise MalformedTreeError("end of structure with no open container")
                closed = stack.pop()
                self._write("}" if closed.node_type is NodeType.MAP else "]")
                state = self._after_value(stack)

        if stack:
            raise MalformedTreeError(f"{len(stack)} container(s) left open at end of document")

        logger.debug("canonicalized document: %d container(s), max depth %d", containers, max_depth)

    def _visit(self, node: Any) -> Tuple[NodeType, GeneratorState]:
        node_type = NodeType.NULL if node is None else self.adapter.node_type(node)
        if node_type in SCALAR_TYPES:
            return node_type, GeneratorState.SCALAR
        if node_type is NodeType.MAP:
            return node_type, GeneratorState.BEGIN_MAP
        if node_type is NodeType.SEQUENCE:
            return node_type, GeneratorState.BEGIN_SEQUENCE
        raise UnsupportedNodeError(f"node type {node_type!r} cannot be canonicalized")

    def _scalar_text(self, node: Any, node_type: NodeType) -> str:
        if node_type is NodeType.NULL:
            return "null"
        if node_type is NodeType.TRUE:
            return "true"
        if node_type is NodeType.FALSE:
            return "false"
        if node_type is NodeType.STRING:
            return quote(self.adapter.string_value(node))
        return canonicalize_number(self.adapter.number_value(node))

    def _after_value(self, stack: List[Cursor]) -> Optional[GeneratorState]:
        if not stack:
            return None
        parent = stack[-1]
        if parent.has_next():
            self._write(",")
        if parent.node_type is NodeType.MAP:
            return GeneratorState.MAP_KEY
        return GeneratorState.SEQUENCE_ELEMENT

    def _write(self, text: str) -> None:
        try:
            self.sink.write(text)
        except OSError as e:
            raise SinkWriteError(f"{type(e).__name__}: {e}") from e
