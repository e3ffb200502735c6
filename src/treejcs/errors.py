"""
errors.py — tree-jcs Error Taxonomy

Coded errors raised by the canonicalization core, with links to the
human-readable error reference.
"""

from typing import Optional

__all__ = [
    "JcsError",
    "MalformedTreeError",
    "UnsupportedNodeError",
    "SinkWriteError",
    "InvalidNumberError",
    "UnknownAdapterError",
    "InvalidStringError",
]

class JcsError(Exception):
    """Base class for all tree-jcs errors."""
    def __init__(
        self,
        code: str,
        message: str,
        context: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.context = context

        full_msg = f"[{code}] {message}"
        if context:
            full_msg += f" Context: {context}"

        super().__init__(full_msg)

    @property
    def doc_url(self) -> str:
        """Link to the human-readable documentation for this error."""
        return f"https://tree-jcs.readthedocs.io/errors/{self.code}"

# Traversal Errors (E00x)
class MalformedTreeError(JcsError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E001", "A container was not properly closed by the tree adapter; the traversal ended in an inconsistent state.", context)

class UnsupportedNodeError(JcsError, TypeError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E002", "A node type outside the JSON data model was encountered.", context)

class SinkWriteError(JcsError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E003", "Writing canonical output to the sink failed.", context)

# Value Errors (E0xx)
class InvalidNumberError(JcsError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E004", "NaN and Infinity have no canonical JSON representation.", context)

class UnknownAdapterError(JcsError, LookupError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E005", "No tree adapter is registered under the requested name.", context)

class InvalidStringError(JcsError, ValueError):
    def __init__(self, context: Optional[str] = None):
        super().__init__("JCS_E006", "A string or member name holds a lone surrogate and has no UTF-8 encoding.", context)
