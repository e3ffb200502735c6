"""tree-jcs public API.

JSON Canonicalization Scheme (RFC 8785 style) for arbitrary value trees,
plus canonical equality, hashing and Ed25519 signing helpers.

Example:
    from treejcs import canonical_dumps, canonical_equals

    canonical_dumps({"b": 1, "a": [2, 3]})   # '{"a":[2,3],"b":1}'
    canonical_equals({"n": 1}, {"n": 1.0})   # True

Trees that are not plain Python values are read through a ``TreeAdapter``;
pass one (or a registered adapter name) as ``adapter=``.
"""

from .adapters import NATIVE, NativeAdapter, NodeType, TreeAdapter
from .canonical_json import (
    canonical_bytes,
    canonical_dumps,
    canonical_hash,
    canonicalize,
    parse_json,
    sha256_hex,
)
from .equality import canonical_equals
from .errors import (
    InvalidNumberError,
    InvalidStringError,
    JcsError,
    MalformedTreeError,
    SinkWriteError,
    UnknownAdapterError,
    UnsupportedNodeError,
)
from .escaping import escape
from .generator import CanonicalGenerator, GeneratorState
from .numbers import canonicalize_number
from .ordering import utf16_sort_key
from .registry import AdapterRegistry, registry, resolve_adapter
from .signing import (
    SigningKeypair,
    key_id_from_public_bytes,
    load_private_key_b64,
    load_public_key_b64,
    sign_canonical,
    verify_canonical,
)

__version__ = "1.0.0"

__all__ = [
    "AdapterRegistry",
    "CanonicalGenerator",
    "GeneratorState",
    "InvalidNumberError",
    "InvalidStringError",
    "JcsError",
    "MalformedTreeError",
    "NATIVE",
    "NativeAdapter",
    "NodeType",
    "SigningKeypair",
    "SinkWriteError",
    "TreeAdapter",
    "UnknownAdapterError",
    "UnsupportedNodeError",
    "canonical_bytes",
    "canonical_dumps",
    "canonical_equals",
    "canonical_hash",
    "canonicalize",
    "canonicalize_number",
    "escape",
    "key_id_from_public_bytes",
    "load_private_key_b64",
    "load_public_key_b64",
    "parse_json",
    "registry",
    "resolve_adapter",
    "sha256_hex",
    "sign_canonical",
    "utf16_sort_key",
    "verify_canonical",
]
