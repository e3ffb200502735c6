"""
signing.py — Ed25519 signatures over canonical JSON

Implements:
  - Ed25519 keypair generation (RFC 8032)
  - Detached signing and verification of canonical bytes
  - Key serialization (base64-encoded raw keys)

Dependencies:
  - cryptography >= 41.0 (pip install cryptography)

The signed payload is always the canonical form of the value, so any
re-serialization with the same canonical form (reordered members, ``1.0``
written as ``1``) verifies against the same signature.
"""

from __future__ import annotations
import base64
import hashlib
import logging
from dataclasses import dataclass
from typing import Any, Dict

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)
from cryptography.exceptions import InvalidSignature

from .canonical_json import canonical_bytes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Key ID derivation
# ---------------------------------------------------------------------------

def key_id_from_public_bytes(pub_bytes: bytes) -> str:
    """
    Derive a stable key_id from raw public key bytes.
    Format: 'jcs1_' + first 16 hex chars of SHA-256(pub_bytes).
    """
    digest = hashlib.sha256(pub_bytes).hexdigest()
    return f"jcs1_{digest[:16]}"


# ---------------------------------------------------------------------------
# Keypair management
# ---------------------------------------------------------------------------

@dataclass
class SigningKeypair:
    """An Ed25519 keypair with its derived key_id."""
    private_key: Ed25519PrivateKey
    public_key: Ed25519PublicKey
    key_id: str
    public_key_b64: str  # base64-encoded raw public key

    @classmethod
    def generate(cls) -> "SigningKeypair":
        """Generate a new Ed25519 keypair."""
        sk = Ed25519PrivateKey.generate()
        return cls.from_private_key(sk)

    @classmethod
    def from_private_key(cls, sk: Ed25519PrivateKey) -> "SigningKeypair":
        pk = sk.public_key()
        pub_bytes = pk.public_bytes(Encoding.Raw, PublicFormat.Raw)
        return cls(
            private_key=sk,
            public_key=pk,
            key_id=key_id_from_public_bytes(pub_bytes),
            public_key_b64=base64.b64encode(pub_bytes).decode("ascii"),
        )

    def private_key_b64(self) -> str:
        """Export private key as base64. Keep it out of signed documents."""
        raw = self.private_key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )
        return base64.b64encode(raw).decode("ascii")

    def to_public_entry(self) -> Dict[str, Any]:
        """Public description of the key, safe to publish."""
        return {
            "key_id": self.key_id,
            "algorithm": "Ed25519",
            "public_key_b64": self.public_key_b64,
        }


def load_private_key_b64(b64_str: str) -> Ed25519PrivateKey:
    """Load an Ed25519 private key from base64-encoded raw bytes."""
    raw = base64.b64decode(b64_str)
    return Ed25519PrivateKey.from_private_bytes(raw)


def load_public_key_b64(b64_str: str) -> Ed25519PublicKey:
    """Load an Ed25519 public key from base64-encoded raw bytes."""
    raw = base64.b64decode(b64_str)
    return Ed25519PublicKey.from_public_bytes(raw)


# ---------------------------------------------------------------------------
# Detached signatures
# ---------------------------------------------------------------------------

def sign_canonical(
    obj: Any,
    private_key: Ed25519PrivateKey,
    adapter: Any = None,
) -> str:
    """Sign the canonical bytes of ``obj`` and return the base64 signature."""
    sig_bytes = private_key.sign(canonical_bytes(obj, adapter))
    return base64.b64encode(sig_bytes).decode("ascii")


def verify_canonical(
    obj: Any,
    signature_b64: str,
    public_key: Ed25519PublicKey,
    adapter: Any = None,
) -> bool:
    """
    Verify a detached signature over the canonical bytes of ``obj``.

    Returns True if valid, False if the signature is invalid or not
    decodable.
    """
    if not signature_b64:
        return False

    try:
        sig_bytes = base64.b64decode(signature_b64, validate=True)
    except ValueError:
        logger.debug("signature is not valid base64")
        return False
    if len(sig_bytes) != 64:
        return False

    try:
        public_key.verify(sig_bytes, canonical_bytes(obj, adapter))
        return True
    except InvalidSignature:
        logger.debug("Ed25519 signature verification failed")
        return False
