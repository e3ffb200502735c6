import base64
import re
import unittest

from treejcs.canonical_json import parse_json
from treejcs.signing import (
    SigningKeypair,
    key_id_from_public_bytes,
    load_private_key_b64,
    load_public_key_b64,
    sign_canonical,
    verify_canonical,
)


class TestKeys(unittest.TestCase):

    def test_key_id_format(self):
        kp = SigningKeypair.generate()
        self.assertRegex(kp.key_id, re.compile(r"^jcs1_[0-9a-f]{16}$"))

    def test_key_id_is_stable(self):
        raw = bytes(range(32))
        self.assertEqual(key_id_from_public_bytes(raw), key_id_from_public_bytes(raw))
        self.assertNotEqual(key_id_from_public_bytes(raw), key_id_from_public_bytes(bytes(32)))

    def test_private_key_roundtrip(self):
        kp = SigningKeypair.generate()
        restored = SigningKeypair.from_private_key(load_private_key_b64(kp.private_key_b64()))
        self.assertEqual(restored.key_id, kp.key_id)
        self.assertEqual(restored.public_key_b64, kp.public_key_b64)

    def test_public_entry_has_no_private_material(self):
        kp = SigningKeypair.generate()
        entry = kp.to_public_entry()
        self.assertEqual(set(entry), {"key_id", "algorithm", "public_key_b64"})
        self.assertEqual(entry["algorithm"], "Ed25519")


class TestDetachedSignatures(unittest.TestCase):

    def setUp(self):
        self.kp = SigningKeypair.generate()
        self.document = {"amount": 1.50, "to": "alice", "tags": ["a", "b"]}
        self.sig = sign_canonical(self.document, self.kp.private_key)

    def test_signature_verifies(self):
        self.assertTrue(verify_canonical(self.document, self.sig, self.kp.public_key))

    def test_signature_is_64_bytes(self):
        self.assertEqual(len(base64.b64decode(self.sig)), 64)

    def test_reserialized_document_still_verifies(self):
        rewritten = parse_json('{"tags": ["a", "b"], "to": "alice", "amount": 1.5000}')
        self.assertTrue(verify_canonical(rewritten, self.sig, self.kp.public_key))

    def test_tampered_document_fails(self):
        tampered = dict(self.document, amount=2)
        self.assertFalse(verify_canonical(tampered, self.sig, self.kp.public_key))

    def test_reordered_sequence_fails(self):
        tampered = dict(self.document, tags=["b", "a"])
        self.assertFalse(verify_canonical(tampered, self.sig, self.kp.public_key))

    def test_wrong_key_fails(self):
        other = SigningKeypair.generate()
        self.assertFalse(verify_canonical(self.document, self.sig, other.public_key))

    def test_public_key_loaded_from_b64(self):
        pk = load_public_key_b64(self.kp.public_key_b64)
        self.assertTrue(verify_canonical(self.document, self.sig, pk))

    def test_missing_or_garbled_signature(self):
        self.assertFalse(verify_canonical(self.document, "", self.kp.public_key))
        self.assertFalse(verify_canonical(self.document, "not base64!!", self.kp.public_key))
        self.assertFalse(verify_canonical(self.document, base64.b64encode(b"short").decode(), self.kp.public_key))


if __name__ == "__main__":
    unittest.main()
