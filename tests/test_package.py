import unittest

import treejcs


class TestTreeJcsPackage(unittest.TestCase):
    def test_package_structure(self):
        """Test that the package exposes the expected API."""
        for name in treejcs.__all__:
            with self.subTest(name=name):
                self.assertTrue(hasattr(treejcs, name))

    def test_basic_flow(self):
        """Canonicalize, compare, hash and sign through the top-level API."""
        document = treejcs.parse_json('{"b": 1.0, "a": [2, 3]}')

        self.assertEqual(treejcs.canonical_dumps(document), '{"a":[2,3],"b":1}')
        self.assertTrue(treejcs.canonical_equals(document, {"a": [2, 3], "b": 1}))
        self.assertFalse(treejcs.canonical_equals({"a": "1", "b": 2}, {"a": 1, "b": 2}))

        digest = treejcs.canonical_hash(document)
        self.assertEqual(digest, treejcs.sha256_hex(b'{"a":[2,3],"b":1}'))

        kp = treejcs.SigningKeypair.generate()
        sig = treejcs.sign_canonical(document, kp.private_key)
        self.assertTrue(treejcs.verify_canonical({"a": [2, 3], "b": 1}, sig, kp.public_key))


if __name__ == "__main__":
    unittest.main()
