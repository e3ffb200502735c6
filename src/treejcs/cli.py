#!/usr/bin/env python3
"""
cli.py — Command line interface for tree-jcs

Commands:
  canonicalize  Write the canonical form of a JSON document
  compare       Check two JSON documents for canonical equality
  hash          Print the SHA-256 of a document's canonical bytes
  keygen        Create an Ed25519 keyfile
  sign          Sign a document's canonical bytes
  verify        Verify a detached signature over a document
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .canonical_json import canonical_dumps, canonical_hash, canonicalize, parse_json
from .equality import canonical_equals
from .errors import JcsError
from .signing import (
    SigningKeypair,
    load_private_key_b64,
    load_public_key_b64,
    sign_canonical,
    verify_canonical,
)

logger = logging.getLogger(__name__)


def _fail_with_error(err: JcsError) -> None:
    """Print a structured error message from a ``JcsError`` and exit.

    Args:
        err: Structured canonicalization error.

    Returns:
        None: This function terminates the process.
    """
    context = f" Context: {err.context}." if err.context else ""
    print(
        f"ERROR: {err.code}. {err.message}{context} "
        f"(See: {err.doc_url})"
    )
    sys.exit(1)


def _cli_error(what: str, why: str, fix: str, see: str) -> None:
    """Print a teaching-style CLI error and exit.

    Args:
        what: What failed.
        why: Why it failed.
        fix: Recommended remediation.
        see: Command reference.

    Returns:
        None: This function terminates the process.
    """
    print(f"ERROR: {what}. {why}. Fix: {fix}. (See: {see})")
    sys.exit(1)


def _load_document(source: Optional[str]) -> Any:
    """Read and parse a JSON document from a path, or stdin for ``-``/None."""
    label = "<stdin>" if source in (None, "-") else source
    try:
        if source in (None, "-"):
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
    except FileNotFoundError:
        _cli_error(
            f"Input file not found: {label}",
            "The path does not exist",
            "pass an existing JSON file or '-' for stdin",
            "treejcs --help",
        )
    except OSError as e:
        _cli_error(
            f"Cannot read {label}",
            e.strerror or str(e),
            "pass a readable JSON file or '-' for stdin",
            "treejcs --help",
        )
    except UnicodeDecodeError as e:
        _cli_error(
            f"Cannot read {label}",
            f"Input is not UTF-8 ({e.reason})",
            "re-encode the document as UTF-8",
            "RFC 8785 section 3.2.4",
        )

    try:
        return parse_json(text)
    except ValueError as e:
        _cli_error(
            f"Cannot parse {label}",
            f"Invalid JSON: {e}",
            "correct the document syntax",
            "RFC 8259",
        )


def cmd_canonicalize(args: argparse.Namespace) -> None:
    """Handle ``treejcs canonicalize``."""
    document = _load_document(args.input)
    if args.output:
        try:
            f = open(args.output, "w", encoding="utf-8", newline="")
        except OSError as e:
            _cli_error(
                f"Cannot write {args.output}",
                e.strerror or str(e),
                "choose a writable output path",
                "treejcs canonicalize --help",
            )
        with f:
            canonicalize(document, f)
        logger.info("wrote canonical form to %s", args.output)
    else:
        canonicalize(document, sys.stdout)
        sys.stdout.flush()


def cmd_compare(args: argparse.Namespace) -> None:
    """Handle ``treejcs compare``. Exit status 1 when documents differ."""
    left = _load_document(args.left)
    right = _load_document(args.right)
    if canonical_equals(left, right):
        print("EQUAL")
        return
    print("NOT EQUAL")
    sys.exit(1)


def cmd_hash(args: argparse.Namespace) -> None:
    """Handle ``treejcs hash``."""
    print(canonical_hash(_load_document(args.input)))


def cmd_keygen(args: argparse.Namespace) -> None:
    """Handle ``treejcs keygen``."""
    kp = SigningKeypair.generate()
    keyfile = {
        "key_id": kp.key_id,
        "algorithm": "Ed25519",
        "public_key_b64": kp.public_key_b64,
        "private_key_b64": kp.private_key_b64(),
    }
    if args.out:
        try:
            Path(args.out).write_text(canonical_dumps(keyfile), encoding="utf-8")
        except OSError as e:
            _cli_error(
                f"Cannot write keyfile {args.out}",
                e.strerror or str(e),
                "choose a writable output path",
                "treejcs keygen --help",
            )
        print(f"Key {kp.key_id} written to {args.out}")
    else:
        print(canonical_dumps(keyfile))


def _load_keyfile(path: str) -> dict:
    try:
        keyfile = parse_json(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        _cli_error(
            f"Keyfile not found: {path}",
            "The path does not exist",
            "create one with 'treejcs keygen --out PATH'",
            "treejcs keygen --help",
        )
    except OSError as e:
        _cli_error(
            f"Cannot read keyfile {path}",
            e.strerror or str(e),
            "pass a readable keyfile created by 'treejcs keygen'",
            "treejcs keygen --help",
        )
    except ValueError as e:
        _cli_error(
            f"Cannot parse keyfile {path}",
            f"Invalid JSON: {e}",
            "regenerate the keyfile with 'treejcs keygen'",
            "treejcs keygen --help",
        )
    if not isinstance(keyfile, dict) or "private_key_b64" not in keyfile:
        _cli_error(
            f"Keyfile {path} has no private key",
            "Field 'private_key_b64' is missing",
            "regenerate the keyfile with 'treejcs keygen'",
            "treejcs keygen --help",
        )
    return keyfile


def cmd_sign(args: argparse.Namespace) -> None:
    """Handle ``treejcs sign``."""
    document = _load_document(args.input)
    keyfile = _load_keyfile(args.keyfile)
    try:
        sk = load_private_key_b64(keyfile["private_key_b64"])
    except ValueError as e:
        _cli_error(
            f"Cannot load private key from {args.keyfile}",
            str(e),
            "regenerate the keyfile with 'treejcs keygen'",
            "treejcs keygen --help",
        )
    kp = SigningKeypair.from_private_key(sk)
    print(canonical_dumps({"key_id": kp.key_id, "sig": sign_canonical(document, sk)}))


def cmd_verify(args: argparse.Namespace) -> None:
    """Handle ``treejcs verify``. Exit status 1 when the signature fails."""
    document = _load_document(args.input)
    try:
        pk = load_public_key_b64(args.public_key)
    except ValueError as e:
        _cli_error(
            "Cannot load public key",
            str(e),
            "pass the 'public_key_b64' value from the keyfile",
            "treejcs verify --help",
        )
    if verify_canonical(document, args.sig, pk):
        print("VALID")
        return
    print("INVALID")
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treejcs", description="JSON Canonicalization Scheme tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    # canonicalize
    p_canon = sub.add_parser("canonicalize", help="Write the canonical form of a document")
    p_canon.add_argument("input", nargs="?", default="-", help="JSON file, or '-' for stdin")
    p_canon.add_argument("-o", "--output", help="Write to this file instead of stdout")

    # compare
    p_cmp = sub.add_parser("compare", help="Check two documents for canonical equality")
    p_cmp.add_argument("left", help="First JSON file")
    p_cmp.add_argument("right", help="Second JSON file")

    # hash
    p_hash = sub.add_parser("hash", help="SHA-256 of the canonical bytes")
    p_hash.add_argument("input", nargs="?", default="-", help="JSON file, or '-' for stdin")

    # keygen
    p_kg = sub.add_parser("keygen", help="Create an Ed25519 keyfile")
    p_kg.add_argument("--out", help="Path to save the keyfile (prints to stdout if omitted)")

    # sign
    p_sign = sub.add_parser("sign", help="Sign a document's canonical bytes")
    p_sign.add_argument("input", help="JSON file, or '-' for stdin")
    p_sign.add_argument("--keyfile", required=True, help="Keyfile created by 'treejcs keygen'")

    # verify
    p_ver = sub.add_parser("verify", help="Verify a detached signature")
    p_ver.add_argument("input", help="JSON file, or '-' for stdin")
    p_ver.add_argument("--public-key", required=True, help="Base64 raw Ed25519 public key")
    p_ver.add_argument("--sig", required=True, help="Base64 signature")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entrypoint.

    Parses command-line arguments, routes to a subcommand handler, and exits
    with subcommand status semantics.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "canonicalize": cmd_canonicalize(args)
        elif args.command == "compare": cmd_compare(args)
        elif args.command == "hash": cmd_hash(args)
        elif args.command == "keygen": cmd_keygen(args)
        elif args.command == "sign": cmd_sign(args)
        elif args.command == "verify": cmd_verify(args)
    except JcsError as e:
        _fail_with_error(e)

if __name__ == "__main__":
    main()
