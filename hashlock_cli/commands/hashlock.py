"""
CLI Hash-Lock Commands

Derive a hash-lock from a secret and check a revealed secret.

Usage:
    hashlock hashlock <secret> [--hex-secret] [--json]
    hashlock verify-secret <secret> <hashlock> [--hex-secret] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.crypto.commitment import derive_hex, validate_secret
from core.crypto.hashing import from_hex
from core.schemas.errors import EscrowException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def secret_from_args(args: Namespace) -> bytes | str:
    """The secret as given, or its decoded bytes with --hex-secret."""
    if getattr(args, "hex_secret", False):
        return from_hex(args.secret)
    return args.secret


def hashlock_cmd(args: Namespace) -> int:
    """Print keccak256(secret) as bare hex."""
    try:
        secret = secret_from_args(args)
    except EscrowException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root_hash = derive_hex(secret)
    logger.debug(f"Derived hash-lock {root_hash}")

    if args.json:
        print(json.dumps({"hashlock": root_hash}, indent=2))
    else:
        print(root_hash)
    return EXIT_SUCCESS


def verify_secret_cmd(args: Namespace) -> int:
    """Exit 0 if the secret opens the hash-lock, 2 if not."""
    try:
        secret = secret_from_args(args)
    except EscrowException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    ok = validate_secret(secret, args.hashlock)

    if args.json:
        print(json.dumps({"ok": ok, "hashlock": args.hashlock}, indent=2))
    else:
        print("valid: true" if ok else "valid: false")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
