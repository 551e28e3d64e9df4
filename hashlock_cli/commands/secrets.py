"""
CLI Secret Commands

Generate the secrets of an order and produce fill proofs.

Usage:
    hashlock secrets generate [--parts N] [--bytes B] [--json]
    hashlock secrets proof --index I SECRET [SECRET ...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Any

from core.crypto.commitment import derive_hex, generate_secret
from core.merkle.merkle_proofs import SecretTree
from core.schemas.errors import EscrowException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def generate_cmd(args: Namespace) -> int:
    """
    Generate fresh secrets for an order.

    One secret for a single-part order, parts + 1 for a multi-part order.
    """
    parts = args.parts
    if parts < 1:
        print(f"Error: --parts must be >= 1, got {parts}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    nbytes = args.cli_config.secret_bytes if args.bytes is None else args.bytes
    count = 1 if parts == 1 else parts + 1
    try:
        secrets = [generate_secret(nbytes) for _ in range(count)]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if parts == 1:
        root_hash = derive_hex(secrets[0])
        hashlocks = [root_hash]
    else:
        tree = SecretTree.for_parts(secrets, parts)
        root_hash = tree.root_hex
        hashlocks = [tree.hashlock_hex(i) for i in range(len(tree))]

    logger.info(f"Generated {count} secret(s) for root {root_hash}")

    output: dict[str, Any] = {
        "parts": parts,
        "root_hash": root_hash,
        "secrets": [
            {"index": i, "secret": s, "hashlock": h}
            for i, (s, h) in enumerate(zip(secrets, hashlocks))
        ],
    }

    if args.json:
        print(json.dumps(output, indent=2))
    else:
        print(f"root_hash: {root_hash}")
        for item in output["secrets"]:
            print(f"  [{item['index']}] secret={item['secret']} hashlock={item['hashlock']}")
        print("\nKeep the secrets private until each fill is ready to settle.")
    return EXIT_SUCCESS


def proof_cmd(args: Namespace) -> int:
    """Print the hash-lock and Merkle proof for one fill index."""
    try:
        tree = SecretTree.from_secrets(args.secrets)
        proof = tree.proof(args.index)
    except EscrowException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    output = {
        "index": args.index,
        "hashlock": tree.hashlock_hex(args.index),
        "leaf": tree.leaf_hex(args.index),
        "proof": proof.siblings_hex(),
        "root_hash": tree.root_hex,
    }

    if args.json:
        print(json.dumps(output, indent=2))
    else:
        print(f"index: {output['index']}")
        print(f"hashlock: {output['hashlock']}")
        print(f"root_hash: {output['root_hash']}")
        print("proof:")
        for sibling in output["proof"]:
            print(f"  {sibling}")
    return EXIT_SUCCESS
