"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashlock_cli hashlock "<secret>" [--hex-secret] [--json]
    python -m hashlock_cli verify-secret "<secret>" <hashlock> [--json]
    python -m hashlock_cli secrets generate [--parts N] [--json]
    python -m hashlock_cli secrets proof --index I SECRET [SECRET ...]
    python -m hashlock_cli order encode --token T --amount A --maker M --secret S [--json]
    python -m hashlock_cli order decode <msg> [--json]
    python -m hashlock_cli order check <msg> --sender ID --token T [--amount A]
    python -m hashlock_cli config --init

Environment Variables:
    HASHLOCK_ORDER_TTL_SECONDS          Default order lifetime (default: 86400)
    HASHLOCK_ORDER_PARTS                Default number of parts (default: 1)
    HASHLOCK_MIN_EXPIRATION_MARGIN_NS   Escrow expiration guard (default: 500)
    HASHLOCK_STRIP_HASH_PREFIX          Strip 0x from root hashes (default: true)
    HASHLOCK_LOG_LEVEL                  Log level (default: WARNING)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashlock_cli import __version__
from hashlock_cli.commands import hashlock, order, secrets
from hashlock_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashlock",
        description="Build hash-locked maker orders and their escrow payloads.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./hashlock.json or ~/.config/hashlock/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hashlock command ---
    hashlock_parser = subparsers.add_parser(
        "hashlock",
        help="Derive the hash-lock of a secret",
        description="Print keccak256(secret) as 64 hex chars without 0x prefix.",
    )
    hashlock_parser.add_argument("secret", type=str, help="The secret (UTF-8 unless --hex-secret)")
    hashlock_parser.add_argument(
        "--hex-secret",
        action="store_true",
        default=False,
        help="Treat the secret as hex-encoded bytes",
    )
    hashlock_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    hashlock_parser.set_defaults(func=hashlock.hashlock_cmd)

    # --- verify-secret command ---
    verify_parser = subparsers.add_parser(
        "verify-secret",
        help="Check a secret against a hash-lock",
        description="Exit 0 if keccak256(secret) matches the hash-lock (0x optional), 2 otherwise.",
    )
    verify_parser.add_argument("secret", type=str, help="The revealed secret")
    verify_parser.add_argument("hashlock", type=str, help="The published hash-lock")
    verify_parser.add_argument("--hex-secret", action="store_true", default=False, help="Secret is hex")
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=hashlock.verify_secret_cmd)

    # --- secrets command ---
    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Generate secrets and fill proofs",
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command", help="Secret operation")

    secrets_generate = secrets_subparsers.add_parser(
        "generate",
        help="Generate the secrets of a new order",
    )
    secrets_generate.add_argument("--parts", type=int, default=1, help="Number of order parts (default: 1)")
    secrets_generate.add_argument("--bytes", type=int, default=None, help="Entropy per secret in bytes (default: from config)")
    secrets_generate.add_argument("--json", action="store_true", default=False, help="JSON output")
    secrets_generate.set_defaults(func=secrets.generate_cmd)

    secrets_proof = secrets_subparsers.add_parser(
        "proof",
        help="Merkle proof for one fill index of a multi-part order",
    )
    secrets_proof.add_argument("secrets", nargs="+", help="All order secrets, in index order")
    secrets_proof.add_argument("--index", type=int, required=True, help="Fill index")
    secrets_proof.add_argument("--json", action="store_true", default=False, help="JSON output")
    secrets_proof.set_defaults(func=secrets.proof_cmd)

    secrets_parser.set_defaults(func=lambda args: secrets_parser.print_help() or EXIT_SUCCESS)

    # --- order command ---
    order_parser = subparsers.add_parser(
        "order",
        help="Encode, decode and check maker orders",
    )
    order_subparsers = order_parser.add_subparsers(dest="order_command", help="Order operation")

    order_encode = order_subparsers.add_parser(
        "encode",
        help="Build an order and print the ft_transfer_call msg",
    )
    order_encode.add_argument("--token", type=str, required=True, help="Token contract account")
    order_encode.add_argument("--amount", type=str, required=True, help="Total amount in base units (decimal)")
    order_encode.add_argument("--maker", type=str, required=True, help="Maker account")
    order_encode.add_argument(
        "--secret",
        action="append",
        default=None,
        help="Order secret; repeat parts + 1 times for multi-part orders",
    )
    order_encode.add_argument("--root-hash", type=str, default=None, help="Precomputed root hash")
    order_encode.add_argument("--parts", type=int, default=None, help="Number of parts (default: from config)")
    order_encode.add_argument("--ttl", type=int, default=None, help="Lifetime in seconds (default: from config)")
    order_encode.add_argument("--json", action="store_true", default=False, help="JSON output")
    order_encode.set_defaults(func=order.encode_cmd)

    order_decode = order_subparsers.add_parser(
        "decode",
        help="Decode a hex msg payload",
    )
    order_decode.add_argument("msg", type=str, help="Hex payload (0x optional)")
    order_decode.add_argument("--json", action="store_true", default=False, help="JSON output")
    order_decode.set_defaults(func=order.decode_cmd)

    order_check = order_subparsers.add_parser(
        "check",
        help="Run the escrow's acceptance rules before submitting",
    )
    order_check.add_argument("msg", type=str, help="Hex payload (0x optional)")
    order_check.add_argument("--sender", type=str, required=True, help="Account calling ft_transfer_call")
    order_check.add_argument("--token", type=str, required=True, help="Token contract being transferred")
    order_check.add_argument("--amount", type=str, default=None, help="Transfer amount (default: order total)")
    order_check.add_argument("--json", action="store_true", default=False, help="JSON output")
    order_check.set_defaults(func=order.check_cmd)

    order_parser.set_defaults(func=lambda args: order_parser.print_help() or EXIT_SUCCESS)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="hashlock.json",
        help="Path for config file (default: hashlock.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (HASHLOCK_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_runtime_config().to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: hashlock config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
