"""
CLI Order Commands

Build, encode, decode and pre-check maker orders.

Usage:
    hashlock order encode --token T --amount A --maker M --secret S [--parts N] [--ttl S] [--json]
    hashlock order decode <msg> [--json]
    hashlock order check <msg> --sender ID --token T [--amount A] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Any

from core.codec.order_codec import decode_order_msg, encode_order_msg, encoded_length
from core.orders.builder import build_maker_order
from core.orders.preflight import preflight_order
from core.schemas.errors import EscrowException
from core.schemas.transport import parse_decimal, to_transport_dict


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def _report_error(e: EscrowException, as_json: bool) -> int:
    if as_json:
        print(json.dumps({"error": e.to_error_model().model_dump()}, indent=2))
    else:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR


def encode_cmd(args: Namespace) -> int:
    """Build an order and print its hex msg payload."""
    runtime = args.cli_config.to_runtime_config()
    secrets = args.secret or []

    try:
        total_amount = parse_decimal(args.amount, "total_amount")
        parts = runtime.orders.parts if args.parts is None else args.parts
        kwargs: dict[str, Any] = {}
        if args.root_hash:
            kwargs["root_hash"] = args.root_hash
        elif parts == 1 and len(secrets) == 1:
            kwargs["secret"] = secrets[0]
        else:
            kwargs["secrets"] = secrets

        order = build_maker_order(
            token=args.token,
            total_amount=total_amount,
            maker=args.maker,
            parts=parts,
            ttl_seconds=args.ttl,
            config=runtime,
            **kwargs,
        )
        msg = encode_order_msg(order)
    except EscrowException as e:
        return _report_error(e, args.json)

    if args.json:
        output: dict[str, Any] = {
            "order": to_transport_dict(order),
            "msg": msg,
            "size": encoded_length(order),
        }
        escrow = runtime.contract.escrow_account
        if escrow:
            # Arguments for the token's ft_transfer_call into the source escrow
            output["ft_transfer_call"] = {
                "receiver_id": escrow,
                "amount": str(order.total_amount),
                "msg": msg,
            }
        print(json.dumps(output, indent=2))
    else:
        print(msg)
    return EXIT_SUCCESS


def decode_cmd(args: Namespace) -> int:
    """Decode a hex msg payload back into an order."""
    try:
        order = decode_order_msg(args.msg)
    except EscrowException as e:
        return _report_error(e, args.json)

    data = to_transport_dict(order)
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key}: {value}")
        problems = order.invariant_violations()
        if problems:
            print(f"\nwarnings ({len(problems)}):")
            for problem in problems:
                print(f"  ! {problem}")
    return EXIT_SUCCESS


def check_cmd(args: Namespace) -> int:
    """Run the escrow's acceptance rules against a hex msg payload."""
    runtime = args.cli_config.to_runtime_config()
    try:
        order = decode_order_msg(args.msg)
        amount = order.total_amount if args.amount is None else parse_decimal(args.amount, "amount")
    except EscrowException as e:
        return _report_error(e, args.json)

    result = preflight_order(
        order,
        sender_id=args.sender,
        token_id=args.token,
        amount=amount,
        config=runtime,
    )

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(f"ok: {str(result.ok).lower()} ({result.summary()})")
        for check in result.checks:
            print(f"  {check.marker} {check.check_id}: {check.message}")

    return EXIT_SUCCESS if result.ok else EXIT_VERIFICATION_FAILED
