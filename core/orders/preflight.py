"""
Orders - Pre-Submission Checks

Runs the acceptance rules of the source escrow's ft_on_transfer against an
order before it is attached to a token transfer. An order the escrow
rejects costs a round trip and a refund; one it accepts by mistake (an
under-funded order) cannot be corrected afterwards.

Checks:
- order_invariants:   record invariants hold
- encodable:          every field fits its wire width
- maker_matches_sender
- token_matches:      order.token is the token being transferred
- amount_covers_order
- expiration_margin:  expiration >= now + min_expiration_margin_ns
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from core.codec.order_codec import encode_maker_order
from core.config.runtime import RuntimeConfig, get_default_config
from core.schemas.errors import EncodingException
from core.schemas.order import MakerOrder
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


def _check_invariants(order: MakerOrder) -> CheckResult:
    problems = order.invariant_violations()
    if problems:
        return CheckResult.failed(
            "order_invariants",
            f"Order breaks {len(problems)} invariant(s)",
            details={"violations": problems},
        )
    return CheckResult.passed("order_invariants", "Order invariants hold")


def _check_encodable(order: MakerOrder) -> CheckResult:
    try:
        payload = encode_maker_order(order)
    except EncodingException as e:
        return CheckResult.failed(
            "encodable",
            e.message,
            details={"code": e.code, **e.details},
        )
    return CheckResult.passed(
        "encodable", "Order encodes", details={"size": len(payload)}
    )


def _check_sender(order: MakerOrder, sender_id: str) -> CheckResult:
    if order.maker != sender_id:
        return CheckResult.failed(
            "maker_matches_sender",
            f"Maker {order.maker} does not match sender {sender_id}",
            details={"maker": order.maker, "sender_id": sender_id},
        )
    return CheckResult.passed("maker_matches_sender", "Maker matches sender")


def _check_token(order: MakerOrder, token_id: str) -> CheckResult:
    if order.token != token_id:
        return CheckResult.failed(
            "token_matches",
            f"Order token {order.token} is not the transferred token {token_id}",
            details={"order_token": order.token, "token_id": token_id},
        )
    return CheckResult.passed("token_matches", "Token matches")


def _check_amount(order: MakerOrder, amount: int) -> CheckResult:
    details = {"total_amount": str(order.total_amount), "amount": str(amount)}
    if amount > order.total_amount:
        return CheckResult.failed(
            "amount_covers_order",
            "Transfer exceeds order total amount; escrow will refund it",
            details=details,
        )
    if amount < order.total_amount:
        # The escrow stores the order anyway, with less locked than promised
        return CheckResult.warning(
            "amount_covers_order",
            "Transfer is smaller than order total amount; order would be under-funded",
            details=details,
        )
    return CheckResult.passed("amount_covers_order", "Transfer covers order", details=details)


def _check_expiration(order: MakerOrder, now_ns: int, margin_ns: int) -> CheckResult:
    details = {"expiration": order.expiration, "now_ns": now_ns, "margin_ns": margin_ns}
    if order.expiration < now_ns + margin_ns:
        return CheckResult.failed(
            "expiration_margin",
            f"Expiration {order.expiration} is too close to now ({now_ns})",
            details=details,
        )
    return CheckResult.passed("expiration_margin", "Expiration is in the future", details=details)


def preflight_order(
    order: MakerOrder,
    sender_id: str,
    token_id: str,
    amount: int,
    now_ns: Optional[int] = None,
    config: Optional[RuntimeConfig] = None,
) -> VerificationResult:
    """
    Check an order against the escrow's acceptance rules.

    Args:
        order: The order to submit
        sender_id: Account that will call ft_transfer_call
        token_id: Token contract the transfer goes through
        amount: Amount being transferred
        now_ns: Clock override in nanoseconds
        config: Runtime config (default: get_default_config())

    Returns:
        VerificationResult; ok is False if the escrow would refund the transfer
    """
    cfg = config or get_default_config()
    now = time.time_ns() if now_ns is None else now_ns

    checks = [
        _check_invariants(order),
        _check_encodable(order),
        _check_sender(order, sender_id),
        _check_token(order, token_id),
        _check_amount(order, amount),
        _check_expiration(order, now, cfg.contract.min_expiration_margin_ns),
    ]
    result = VerificationResult.from_checks(checks)

    if result.ok:
        logger.info(f"Preflight passed for order {order.root_hash}: {result.summary()}")
    else:
        logger.warning(
            f"Preflight failed for order {order.root_hash}: "
            f"{'; '.join(result.get_error_messages())}"
        )
    return result


__all__ = [
    "preflight_order",
]
