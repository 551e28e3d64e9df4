"""
Orders - Maker Order Builder

Turns a maker's intent (token, amount, secret(s), lifetime) into a fully
populated MakerOrder ready for encoding.

Rules:
- parts == 1: root_hash = keccak256(secret)
- parts > 1: root_hash = Merkle root over parts + 1 indexed secret hashes
- expiration = (now_ms + ttl_ms) * 1_000_000 (nanoseconds)
- filled_amount and withdrawn_amount start at zero

Secrets never appear in logs; only the derived root hash does.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from core.config.runtime import RuntimeConfig, get_default_config
from core.crypto.commitment import Secret, derive_hex
from core.crypto.hashing import strip_0x
from core.merkle.merkle_proofs import SecretTree
from core.schemas.errors import SchemaValidationException
from core.schemas.order import NANOS_PER_MILLI, MakerOrder


logger = logging.getLogger(__name__)


def current_time_ms() -> int:
    return time.time_ns() // NANOS_PER_MILLI


def expiration_from_ttl(ttl_seconds: int, now_ms: Optional[int] = None) -> int:
    """
    Nanosecond expiration ``ttl_seconds`` from now.

    Millisecond clock scaled to nanoseconds, the resolution the escrow
    compares against block_timestamp.
    """
    if ttl_seconds <= 0:
        raise SchemaValidationException(
            f"Order lifetime must be positive, got {ttl_seconds}s",
            field_path="expiration",
        )
    base_ms = current_time_ms() if now_ms is None else now_ms
    return (base_ms + ttl_seconds * 1000) * NANOS_PER_MILLI


def normalize_root_hash(value: str, strip_prefix: bool = True) -> str:
    """
    Bring a root hash into the stored form: lowercase, no 0x.

    Raises:
        SchemaValidationException: If the hash carries 0x and stripping is off
    """
    if value.startswith("0x"):
        if not strip_prefix:
            raise SchemaValidationException(
                "root_hash carries a 0x prefix and prefix stripping is disabled",
                field_path="root_hash",
            )
        value = strip_0x(value)
    return value.lower()


def root_hash_for(
    parts: int,
    secret: Optional[Secret] = None,
    secrets: Optional[Sequence[Secret]] = None,
) -> str:
    """
    Derive the order root hash from the maker's secret(s).

    Raises:
        SchemaValidationException: If the secrets do not match ``parts``
    """
    if parts < 1:
        raise SchemaValidationException(f"parts must be >= 1, got {parts}", field_path="parts")

    if parts == 1:
        if secret is None:
            if secrets is not None and len(secrets) == 1:
                secret = secrets[0]
            else:
                raise SchemaValidationException(
                    "A single-part order needs exactly one secret",
                    field_path="root_hash",
                )
        return derive_hex(secret)

    if secrets is None or len(secrets) != parts + 1:
        got = 0 if secrets is None else len(secrets)
        raise SchemaValidationException(
            f"An order in {parts} parts needs {parts + 1} secrets, got {got}",
            field_path="root_hash",
            details={"parts": parts, "secrets": got},
        )
    return SecretTree.for_parts(secrets, parts).root_hex


def build_maker_order(
    token: str,
    total_amount: int,
    maker: str,
    *,
    secret: Optional[Secret] = None,
    secrets: Optional[Sequence[Secret]] = None,
    root_hash: Optional[str] = None,
    parts: Optional[int] = None,
    ttl_seconds: Optional[int] = None,
    now_ms: Optional[int] = None,
    config: Optional[RuntimeConfig] = None,
) -> MakerOrder:
    """
    Build a new maker order.

    Exactly one of ``secret``, ``secrets`` or ``root_hash`` is given. A
    precomputed ``root_hash`` is normalized per the contract config.

    Args:
        token: Token contract account
        total_amount: Order size in token base units
        maker: Maker account id
        secret: The secret of a single-part order
        secrets: parts + 1 secrets of a multi-part order
        root_hash: A hash-lock or Merkle root computed elsewhere
        parts: Number of parts (default from config)
        ttl_seconds: Lifetime (default from config)
        now_ms: Clock override in milliseconds
        config: Runtime config (default: get_default_config())

    Returns:
        A MakerOrder with no fills and no withdrawals

    Raises:
        SchemaValidationException: If inputs conflict or the order is malformed
    """
    cfg = config or get_default_config()
    parts = cfg.orders.parts if parts is None else parts
    ttl_seconds = cfg.orders.ttl_seconds if ttl_seconds is None else ttl_seconds

    given = sum(x is not None for x in (secret, secrets, root_hash))
    if given != 1:
        raise SchemaValidationException(
            "Provide exactly one of secret, secrets or root_hash",
            details={"given": given},
        )

    if root_hash is not None:
        root = normalize_root_hash(root_hash, cfg.contract.strip_hash_prefix)
    else:
        root = root_hash_for(parts, secret=secret, secrets=secrets)

    order = MakerOrder(
        root_hash=root,
        token=token,
        total_amount=total_amount,
        parts=parts,
        filled_amount=0,
        withdrawn_amount=0,
        maker=maker,
        expiration=expiration_from_ttl(ttl_seconds, now_ms),
    )

    problems = order.invariant_violations()
    if problems:
        raise SchemaValidationException(
            f"Invalid maker order: {'; '.join(problems)}",
            details={"violations": problems},
        )

    logger.info(
        f"Built maker order root={order.root_hash} token={order.token} "
        f"parts={order.parts} expiration={order.expiration}"
    )
    return order


__all__ = [
    "current_time_ms",
    "expiration_from_ttl",
    "normalize_root_hash",
    "root_hash_for",
    "build_maker_order",
]
