"""
Common test fixtures shared by all modules.

Provides factory functions for core data structures:
- MakerOrder
- Immutables / TimeLock
- Secret sets for multi-part orders
"""

from typing import Optional

from core.crypto.commitment import derive_hex
from core.schemas.immutables import Immutables, TimeLock
from core.schemas.order import MakerOrder


# 2100-01-01T00:00:00Z in nanoseconds; always in the future for these tests
FUTURE_EXPIRATION_NS = 4_102_444_800_000_000_000

# A fixed "now" well before FUTURE_EXPIRATION_NS
FIXED_NOW_MS = 1_750_000_000_000
FIXED_NOW_NS = FIXED_NOW_MS * 1_000_000

SAMPLE_SECRET = "test_secret_123"
ONE_TOKEN = 10**24


# =============================================================================
# MakerOrder Factory
# =============================================================================

def make_maker_order(
    secret: str = SAMPLE_SECRET,
    token: str = "token-1",
    total_amount: int = ONE_TOKEN,
    parts: int = 1,
    filled_amount: int = 0,
    withdrawn_amount: int = 0,
    maker: str = "maker.id",
    expiration: int = FUTURE_EXPIRATION_NS,
    root_hash: Optional[str] = None,
) -> MakerOrder:
    """
    Create a MakerOrder for testing.

    The root hash defaults to the hash-lock of ``secret``.
    """
    return MakerOrder(
        root_hash=root_hash if root_hash is not None else derive_hex(secret),
        token=token,
        total_amount=total_amount,
        parts=parts,
        filled_amount=filled_amount,
        withdrawn_amount=withdrawn_amount,
        maker=maker,
        expiration=expiration,
    )


def make_secrets(count: int, prefix: str = "secret") -> list[str]:
    """Deterministic secrets: secret-0, secret-1, ..."""
    return [f"{prefix}-{i}" for i in range(count)]


# =============================================================================
# Immutables Factory
# =============================================================================

def make_timelock(base_ns: int = FIXED_NOW_NS, step_ns: int = 60_000_000_000) -> TimeLock:
    """A TimeLock whose stages are ``step_ns`` apart, starting at base_ns."""
    return TimeLock(
        src_withdrawal=base_ns + step_ns,
        src_public_withdrawal=base_ns + 2 * step_ns,
        src_cancellation=base_ns + 3 * step_ns,
        src_public_cancellation=base_ns + 4 * step_ns,
        dst_withdrawal=base_ns + step_ns,
        dst_public_withdrawal=base_ns + 2 * step_ns,
        dst_cancellation=base_ns + 3 * step_ns,
    )


def make_immutables(
    salt: str = "salt-1",
    order_root_hash: Optional[str] = None,
    hashlock: Optional[str] = None,
    making_amount: int = ONE_TOKEN,
    taking_amount: int = 5 * 10**18,
    maker: str = "maker.id",
    taker: str = "resolver.id",
) -> Immutables:
    """Create Immutables for a single-part fill of the default order."""
    root = order_root_hash or derive_hex(SAMPLE_SECRET)
    return Immutables(
        salt=salt,
        order_root_hash=root,
        hashlock=hashlock or root,
        making_token="token-1",
        taking_token="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        making_amount=making_amount,
        taking_amount=taking_amount,
        src_safety_deposit=10**22,
        dst_safety_deposit=10**15,
        timelock=make_timelock(),
        maker=maker,
        taker=taker,
    )
