"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    DecodingErrorKind,
    DecodingException,
    EncodingErrorKind,
    EncodingException,
    ErrorCodes,
    EscrowError,
    EscrowException,
    FillException,
    HexFormatException,
    MerkleVerificationException,
    SchemaValidationException,
)

# Order schemas
from .order import (
    MAKER_ORDER_LAYOUT,
    NANOS_PER_MILLI,
    ROOT_HASH_PATTERN,
    FieldKind,
    MakerOrder,
)

# Resolver fill schemas
from .immutables import (
    TIMELOCK_STAGES,
    Immutables,
    TimeLock,
)

# Transport form
from .transport import (
    order_from_transport,
    parse_decimal,
    to_transport_dict,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Errors
    "DecodingErrorKind",
    "DecodingException",
    "EncodingErrorKind",
    "EncodingException",
    "ErrorCodes",
    "EscrowError",
    "EscrowException",
    "FillException",
    "HexFormatException",
    "MerkleVerificationException",
    "SchemaValidationException",
    # Order
    "MAKER_ORDER_LAYOUT",
    "NANOS_PER_MILLI",
    "ROOT_HASH_PATTERN",
    "FieldKind",
    "MakerOrder",
    # Immutables
    "TIMELOCK_STAGES",
    "Immutables",
    "TimeLock",
    # Transport
    "order_from_transport",
    "parse_decimal",
    "to_transport_dict",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
