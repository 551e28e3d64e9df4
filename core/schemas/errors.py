"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Error codes, the pydantic error model used in JSON output, and the
exception hierarchy raised by the codec, commitment and order helpers.

Every failure here is a deterministic function of its input, so nothing is
retryable: retrying the same encode, decode or proof fails the same way.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorCodes:
    """Stable machine-readable error codes."""

    # Encoding
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    INVALID_VALUE = "INVALID_VALUE"

    # Decoding
    TRUNCATED = "TRUNCATED"
    TRAILING_DATA = "TRAILING_DATA"
    INVALID_ENCODING = "INVALID_ENCODING"

    # Records and hex input
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    INVALID_HEX = "INVALID_HEX"

    # Commitments and fills
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    FILL_INVALID = "FILL_INVALID"


class EncodingErrorKind(str, Enum):
    """Why a value could not be written."""

    VALUE_OUT_OF_RANGE = ErrorCodes.VALUE_OUT_OF_RANGE
    INVALID_VALUE = ErrorCodes.INVALID_VALUE


class DecodingErrorKind(str, Enum):
    """Why a byte sequence is not a MakerOrder."""

    TRUNCATED = ErrorCodes.TRUNCATED
    TRAILING_DATA = ErrorCodes.TRAILING_DATA
    INVALID_ENCODING = ErrorCodes.INVALID_ENCODING


class EscrowError(BaseModel):
    """Serializable form of an EscrowException, for JSON output."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(..., examples=[ErrorCodes.TRUNCATED])
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    retryable: bool = False

    def to_exception(self) -> "EscrowException":
        return EscrowException(
            self.message,
            code=self.code,
            details=self.details,
            retryable=self.retryable,
        )


def _merge(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({k: v for k, v in context.items() if v is not None})
    return merged


class EscrowException(Exception):
    """
    Root of every error raised by this package.

    Subclasses fix ``code``; ``details`` carries structured context such as
    the field name or byte offset.
    """

    code = "ESCROW_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> EscrowError:
        return EscrowError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EncodingException(EscrowException):
    """A field value does not fit its wire type."""

    def __init__(
        self,
        kind: EncodingErrorKind,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=kind.value, details=_merge(details, field=field_name))
        self.kind = kind
        self.field_name = field_name


class DecodingException(EscrowException):
    """Input bytes are not a valid encoding; offset is where reading stopped."""

    def __init__(
        self,
        kind: DecodingErrorKind,
        message: str,
        field_name: str | None = None,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=kind.value,
            details=_merge(details, field=field_name, offset=offset),
        )
        self.kind = kind
        self.field_name = field_name
        self.offset = offset


class SchemaValidationException(EscrowException):
    """A record or its inputs break a field invariant."""

    code = ErrorCodes.SCHEMA_VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_merge(details, field_path=field_path))


class HexFormatException(EscrowException):
    code = ErrorCodes.INVALID_HEX

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class MerkleVerificationException(EscrowException):
    """A secret tree cannot be built, or a proof cannot be produced or read."""

    code = ErrorCodes.MERKLE_PROOF_INVALID

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_merge(details, leaf_index=leaf_index))


class FillException(EscrowException):
    """Fill amounts that the escrow would reject outright."""

    code = ErrorCodes.FILL_INVALID

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)
