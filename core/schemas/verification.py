"""
Schemas - Check Results
File: verification.py

Purpose: Outcome of the pre-submission checks run against a maker order.
Every check runs and reports; nothing is raised, so one report lists all
the reasons the escrow would refund a transfer.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


CheckSeverity = Literal["info", "warn", "error"]


class CheckResult(BaseModel):
    """One acceptance rule applied to one order."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_id: str = Field(..., min_length=1, description="Stable name of the rule")
    ok: bool = Field(..., description="False if the escrow would reject the order")
    severity: CheckSeverity = Field(..., description="info on pass, warn or error otherwise")
    message: str = Field(..., description="Human-readable outcome")
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return not self.ok

    @property
    def is_warning(self) -> bool:
        return self.severity == "warn"

    @property
    def marker(self) -> str:
        """Single-character status used in terminal output."""
        if self.is_error:
            return "✗"
        return "!" if self.is_warning else "✓"

    @classmethod
    def passed(cls, check_id: str, message: str, details: dict[str, Any] | None = None) -> "CheckResult":
        return cls(check_id=check_id, ok=True, severity="info", message=message, details=details or {})

    @classmethod
    def warning(cls, check_id: str, message: str, details: dict[str, Any] | None = None) -> "CheckResult":
        """Accepted by the escrow, but probably not what the maker meant."""
        return cls(check_id=check_id, ok=True, severity="warn", message=message, details=details or {})

    @classmethod
    def failed(cls, check_id: str, message: str, details: dict[str, Any] | None = None) -> "CheckResult":
        return cls(check_id=check_id, ok=False, severity="error", message=message, details=details or {})


class VerificationResult(BaseModel):
    """All checks run against an order, in the order they ran."""

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(..., description="True when no check failed")
    checks: list[CheckResult] = Field(default_factory=list)

    @classmethod
    def from_checks(cls, checks: list[CheckResult]) -> "VerificationResult":
        return cls(ok=all(check.ok for check in checks), checks=checks)

    @property
    def has_warnings(self) -> bool:
        return any(check.is_warning for check in self.checks)

    @property
    def error_count(self) -> int:
        return sum(1 for check in self.checks if check.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for check in self.checks if check.is_warning)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.ok)

    def get(self, check_id: str) -> CheckResult | None:
        return next((c for c in self.checks if c.check_id == check_id), None)

    def get_failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if check.is_error]

    def get_error_messages(self) -> list[str]:
        return [check.message for check in self.get_failed_checks()]

    def summary(self) -> str:
        """One line such as '5 passed, 1 warning, 0 failed'."""
        return (
            f"{self.passed_count - self.warning_count} passed, "
            f"{self.warning_count} warning{'s' if self.warning_count != 1 else ''}, "
            f"{self.error_count} failed"
        )
