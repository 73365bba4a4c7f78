"""Validation vocabulary shared by the rule tier and the constraint tier."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    PASS = "pass"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"
    FATAL = "fatal"

    @property
    def is_blocking(self) -> bool:
        """Critical-or-above: the candidate cannot be kept."""
        return self in BLOCKING_SEVERITIES


BLOCKING_SEVERITIES = frozenset({Severity.CRITICAL, Severity.FATAL})


class TierPolicy(BaseModel):
    """
    Which severities stop evaluation in a validation tier.

    The rule tier stops a context on the first critical result.
    The constraint tier stops only the current category, and only on fatal.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    halt_on: frozenset[Severity]

    def halts(self, severity: Severity) -> bool:
        return severity in self.halt_on


RULE_TIER_POLICY = TierPolicy(name="rules", halt_on=frozenset({Severity.CRITICAL}))
CONSTRAINT_TIER_POLICY = TierPolicy(name="constraints", halt_on=frozenset({Severity.FATAL}))


class ValidationResult(BaseModel):
    """Outcome of one legacy design rule on one context."""
    model_config = ConfigDict(frozen=True)

    severity: Severity
    rule_name: str
    message: str = ""
    penalty: float = 0.0  # Only meaningful for warnings

    @classmethod
    def passed(cls, rule_name: str) -> ValidationResult:
        return cls(severity=Severity.PASS, rule_name=rule_name)

    @classmethod
    def info(cls, rule_name: str, message: str) -> ValidationResult:
        return cls(severity=Severity.INFO, rule_name=rule_name, message=message)

    @classmethod
    def warning(cls, rule_name: str, message: str, penalty: float) -> ValidationResult:
        return cls(severity=Severity.WARNING, rule_name=rule_name, message=message, penalty=penalty)

    @classmethod
    def critical(cls, rule_name: str, message: str) -> ValidationResult:
        return cls(severity=Severity.CRITICAL, rule_name=rule_name, message=message)


class ConstraintResult(BaseModel):
    """Outcome of one pluggable constraint check."""
    model_config = ConfigDict(frozen=True)

    passed: bool
    severity: Severity
    constraint_name: str
    message: str = ""
    penalty: float = 0.0
    suggested_fix: str | None = None

    @classmethod
    def ok(cls, constraint_name: str) -> ConstraintResult:
        return cls(passed=True, severity=Severity.PASS, constraint_name=constraint_name)

    @classmethod
    def info(cls, constraint_name: str, message: str) -> ConstraintResult:
        return cls(passed=True, severity=Severity.INFO, constraint_name=constraint_name, message=message)

    @classmethod
    def warning(cls, constraint_name: str, message: str, penalty: float = 5.0) -> ConstraintResult:
        return cls(
            passed=False, severity=Severity.WARNING,
            constraint_name=constraint_name, message=message, penalty=penalty,
        )

    @classmethod
    def critical(
        cls, constraint_name: str, message: str, fix: str | None = None,
    ) -> ConstraintResult:
        return cls(
            passed=False, severity=Severity.CRITICAL,
            constraint_name=constraint_name, message=message, suggested_fix=fix,
        )

    @classmethod
    def fatal(cls, constraint_name: str, message: str) -> ConstraintResult:
        return cls(passed=False, severity=Severity.FATAL, constraint_name=constraint_name, message=message)

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.constraint_name}: {'PASS' if self.passed else self.message}"
