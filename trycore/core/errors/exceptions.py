# trycore/core/errors/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from . import codes


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unstringifiable>"


def _normalize_error_code(code: Any) -> str:
    """
    Keep error_code stable and finite.
    """
    c = _safe_str(code or codes.UNKNOWN).strip() or codes.UNKNOWN
    if c in codes.CONFIGURATION_CODES:
        return c
    return codes.UNKNOWN


@dataclass
class TryCoreError(Exception):
    """
    The one public exception type for misconfigured registries and controllers.

    Guarded failures raised by user operations are never wrapped in it.
    """
    message: str
    error_code: str = codes.UNKNOWN
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.error_code = _normalize_error_code(self.error_code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    @property
    def is_configuration(self) -> bool:
        return self.error_code in codes.CONFIGURATION_CODES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    # -------- factories --------

    @classmethod
    def invalid_clause_arguments(cls, **details: Any) -> "TryCoreError":
        return cls(
            message="invalid clause arguments",
            error_code=codes.INVALID_CLAUSE_ARGUMENTS,
            details={k: _safe_str(v) for k, v in details.items()},
        )

    @classmethod
    def invalid_failure_kind(cls, target: Any, **details: Any) -> "TryCoreError":
        merged = {"target": _safe_str(target)}
        merged.update({k: _safe_str(v) for k, v in details.items()})
        return cls(
            message="invalid failure kind",
            error_code=codes.INVALID_FAILURE_KIND,
            details=merged,
        )

    @classmethod
    def invalid_config(cls, message: str, **details: Any) -> "TryCoreError":
        return cls(
            message=message,
            error_code=codes.INVALID_CONFIG,
            details={k: _safe_str(v) for k, v in details.items()},
        )
