# trycore/config/validator.py
"""
Configuration Validator

Validates configuration for illegal/misleading values.
Returns structured issues with level (warn/error), path, message, hint.
"""

from typing import List, Literal
from dataclasses import dataclass

from .modules import FailureConfig, DispatchConfig


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "failures.trace_limit"
    message: str
    hint: str = ""

    def __str__(self) -> str:
        hint_str = f"\n   Hint: {self.hint}" if self.hint else ""
        return f"{self.level.upper()} [{self.path}] {self.message}{hint_str}"


def validate_config(
    failures: FailureConfig,
    dispatch: DispatchConfig,
) -> List[ConfigIssue]:
    """
    Validate configuration for illegal/misleading values.

    Returns:
        List of issues (warn/error level)
    """
    issues = []

    limit = failures.trace_limit
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        issues.append(ConfigIssue(
            level="error",
            path="failures.trace_limit",
            message=f"trace_limit={limit!r} must be a positive integer or null",
            hint="Remove failures.trace_limit to capture the whole stack",
        ))

    for name in ("finally_with_return", "finally_auto_run"):
        value = getattr(dispatch, name)
        if not isinstance(value, bool):
            issues.append(ConfigIssue(
                level="error",
                path=f"dispatch.{name}",
                message=f"{name}={value!r} must be a boolean",
            ))

    # auto-run with a returning finally makes every finally_() call a one-shot run
    if dispatch.finally_auto_run is True and dispatch.finally_with_return is True:
        issues.append(ConfigIssue(
            level="warn",
            path="dispatch.finally_with_return",
            message="finally_() will run immediately and return the finally handler's value",
            hint="Pass auto_run=False to finally_() when building reusable controllers",
        ))

    return issues


__all__ = [
    "ConfigIssue",
    "validate_config",
]
