# trycore/core/kinds/__init__.py
"""
Failure kinds for trycore.

No side effects on import.
"""

from .kind import FailureKind, Failure, ROOT_KIND, kind_of
from .builtins import is_host_failure_type, builtin_failure_type, BUILTIN_FAILURE_NAMES
from .registry import (
    FailureRegistry,
    KindNamespace,
    get_global_registry,
    set_global_registry,
    reset_global_registry,
    define,
    errors,
)

__all__ = [
    "FailureKind",
    "Failure",
    "ROOT_KIND",
    "kind_of",
    "is_host_failure_type",
    "builtin_failure_type",
    "BUILTIN_FAILURE_NAMES",
    "FailureRegistry",
    "KindNamespace",
    "get_global_registry",
    "set_global_registry",
    "reset_global_registry",
    "define",
    "errors",
]
