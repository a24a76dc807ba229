# trycore/core/kinds/builtins.py
"""
Host failure types: the interpreter's own exception classes.

They are valid catch targets without being defined in a registry.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Optional
import builtins

from .kind import Failure


def is_host_failure_type(obj: Any) -> bool:
    """
    True for exception classes that can be caught by class.

    Failure and its subclasses are excluded: failures are matched by kind.
    """
    return (
        isinstance(obj, type)
        and issubclass(obj, Exception)
        and not issubclass(obj, Failure)
    )


def builtin_failure_type(name: str) -> Optional[type]:
    """Built-in exception class named `name`, or None."""
    obj = getattr(builtins, name, None)
    if is_host_failure_type(obj):
        return obj
    return None


BUILTIN_FAILURE_NAMES: FrozenSet[str] = frozenset(
    name for name in dir(builtins) if builtin_failure_type(name) is not None
)


__all__ = [
    "is_host_failure_type",
    "builtin_failure_type",
    "BUILTIN_FAILURE_NAMES",
]
