# trycore/core/kinds/registry.py
"""
Failure Registry: named failure kinds with parent links.

The registry provides:
- Kind definition (define), idempotent per name
- Membership test for kinds it created (is_known)
- Name lookup with fallback to built-in exception classes (lookup)
- Catch-target canonicalisation (resolve)

Design principles:
- One registry instance owns its names; no cross-registry collisions
- First definition wins (later parents are ignored)
- Thread-safe (uses locks for definition)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional
import logging
import threading

from ..errors import TryCoreError
from .builtins import builtin_failure_type, is_host_failure_type
from .kind import FailureKind, ROOT_KIND


logger = logging.getLogger(__name__)


class KindNamespace(Mapping):
    """
    Read-only view of a registry's name -> FailureKind table.

    Supports attribute access: ``errors.NotFound``. Mapping methods win
    over kind names, so a kind named ``keys``, ``get``, ``items`` or
    ``values`` is only reachable by item access: ``errors["keys"]``.
    """

    __slots__ = ("_kinds",)

    def __init__(self, kinds: Dict[str, FailureKind]) -> None:
        self._kinds = kinds

    def __getitem__(self, name: str) -> FailureKind:
        return self._kinds[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __getattr__(self, name: str) -> FailureKind:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._kinds[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"KindNamespace({list(self._kinds)!r})"


class FailureRegistry:
    """
    Registry of failure kinds.

    Usage:
    ```python
    registry = FailureRegistry()
    IOFailure, = registry.define("IOFailure")
    ReadFailure, WriteFailure = registry.define("ReadFailure", "WriteFailure", IOFailure)

    registry.is_known(ReadFailure)      # True
    registry.lookup("ReadFailure")      # ReadFailure
    registry.lookup("KeyError")         # builtins.KeyError
    ```
    """

    def __init__(self) -> None:
        self._kinds: Dict[str, FailureKind] = {}
        self._known: set = set()
        self._lock = threading.Lock()
        self._errors = KindNamespace(self._kinds)

    def define(self, *names: Any, parent: Optional[FailureKind] = None) -> List[FailureKind]:
        """
        Define failure kinds.

        Args:
            *names: Kind names; a trailing non-string argument is the parent
            parent: Parent kind (keyword form); defaults to ROOT_KIND

        Returns:
            One FailureKind per requested name, in request order

        Raises:
            TryCoreError: If a name is not a non-empty string, or a new kind
                would get a parent that is not ROOT_KIND or a kind of this
                registry (repeat definitions ignore the parent)
        """
        if names and not isinstance(names[-1], str):
            if parent is not None:
                raise TryCoreError.invalid_failure_kind(names[-1], reason="parent given twice")
            parent = names[-1]
            names = names[:-1]

        if parent is None:
            parent = ROOT_KIND

        for name in names:
            if not isinstance(name, str) or not name:
                raise TryCoreError.invalid_failure_kind(name, reason="name must be a non-empty string")

        result = []
        with self._lock:
            # the parent only matters for names that are not registered yet
            needs_parent = any(name not in self._kinds for name in names)
            if needs_parent and parent is not ROOT_KIND and not self.is_known(parent):
                raise TryCoreError.invalid_failure_kind(parent, reason="unknown parent")
            for name in names:
                kind = self._kinds.get(name)
                if kind is None:
                    kind = FailureKind(name, parent)
                    self._kinds[name] = kind
                    self._known.add(kind)
                    logger.debug("Defined failure kind %s (parent=%s)", name, parent.name)
                result.append(kind)
        return result

    def is_known(self, kind: Any) -> bool:
        """True if `kind` is a FailureKind created by this registry."""
        return isinstance(kind, FailureKind) and kind in self._known

    def get(self, name: str) -> Optional[FailureKind]:
        """Registry entry for `name`, or None."""
        return self._kinds.get(name)

    def lookup(self, name: str) -> Any:
        """
        Resolve a name to a kind.

        Registry entries win over built-in exception classes of the same name.

        Returns:
            FailureKind, built-in exception class, or None
        """
        kind = self._kinds.get(name)
        if kind is not None:
            return kind
        return builtin_failure_type(name)

    def resolve(self, target: Any) -> Any:
        """
        Canonical kind token for a catch target.

        Args:
            target: Kind name, FailureKind of this registry, or exception class

        Raises:
            TryCoreError: If the target is unknown
        """
        if isinstance(target, str):
            resolved = self.lookup(target)
        elif self.is_known(target) or is_host_failure_type(target):
            resolved = target
        else:
            resolved = None

        if resolved is None:
            raise TryCoreError.invalid_failure_kind(target)
        return resolved

    def children(self, kind: FailureKind) -> List[FailureKind]:
        """Kinds whose direct parent is `kind`, in definition order."""
        return [k for k in self._kinds.values() if k.parent is kind]

    @property
    def errors(self) -> KindNamespace:
        """Read-only name -> FailureKind mapping."""
        return self._errors

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._kinds))

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"FailureRegistry(kinds={list(self._kinds)!r})"


# Global registry instance
_global_registry: Optional[FailureRegistry] = None
_global_registry_lock = threading.Lock()


def get_global_registry() -> FailureRegistry:
    """
    Get the global failure registry.

    The global registry is lazily initialized on first access.
    """
    global _global_registry

    if _global_registry is None:
        with _global_registry_lock:
            if _global_registry is None:
                _global_registry = FailureRegistry()

    return _global_registry


def set_global_registry(registry: FailureRegistry) -> None:
    """
    Set the global failure registry.

    Args:
        registry: FailureRegistry instance to use as global registry
    """
    global _global_registry
    with _global_registry_lock:
        _global_registry = registry


def reset_global_registry() -> None:
    """
    Reset the global registry.

    Useful for testing. The next access creates a new empty registry.
    """
    global _global_registry
    with _global_registry_lock:
        _global_registry = None


def define(*names: Any, parent: Optional[FailureKind] = None) -> List[FailureKind]:
    """define() on the global registry."""
    return get_global_registry().define(*names, parent=parent)


class _GlobalErrors(Mapping):
    """Follows whichever registry is global at access time."""

    def __getitem__(self, name: str) -> FailureKind:
        return get_global_registry().errors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(get_global_registry().errors)

    def __len__(self) -> int:
        return len(get_global_registry().errors)

    def __getattr__(self, name: str) -> FailureKind:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(get_global_registry().errors, name)

    def __repr__(self) -> str:
        return repr(get_global_registry().errors)


errors = _GlobalErrors()


__all__ = [
    "FailureRegistry",
    "KindNamespace",
    "get_global_registry",
    "set_global_registry",
    "reset_global_registry",
    "define",
    "errors",
]
