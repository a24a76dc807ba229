# trycore/core/kinds/kind.py
"""
Failure kinds and the Failure exception.

A FailureKind is an explicit tag, not a Python class. Kinds form a forest
rooted at ROOT_KIND through weak parent references, and matching is done on
kind identity, never on isinstance().
"""

from __future__ import annotations

from typing import Any, List, Optional
import traceback
import uuid
import weakref

from ..errors import TryCoreError


class FailureKind:
    """
    Named failure classification.

    Calling a kind builds a Failure of that kind:
        >>> [NotFound] = define("NotFound")
        >>> raise NotFound("no such user")
    """

    __slots__ = ("name", "identity", "_parent", "__weakref__")

    def __init__(self, name: str, parent: Optional["FailureKind"] = None) -> None:
        self.name = name
        self.identity = uuid.uuid4().hex
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> Optional["FailureKind"]:
        if self._parent is None:
            return None
        return self._parent()

    def ancestors(self) -> List["FailureKind"]:
        """Parents from nearest to the root."""
        chain = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain

    def is_subkind_of(self, other: "FailureKind") -> bool:
        """True if other is this kind or one of its ancestors."""
        return other is self or any(a is other for a in self.ancestors())

    def __call__(self, message: str = "") -> "Failure":
        return Failure(message, kind=self)

    def __repr__(self) -> str:
        return f"<FailureKind {self.name}>"


ROOT_KIND = FailureKind("BaseFailure")


def _capture_trace() -> str:
    # local import: config pulls in yaml and the loader lazily
    from trycore.config.loader import get_config_or_default

    frames = [f for f in traceback.extract_stack() if f.filename != __file__]
    limit = get_config_or_default().failures.trace_limit
    if limit is not None:
        frames = frames[-limit:]
    return "".join(traceback.format_list(frames))


class Failure(Exception):
    """
    A raised value of some FailureKind.

    Attributes:
        message: Human readable message ("" by default)
        trace: Stack captured when the failure was constructed
    """

    def __init__(self, message: str = "", *, kind: Optional[FailureKind] = None) -> None:
        if kind is None:
            kind = ROOT_KIND
        if not isinstance(kind, FailureKind):
            raise TryCoreError.invalid_failure_kind(kind)
        super().__init__(message)
        self.message = message
        self._kind = kind
        self.trace = _capture_trace()

    @property
    def kind(self) -> FailureKind:
        return self._kind

    @property
    def name(self) -> str:
        return self._kind.name

    def __str__(self) -> str:
        if self.message:
            return f"{self.name}: {self.message}"
        return self.name

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"


def kind_of(failure: BaseException) -> Any:
    """
    Canonical kind token of a raised value.

    Failure instances report their FailureKind; any other exception reports
    its own class (its host failure type).
    """
    if isinstance(failure, Failure):
        return failure.kind
    return type(failure)


__all__ = [
    "FailureKind",
    "Failure",
    "ROOT_KIND",
    "kind_of",
]
