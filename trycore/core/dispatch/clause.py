# trycore/core/dispatch/clause.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Sequence

from ..kinds import kind_of


Handler = Callable[..., Any]


@dataclass(frozen=True)
class CatchClause:
    """
    A set of canonical kind tokens and the handler that receives matching failures.
    """
    kinds: FrozenSet[Any]
    handler: Handler

    def covers(self, failure: BaseException) -> bool:
        # exact kind only, ancestors are not consulted
        return isinstance(failure, Exception) and kind_of(failure) in self.kinds


def select_clause(clauses: Sequence[CatchClause], failure: BaseException) -> Optional[CatchClause]:
    """First clause, in registration order, that covers `failure`."""
    for clause in clauses:
        if clause.covers(failure):
            return clause
    return None


__all__ = [
    "Handler",
    "CatchClause",
    "select_clause",
]
