# trycore/core/dispatch/phases.py
"""
Phase state machine: TRY -> (CATCH | ELSE) -> FINALLY -> (RESULT | PROPAGATE)

run_phases() is a generator. It yields one PhaseStep per handler call and
expects the driver to answer with send(value) when the call returned, or
throw(exc) when it raised. It finishes by returning an Outcome; the driver
unwraps it into a result or a propagated failure.

Both drivers interpret the same steps, so blocking and suspending runs
cannot diverge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generator, Optional, Tuple

from .clause import CatchClause, Handler, select_clause


class Phase(str, Enum):
    TRY = "try"
    CATCH = "catch"
    ELSE = "else"
    FINALLY = "finally"


@dataclass(frozen=True)
class PhaseStep:
    """One handler call requested by the state machine."""
    phase: Phase
    fn: Handler
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def invoke(self) -> Any:
        return self.fn(*self.args, **self.kwargs)


@dataclass(frozen=True)
class Outcome:
    """Result of one run: a value, or the failure to propagate."""
    value: Any = None
    failure: Optional[BaseException] = None

    def unwrap(self) -> Any:
        if self.failure is not None:
            raise self.failure
        return self.value


@dataclass(frozen=True)
class DispatchPlan:
    """
    Snapshot of a controller's configuration, taken when a run starts.
    """
    operation: Handler
    clauses: Tuple[CatchClause, ...] = ()
    else_handler: Optional[Handler] = None
    finally_handler: Optional[Handler] = None
    finally_with_return: bool = False


PhaseGenerator = Generator[PhaseStep, Any, Outcome]


def run_phases(plan: DispatchPlan, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> PhaseGenerator:
    pending: Any = None
    failure: Optional[BaseException] = None

    # TRY
    try:
        value = yield PhaseStep(Phase.TRY, plan.operation, args, kwargs)
    except BaseException as exc:
        # CATCH
        clause = select_clause(plan.clauses, exc)
        if clause is None:
            failure = exc
        else:
            try:
                pending = yield PhaseStep(Phase.CATCH, clause.handler, (exc,))
            except BaseException as handler_exc:
                failure = handler_exc
    else:
        # ELSE: a raise here is never matched against this plan's clauses
        pending = value
        if plan.else_handler is not None:
            try:
                pending = yield PhaseStep(Phase.ELSE, plan.else_handler)
            except BaseException as else_exc:
                failure = else_exc

    # FINALLY
    if plan.finally_handler is not None:
        try:
            replacement = yield PhaseStep(Phase.FINALLY, plan.finally_handler)
        except BaseException as finally_exc:
            return Outcome(failure=finally_exc)
        # interrupts and cancellation are never overridden
        if plan.finally_with_return and (failure is None or isinstance(failure, Exception)):
            return Outcome(value=replacement)

    return Outcome(value=pending, failure=failure)


__all__ = [
    "Phase",
    "PhaseStep",
    "Outcome",
    "DispatchPlan",
    "PhaseGenerator",
    "run_phases",
]
