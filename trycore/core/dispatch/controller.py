# trycore/core/dispatch/controller.py
"""
Dispatch Controller - declarative try / catch / else / finally

    >>> NotFound, Timeout = define("NotFound", "Timeout")
    >>> fetch = (
    ...     attempt(load_user)
    ...     .catch(NotFound, lambda failure: None)
    ...     .catch("Timeout", KeyError, lambda failure: retry_later(failure))
    ...     .else_(lambda: "loaded")
    ...     .finally_(close_session, auto_run=False)
    ... )
    >>> fetch.run(user_id)            # blocking
    >>> await fetch.run_async(user_id)  # suspending

Builder calls validate immediately and return the controller. Runs never
mutate the controller, so one controller may run concurrently.
"""

from __future__ import annotations

from typing import Any, Awaitable, List, Optional, Tuple
import logging

from ..errors import TryCoreError
from ..kinds import FailureKind, FailureRegistry, get_global_registry, is_host_failure_type
from .clause import CatchClause, Handler, select_clause
from .drivers import drive_blocking, drive_suspending
from .phases import DispatchPlan, run_phases
from trycore.config.loader import TryCoreConfig, get_config


logger = logging.getLogger(__name__)


class DispatchController:
    """
    Wraps a fallible operation and routes its failures to catch clauses.

    Args:
        operation: Callable guarded by the controller
        registry: Registry used to resolve catch targets (global registry if None)
        config: Configuration for finally_() defaults (active config if None)
    """

    def __init__(
        self,
        operation: Handler,
        registry: Optional[FailureRegistry] = None,
        config: Optional[TryCoreConfig] = None,
    ) -> None:
        if not callable(operation):
            raise TryCoreError.invalid_clause_arguments(operation=operation)
        self._operation = operation
        self._registry = registry if registry is not None else get_global_registry()
        self._config = config
        self._clauses: List[CatchClause] = []
        self._else_handler: Optional[Handler] = None
        self._finally_handler: Optional[Handler] = None
        self._finally_with_return = False

    # ---- builder ----

    def catch(self, *args: Any) -> "DispatchController":
        """
        Add a catch clause.

        Args:
            *args: One or more kinds (FailureKind, kind name, or exception
                class) followed by the handler, which receives the failure

        Raises:
            TryCoreError: invalid clause arguments / invalid failure kind
        """
        if len(args) < 2 or not _is_handler(args[-1]):
            raise TryCoreError.invalid_clause_arguments(args=args)
        *targets, handler = args
        kinds = frozenset(self._registry.resolve(target) for target in targets)
        self._clauses.append(CatchClause(kinds=kinds, handler=handler))
        logger.debug("Registered catch clause #%d for %s", len(self._clauses), _names(kinds))
        return self

    def else_(self, handler: Handler) -> "DispatchController":
        """Set the handler run (with no arguments) when the operation did not raise."""
        if not callable(handler):
            raise TryCoreError.invalid_clause_arguments(handler=handler)
        if self._else_handler is not None:
            logger.debug("Replacing else handler %r", self._else_handler)
        self._else_handler = handler
        return self

    def finally_(
        self,
        handler: Handler,
        *,
        with_return: Optional[bool] = None,
        auto_run: Optional[bool] = None,
    ) -> Any:
        """
        Set the handler that always runs last.

        Args:
            handler: Called with no arguments
            with_return: If True, the handler's value replaces the run's outcome
            auto_run: If True, run() immediately with no arguments and return
                its result instead of the controller

        Defaults for both options come from the `dispatch` config section.
        """
        self._set_finally(handler, with_return)
        if auto_run is None:
            auto_run = self.config.dispatch.finally_auto_run
        if auto_run:
            return self.run()
        return self

    def finally_async(self, handler: Handler, *, with_return: Optional[bool] = None) -> Awaitable[Any]:
        """Set the finally handler and return run_async() with no arguments."""
        self._set_finally(handler, with_return)
        return self.run_async()

    def _set_finally(self, handler: Handler, with_return: Optional[bool]) -> None:
        if not callable(handler):
            raise TryCoreError.invalid_clause_arguments(handler=handler)
        if with_return is None:
            with_return = self.config.dispatch.finally_with_return
        if self._finally_handler is not None:
            logger.debug("Replacing finally handler %r", self._finally_handler)
        self._finally_handler = handler
        self._finally_with_return = bool(with_return)

    # ---- execution ----

    def run(self, *args: Any, **kwargs: Any) -> Any:
        """Blocking run: every phase completes before returning."""
        return drive_blocking(run_phases(self.plan(), args, kwargs))

    async def run_async(self, *args: Any, **kwargs: Any) -> Any:
        """Suspending run: awaitable results of the operation and handlers are awaited."""
        return await drive_suspending(run_phases(self.plan(), args, kwargs))

    __call__ = run

    # ---- introspection ----

    def plan(self) -> DispatchPlan:
        """Snapshot of the current configuration."""
        return DispatchPlan(
            operation=self._operation,
            clauses=tuple(self._clauses),
            else_handler=self._else_handler,
            finally_handler=self._finally_handler,
            finally_with_return=self._finally_with_return,
        )

    def handles(self, failure: BaseException) -> Optional[CatchClause]:
        """The clause a run would select for `failure`, or None."""
        return select_clause(self._clauses, failure)

    @property
    def clauses(self) -> Tuple[CatchClause, ...]:
        return tuple(self._clauses)

    @property
    def registry(self) -> FailureRegistry:
        return self._registry

    @property
    def config(self) -> TryCoreConfig:
        return self._config if self._config is not None else get_config()

    def __repr__(self) -> str:
        name = getattr(self._operation, "__qualname__", repr(self._operation))
        return (
            f"DispatchController({name}, "
            f"clauses={len(self._clauses)}, "
            f"else={self._else_handler is not None}, "
            f"finally={self._finally_handler is not None})"
        )


def _is_handler(obj: Any) -> bool:
    # kinds and exception classes are callable but are catch targets, not handlers
    return callable(obj) and not isinstance(obj, FailureKind) and not is_host_failure_type(obj)


def _names(kinds) -> str:
    return ", ".join(sorted(getattr(k, "name", None) or getattr(k, "__name__", str(k)) for k in kinds))


def attempt(
    operation: Handler,
    *,
    registry: Optional[FailureRegistry] = None,
    config: Optional[TryCoreConfig] = None,
) -> DispatchController:
    """
    Wrap a fallible operation into a DispatchController.

    Also usable as a decorator:

        >>> @attempt
        ... def parse(text):
        ...     return int(text)
        >>> _ = parse.catch(ValueError, lambda failure: 0)
        >>> parse("x")
        0
    """
    return DispatchController(operation, registry=registry, config=config)


__all__ = [
    "DispatchController",
    "attempt",
]
