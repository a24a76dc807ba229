# trycore/__init__.py
"""
trycore - Typed, declarative try / catch / else / finally

User-facing API:
- define(): define named failure kinds (optionally under a parent kind)
- errors: name -> FailureKind view of the global registry
- attempt(): wrap a fallible operation into a DispatchController
- Failure: base exception carrying a kind, a message and a trace

Basic usage:

Define kinds and raise them:
    >>> from trycore import attempt, define
    >>> NotFound, Forbidden = define("NotFound", "Forbidden")
    >>> raise NotFound("user 42")

Dispatch on the kind of failure:
    >>> lookup = (
    ...     attempt(fetch_user)
    ...     .catch(NotFound, lambda failure: None)
    ...     .catch("Forbidden", PermissionError, lambda failure: deny(failure))
    ...     .else_(lambda: "ok")
    ... )
    >>> lookup.run(42)

Suspending (async) operations and handlers:
    >>> await lookup.run_async(42)

Hierarchies:
    >>> IOFailure, = define("IOFailure")
    >>> ReadFailure, WriteFailure = define("ReadFailure", "WriteFailure", IOFailure)
    >>> ReadFailure.is_subkind_of(IOFailure)
    True

Catch clauses match the exact kind only; a clause for IOFailure does not
catch ReadFailure.
"""

__version__ = "0.1.0"

from .core.errors import TryCoreError
from .core.kinds import (
    FailureKind,
    Failure,
    ROOT_KIND,
    kind_of,
    FailureRegistry,
    get_global_registry,
    set_global_registry,
    reset_global_registry,
    define,
    errors,
)
from .core.dispatch import (
    CatchClause,
    DispatchController,
    Phase,
    attempt,
)
from .config import (
    TryCoreConfig,
    load_config,
    get_config,
    set_config,
    reset_config,
)

__all__ = [
    # Version
    "__version__",

    # User-facing API
    "attempt",
    "define",
    "errors",
    "Failure",

    # Kinds and registry
    "FailureKind",
    "ROOT_KIND",
    "kind_of",
    "FailureRegistry",
    "get_global_registry",
    "set_global_registry",
    "reset_global_registry",

    # Dispatch
    "DispatchController",
    "CatchClause",
    "Phase",

    # Errors
    "TryCoreError",

    # Config
    "TryCoreConfig",
    "load_config",
    "get_config",
    "set_config",
    "reset_config",
]
