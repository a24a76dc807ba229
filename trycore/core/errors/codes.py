# trycore/core/errors/codes.py
from __future__ import annotations

from typing import Final


# ---- canonical error codes (stable public contract) ----
# generic
UNKNOWN: Final[str] = "UNKNOWN"

# builder / registry configuration
INVALID_CLAUSE_ARGUMENTS: Final[str] = "INVALID_CLAUSE_ARGUMENTS"
INVALID_FAILURE_KIND: Final[str] = "INVALID_FAILURE_KIND"

# config file
INVALID_CONFIG: Final[str] = "INVALID_CONFIG"


# ---- semantic groups (internal helpers) ----

# Raised at builder-call time, never deferred to a run.
CONFIGURATION_CODES: Final[set[str]] = {
    INVALID_CLAUSE_ARGUMENTS,
    INVALID_FAILURE_KIND,
    INVALID_CONFIG,
}
