# trycore/core/errors/__init__.py
"""
Configuration error types for trycore.

This package defines the components responsible for:
- Reporting misconfigured catch clauses
- Reporting unknown failure kinds
- Categorizing those errors by code

No side effects on import.
"""

from . import codes
from .exceptions import TryCoreError

__all__ = [
    "codes",
    "TryCoreError",
]
