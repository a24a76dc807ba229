# trycore/config/modules/failures.py
"""
Failures Section Configuration

Configuration for Failure construction.
"""

from dataclasses import dataclass
from typing import Optional

from .base import SectionConfig


@dataclass(frozen=True)
class FailureConfig(SectionConfig):
    """
    Failure configuration.

    trace_limit: Maximum number of stack frames captured into Failure.trace
                 (None = the whole stack)
    """

    trace_limit: Optional[int] = None

    @classmethod
    def default(cls) -> "FailureConfig":
        """Default failure configuration"""
        return cls(trace_limit=None)
