# trycore/config/modules/__init__.py
"""
Section configurations.
"""

from .base import SectionConfig
from .failures import FailureConfig
from .dispatch import DispatchConfig

__all__ = [
    "SectionConfig",
    "FailureConfig",
    "DispatchConfig",
]
