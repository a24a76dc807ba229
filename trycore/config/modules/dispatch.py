# trycore/config/modules/dispatch.py
"""
Dispatch Section Configuration

Defaults for DispatchController.finally_() options.
"""

from dataclasses import dataclass

from .base import SectionConfig


@dataclass(frozen=True)
class DispatchConfig(SectionConfig):
    """
    Dispatch configuration.

    finally_with_return: Default for finally_(with_return=...)
    finally_auto_run: Default for finally_(auto_run=...)
    """

    finally_with_return: bool = False
    finally_auto_run: bool = True

    @classmethod
    def default(cls) -> "DispatchConfig":
        """Default dispatch configuration"""
        return cls(finally_with_return=False, finally_auto_run=True)
