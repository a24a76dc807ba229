# trycore/config/__init__.py
"""
trycore Configuration

Design principles:
1. Code has defaults, YAML is optional input (YAML can be deleted)
2. Each section has its own frozen dataclass
3. Explicit config arguments win over the active configuration
"""

from .modules import (
    SectionConfig,
    FailureConfig,
    DispatchConfig,
)

from .loader import (
    TryCoreConfig,
    load_config,
    get_config,
    get_config_or_default,
    set_config,
    reset_config,
)

from .validator import validate_config, ConfigIssue

__all__ = [
    "SectionConfig",
    "FailureConfig",
    "DispatchConfig",
    "TryCoreConfig",
    "load_config",
    "get_config",
    "get_config_or_default",
    "set_config",
    "reset_config",
    "validate_config",
    "ConfigIssue",
]
