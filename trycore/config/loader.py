# trycore/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- System works without YAML
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Dict, Any
import logging
import threading

import yaml

from .modules import FailureConfig, DispatchConfig
from .validator import validate_config, ConfigIssue
from trycore.core.errors import TryCoreError


logger = logging.getLogger(__name__)


class TryCoreConfig:
    """
    Unified trycore configuration.

    All fields have code defaults - YAML is optional.
    """

    def __init__(
        self,
        failures: Optional[FailureConfig] = None,
        dispatch: Optional[DispatchConfig] = None,
    ):
        """Initialize with code defaults"""
        self.failures = failures or FailureConfig.default()
        self.dispatch = dispatch or DispatchConfig.default()

    @classmethod
    def default(cls) -> "TryCoreConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "TryCoreConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML file. If None, tries ~/.trycore/config.yml

        Returns:
            TryCoreConfig instance (always has code defaults as fallback)
        """
        config = cls.default()

        yaml_data = _load_yaml(config_path)
        if not yaml_data:
            return config

        if "failures" in yaml_data:
            config.failures = _merge_config(config.failures, yaml_data["failures"], FailureConfig)

        if "dispatch" in yaml_data:
            config.dispatch = _merge_config(config.dispatch, yaml_data["dispatch"], DispatchConfig)

        return config

    def validate(self) -> list[ConfigIssue]:
        """
        Validate configuration for illegal/misleading values.

        Returns:
            List of issues (warn/error level)
        """
        return validate_config(self.failures, self.dispatch)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "failures": self.failures.to_dict(),
            "dispatch": self.dispatch.to_dict(),
        }

    def __repr__(self) -> str:
        return f"TryCoreConfig({self.to_dict()!r})"


def _load_yaml(config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found (not an error)"""
    if config_path:
        paths = [Path(config_path)]
    else:
        paths = [Path.home() / ".trycore" / "config.yml"]

    for path in paths:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Ignoring unreadable config file %s: %s", path, e)
                return None
            if data is not None and not isinstance(data, dict):
                logger.warning("Ignoring config file %s: top level is not a mapping", path)
                return None
            return data

    return None


def _merge_config(default_instance, yaml_data: Any, config_class):
    """Merge YAML data into default config instance"""
    if not isinstance(yaml_data, dict):
        return default_instance
    default_dict = default_instance.to_dict()
    merged = {**default_dict, **yaml_data}
    return config_class(**{k: v for k, v in merged.items() if k in config_class.__dataclass_fields__})


def load_config(config_path: Optional[Path] = None) -> TryCoreConfig:
    """
    Load trycore configuration.

    Args:
        config_path: Optional path to YAML file

    Returns:
        TryCoreConfig instance (always has code defaults)

    Raises:
        TryCoreError: If the file sets an illegal value (error-level issue)

    Note:
        - If YAML is not found or unreadable, returns code defaults
        - Warn-level issues are logged, not raised
    """
    config = TryCoreConfig.from_yaml(config_path)
    for issue in config.validate():
        if issue.level == "error":
            raise TryCoreError.invalid_config(issue.message, path=issue.path)
        logger.warning("%s", issue)
    return config


# Active configuration
_active_config: Optional[TryCoreConfig] = None
_active_config_lock = threading.Lock()


def get_config() -> TryCoreConfig:
    """
    Get the active configuration.

    Lazily loaded from ~/.trycore/config.yml (or code defaults) on first access.
    """
    global _active_config

    if _active_config is None:
        with _active_config_lock:
            if _active_config is None:
                _active_config = load_config()

    return _active_config


def get_config_or_default() -> TryCoreConfig:
    """
    Like get_config(), but never raises.

    An illegal config file is logged once and replaced by code defaults
    for the rest of the process. Used where a config error must not mask
    the caller's own exception (Failure construction).
    """
    global _active_config

    try:
        return get_config()
    except TryCoreError as e:
        with _active_config_lock:
            if _active_config is None:
                logger.warning("Using default configuration: %s", e)
                _active_config = TryCoreConfig.default()
            return _active_config


def set_config(config: TryCoreConfig) -> None:
    """
    Set the active configuration.

    Args:
        config: TryCoreConfig instance to use process-wide
    """
    global _active_config
    with _active_config_lock:
        _active_config = config


def reset_config() -> None:
    """
    Reset the active configuration.

    Useful for testing. The next get_config() reloads it.
    """
    global _active_config
    with _active_config_lock:
        _active_config = None


__all__ = [
    "TryCoreConfig",
    "load_config",
    "get_config",
    "get_config_or_default",
    "set_config",
    "reset_config",
]
