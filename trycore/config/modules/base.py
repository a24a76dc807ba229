# trycore/config/modules/base.py
"""
Base Section Configuration

Base class for all configuration sections.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class SectionConfig:
    """
    Base configuration for all sections.

    Each section maps to one top-level key of the YAML file.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        result = {}
        for key, value in self.__dict__.items():
            if not key.startswith("_"):
                if isinstance(value, SectionConfig):
                    result[key] = value.to_dict()
                elif isinstance(value, (dict, list, str, int, float, bool, type(None))):
                    result[key] = value
                else:
                    result[key] = str(value)
        return result
