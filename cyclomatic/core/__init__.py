"""
Configuration and error types.
"""

from cyclomatic.core.config import Config
from cyclomatic.core.errors import ConfigError, CyclomaticError, NameResolutionError, ParseFailure

__all__ = [
    "Config",
    "ConfigError",
    "CyclomaticError",
    "NameResolutionError",
    "ParseFailure",
]
