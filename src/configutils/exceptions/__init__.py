"""Common exceptions for configutils.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from configutils.exceptions import (
        ConfigUtilsError,
        ConfigLoadError,
        UnknownKeyError,
    )

    try:
        load_config("config.yaml", cfg)
    except ConfigLoadError as e:
        if isinstance(e.root_cause, UnknownKeyError):
            ...
"""

from configutils.exceptions.base import (
    ConfigLoadError,
    ConfigUtilsError,
    DecodeError,
    EnvParseError,
    ParseError,
    SourceReadError,
    TypeMismatchError,
    UnknownKeyError,
)

__all__ = [
    # Base exception
    "ConfigUtilsError",
    # Source and decode errors
    "SourceReadError",
    "DecodeError",
    "ParseError",
    "UnknownKeyError",
    "TypeMismatchError",
    # Environment override
    "EnvParseError",
    # Stage wrapper
    "ConfigLoadError",
]
