"""configutils - layered configuration loading.

This package provides:
- config: YAML documents, overrides and environment variables into dataclasses
- exceptions: Exception classes with structured error info
- logger: Logging interface with structured and plain implementations
"""

__version__ = "1.0.0"

# Re-export commonly used items for convenience
from configutils.config import (
    LoadConfigOptions,
    disable_env_override,
    env_file,
    env_getter,
    env_prefix,
    load_config,
    load_config_bytes,
    load_config_file,
    override_config_bytes,
    override_config_file,
    with_logger,
    yaml_keep_root_keys,
    yaml_patch_bytes,
    yaml_remove_root_keys,
    yaml_validate_keys,
)
from configutils.exceptions import (
    ConfigLoadError,
    ConfigUtilsError,
    DecodeError,
    EnvParseError,
    ParseError,
    SourceReadError,
    TypeMismatchError,
    UnknownKeyError,
)
from configutils.logger import DefaultLogger, Logger, StructuredLogger, get_logger

__all__ = [
    "__version__",
    # Loading
    "load_config",
    "load_config_bytes",
    "load_config_file",
    "LoadConfigOptions",
    # Options
    "disable_env_override",
    "env_prefix",
    "env_getter",
    "env_file",
    "override_config_file",
    "override_config_bytes",
    "yaml_validate_keys",
    "yaml_patch_bytes",
    "with_logger",
    # Root key filter
    "yaml_remove_root_keys",
    "yaml_keep_root_keys",
    # Exceptions
    "ConfigUtilsError",
    "ConfigLoadError",
    "SourceReadError",
    "DecodeError",
    "ParseError",
    "UnknownKeyError",
    "TypeMismatchError",
    "EnvParseError",
    # Logger
    "Logger",
    "DefaultLogger",
    "StructuredLogger",
    "get_logger",
]
