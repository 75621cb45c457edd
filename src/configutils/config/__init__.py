"""Layered configuration loading for dataclass targets.

Loads a YAML document into a caller-allocated dataclass instance, merges
override documents on top of it and finally applies environment variables.

Example:
    from dataclasses import dataclass
    from configutils.config import load_config, env_prefix, override_config_file

    @dataclass
    class Config:
        key: str = ""
        do: bool = False
        pi: float = 0.0

    cfg = Config()
    load_config("config.yaml", cfg, override_config_file("local.yaml"), env_prefix("MYAPP"))
"""

from configutils.config.decoder import PatchBytes, decode
from configutils.config.env_loader import EnvGetter, EnvLoader, environ_getter, mapping_getter
from configutils.config.env_override import apply_env
from configutils.config.fields import FieldSpec, TypeSpec, describe_fields
from configutils.config.loader import (
    ENV_STAGE,
    LOAD_CONFIG_BYTES_STAGE,
    LOAD_CONFIG_STAGE,
    OVERRIDE_STAGE,
    apply_env_layer,
    apply_overrides,
    load_config,
    load_config_bytes,
    load_config_file,
    read_source,
)
from configutils.config.options import (
    LoadConfigOptions,
    OptionFunc,
    disable_env_override,
    env_file,
    env_getter,
    env_prefix,
    override_config_bytes,
    override_config_file,
    with_logger,
    yaml_patch_bytes,
    yaml_validate_keys,
)
from configutils.config.yaml_filter import (
    filter_root_keys,
    yaml_keep_root_keys,
    yaml_remove_root_keys,
)

__all__ = [
    # Loader facade
    "load_config",
    "load_config_bytes",
    "load_config_file",
    "apply_overrides",
    "apply_env_layer",
    "read_source",
    # Stage prefixes
    "LOAD_CONFIG_STAGE",
    "LOAD_CONFIG_BYTES_STAGE",
    "OVERRIDE_STAGE",
    "ENV_STAGE",
    # Options
    "LoadConfigOptions",
    "OptionFunc",
    "disable_env_override",
    "env_prefix",
    "env_getter",
    "env_file",
    "override_config_file",
    "override_config_bytes",
    "yaml_validate_keys",
    "yaml_patch_bytes",
    "with_logger",
    # Decoder
    "decode",
    "PatchBytes",
    # Field description
    "describe_fields",
    "FieldSpec",
    "TypeSpec",
    # Environment
    "apply_env",
    "EnvGetter",
    "EnvLoader",
    "environ_getter",
    "mapping_getter",
    # Root key filter
    "filter_root_keys",
    "yaml_remove_root_keys",
    "yaml_keep_root_keys",
]
