"""Layered configuration loading.

A load call mutates a caller-allocated dataclass instance through these
layers, each applied once and only after the previous one succeeded:

    1. base document (file or bytes)
    2. file overrides, in the order given
    3. byte overrides, in the order given
    4. environment variables, unless disabled

Failures are wrapped in ``ConfigLoadError`` with the prefix of the failing
stage; nothing applied before the failure is rolled back.

Example:
    cfg = Config()
    load_config(
        "config.yaml",
        cfg,
        override_config_file("config.local.yaml"),
        env_prefix("MYAPP"),
    )
"""

from pathlib import Path
from typing import Any, Callable, Union

from configutils.config.decoder import decode
from configutils.config.env_override import apply_env
from configutils.config.fields import is_config_instance
from configutils.config.options import LoadConfigOptions, OptionFunc
from configutils.exceptions import ConfigLoadError, ConfigUtilsError, SourceReadError
from configutils.logger import Logger, get_logger

# Error prefixes, matched on by callers
LOAD_CONFIG_STAGE = "LoadConfig error"
LOAD_CONFIG_BYTES_STAGE = "LoadConfigBytes error"
OVERRIDE_STAGE = "override error"
ENV_STAGE = "envigo error"

_logger = get_logger()


def read_source(path: Union[str, Path]) -> bytes:
    """Read a whole configuration file.

    Raises:
        SourceReadError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(str(path), (e.strerror or str(e)).lower()) from e


def _decode_layer(data: bytes, target: Any, opts: LoadConfigOptions) -> None:
    decode(
        data,
        target,
        validate_keys=opts.yaml_validate_keys,
        patch_bytes=opts.yaml_patch_bytes,
    )


def apply_overrides(target: Any, opts: LoadConfigOptions, log: Logger) -> None:
    """Decode every override layer of ``opts`` into ``target``.

    File overrides go first, then byte overrides. The first failing layer
    stops the pipeline.

    Raises:
        ConfigLoadError: Wrapping the failing layer's error with "override error"
    """
    for path in opts.override_config_files:
        log.debug("Applying override layer", layer="file", source=path)
        try:
            _decode_layer(read_source(path), target, opts)
        except ConfigUtilsError as e:
            raise ConfigLoadError(OVERRIDE_STAGE, e) from e

    for index, data in enumerate(opts.override_config_bytes):
        log.debug("Applying override layer", layer="bytes", index=index, size=len(data))
        try:
            _decode_layer(data, target, opts)
        except ConfigUtilsError as e:
            raise ConfigLoadError(OVERRIDE_STAGE, e) from e


def apply_env_layer(target: Any, opts: LoadConfigOptions, log: Logger) -> None:
    """Apply environment variables to ``target`` unless disabled.

    Raises:
        ConfigLoadError: Wrapping an EnvParseError with "envigo error"
    """
    if not opts.env_override:
        log.debug("Environment override disabled")
        return

    try:
        applied = apply_env(target, opts.env_prefix, opts.env_getter)
    except ConfigUtilsError as e:
        raise ConfigLoadError(ENV_STAGE, e) from e

    log.debug("Applied environment overrides", env_prefix=opts.env_prefix, variables=applied)


def _load(
    stage: str,
    source: str,
    read_base: Callable[[], bytes],
    target: Any,
    option_funcs: tuple,
) -> Any:
    if not is_config_instance(target):
        raise TypeError(
            f"configuration target must be a dataclass instance, got {type(target).__name__}"
        )

    opts = LoadConfigOptions.from_options(*option_funcs)
    log = opts.logger or _logger

    try:
        log.debug("Decoding base layer", source=source)
        _decode_layer(read_base(), target, opts)
        apply_overrides(target, opts, log)
        apply_env_layer(target, opts, log)
    except ConfigUtilsError as e:
        log.debug("Configuration load failed", stage=stage, error=str(e))
        raise ConfigLoadError(stage, e) from e

    log.debug("Configuration loaded", source=source)
    return target


def load_config(path: Union[str, Path], target: Any, *option_funcs: OptionFunc) -> Any:
    """Load a configuration file and its override layers into ``target``.

    Args:
        path: Base YAML document
        target: Dataclass instance, mutated in place
        *option_funcs: Option functions, applied in order

    Returns:
        ``target``

    Raises:
        ConfigLoadError: Prefixed "LoadConfig error", wrapping the stage error
        TypeError: If target is not a dataclass instance
    """
    return _load(LOAD_CONFIG_STAGE, str(path), lambda: read_source(path), target, option_funcs)


def load_config_bytes(data: bytes, target: Any, *option_funcs: OptionFunc) -> Any:
    """Same as ``load_config`` with the base document given as bytes.

    Raises:
        ConfigLoadError: Prefixed "LoadConfigBytes error", wrapping the stage error
        TypeError: If target is not a dataclass instance
    """
    return _load(LOAD_CONFIG_BYTES_STAGE, "<bytes>", lambda: data, target, option_funcs)


def load_config_file(path: Union[str, Path], target: Any) -> Any:
    """Decode a single file into ``target``.

    No override layers, no environment, unknown keys ignored. Errors are
    raised unwrapped.
    """
    decode(read_source(path), target, validate_keys=False)
    return target
