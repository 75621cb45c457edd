"""Load options and their option functions.

A load call takes any number of option functions; each one mutates a
``LoadConfigOptions`` built from the defaults, in call order:

    load_config(
        "config.yaml",
        cfg,
        env_prefix("MYAPP"),
        override_config_file("local.yaml"),
        yaml_validate_keys(False),
    )
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from configutils.config.decoder import PatchBytes
from configutils.config.env_loader import EnvGetter, EnvLoader, environ_getter
from configutils.logger import Logger

OptionFunc = Callable[["LoadConfigOptions"], None]


@dataclass
class LoadConfigOptions:
    """Options resolved once per load call.

    Attributes:
        env_override: Apply environment variables after the documents
        env_prefix: Prefix of derived variable names (empty for none)
        env_getter: Variable lookup returning a value or None
        override_config_files: File overrides, applied in order
        override_config_bytes: Byte overrides, applied in order after the files
        yaml_validate_keys: Reject document keys without a matching field
        yaml_patch_bytes: Transform run on every document before parsing
        logger: Logger for stage progress; the module logger when None
    """

    env_override: bool = True
    env_prefix: str = ""
    env_getter: EnvGetter = field(default_factory=environ_getter)
    override_config_files: List[str] = field(default_factory=list)
    override_config_bytes: List[bytes] = field(default_factory=list)
    yaml_validate_keys: bool = True
    yaml_patch_bytes: Optional[PatchBytes] = None
    logger: Optional[Logger] = None

    @classmethod
    def from_options(cls, *option_funcs: OptionFunc) -> "LoadConfigOptions":
        """Apply option functions to the defaults, in order."""
        opts = cls()
        for option_func in option_funcs:
            option_func(opts)
        return opts


def disable_env_override() -> OptionFunc:
    def apply(opts: LoadConfigOptions) -> None:
        opts.env_override = False

    return apply


def env_prefix(prefix: str) -> OptionFunc:
    def apply(opts: LoadConfigOptions) -> None:
        opts.env_prefix = prefix

    return apply


def env_getter(getter: EnvGetter) -> OptionFunc:
    """Replace the process environment lookup."""

    def apply(opts: LoadConfigOptions) -> None:
        opts.env_getter = getter

    return apply


def env_file(path: Union[str, Path]) -> OptionFunc:
    """Look variables up in a .env file, under the process environment.

    The file is read when the option is applied; a missing file contributes
    nothing.
    """

    def apply(opts: LoadConfigOptions) -> None:
        opts.env_getter = EnvLoader(path).getter()

    return apply


def override_config_file(path: Union[str, Path]) -> OptionFunc:
    """Append a file override layer. An empty path is ignored."""

    def apply(opts: LoadConfigOptions) -> None:
        if path:
            opts.override_config_files.append(str(path))

    return apply


def override_config_bytes(data: bytes) -> OptionFunc:
    """Append a byte override layer."""

    def apply(opts: LoadConfigOptions) -> None:
        opts.override_config_bytes.append(data)

    return apply


def yaml_validate_keys(validate: bool) -> OptionFunc:
    def apply(opts: LoadConfigOptions) -> None:
        opts.yaml_validate_keys = validate

    return apply


def yaml_patch_bytes(patch: PatchBytes) -> OptionFunc:
    """Install a transform run on the raw bytes of every document."""

    def apply(opts: LoadConfigOptions) -> None:
        opts.yaml_patch_bytes = patch

    return apply


def with_logger(logger: Logger) -> OptionFunc:
    def apply(opts: LoadConfigOptions) -> None:
        opts.logger = logger

    return apply
