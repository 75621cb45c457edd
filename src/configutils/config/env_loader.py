"""Environment lookup sources for the environment override.

A lookup (``EnvGetter``) maps a variable name to its value, or None when the
variable is not set. The default lookup reads the live process environment;
``EnvLoader`` adds .env file support with deterministic precedence:
1) .env file (if provided and exists)
2) OS environment variables
3) Explicit overrides (highest precedence)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Mapping, MutableMapping, Optional

from dotenv import dotenv_values

EnvGetter = Callable[[str], Optional[str]]


def environ_getter() -> EnvGetter:
    """Lookup over the live process environment."""
    return os.environ.get


def mapping_getter(values: Mapping[str, str]) -> EnvGetter:
    """Lookup over a snapshot of ``values``."""
    return dict(values).get


class EnvLoader:
    """Load environment-style key/value pairs with .env support."""

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
        """Load environment data with deterministic precedence.

        Precedence (low -> high): .env file, OS env vars, overrides
        """
        data: MutableMapping[str, str] = {}

        env_path = self.env_file or Path.cwd() / ".env"
        if env_path.exists():
            file_values = dotenv_values(env_path)
            data.update({k: v for k, v in file_values.items() if v is not None})

        data.update(os.environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data

    def getter(self, overrides: Optional[Mapping[str, str]] = None) -> EnvGetter:
        """Snapshot lookup over ``load(overrides)``."""
        return mapping_getter(self.load(overrides))


__all__ = ["EnvGetter", "EnvLoader", "environ_getter", "mapping_getter"]
