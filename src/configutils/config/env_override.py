"""Environment variable overrides for dataclass targets.

Every scalar field reachable from the target gets a variable name derived
from its path: upper-cased field names (or the ``env`` metadata segment)
joined with underscores, behind an optional ``PREFIX_``.

    @dataclass
    class Section:
        sectionkey: str = ""

    @dataclass
    class Config:
        pi: float = 0.0
        section: Optional[Section] = None

    # pi                 -> PI             (MYAPP_PI with prefix "MYAPP")
    # section.sectionkey -> SECTION_SECTIONKEY

Values found through the lookup overwrite whatever the documents set.
List, dict and untyped fields are not addressable.
"""

from functools import partial
from typing import Any, Callable, Dict, List, Optional

from configutils.config.env_loader import EnvGetter, environ_getter
from configutils.config.fields import (
    KIND_BOOL,
    KIND_FLOAT,
    KIND_INT,
    KIND_STR,
    KIND_STRUCT,
    describe_fields,
    is_config_instance,
    new_struct,
)
from configutils.exceptions import EnvParseError

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _invalid(value: str) -> ValueError:
    return ValueError(f'parsing "{value}": invalid syntax')


def parse_bool(value: str) -> bool:
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise _invalid(value)


def _parse_number(value: str, cast: Callable[[str], Any]) -> Any:
    # Python's numeric parsers also accept padding and digit separators
    if not value or value != value.strip() or "_" in value:
        raise _invalid(value)
    try:
        return cast(value)
    except ValueError:
        raise _invalid(value) from None


_PARSERS: Dict[str, Callable[[str], Any]] = {
    KIND_STR: str,
    KIND_BOOL: parse_bool,
    KIND_INT: partial(_parse_number, cast=int),
    KIND_FLOAT: partial(_parse_number, cast=float),
}


def env_var_name(prefix: str, segment: str) -> str:
    """Join a name prefix and a field segment."""
    return f"{prefix}_{segment}" if prefix else segment


def _apply_struct(target: Any, prefix: str, getter: EnvGetter, applied: List[str]) -> None:
    for spec in describe_fields(type(target)):
        name = env_var_name(prefix, spec.env_segment)

        if spec.type.kind == KIND_STRUCT:
            current = getattr(target, spec.name)
            if isinstance(current, spec.type.struct_type):
                _apply_struct(current, name, getter, applied)
            elif current is None:
                try:
                    probe = new_struct(spec.type.struct_type)
                except TypeError:
                    # No defaults to build from: nothing to probe
                    continue
                before = len(applied)
                _apply_struct(probe, name, getter, applied)
                if len(applied) > before:
                    setattr(target, spec.name, probe)
            continue

        parser = _PARSERS.get(spec.type.kind)
        if parser is None:
            continue

        raw = getter(name)
        if raw is None:
            continue

        try:
            value = parser(raw)
        except ValueError as e:
            raise EnvParseError(name, raw, spec.type.kind, str(e)) from e

        setattr(target, spec.name, value)
        applied.append(name)


def apply_env(target: Any, prefix: str = "", getter: Optional[EnvGetter] = None) -> List[str]:
    """Overwrite fields of ``target`` from environment variables.

    Args:
        target: Dataclass instance to mutate
        prefix: Variable name prefix, joined with "_" (empty for none)
        getter: Lookup returning a value or None; defaults to the process environment

    Returns:
        Names of the variables that were applied, in field order

    Raises:
        EnvParseError: If a value cannot be converted to its field type
        TypeError: If target is not a dataclass instance
    """
    if not is_config_instance(target):
        raise TypeError(
            f"configuration target must be a dataclass instance, got {type(target).__name__}"
        )

    applied: List[str] = []
    _apply_struct(target, prefix, getter or environ_getter(), applied)
    return applied
