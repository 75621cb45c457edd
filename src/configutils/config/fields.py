"""Field description of dataclass configuration targets.

The decoder and the environment override never inspect dataclasses
directly: both walk a target through ``describe_fields``, which lists each
field's attribute name, YAML key, environment segment and semantic type.

Field metadata keys:
    yaml: YAML key to use instead of the attribute name
    env:  environment segment to use instead of the upper-cased name

Example:
    @dataclass
    class Server:
        host: str = "localhost"
        read_timeout: float = field(default=5.0, metadata={"yaml": "read-timeout"})
"""

import dataclasses
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Tuple, Union

KIND_STR = "str"
KIND_BOOL = "bool"
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_STRUCT = "struct"
KIND_LIST = "list"
KIND_DICT = "dict"
KIND_ANY = "any"

SCALAR_KINDS = frozenset({KIND_STR, KIND_BOOL, KIND_INT, KIND_FLOAT})

_SCALAR_TYPES = {str: KIND_STR, bool: KIND_BOOL, int: KIND_INT, float: KIND_FLOAT}


@dataclass(frozen=True)
class TypeSpec:
    """Semantic type of a field.

    Attributes:
        kind: One of the KIND_* constants
        optional: Whether None is an accepted value
        struct_type: Dataclass type for KIND_STRUCT
        item: Element spec for KIND_LIST, value spec for KIND_DICT
    """

    kind: str
    optional: bool = False
    struct_type: Optional[type] = None
    item: Optional["TypeSpec"] = None

    @property
    def name(self) -> str:
        if self.kind == KIND_STRUCT and self.struct_type is not None:
            return self.struct_type.__name__
        return self.kind


@dataclass(frozen=True)
class FieldSpec:
    """One decodable field of a dataclass."""

    name: str
    key: str
    env_segment: str
    type: TypeSpec


def is_config_instance(obj: Any) -> bool:
    """True for dataclass instances (not dataclass types)."""
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def resolve_type(tp: Any) -> TypeSpec:
    """Map a type annotation to its TypeSpec.

    Raises:
        TypeError: If the annotation has no supported semantic type
    """
    if tp is Any or tp is object:
        return TypeSpec(KIND_ANY, optional=True)

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        if len(members) == 1:
            return dataclasses.replace(resolve_type(members[0]), optional=True)
        # Unions of several types are passed through untouched
        return TypeSpec(KIND_ANY, optional=len(members) != len(args))

    if tp in _SCALAR_TYPES:
        return TypeSpec(_SCALAR_TYPES[tp])

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return TypeSpec(KIND_STRUCT, struct_type=tp)

    if tp is list or origin is list:
        item = resolve_type(args[0]) if args else TypeSpec(KIND_ANY, optional=True)
        return TypeSpec(KIND_LIST, item=item)

    if tp is dict or origin is dict:
        value = resolve_type(args[1]) if len(args) == 2 else TypeSpec(KIND_ANY, optional=True)
        return TypeSpec(KIND_DICT, item=value)

    raise TypeError(f"unsupported configuration field type: {tp!r}")


@lru_cache(maxsize=None)
def describe_fields(cls: type) -> Tuple[FieldSpec, ...]:
    """List the decodable fields of a dataclass type, in declaration order.

    Private fields (leading underscore) and ``init=False`` fields are skipped.
    """
    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        # Unresolvable forward references: fall back to raw annotations
        hints = {f.name: f.type for f in dataclasses.fields(cls)}

    specs = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_") or not f.init:
            continue
        specs.append(
            FieldSpec(
                name=f.name,
                key=f.metadata.get("yaml", f.name),
                env_segment=f.metadata.get("env", f.name.upper()),
                type=resolve_type(hints[f.name]),
            )
        )
    return tuple(specs)


def new_struct(cls: type) -> Any:
    """Allocate a nested configuration dataclass with its defaults."""
    try:
        return cls()
    except TypeError as e:
        raise TypeError(
            f"cannot allocate {cls.__name__}: nested configuration dataclasses "
            f"need a default for every field"
        ) from e


def zero_value(spec: TypeSpec) -> Any:
    """Value a field takes when a document sets it to null."""
    if spec.optional:
        return None
    if spec.kind == KIND_STR:
        return ""
    if spec.kind == KIND_BOOL:
        return False
    if spec.kind == KIND_INT:
        return 0
    if spec.kind == KIND_FLOAT:
        return 0.0
    if spec.kind == KIND_STRUCT:
        return new_struct(spec.struct_type)
    if spec.kind == KIND_LIST:
        return []
    if spec.kind == KIND_DICT:
        return {}
    return None
