"""YAML document decoder for dataclass targets.

Decodes a YAML buffer directly into an existing dataclass instance. Only
the fields a document specifies are assigned; everything else keeps the
value a previous layer left (merge-by-presence).

The buffer is composed into a node graph with PyYAML's SafeLoader rather
than loaded into plain Python objects, so scalar source text, tags and line
numbers stay available for conversion and error reporting. Plain exponent
numbers such as 1e5 resolve as floats, and a mapping that repeats a key is
rejected.

Conversion rules:
    str    any non-null scalar, as written in the document
    bool   YAML booleans only
    int    YAML integers, and floats with an integral value
    float  YAML integers and floats
    struct mappings, decoded into the existing nested instance
    list   sequences, replacing the previous list
    dict   mappings, merged by key into the existing dict
    null   None for optional fields, the type's zero value otherwise
"""

import re
from typing import Any, Callable, List, Optional, Tuple

import yaml
import yaml.composer
from yaml.constructor import SafeConstructor
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from configutils.config.fields import (
    KIND_ANY,
    KIND_BOOL,
    KIND_DICT,
    KIND_FLOAT,
    KIND_INT,
    KIND_LIST,
    KIND_STR,
    KIND_STRUCT,
    TypeSpec,
    describe_fields,
    is_config_instance,
    new_struct,
    zero_value,
)
from configutils.exceptions import DecodeError, ParseError, TypeMismatchError, UnknownKeyError

PatchBytes = Callable[[bytes], bytes]

_TAG_PREFIX = "tag:yaml.org,2002:"
_NULL_TAG = _TAG_PREFIX + "null"
_MERGE_TAG = _TAG_PREFIX + "merge"


def _short_tag(tag: str) -> str:
    if tag.startswith(_TAG_PREFIX):
        return "!!" + tag[len(_TAG_PREFIX):]
    return tag


def _line(node: Node) -> Optional[int]:
    mark = node.start_mark
    return mark.line + 1 if mark is not None else None


def _is_null(node: Node) -> bool:
    return isinstance(node, ScalarNode) and node.tag == _NULL_TAG


def _parse_error(exc: yaml.YAMLError) -> ParseError:
    if isinstance(exc, yaml.MarkedYAMLError):
        mark = exc.problem_mark or exc.context_mark
        problem = exc.problem or exc.context or str(exc)
        return ParseError(problem, line=mark.line + 1 if mark is not None else None)
    return ParseError(str(exc))


# YAML 1.1 floats need a dot, so plain 1e5 or 6.02E23 would resolve to !!str
_EXPONENT_FLOAT = re.compile(r"^[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)[eE][-+]?[0-9]+$")


class _DocumentLoader(yaml.SafeLoader):
    """SafeLoader with exponent floats and duplicate key detection."""

    def compose_mapping_node(self, anchor):
        node = super().compose_mapping_node(anchor)

        seen = {}
        for key_node, _ in node.value:
            if not isinstance(key_node, ScalarNode) or key_node.tag == _MERGE_TAG:
                continue
            key = (key_node.tag, key_node.value)
            if key in seen:
                raise yaml.composer.ComposerError(
                    "while composing a mapping",
                    node.start_mark,
                    f'mapping key "{key_node.value}" already defined at line {seen[key]}',
                    key_node.start_mark,
                )
            seen[key] = key_node.start_mark.line + 1

        return node


_DocumentLoader.add_implicit_resolver(
    _TAG_PREFIX + "float", _EXPONENT_FLOAT, list("-+0123456789.")
)


def compose_document(data: bytes) -> Optional[Node]:
    """Compose the first YAML document of ``data`` into a node graph.

    Returns None for a stream without any document.

    Raises:
        ParseError: If the buffer is not valid YAML or repeats a mapping key
    """
    try:
        # The reader detects the encoding on construction
        loader = _DocumentLoader(data)
    except yaml.YAMLError as e:
        raise _parse_error(e) from e

    try:
        if not loader.check_node():
            return None
        return loader.get_node()
    except yaml.YAMLError as e:
        raise _parse_error(e) from e
    finally:
        loader.dispose()


class _NodeDecoder:
    """Walks a node graph against a target's field description.

    Field-level failures are collected so that every valid field of the
    document is still applied.
    """

    def __init__(self, validate_keys: bool):
        self.validate_keys = validate_keys
        self.constructor = SafeConstructor()
        self.errors: List[DecodeError] = []

    def mismatch(self, node: Node, expected: str, path: str) -> Tuple[bool, Any]:
        value = node.value if isinstance(node, ScalarNode) else None
        self.errors.append(
            TypeMismatchError(path, _short_tag(node.tag), value, expected, line=_line(node))
        )
        return False, None

    def key_text(self, node: Node) -> str:
        if isinstance(node, ScalarNode):
            return node.value
        return str(self.constructor.construct_object(node, deep=True))

    def decode_struct(self, node: Node, target: Any, path: str) -> None:
        cls = type(target)
        if not isinstance(node, MappingNode):
            self.mismatch(node, cls.__name__, path)
            return

        self.constructor.flatten_mapping(node)
        specs = {spec.key: spec for spec in describe_fields(cls)}

        for key_node, value_node in node.value:
            key = self.key_text(key_node)
            key_path = f"{path}.{key}" if path else key
            spec = specs.get(key)
            if spec is None:
                if self.validate_keys:
                    self.errors.append(UnknownKeyError(key_path, cls.__name__, line=_line(key_node)))
                continue

            ok, value = self.decode_value(value_node, spec.type, getattr(target, spec.name), key_path)
            if ok:
                setattr(target, spec.name, value)

    def decode_value(self, node: Node, spec: TypeSpec, current: Any, path: str) -> Tuple[bool, Any]:
        if _is_null(node):
            return True, zero_value(spec)

        if spec.kind == KIND_ANY:
            return True, self.constructor.construct_object(node, deep=True)

        if spec.kind == KIND_STRUCT:
            if not isinstance(node, MappingNode):
                return self.mismatch(node, spec.name, path)
            if not isinstance(current, spec.struct_type):
                current = new_struct(spec.struct_type)
            self.decode_struct(node, current, path)
            return True, current

        if spec.kind == KIND_LIST:
            if not isinstance(node, SequenceNode):
                return self.mismatch(node, spec.name, path)
            items = []
            for i, item_node in enumerate(node.value):
                ok, item = self.decode_value(item_node, spec.item, None, f"{path}[{i}]")
                if ok:
                    items.append(item)
            return True, items

        if spec.kind == KIND_DICT:
            if not isinstance(node, MappingNode):
                return self.mismatch(node, spec.name, path)
            self.constructor.flatten_mapping(node)
            result = current if isinstance(current, dict) else {}
            for key_node, value_node in node.value:
                key = self.key_text(key_node)
                ok, item = self.decode_value(value_node, spec.item, None, f"{path}.{key}")
                if ok:
                    result[key] = item
            return True, result

        if not isinstance(node, ScalarNode):
            return self.mismatch(node, spec.name, path)

        if spec.kind == KIND_STR:
            return True, node.value

        try:
            value = self.constructor.construct_object(node, deep=True)
        except (yaml.YAMLError, ValueError):
            return self.mismatch(node, spec.name, path)

        if spec.kind == KIND_BOOL and isinstance(value, bool):
            return True, value
        if spec.kind == KIND_INT and not isinstance(value, bool):
            if isinstance(value, int):
                return True, value
            if isinstance(value, float) and value.is_integer():
                return True, int(value)
        if spec.kind == KIND_FLOAT and isinstance(value, (int, float)) and not isinstance(value, bool):
            return True, float(value)

        return self.mismatch(node, spec.name, path)

    def raise_errors(self) -> None:
        if not self.errors:
            return
        first = self.errors[0]
        first.details["errors"] = [str(e) for e in self.errors]
        raise first


def decode(
    data: bytes,
    target: Any,
    *,
    validate_keys: bool = True,
    patch_bytes: Optional[PatchBytes] = None,
) -> None:
    """Decode a YAML buffer into an existing dataclass instance.

    Args:
        data: Raw document bytes (str is accepted and UTF-8 encoded)
        target: Dataclass instance to mutate
        validate_keys: Reject keys that have no matching field
        patch_bytes: Optional transform applied to the bytes before parsing

    Raises:
        ParseError: If the (patched) buffer is not valid YAML
        UnknownKeyError: If validate_keys is set and a key has no field
        TypeMismatchError: If a value cannot be converted to its field type
        TypeError: If target is not a dataclass instance
    """
    if not is_config_instance(target):
        raise TypeError(
            f"configuration target must be a dataclass instance, got {type(target).__name__}"
        )

    if isinstance(data, str):
        data = data.encode("utf-8")

    if patch_bytes is not None:
        data = patch_bytes(data)

    node = compose_document(data)
    # An empty document is a no-op, not an end-of-stream error
    if node is None or _is_null(node):
        return

    decoder = _NodeDecoder(validate_keys)
    try:
        decoder.decode_struct(node, target, "")
    except yaml.YAMLError as e:
        # Malformed merge keys surface while walking
        raise _parse_error(e) from e

    decoder.raise_errors()
