"""Text-level root key filtering for YAML documents.

Selects top-level sections of a document without parsing it, typically from
a ``yaml_patch_bytes`` hook:

    load_config(path, cfg, yaml_patch_bytes(lambda b: yaml_remove_root_keys(b, "secrets")))

Filtered sections are blanked, never deleted, so line numbers in later
error messages still point at the original document.

Root lines are detected with a leading-whitespace heuristic only. Content
that continues a key flush-left (some block scalars, for instance) is taken
for a new root key.
"""

from typing import Iterable


def filter_root_keys(data: bytes, keys: Iterable[str], keep: bool) -> bytes:
    """Blank the sections of the given root keys, or of all other root keys.

    Args:
        data: Raw YAML document
        keys: Root key names
        keep: False blanks the sections of ``keys``; True blanks every other section

    Returns:
        The filtered document, with the same number of lines as ``data``
    """
    prefixes = tuple(key.encode("utf-8") + b":" for key in keys)
    lines = data.split(b"\n")

    ignoring = False

    for i, line in enumerate(lines):
        is_blank = not line.strip()
        is_root = not is_blank and line.lstrip() == line

        if is_root:
            ignoring = line.startswith(prefixes)

        if ignoring != keep:
            lines[i] = b""

    return b"\n".join(lines)


def yaml_remove_root_keys(data: bytes, *keys: str) -> bytes:
    """Blank the sections of ``keys``."""
    return filter_root_keys(data, keys, keep=False)


def yaml_keep_root_keys(data: bytes, *keys: str) -> bytes:
    """Blank every section except those of ``keys``."""
    return filter_root_keys(data, keys, keep=True)
