"""Base exception classes for configutils.

All configutils exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Unlike a plain ``code: message`` rendering, ``str()`` returns only the
message so that stage prefixes compose into readable chains such as
``LoadConfig error: override error: ...``.
"""

from typing import Any, Dict, Optional


class ConfigUtilsError(Exception):
    """Base exception for all configutils errors.

    Attributes:
        code: Machine-readable error code (e.g., "UNKNOWN_KEY")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code (e.g., "PARSE_ERROR")
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class SourceReadError(ConfigUtilsError):
    """Raised when a configuration file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            code="SOURCE_READ_ERROR",
            message=f"open {path}: {reason}",
            details={"path": path},
        )


class DecodeError(ConfigUtilsError):
    """Base for errors raised while decoding a document into a target."""

    pass


class ParseError(DecodeError):
    """Raised when a document is not syntactically valid YAML."""

    def __init__(self, problem: str, line: Optional[int] = None):
        self.problem = problem
        self.line = line
        location = f"line {line}: " if line is not None else ""
        super().__init__(
            code="PARSE_ERROR",
            message=f"yaml: {location}{problem}",
            details={"line": line},
        )


class UnknownKeyError(DecodeError):
    """Raised in strict mode when a document key has no matching field.

    The dotted ``key_path`` identifies the key from the document root,
    e.g. ``section.typo``.
    """

    def __init__(self, key_path: str, type_name: str, line: Optional[int] = None):
        self.key_path = key_path
        self.type_name = type_name
        self.line = line
        key = key_path.rsplit(".", 1)[-1]
        location = f"line {line}: " if line is not None else ""
        super().__init__(
            code="UNKNOWN_KEY",
            message=f"{location}field {key} not found in type {type_name}",
            details={"key_path": key_path, "type": type_name, "line": line},
        )


class TypeMismatchError(DecodeError):
    """Raised when a document value cannot be converted to the field type."""

    def __init__(
        self,
        key_path: str,
        tag: str,
        value: Optional[str],
        expected: str,
        line: Optional[int] = None,
    ):
        self.key_path = key_path
        self.tag = tag
        self.value = value
        self.expected = expected
        self.line = line
        location = f"line {line}: " if line is not None else ""
        shown = f" `{value}`" if value is not None else ""
        target = f" ({key_path})" if key_path else ""
        super().__init__(
            code="TYPE_MISMATCH",
            message=f"{location}cannot unmarshal {tag}{shown} into {expected}{target}",
            details={"key_path": key_path, "tag": tag, "expected": expected, "line": line},
        )


class EnvParseError(ConfigUtilsError):
    """Raised when an environment value cannot be converted to the field type."""

    def __init__(self, var_name: str, value: str, kind: str, reason: str):
        self.var_name = var_name
        self.value = value
        self.kind = kind
        self.reason = reason
        super().__init__(
            code="ENV_PARSE_ERROR",
            message=f"envigo {var_name} parse {kind} error: {reason}",
            details={"var_name": var_name, "value": value, "kind": kind},
        )


class ConfigLoadError(ConfigUtilsError):
    """Stage wrapper raised by the loader.

    Wraps the error of a failing stage with a stage-identifying prefix.
    Wrappers nest, so the chain of ``cause`` attributes mirrors the
    prefixes in the message.
    """

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(
            code="LOAD_CONFIG_ERROR",
            message=f"{stage}: {cause}",
            details={"stage": stage, "cause_type": type(cause).__name__},
        )

    @property
    def root_cause(self) -> Exception:
        """Innermost non-wrapper error."""
        err: Exception = self
        while isinstance(err, ConfigLoadError):
            err = err.cause
        return err
