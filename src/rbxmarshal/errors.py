"""
Datatype errors and diagnostics.

Error code ranges:
- E1xx: Conversion errors (tagged variant <-> datatype)
- E2xx: Argument errors (constructor / method argument shapes)
- E3xx: Value errors (datatype invariants)
- E4xx: Host runtime errors (unknown names, unsupported operations)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E101, E201, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity = ErrorSeverity.ERROR
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.severity.value}[{self.code}]: {self.message}"]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "hints": self.hints,
        }


class DatatypeError(Exception):
    """Base exception for datatype errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def __str__(self) -> str:
        return self.diagnostic.message


class ConversionError(DatatypeError):
    """Error converting between a datatype and a tagged variant (E1xx)."""

    def __init__(self, diagnostic: Diagnostic, source: str, target: str,
                 detail: Optional[str] = None):
        super().__init__(diagnostic)
        self.source = source
        self.target = target
        self.detail = detail


class MismatchedSource(ConversionError):
    """E101: variant discriminant (or payload) does not fit the target datatype."""
    pass


class UnsupportedTarget(ConversionError):
    """E102: a datatype was asked to convert into a foreign variant type."""
    pass


class ArgumentError(DatatypeError):
    """Error binding host arguments (E2xx)."""
    pass


class InvalidConstructorArguments(ArgumentError):
    """E201: no constructor shape matched."""
    pass


class InvalidMethodArguments(ArgumentError):
    """E202: method arguments did not match."""
    pass


class InvalidValue(DatatypeError):
    """E301: a datatype invariant was violated."""
    pass


class HostRuntimeError(DatatypeError):
    """
    Error surfaced to the host runtime.

    Wraps lower-level datatype errors without changing their diagnostic, so
    the message seen by script code is the original one.
    """
    pass


# --- Conversion error codes ---

def error_mismatched_source(source: str, target: str,
                            detail: Optional[str] = None) -> MismatchedSource:
    """E101: Variant of the wrong type (or malformed) for a datatype."""
    message = f"failed to convert variant '{source}' into datatype '{target}'"
    if detail:
        message = f"{message}: {detail}"
    diag = Diagnostic(code="E101", message=message)
    return MismatchedSource(diag, source, target, detail)


def error_unsupported_target(source: str, target: str,
                             detail: Optional[str] = None) -> UnsupportedTarget:
    """E102: Datatype cannot produce the requested variant type."""
    message = f"failed to convert datatype '{source}' into variant '{target}'"
    if detail:
        message = f"{message}: {detail}"
    diag = Diagnostic(
        code="E102",
        message=message,
        hints=["datatypes only convert into their own variant type"],
    )
    return UnsupportedTarget(diag, source, target, detail)


# --- Argument error codes ---

def _type_list(type_names: Sequence[str]) -> str:
    return "(" + ", ".join(type_names) + ")"


def error_invalid_constructor_arguments(
    name: str,
    received: Sequence[str],
    expected: Sequence[str],
) -> InvalidConstructorArguments:
    """E201: No recognized argument shape matched a constructor call."""
    message = (
        f"invalid arguments to constructor {name}: "
        f"no recognized argument shape matched {_type_list(received)}"
    )
    if expected:
        message += "; expected one of " + ", ".join(expected)
    diag = Diagnostic(code="E201", message=message)
    return InvalidConstructorArguments(diag)


def error_invalid_constructed_value(name: str, detail: str) -> InvalidConstructorArguments:
    """E201: A constructor shape matched but the resulting value was rejected."""
    diag = Diagnostic(
        code="E201",
        message=f"invalid arguments to constructor {name}: {detail}",
    )
    return InvalidConstructorArguments(diag)


def error_invalid_method_arguments(
    name: str,
    received: Sequence[str],
    expected: str,
) -> InvalidMethodArguments:
    """E202: Method arguments did not match the method signature."""
    diag = Diagnostic(
        code="E202",
        message=(
            f"invalid arguments to method {name}: "
            f"expected {expected}, got {_type_list(received)}"
        ),
    )
    return InvalidMethodArguments(diag)


# --- Value error codes ---

def error_invalid_value(datatype: str, detail: str) -> InvalidValue:
    """E301: Datatype invariant violated."""
    diag = Diagnostic(code="E301", message=f"invalid {datatype}: {detail}")
    return InvalidValue(diag)


# --- Host runtime error codes ---

def error_unknown_datatype(name: str) -> HostRuntimeError:
    """E401: No datatype registered under this name."""
    diag = Diagnostic(code="E401", message=f"unknown datatype '{name}'")
    return HostRuntimeError(diag)


def error_unknown_constructor(type_name: str, name: str) -> HostRuntimeError:
    """E402: Datatype has no constructor with this name."""
    diag = Diagnostic(code="E402", message=f"{type_name}.{name} is not a valid member")
    return HostRuntimeError(diag)


def error_unknown_field(type_name: str, name: str) -> HostRuntimeError:
    """E403: Datatype has no field with this name."""
    diag = Diagnostic(code="E403", message=f"{name} is not a valid member of {type_name}")
    return HostRuntimeError(diag)


def error_unknown_method(type_name: str, name: str) -> HostRuntimeError:
    """E404: Datatype has no method with this name."""
    diag = Diagnostic(code="E404", message=f"{name} is not a valid method of {type_name}")
    return HostRuntimeError(diag)


def error_unsupported_operation(operation: str, operand_types: Sequence[str],
                                detail: Optional[str] = None) -> HostRuntimeError:
    """E405: Operator not defined for these operand types."""
    message = f"attempt to perform {operation} on {' and '.join(operand_types)}"
    if detail:
        message = f"{message}: {detail}"
    diag = Diagnostic(code="E405", message=message)
    return HostRuntimeError(diag)


def host_error(error: DatatypeError) -> HostRuntimeError:
    """Translate any datatype error into a host runtime error, message unchanged."""
    if isinstance(error, HostRuntimeError):
        return error
    return HostRuntimeError(error.diagnostic)
