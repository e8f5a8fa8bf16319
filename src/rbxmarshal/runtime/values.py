"""
Host runtime value wrappers.

Values wrap Python objects with host type metadata so argument shapes can be
checked before anything is converted.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

from ..datatypes import Datatype
from ..types import (
    Type,
    NIL, BOOLEAN, NUMBER, STRING, TABLE,
    userdata_type,
)


@dataclass
class Value:
    """
    A host value.

    The `data` field holds the Python object (a list of Values for tables,
    a Datatype instance for userdata).
    The `type` field holds the host type.
    """
    data: Any
    type: Type

    def __repr__(self) -> str:
        return f"Value({self.data!r}, {self.type})"

    @property
    def type_name(self) -> str:
        return self.type.name

    def is_nil(self) -> bool:
        return self.type == NIL


# Convenience constructors

def nil_val() -> Value:
    """Create the nil value."""
    return Value(None, NIL)


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(bool(b), BOOLEAN)


def number_val(x: float) -> Value:
    """Create a number value; ints stay ints."""
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"expected a number, got {type(x).__name__}")
    return Value(x, NUMBER)


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(str(s), STRING)


def table_val(items: Sequence[Value]) -> Value:
    """Create an array table from a sequence of Values."""
    return Value(list(items), TABLE)


def userdata_val(datatype: Datatype) -> Value:
    """Wrap a datatype instance."""
    return Value(datatype, userdata_type(datatype.type_name))


def from_python(obj: Any) -> Value:
    """Wrap a plain Python object as a host value."""
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return nil_val()
    if isinstance(obj, bool):
        return bool_val(obj)
    if isinstance(obj, (int, float)):
        return number_val(obj)
    if isinstance(obj, str):
        return string_val(obj)
    if isinstance(obj, Datatype):
        return userdata_val(obj)
    if isinstance(obj, (list, tuple)):
        return table_val([from_python(item) for item in obj])
    raise TypeError(f"cannot represent {type(obj).__name__} as a host value")


def from_python_args(args: Sequence[Any]) -> List[Value]:
    """Wrap every element of an argument list."""
    return [from_python(a) for a in args]


def to_python(value: Value) -> Any:
    """Unwrap a host value; tables become lists."""
    if value.type == TABLE:
        return [to_python(item) for item in value.data]
    return value.data


def type_names(values: Sequence[Value]) -> List[str]:
    """Host type names of an argument list, for error messages."""
    return [v.type_name for v in values]
