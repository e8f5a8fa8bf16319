"""
Constructor overload resolution.

A constructor name maps to an ordered list of ``Shape``s. ``resolve`` walks
the list and commits to the first shape that accepts the whole argument
list:

- every supplied argument must be consumed (``len(args) <= len(params)``),
  so surplus arguments reject a shape even when they are nil;
- every supplied argument must match its parameter type;
- missing trailing arguments count as nil, which only optional parameters
  accept.

Nothing is converted until a shape has matched, so a rejected shape never
leaves partial work behind. Shapes are listed most specific first.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..datatypes import Datatype
from ..errors import (
    InvalidValue,
    error_invalid_constructed_value,
    error_invalid_constructor_arguments,
    error_invalid_method_arguments,
)
from ..types import Type
from .values import Value, type_names


def signature(params: Sequence[Type]) -> str:
    """Render a parameter list as ``(T1, T2?)``."""
    return "(" + ", ".join(p.name for p in params) + ")"


def match_arguments(params: Sequence[Type], args: Sequence[Value]) -> bool:
    """Check that ``args`` fill ``params`` exactly, with nil for missing ones."""
    if len(args) > len(params):
        return False
    for i, param in enumerate(params):
        if i < len(args):
            if not param.matches(args[i]):
                return False
        elif not param.optional:
            return False
    return True


def convert_arguments(params: Sequence[Type], args: Sequence[Value]) -> List[Any]:
    """Convert matched arguments; missing ones become None."""
    return [param.convert(args[i]) if i < len(args) else None
            for i, param in enumerate(params)]


@dataclass(frozen=True)
class Shape:
    """One accepted argument pattern and the builder it feeds."""
    params: Tuple[Type, ...]
    build: Callable[..., Datatype]

    def signature(self) -> str:
        return signature(self.params)

    def matches(self, args: Sequence[Value]) -> bool:
        return match_arguments(self.params, args)

    def bind(self, args: Sequence[Value]) -> List[Any]:
        return convert_arguments(self.params, args)


def shape(*params: Type) -> Callable[[Callable[..., Datatype]], Shape]:
    """Decorator form: ``@shape(FLOAT, INT32)`` turns a builder into a Shape."""
    def wrap(build: Callable[..., Datatype]) -> Shape:
        return Shape(tuple(params), build)
    return wrap


def find_shape(shapes: Sequence[Shape], args: Sequence[Value]) -> Optional[Shape]:
    """First shape accepting ``args``, or None."""
    for candidate in shapes:
        if candidate.matches(args):
            return candidate
    return None


def resolve(name: str, shapes: Sequence[Shape], args: Sequence[Value]) -> Datatype:
    """
    Build a value through the first matching shape.

    Raises InvalidConstructorArguments when no shape matches, or when the
    matched shape's builder rejects the value.
    """
    chosen = find_shape(shapes, args)
    if chosen is None:
        raise error_invalid_constructor_arguments(
            name, type_names(args), [s.signature() for s in shapes])
    try:
        return chosen.build(*chosen.bind(args))
    except InvalidValue as exc:
        raise error_invalid_constructed_value(name, exc.message) from exc


def bind_method(name: str, params: Sequence[Type], args: Sequence[Value]) -> List[Any]:
    """Match and convert method arguments, or raise InvalidMethodArguments."""
    if not match_arguments(params, args):
        raise error_invalid_method_arguments(name, type_names(args), signature(params))
    return convert_arguments(params, args)
