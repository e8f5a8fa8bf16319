"""
Datatype registry for the host runtime.

Maps host-visible names (constructors, constants, fields, methods,
metamethods) onto the datatypes' Python API. Every datatype is registered
through ``register_datatype``, which always adds ``__eq`` and
``__tostring``; the per-datatype blocks below are declarative tables and
delegate all behaviour to the datatype classes.
"""

import functools
import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Type

from ..datatypes import (
    Datatype,
    BrickColor,
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    UDim,
    UDim2,
    Vector2,
    Vector2int16,
    Vector3,
    Vector3int16,
)
from ..errors import (
    DatatypeError,
    HostRuntimeError,
    error_unknown_constructor,
    error_unknown_datatype,
    error_unknown_field,
    error_unknown_method,
    error_unsupported_operation,
    host_error,
)
from ..types import (
    Type as HostType,
    FLOAT, INT16, INT32, UINT8, NUMBER, STRING,
    is_userdata,
    make_list_type,
    make_optional_type,
    userdata_type,
)
from .overload import Shape, bind_method, resolve
from .values import (
    Value,
    bool_val,
    from_python,
    from_python_args,
    string_val,
    userdata_val,
)

logger = logging.getLogger(__name__)


class MetaMethod(Enum):
    """Host metamethods a datatype can expose."""
    EQ = "__eq"
    TOSTRING = "__tostring"
    UNM = "__unm"
    ADD = "__add"
    SUB = "__sub"
    MUL = "__mul"
    DIV = "__div"

    @property
    def operation(self) -> str:
        """Short name used in error messages."""
        return self.value[2:]


ARITHMETIC = frozenset({MetaMethod.UNM, MetaMethod.ADD, MetaMethod.SUB})
FULL_ARITHMETIC = ARITHMETIC | {MetaMethod.MUL, MetaMethod.DIV}

_BINARY_OPERATORS: Dict[MetaMethod, Callable[[Any, Any], Any]] = {
    MetaMethod.ADD: operator.add,
    MetaMethod.SUB: operator.sub,
    MetaMethod.MUL: operator.mul,
    MetaMethod.DIV: operator.truediv,
}


@dataclass
class DatatypeField:
    """A read-only field; ``getter`` receives the datatype instance."""
    name: str
    getter: Callable[[Any], Any]
    doc: str = ""


@dataclass
class DatatypeMethod:
    """
    A method callable as ``value:Name(args)``.

    ``params`` excludes the receiver; ``implementation`` receives the
    datatype instance followed by the converted arguments.
    """
    name: str
    params: Tuple[HostType, ...]
    implementation: Callable[..., Any]
    doc: str = ""

    def signature(self) -> str:
        return "(" + ", ".join(p.name for p in self.params) + ")"


@dataclass
class DatatypeConstructor:
    """A named constructor with its ordered argument shapes."""
    name: str
    shapes: Tuple[Shape, ...]
    doc: str = ""


@dataclass
class DatatypeBinding:
    """Everything registered for one datatype."""
    datatype: Type[Datatype]
    constructors: Dict[str, DatatypeConstructor] = field(default_factory=dict)
    fields: Dict[str, DatatypeField] = field(default_factory=dict)
    methods: Dict[str, DatatypeMethod] = field(default_factory=dict)
    metamethods: FrozenSet[MetaMethod] = frozenset()
    constants: Dict[str, Datatype] = field(default_factory=dict)

    @property
    def type_name(self) -> str:
        return self.datatype.type_name


def _host_errors(func):
    """Re-raise datatype errors as host runtime errors, message unchanged."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HostRuntimeError:
            raise
        except DatatypeError as exc:
            raise host_error(exc) from exc
    return wrapper


def _or(value, default):
    return default if value is None else value


def _ctor(name: str, *shapes: Shape, doc: str = "") -> DatatypeConstructor:
    return DatatypeConstructor(name, tuple(shapes), doc)


def _shape(build: Callable[..., Datatype], *params: HostType) -> Shape:
    return Shape(tuple(params), build)


class DatatypeRegistry:
    """
    Registry of all datatypes exposed to the host runtime.

    Datatypes are registered by type name and looked up for construction,
    field access, method calls and metamethods.
    """

    def __init__(self):
        self._bindings: Dict[str, DatatypeBinding] = {}
        self._register_all()

    # --- Registration ---

    def register_datatype(
        self,
        datatype: Type[Datatype],
        constructors: Iterable[DatatypeConstructor] = (),
        fields: Iterable[DatatypeField] = (),
        methods: Iterable[DatatypeMethod] = (),
        operators: Iterable[MetaMethod] = (),
        constants: Optional[Dict[str, Datatype]] = None,
    ) -> DatatypeBinding:
        """Register a datatype; equality and string form are always included."""
        binding = DatatypeBinding(
            datatype=datatype,
            constructors={c.name: c for c in constructors},
            fields={f.name: f for f in fields},
            methods={m.name: m for m in methods},
            metamethods=frozenset(operators) | {MetaMethod.EQ, MetaMethod.TOSTRING},
            constants=dict(constants or {}),
        )
        self._bindings[datatype.type_name] = binding
        userdata_type(datatype.type_name)
        logger.debug("registered datatype %s (%d constructors, %d fields, %d methods)",
                     datatype.type_name, len(binding.constructors),
                     len(binding.fields), len(binding.methods))
        return binding

    def get_binding(self, type_name: str) -> Optional[DatatypeBinding]:
        """Look up a datatype binding by name."""
        return self._bindings.get(type_name)

    def type_names(self) -> List[str]:
        """Registered datatype names, in registration order."""
        return list(self._bindings)

    def _require_binding(self, type_name: str) -> DatatypeBinding:
        binding = self._bindings.get(type_name)
        if binding is None:
            raise error_unknown_datatype(type_name)
        return binding

    def _binding_of(self, value: Value) -> Optional[DatatypeBinding]:
        if not is_userdata(value.type):
            return None
        return self._bindings.get(value.type.name)

    # --- Host entry points ---

    @_host_errors
    def construct(self, type_name: str, constructor_name: str,
                  args: Sequence[Any] = ()) -> Value:
        """Call ``TypeName.constructor(args...)``."""
        binding = self._require_binding(type_name)
        ctor = binding.constructors.get(constructor_name)
        if ctor is None:
            raise error_unknown_constructor(type_name, constructor_name)
        result = resolve(f"{type_name}.{constructor_name}", ctor.shapes,
                         from_python_args(args))
        return userdata_val(result)

    @_host_errors
    def get_constant(self, type_name: str, name: str) -> Value:
        """Read ``TypeName.name`` for a constant such as ``Vector3.zero``."""
        binding = self._require_binding(type_name)
        constant = binding.constants.get(name)
        if constant is None:
            raise error_unknown_constructor(type_name, name)
        return userdata_val(constant)

    @_host_errors
    def index(self, value: Value, field_name: str) -> Value:
        """Read ``value.field``."""
        value = from_python(value)
        binding = self._binding_of(value)
        if binding is None:
            raise error_unsupported_operation("index", [value.type_name])
        entry = binding.fields.get(field_name)
        if entry is None:
            raise error_unknown_field(binding.type_name, field_name)
        return from_python(entry.getter(value.data))

    @_host_errors
    def call_method(self, value: Value, name: str, args: Sequence[Any] = ()) -> Value:
        """Call ``value:Name(args...)``."""
        value = from_python(value)
        binding = self._binding_of(value)
        if binding is None:
            raise error_unsupported_operation("call", [value.type_name])
        method = binding.methods.get(name)
        if method is None:
            raise error_unknown_method(binding.type_name, name)
        converted = bind_method(f"{binding.type_name}:{name}", method.params,
                                from_python_args(args))
        return from_python(method.implementation(value.data, *converted))

    @_host_errors
    def call_metamethod(self, metamethod: MetaMethod, lhs: Any,
                        rhs: Any = None) -> Value:
        """Invoke a metamethod; ``rhs`` is ignored for ``__unm`` and ``__tostring``."""
        lhs = from_python(lhs)
        if metamethod is MetaMethod.EQ:
            return bool_val(self.equals(lhs, rhs))
        if metamethod is MetaMethod.TOSTRING:
            return string_val(self.to_string(lhs))
        if metamethod is MetaMethod.UNM:
            binding = self._binding_of(lhs)
            if binding is None or MetaMethod.UNM not in binding.metamethods:
                raise error_unsupported_operation(metamethod.operation, [lhs.type_name])
            return userdata_val(-lhs.data)
        return self._binary(metamethod, lhs, from_python(rhs))

    def _binary(self, metamethod: MetaMethod, lhs: Value, rhs: Value) -> Value:
        operands = [lhs.type_name, rhs.type_name]
        binding = self._binding_of(lhs) or self._binding_of(rhs)
        if binding is None or metamethod not in binding.metamethods:
            raise error_unsupported_operation(metamethod.operation, operands)
        for side in (lhs, rhs):
            owner = self._binding_of(side)
            if owner is not None and metamethod not in owner.metamethods:
                raise error_unsupported_operation(metamethod.operation, operands)
        try:
            result = _BINARY_OPERATORS[metamethod](lhs.data, rhs.data)
        except TypeError as exc:
            raise error_unsupported_operation(metamethod.operation, operands) from exc
        except ZeroDivisionError as exc:
            raise error_unsupported_operation(
                metamethod.operation, operands, "integer division by zero") from exc
        return from_python(result)

    def to_string(self, value: Any) -> str:
        """Host string form; datatypes use their ``str()``."""
        value = from_python(value)
        if value.is_nil():
            return "nil"
        if isinstance(value.data, bool):
            return "true" if value.data else "false"
        if self._binding_of(value) is not None:
            return str(value.data)
        if value.type == NUMBER:
            return "%.14g" % value.data
        if isinstance(value.data, list):
            return "table"
        return str(value.data)

    def equals(self, a: Any, b: Any) -> bool:
        """Host equality: same type and structurally equal."""
        a, b = from_python(a), from_python(b)
        return a.type == b.type and a.data == b.data

    # --- Registration tables ---

    def _register_all(self) -> None:
        """Register all datatypes."""
        self._register_udim()
        self._register_udim2()
        self._register_vector2()
        self._register_vector2int16()
        self._register_vector3()
        self._register_vector3int16()
        self._register_color3()
        self._register_color_sequence_keypoint()
        self._register_color_sequence()
        self._register_brick_color()

    def _register_udim(self) -> None:
        number, int32 = make_optional_type(FLOAT), make_optional_type(INT32)
        t = userdata_type(UDim.type_name)

        self.register_datatype(
            UDim,
            constructors=[
                _ctor("new",
                      _shape(lambda s, o: UDim(_or(s, 0.0), _or(o, 0)), number, int32)),
            ],
            fields=[
                DatatypeField("Scale", lambda u: u.scale),
                DatatypeField("Offset", lambda u: u.offset),
            ],
            methods=[
                DatatypeMethod("Lerp", (t, FLOAT), UDim.lerp),
            ],
            operators=ARITHMETIC,
        )

    def _register_udim2(self) -> None:
        number, int32 = make_optional_type(FLOAT), make_optional_type(INT32)
        udim = make_optional_type(userdata_type(UDim.type_name))
        t = userdata_type(UDim2.type_name)

        self.register_datatype(
            UDim2,
            constructors=[
                _ctor("new",
                      _shape(lambda: UDim2()),
                      _shape(lambda x, y: UDim2(_or(x, UDim()), _or(y, UDim())), udim, udim),
                      _shape(lambda sx, ox, sy, oy: UDim2.from_components(
                          _or(sx, 0.0), _or(ox, 0), _or(sy, 0.0), _or(oy, 0)),
                          number, int32, number, int32),
                      doc="UDim2.new(), UDim2.new(x, y) or UDim2.new(xScale, xOffset, yScale, yOffset)"),
                _ctor("fromScale", _shape(UDim2.from_scale, number, number)),
                _ctor("fromOffset", _shape(UDim2.from_offset, int32, int32)),
            ],
            fields=[
                DatatypeField("X", lambda u: u.x),
                DatatypeField("Y", lambda u: u.y),
                DatatypeField("Width", lambda u: u.x, "alias of X"),
                DatatypeField("Height", lambda u: u.y, "alias of Y"),
            ],
            methods=[
                DatatypeMethod("Lerp", (t, FLOAT), UDim2.lerp),
            ],
            operators=ARITHMETIC,
        )

    def _register_vector2(self) -> None:
        number = make_optional_type(FLOAT)
        t = userdata_type(Vector2.type_name)

        self.register_datatype(
            Vector2,
            constructors=[
                _ctor("new", _shape(lambda x, y: Vector2(_or(x, 0.0), _or(y, 0.0)),
                                    number, number)),
            ],
            fields=[
                DatatypeField("X", lambda v: v.x),
                DatatypeField("Y", lambda v: v.y),
                DatatypeField("Magnitude", lambda v: v.magnitude),
                DatatypeField("Unit", lambda v: v.unit),
            ],
            methods=[
                DatatypeMethod("Cross", (t,), Vector2.cross),
                DatatypeMethod("Dot", (t,), Vector2.dot),
                DatatypeMethod("Lerp", (t, FLOAT), Vector2.lerp),
                DatatypeMethod("Max", (t,), Vector2.max),
                DatatypeMethod("Min", (t,), Vector2.min),
            ],
            operators=FULL_ARITHMETIC,
            constants={
                "zero": Vector2.zero,
                "one": Vector2.one,
                "xAxis": Vector2.x_axis,
                "yAxis": Vector2.y_axis,
            },
        )

    def _register_vector2int16(self) -> None:
        int16 = make_optional_type(INT16)

        self.register_datatype(
            Vector2int16,
            constructors=[
                _ctor("new", _shape(lambda x, y: Vector2int16(_or(x, 0), _or(y, 0)),
                                    int16, int16)),
            ],
            fields=[
                DatatypeField("X", lambda v: v.x),
                DatatypeField("Y", lambda v: v.y),
            ],
            operators=FULL_ARITHMETIC,
        )

    def _register_vector3(self) -> None:
        number = make_optional_type(FLOAT)
        t = userdata_type(Vector3.type_name)

        self.register_datatype(
            Vector3,
            constructors=[
                _ctor("new", _shape(lambda x, y, z: Vector3(_or(x, 0.0), _or(y, 0.0), _or(z, 0.0)),
                                    number, number, number)),
            ],
            fields=[
                DatatypeField("X", lambda v: v.x),
                DatatypeField("Y", lambda v: v.y),
                DatatypeField("Z", lambda v: v.z),
                DatatypeField("Magnitude", lambda v: v.magnitude),
                DatatypeField("Unit", lambda v: v.unit),
            ],
            methods=[
                DatatypeMethod("Angle", (t, make_optional_type(t)), Vector3.angle),
                DatatypeMethod("Cross", (t,), Vector3.cross),
                DatatypeMethod("Dot", (t,), Vector3.dot),
                DatatypeMethod("FuzzyEq", (t, number), Vector3.fuzzy_eq),
                DatatypeMethod("Lerp", (t, FLOAT), Vector3.lerp),
                DatatypeMethod("Max", (t,), Vector3.max),
                DatatypeMethod("Min", (t,), Vector3.min),
            ],
            operators=FULL_ARITHMETIC,
            constants={
                "zero": Vector3.zero,
                "one": Vector3.one,
                "xAxis": Vector3.x_axis,
                "yAxis": Vector3.y_axis,
                "zAxis": Vector3.z_axis,
            },
        )

    def _register_vector3int16(self) -> None:
        int16 = make_optional_type(INT16)

        self.register_datatype(
            Vector3int16,
            constructors=[
                _ctor("new", _shape(lambda x, y, z: Vector3int16(_or(x, 0), _or(y, 0), _or(z, 0)),
                                    int16, int16, int16)),
            ],
            fields=[
                DatatypeField("X", lambda v: v.x),
                DatatypeField("Y", lambda v: v.y),
                DatatypeField("Z", lambda v: v.z),
            ],
            operators=FULL_ARITHMETIC,
        )

    def _register_color3(self) -> None:
        number, uint8 = make_optional_type(FLOAT), make_optional_type(UINT8)
        t = userdata_type(Color3.type_name)

        self.register_datatype(
            Color3,
            constructors=[
                _ctor("new", _shape(lambda r, g, b: Color3(_or(r, 0.0), _or(g, 0.0), _or(b, 0.0)),
                                    number, number, number)),
                _ctor("fromRGB", _shape(lambda r, g, b: Color3.from_rgb(_or(r, 0), _or(g, 0), _or(b, 0)),
                                        uint8, uint8, uint8)),
                _ctor("fromHSV", _shape(Color3.from_hsv, FLOAT, FLOAT, FLOAT)),
                _ctor("fromHex", _shape(Color3.from_hex, STRING)),
            ],
            fields=[
                DatatypeField("R", lambda c: c.r),
                DatatypeField("G", lambda c: c.g),
                DatatypeField("B", lambda c: c.b),
            ],
            methods=[
                DatatypeMethod("Lerp", (t, FLOAT), Color3.lerp),
                DatatypeMethod("ToHSV", (), Color3.to_hsv, "returns a table {h, s, v}"),
                DatatypeMethod("ToHex", (), Color3.to_hex),
            ],
            operators=FULL_ARITHMETIC,
        )

    def _register_color_sequence_keypoint(self) -> None:
        color = userdata_type(Color3.type_name)

        self.register_datatype(
            ColorSequenceKeypoint,
            constructors=[
                _ctor("new", _shape(ColorSequenceKeypoint, FLOAT, color)),
            ],
            fields=[
                DatatypeField("Time", lambda k: k.time),
                DatatypeField("Value", lambda k: k.color),
            ],
        )

    def _register_color_sequence(self) -> None:
        color = userdata_type(Color3.type_name)
        keypoints = make_list_type(userdata_type(ColorSequenceKeypoint.type_name))

        self.register_datatype(
            ColorSequence,
            constructors=[
                _ctor("new",
                      _shape(ColorSequence.from_color, color),
                      _shape(ColorSequence.from_colors, color, color),
                      _shape(ColorSequence.from_keypoints, keypoints)),
            ],
            fields=[
                DatatypeField("Keypoints", lambda s: s.keypoints),
            ],
        )

    def _register_brick_color(self) -> None:
        color = userdata_type(Color3.type_name)

        named = [
            ("White", BrickColor.white),
            ("Gray", BrickColor.gray),
            ("DarkGray", BrickColor.dark_gray),
            ("Black", BrickColor.black),
            ("Red", BrickColor.red),
            ("Yellow", BrickColor.yellow),
            ("Green", BrickColor.green),
            ("Blue", BrickColor.blue),
        ]

        self.register_datatype(
            BrickColor,
            constructors=[
                _ctor("new",
                      _shape(BrickColor.from_rgb, FLOAT, FLOAT, FLOAT),
                      _shape(BrickColor.from_number, INT32),
                      _shape(BrickColor.from_name, STRING),
                      _shape(BrickColor.from_color3, color)),
                _ctor("palette", _shape(BrickColor.palette, INT32)),
                _ctor("random", _shape(BrickColor.random)),
            ] + [_ctor(name, _shape(factory)) for name, factory in named],
            fields=[
                DatatypeField("Number", lambda c: c.number),
                DatatypeField("Name", lambda c: c.name),
                DatatypeField("R", lambda c: c.r),
                DatatypeField("G", lambda c: c.g),
                DatatypeField("B", lambda c: c.b),
                DatatypeField("r", lambda c: c.r),
                DatatypeField("g", lambda c: c.g),
                DatatypeField("b", lambda c: c.b),
                DatatypeField("Color", lambda c: c.color),
            ],
        )


# Global singleton registry
_registry: Optional[DatatypeRegistry] = None


def get_registry() -> DatatypeRegistry:
    """Get the global datatype registry."""
    global _registry
    if _registry is None:
        _registry = DatatypeRegistry()
    return _registry


def construct(type_name: str, constructor_name: str, args: Sequence[Any] = ()) -> Value:
    """Call a datatype constructor through the global registry."""
    return get_registry().construct(type_name, constructor_name, args)


def call_method(value: Any, name: str, args: Sequence[Any] = ()) -> Value:
    """Call a datatype method through the global registry."""
    return get_registry().call_method(value, name, args)


def call_metamethod(metamethod: MetaMethod, lhs: Any, rhs: Any = None) -> Value:
    """Invoke a metamethod through the global registry."""
    return get_registry().call_metamethod(metamethod, lhs, rhs)
