"""
Tests for the host runtime exposure layer (values, registry, metamethods).
"""

import logging
import math

import pytest

from rbxmarshal import (
    BrickColor,
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    DATATYPES,
    HostRuntimeError,
    InvalidConstructorArguments,
    UDim,
    UDim2,
    Vector2,
    Vector2int16,
    Vector3,
)
from rbxmarshal.runtime import (
    DatatypeRegistry,
    MetaMethod,
    Value,
    bool_val,
    call_metamethod,
    call_method,
    construct,
    from_python,
    from_python_args,
    get_registry,
    nil_val,
    number_val,
    resolve,
    string_val,
    table_val,
    to_python,
    userdata_val,
)
from rbxmarshal.types import BOOLEAN, NIL, NUMBER, STRING, TABLE, userdata_type


# --- Value Tests ---

class TestValues:
    """Test host value wrappers."""

    def test_primitives(self):
        assert nil_val().type == NIL
        assert bool_val(True).type == BOOLEAN
        assert number_val(3).data == 3
        assert number_val(0.5).type == NUMBER
        assert string_val("hi").type == STRING

    def test_number_rejects_bool(self):
        with pytest.raises(TypeError):
            number_val(True)

    def test_from_python(self):
        assert from_python(None).type == NIL
        assert from_python(True).type == BOOLEAN
        assert from_python(2).type == NUMBER
        assert from_python("x").type == STRING
        assert from_python(UDim()).type == userdata_type("UDim")
        table = from_python([1, "a"])
        assert table.type == TABLE
        assert [v.type for v in table.data] == [NUMBER, STRING]

    def test_from_python_passes_values_through(self):
        v = number_val(1)
        assert from_python(v) is v

    def test_from_python_rejects_unknown_objects(self):
        with pytest.raises(TypeError):
            from_python(object())

    def test_to_python(self):
        assert to_python(table_val([number_val(1), table_val([string_val("a")])])) == [1, ["a"]]
        assert to_python(userdata_val(Vector2(1, 2))) == Vector2(1, 2)


# --- Registry Tests ---

class TestRegistration:
    """Test the shared registration contract."""

    def test_all_datatypes_registered(self):
        registry = get_registry()
        assert set(registry.type_names()) == {cls.type_name for cls in DATATYPES}

    def test_equality_and_string_always_registered(self):
        registry = get_registry()
        for name in registry.type_names():
            binding = registry.get_binding(name)
            assert MetaMethod.EQ in binding.metamethods
            assert MetaMethod.TOSTRING in binding.metamethods

    def test_minimal_registration(self):
        registry = DatatypeRegistry()
        binding = registry.register_datatype(UDim)
        assert binding.metamethods == {MetaMethod.EQ, MetaMethod.TOSTRING}
        assert binding.constructors == {}
        assert registry.get_binding("UDim") is binding

    def test_arithmetic_metamethods(self):
        registry = get_registry()
        assert MetaMethod.MUL in registry.get_binding("Vector3").metamethods
        assert MetaMethod.MUL not in registry.get_binding("UDim2").metamethods
        assert MetaMethod.ADD not in registry.get_binding("ColorSequence").metamethods

    def test_registration_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="rbxmarshal.runtime.builtins")
        DatatypeRegistry()
        assert "registered datatype UDim2" in caplog.text

    def test_singleton(self):
        assert get_registry() is get_registry()


class TestConstructors:
    """Test constructor and constant lookup through the registry."""

    def test_returns_userdata(self):
        value = construct("Vector3", "new", [1, 2, 3])
        assert value.type == userdata_type("Vector3")
        assert value.data == Vector3(1, 2, 3)

    def test_defaults(self):
        assert construct("Vector3", "new").data == Vector3.zero
        assert construct("Color3", "new", [0.5]).data == Color3(0.5, 0, 0)

    def test_named_factories(self):
        assert construct("UDim2", "fromScale", [0.5, 0.25]).data == UDim2.from_scale(0.5, 0.25)
        assert construct("UDim2", "fromOffset", [10, 20]).data == UDim2.from_offset(10, 20)
        assert construct("Color3", "fromRGB", [255, 128, 0]).data == Color3.from_rgb(255, 128, 0)
        assert construct("Color3", "fromHSV", [0, 1, 1]).data == Color3(1, 0, 0)
        assert construct("Color3", "fromHex", ["#00FF00"]).data == Color3(0, 1, 0)

    def test_factory_has_single_shape(self):
        with pytest.raises(HostRuntimeError):
            construct("UDim2", "fromScale", [UDim(), UDim()])

    def test_invalid_value_in_factory(self):
        with pytest.raises(HostRuntimeError) as info:
            construct("Color3", "fromHex", ["nope"])
        assert info.value.code == "E201"
        assert "hex color 'nope' is not valid" in str(info.value)

    def test_constants(self):
        registry = get_registry()
        assert registry.get_constant("Vector3", "zAxis").data == Vector3(0, 0, 1)
        assert registry.get_constant("Vector2", "one").data == Vector2(1, 1)

    def test_unknown_datatype(self):
        with pytest.raises(HostRuntimeError) as info:
            construct("CFrame", "new")
        assert info.value.code == "E401"

    def test_unknown_constructor(self):
        with pytest.raises(HostRuntimeError) as info:
            construct("UDim2", "fromPixels", [1, 2])
        assert info.value.code == "E402"
        assert str(info.value) == "UDim2.fromPixels is not a valid member"

    def test_unknown_constant(self):
        with pytest.raises(HostRuntimeError) as info:
            get_registry().get_constant("Vector2", "zAxis")
        assert info.value.code == "E402"


class TestFields:
    """Test field reads."""

    def test_udim_fields(self):
        u = construct("UDim", "new", [0.5, 10])
        registry = get_registry()
        assert registry.index(u, "Scale").data == 0.5
        assert registry.index(u, "Offset").data == 10

    def test_udim2_aliases(self):
        u = construct("UDim2", "new", [0.5, 10, 0.25, 5])
        registry = get_registry()
        assert registry.index(u, "X").data == UDim(0.5, 10)
        assert registry.index(u, "Width").data == registry.index(u, "X").data
        assert registry.index(u, "Height").data == UDim(0.25, 5)
        assert registry.index(u, "X").type == userdata_type("UDim")

    def test_computed_fields(self):
        v = construct("Vector3", "new", [0, 3, 4])
        registry = get_registry()
        assert registry.index(v, "Magnitude").data == 5.0
        assert registry.index(v, "Unit").data == Vector3(0, 0.6, 0.8)

    def test_keypoints_field(self):
        seq = ColorSequence.from_colors(Color3(1, 0, 0), Color3(0, 0, 1))
        keypoints = get_registry().index(seq, "Keypoints")
        assert keypoints.type == TABLE
        assert [k.data for k in keypoints.data] == list(seq.keypoints)
        assert get_registry().index(keypoints.data[1], "Value").data == Color3(0, 0, 1)
        assert get_registry().index(keypoints.data[1], "Time").data == 1.0

    def test_unknown_field(self):
        u = construct("UDim", "new", [0.5, 10])
        with pytest.raises(HostRuntimeError) as info:
            get_registry().index(u, "Foo")
        assert info.value.code == "E403"
        assert str(info.value) == "Foo is not a valid member of UDim"

    def test_index_primitive(self):
        with pytest.raises(HostRuntimeError) as info:
            get_registry().index(5, "X")
        assert info.value.code == "E405"


class TestMethods:
    """Test method calls."""

    def test_lerp(self):
        a = construct("UDim2", "new", [0, 0, 0, 0])
        b = construct("UDim2", "new", [1, 11, 0, 0])
        assert call_method(a, "Lerp", [b, 0.5]).data == UDim2.from_components(0.5, 6, 0, 0)

    def test_vector_methods(self):
        a = Vector3(1, 0, 0)
        b = Vector3(0, 1, 0)
        assert call_method(a, "Cross", [b]).data == Vector3(0, 0, 1)
        assert call_method(a, "Dot", [b]).data == 0.0
        assert call_method(a, "FuzzyEq", [Vector3(1, 0, 0)]).data is True
        assert call_method(a, "Angle", [b]).data == pytest.approx(1.5707963, abs=1e-6)
        assert call_method(a, "Angle", [b, Vector3(0, 0, -1)]).data < 0
        assert call_method(Vector2(1, 5), "Max", [Vector2(3, 2)]).data == Vector2(3, 5)

    def test_color_methods(self):
        c = Color3(1, 0, 0)
        assert call_method(c, "ToHex").data == "FF0000"
        assert to_python(call_method(c, "ToHSV")) == [0.0, 1.0, 1.0]

    def test_color_methods_on_unclamped_values(self):
        assert to_python(call_method(-Color3(1, 0, 0), "ToHSV")) == [0.0, 0.0, 0.0]
        assert call_method(Color3(math.nan, 0, 0), "ToHex").data == "000000"

    def test_from_hsv_rejects_infinite_hue(self):
        with pytest.raises(HostRuntimeError) as info:
            construct("Color3", "fromHSV", [math.inf, 1, 1])
        assert info.value.code == "E201"
        assert "must be finite" in str(info.value)

    def test_wrong_arguments(self):
        with pytest.raises(HostRuntimeError) as info:
            call_method(Vector3(), "Dot", [1])
        assert info.value.code == "E202"
        assert str(info.value) == "invalid arguments to method Vector3:Dot: expected (Vector3), got (number)"

    def test_surplus_arguments(self):
        with pytest.raises(HostRuntimeError):
            call_method(Color3(), "ToHex", [1])

    def test_unknown_method(self):
        with pytest.raises(HostRuntimeError) as info:
            call_method(Vector2int16(), "Lerp", [Vector2int16(), 0.5])
        assert info.value.code == "E404"


class TestMetaMethods:
    """Test operator metamethods."""

    def test_add(self):
        result = call_metamethod(MetaMethod.ADD, Vector3(1, 2, 3), Vector3(1, 1, 1))
        assert result.data == Vector3(2, 3, 4)
        assert result.type == userdata_type("Vector3")

    def test_number_on_either_side(self):
        assert call_metamethod(MetaMethod.MUL, Vector3(1, 2, 3), 2).data == Vector3(2, 4, 6)
        assert call_metamethod(MetaMethod.MUL, 2, Vector3(1, 2, 3)).data == Vector3(2, 4, 6)
        assert call_metamethod(MetaMethod.DIV, Color3(1, 1, 1), 2).data == Color3(0.5, 0.5, 0.5)

    def test_unm(self):
        assert call_metamethod(MetaMethod.UNM, UDim(0.5, 10)).data == UDim(-0.5, -10)

    def test_unm_unsupported(self):
        seq = ColorSequence.from_color(Color3())
        with pytest.raises(HostRuntimeError) as info:
            call_metamethod(MetaMethod.UNM, seq)
        assert str(info.value) == "attempt to perform unm on ColorSequence"

    def test_mismatched_operands(self):
        with pytest.raises(HostRuntimeError) as info:
            call_metamethod(MetaMethod.ADD, Vector2(1, 2), Vector3(1, 2, 3))
        assert info.value.code == "E405"
        assert str(info.value) == "attempt to perform add on Vector2 and Vector3"

    def test_operator_not_registered(self):
        with pytest.raises(HostRuntimeError) as info:
            call_metamethod(MetaMethod.MUL, UDim(0.5, 10), 2)
        assert str(info.value) == "attempt to perform mul on UDim and number"

    def test_number_divided_by_vector(self):
        with pytest.raises(HostRuntimeError):
            call_metamethod(MetaMethod.DIV, 2, Vector2(1, 2))

    def test_integer_division_by_zero(self):
        with pytest.raises(HostRuntimeError, match="division by zero"):
            call_metamethod(MetaMethod.DIV, Vector2int16(1, 1), Vector2int16(0, 1))
        with pytest.raises(HostRuntimeError, match="division by zero"):
            call_metamethod(MetaMethod.DIV, Vector2int16(1, 1), 0)

    def test_float_division_by_zero(self):
        result = call_metamethod(MetaMethod.DIV, Vector2(1, -1), 0).data
        assert result == Vector2(float("inf"), float("-inf"))

    def test_eq(self):
        assert call_metamethod(MetaMethod.EQ, UDim(0.5, 10), UDim(0.5, 10)).data is True
        assert call_metamethod(MetaMethod.EQ, UDim(0.5, 10), UDim(0.5, 11)).data is False
        assert call_metamethod(MetaMethod.EQ, Vector2(), Vector3()).data is False

    def test_tostring(self):
        value = construct("UDim2", "new", [0.5, 10, 0.25, 5])
        result = call_metamethod(MetaMethod.TOSTRING, value)
        assert result == Value("0.5, 10, 0.25, 5", STRING)

    def test_tostring_every_datatype(self):
        registry = get_registry()
        assert registry.to_string(BrickColor.from_number(21)) == "Bright red"
        assert registry.to_string(Vector3(1, 2, 3)) == "1, 2, 3"
        assert registry.to_string(ColorSequenceKeypoint(0.5, Color3(1, 0, 0))) == "0.5, 1, 0, 0"

    def test_tostring_primitives(self):
        registry = get_registry()
        assert registry.to_string(None) == "nil"
        assert registry.to_string(True) == "true"
        assert registry.to_string(0.5) == "0.5"
        assert registry.to_string(10) == "10"


class TestErrorTranslation:
    """Test that host errors keep the underlying message."""

    def test_same_message_as_native_error(self):
        shapes = get_registry().get_binding("UDim2").constructors["new"].shapes
        with pytest.raises(InvalidConstructorArguments) as native:
            resolve("UDim2.new", shapes, from_python_args([0.5, "x"]))
        with pytest.raises(HostRuntimeError) as host:
            construct("UDim2", "new", [0.5, "x"])
        assert str(host.value) == str(native.value)
        assert host.value.code == native.value.code

    def test_host_error_chains_original(self):
        keypoints = [ColorSequenceKeypoint(0, Color3()), ColorSequenceKeypoint(0.5, Color3())]
        with pytest.raises(HostRuntimeError) as info:
            construct("ColorSequence", "new", [keypoints])
        assert info.value.__cause__ is not None
        assert info.value.message == info.value.__cause__.message
