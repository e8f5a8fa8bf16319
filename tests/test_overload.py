"""
Tests for constructor overload resolution.
"""

import math

import pytest

from rbxmarshal import (
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    HostRuntimeError,
    InvalidConstructorArguments,
    InvalidMethodArguments,
    UDim,
    UDim2,
)
from rbxmarshal.runtime import (
    Shape,
    bind_method,
    construct,
    find_shape,
    from_python_args,
    nil_val,
    number_val,
    resolve,
    shape,
    string_val,
)
from rbxmarshal.types import (
    FLOAT, INT32, STRING,
    make_list_type,
    make_optional_type,
    userdata_type,
)


def udim2_new(*args):
    return construct("UDim2", "new", args).data


class TestUDim2New:
    """Test the ordered UDim2.new shapes."""

    def test_no_arguments(self):
        assert udim2_new() == UDim2(UDim(0, 0), UDim(0, 0))

    def test_two_udims(self):
        result = udim2_new(UDim(0.5, 10), UDim(0.25, 5))
        assert result.x == UDim(0.5, 10)
        assert result.y == UDim(0.25, 5)

    def test_four_numbers_match_two_udims(self):
        assert udim2_new(0.5, 10, 0.25, 5) == udim2_new(UDim(0.5, 10), UDim(0.25, 5))

    def test_missing_udim_defaults_to_zero(self):
        assert udim2_new(UDim(0.5, 10)) == UDim2(UDim(0.5, 10), UDim())
        assert udim2_new(None, UDim(0, 5)) == UDim2(UDim(), UDim(0, 5))

    def test_missing_numbers_default_to_zero(self):
        assert udim2_new(0.5, 10) == UDim2(UDim(0.5, 10), UDim())
        assert udim2_new(0.5, None, 0.25) == UDim2(UDim(0.5, 0), UDim(0.25, 0))

    def test_string_rejected(self):
        with pytest.raises(HostRuntimeError) as info:
            udim2_new(0.5, "x")
        assert info.value.code == "E201"
        assert str(info.value) == (
            "invalid arguments to constructor UDim2.new: no recognized argument "
            "shape matched (number, string); expected one of (), (UDim?, UDim?), "
            "(number?, int32?, number?, int32?)"
        )

    def test_surplus_arguments_rejected(self):
        """Test that every supplied argument must be consumed, even nil."""
        with pytest.raises(HostRuntimeError, match="E201|no recognized"):
            udim2_new(UDim(), UDim(), None)
        with pytest.raises(HostRuntimeError):
            udim2_new(0.5, 10, 0.25, 5, None)

    def test_mixed_udim_and_number_rejected(self):
        with pytest.raises(HostRuntimeError):
            udim2_new(UDim(), 0.5)

    def test_string_form(self):
        value = construct("UDim2", "new", [0.5, 10, 0.25, 5])
        assert str(value.data) == "0.5, 10, 0.25, 5"


class TestIntegerParameters:
    """Test int32/int16/uint8 parameter matching."""

    def test_truncates_toward_zero(self):
        assert construct("UDim", "new", [0.5, 10.9]).data == UDim(0.5, 10)
        assert construct("UDim", "new", [0.5, -10.9]).data == UDim(0.5, -10)

    def test_out_of_range(self):
        with pytest.raises(HostRuntimeError):
            construct("UDim", "new", [0, 2 ** 31])
        with pytest.raises(HostRuntimeError):
            construct("Vector2int16", "new", [40000, 0])
        with pytest.raises(HostRuntimeError):
            construct("Color3", "fromRGB", [256, 0, 0])

    def test_non_finite(self):
        with pytest.raises(HostRuntimeError):
            construct("UDim", "new", [0, math.inf])
        with pytest.raises(HostRuntimeError):
            construct("UDim", "new", [0, math.nan])

    def test_numeric_strings_not_coerced(self):
        with pytest.raises(HostRuntimeError):
            construct("UDim", "new", [0, "10"])


class TestColorSequenceNew:
    """Test ColorSequence.new shapes and rejected values."""

    red, blue = Color3(1, 0, 0), Color3(0, 0, 1)

    def test_single_color(self):
        assert construct("ColorSequence", "new", [self.red]).data == ColorSequence.from_color(self.red)

    def test_two_colors(self):
        result = construct("ColorSequence", "new", [self.red, self.blue]).data
        assert result == ColorSequence.from_colors(self.red, self.blue)

    def test_keypoint_table(self):
        keypoints = [ColorSequenceKeypoint(0, self.red), ColorSequenceKeypoint(1, self.blue)]
        result = construct("ColorSequence", "new", [keypoints]).data
        assert result.keypoints == tuple(keypoints)

    def test_invalid_keypoints_reported_as_constructor_error(self):
        keypoints = [ColorSequenceKeypoint(0.2, self.red), ColorSequenceKeypoint(1, self.blue)]
        with pytest.raises(HostRuntimeError) as info:
            construct("ColorSequence", "new", [keypoints])
        assert info.value.code == "E201"
        assert str(info.value) == (
            "invalid arguments to constructor ColorSequence.new: "
            "invalid ColorSequence: the first keypoint must be at time 0"
        )

    def test_empty_table(self):
        with pytest.raises(HostRuntimeError, match="at least 2"):
            construct("ColorSequence", "new", [[]])

    def test_mixed_table_matches_no_shape(self):
        with pytest.raises(HostRuntimeError, match=r"matched \(table\)"):
            construct("ColorSequence", "new", [[ColorSequenceKeypoint(0, self.red), 5]])

    def test_keypoint_time_out_of_range(self):
        with pytest.raises(HostRuntimeError, match="outside"):
            construct("ColorSequenceKeypoint", "new", [1.5, self.red])


class TestShapes:
    """Test Shape, resolve and bind_method directly."""

    udim = userdata_type("UDim")

    def test_signature(self):
        s = Shape((FLOAT, make_optional_type(INT32)), UDim)
        assert s.signature() == "(number, int32?)"
        assert Shape((), UDim).signature() == "()"
        assert Shape((make_list_type(self.udim),), UDim).signature() == "(table<UDim>)"

    def test_decorator(self):
        @shape(FLOAT, INT32)
        def build(scale, offset):
            return UDim(scale, offset)

        assert isinstance(build, Shape)
        assert build.params == (FLOAT, INT32)

    def test_required_parameter_needs_argument(self):
        s = Shape((FLOAT, FLOAT), UDim)
        assert s.matches([number_val(1), number_val(2)])
        assert not s.matches([number_val(1)])
        assert not s.matches([number_val(1), nil_val()])

    def test_find_shape_first_match_wins(self):
        first = Shape((make_optional_type(FLOAT),), UDim)
        second = Shape((FLOAT,), UDim)
        assert find_shape([first, second], [number_val(1)]) is first
        assert find_shape([first, second], [string_val("x")]) is None

    def test_resolve_converts_after_match(self):
        calls = []

        def build(scale, offset):
            calls.append((scale, offset))
            return UDim(scale, offset or 0)

        shapes = [
            Shape((STRING,), lambda s: pytest.fail("string shape must not be used")),
            Shape((FLOAT, make_optional_type(INT32)), build),
        ]
        result = resolve("UDim.new", shapes, from_python_args([0.5]))
        assert result == UDim(0.5, 0)
        assert calls == [(0.5, None)]

    def test_resolve_raises_constructor_error(self):
        with pytest.raises(InvalidConstructorArguments) as info:
            resolve("UDim.new", [Shape((FLOAT,), UDim)], from_python_args(["x"]))
        assert "UDim.new" in info.value.message
        assert "(string)" in info.value.message

    def test_bind_method(self):
        vector3 = userdata_type("Vector3")
        with pytest.raises(InvalidMethodArguments) as info:
            bind_method("Vector3:Dot", (vector3,), from_python_args([1]))
        assert str(info.value) == "invalid arguments to method Vector3:Dot: expected (Vector3), got (number)"
        assert info.value.code == "E202"

    def test_bind_method_fills_missing_optional(self):
        assert bind_method("Color3:Lerp", (FLOAT, make_optional_type(FLOAT)),
                           from_python_args([0.5])) == [0.5, None]
