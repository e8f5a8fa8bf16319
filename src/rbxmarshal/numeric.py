"""
Numeric helpers shared by every datatype.

Datatype fields are stored as plain Python ``float``/``int`` values, but they
follow the semantics of the engine's fixed-width types:

- float fields are quantized to IEEE float32
- integer fields wrap around their declared width (two's complement)
- float -> integer casts saturate, truncate toward zero, and map NaN to 0

numpy is used for all float32 arithmetic so results match what the engine
computes; no numpy scalar ever leaves this module.
"""

import math
from typing import Iterable, Sequence, Tuple

import numpy as np


INT16_MIN = -(2 ** 15)
INT16_MAX = 2 ** 15 - 1
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT8_MAX = 2 ** 8 - 1


def int_range(bits: int, signed: bool = True) -> Tuple[int, int]:
    """Return the inclusive (min, max) range of an integer type."""
    if signed:
        return -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    return 0, 2 ** bits - 1


# =============================================================================
# Scalar conversions
# =============================================================================

def f32(x: float) -> float:
    """Quantize a number to float32 and return it as a Python float."""
    with np.errstate(over="ignore"):
        return float(np.float32(x))


def wrap_int(value: int, bits: int, signed: bool = True) -> int:
    """Wrap an integer into the given width (two's complement)."""
    lo, _ = int_range(bits, signed)
    span = 2 ** bits
    return (int(value) - lo) % span + lo


def saturate_int(x: float, bits: int, signed: bool = True) -> int:
    """
    Cast a float to an integer type the way the engine does.

    Truncates toward zero, saturates at the bounds of the type, and maps
    NaN to 0.
    """
    if math.isnan(x):
        return 0
    lo, hi = int_range(bits, signed)
    if x <= lo:
        return lo
    if x >= hi:
        return hi
    return int(x)


def round_half_away(x: float) -> float:
    """Round to nearest, ties away from zero (not Python's banker's rounding)."""
    if math.isnan(x) or math.isinf(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


def offset_from_float(x: float) -> int:
    """
    Convert an interpolated float back into an int32 offset.

    The value is clamped to the float32 image of the int32 range first,
    then rounded, then cast. The order matters near the int32 extremes.
    """
    lo = f32(INT32_MIN)
    hi = f32(INT32_MAX)
    if not math.isnan(x):
        x = min(max(x, lo), hi)
    return saturate_int(round_half_away(x), 32)


def format_number(x: float) -> str:
    """
    Render a float32 field for string conversion.

    Uses the shortest representation that round-trips through float32 and
    drops a trailing ``.0``: ``0.5``, ``10``, ``0.1``, ``inf``, ``NaN``.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return np.format_float_positional(np.float32(x), trim="-")


# =============================================================================
# Vector math
# =============================================================================

def _as_f32(values: Iterable[float]) -> np.ndarray:
    with np.errstate(over="ignore"):
        return np.asarray(list(values), dtype=np.float32)


def _to_floats(array: np.ndarray) -> Tuple[float, ...]:
    return tuple(float(v) for v in array)


def lerp(a: Sequence[float], b: Sequence[float], alpha: float) -> Tuple[float, ...]:
    """
    Interpolate two equal-length float32 tuples componentwise.

    Computed as ``a * (1 - alpha) + b * alpha`` so that alpha 0 and 1
    reproduce the endpoints exactly.
    """
    t = np.float32(f32(alpha))
    with np.errstate(over="ignore", invalid="ignore"):
        result = _as_f32(a) * (np.float32(1.0) - t) + _as_f32(b) * t
    return _to_floats(result)


def add(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    with np.errstate(over="ignore", invalid="ignore"):
        return _to_floats(_as_f32(a) + _as_f32(b))


def sub(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    with np.errstate(over="ignore", invalid="ignore"):
        return _to_floats(_as_f32(a) - _as_f32(b))


def mul(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    with np.errstate(over="ignore", invalid="ignore"):
        return _to_floats(_as_f32(a) * _as_f32(b))


def div(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    """Componentwise float32 division; division by zero yields inf or NaN."""
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return _to_floats(_as_f32(a) / _as_f32(b))


def neg(a: Sequence[float]) -> Tuple[float, ...]:
    return _to_floats(-_as_f32(a))


def scale(a: Iterable[float], factor: float) -> Tuple[float, ...]:
    a = list(a)
    return mul(a, [factor] * len(a))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.dot(_as_f32(a), _as_f32(b)))


def cross3(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    with np.errstate(over="ignore", invalid="ignore"):
        return _to_floats(np.cross(_as_f32(a), _as_f32(b)))


def magnitude(a: Sequence[float]) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.linalg.norm(_as_f32(a)).astype(np.float32))


def normalize(a: Sequence[float]) -> Tuple[float, ...]:
    """Unit vector; a zero-length input produces NaN components."""
    length = np.float32(magnitude(a))
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        return _to_floats(_as_f32(a) / length)


def minimum(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    return _to_floats(np.minimum(_as_f32(a), _as_f32(b)))


def maximum(a: Sequence[float], b: Sequence[float]) -> Tuple[float, ...]:
    return _to_floats(np.maximum(_as_f32(a), _as_f32(b)))


# =============================================================================
# Integer vector math
# =============================================================================

def int_add(a: Sequence[int], b: Sequence[int], bits: int) -> Tuple[int, ...]:
    return tuple(wrap_int(x + y, bits) for x, y in zip(a, b))


def int_sub(a: Sequence[int], b: Sequence[int], bits: int) -> Tuple[int, ...]:
    return tuple(wrap_int(x - y, bits) for x, y in zip(a, b))


def int_mul(a: Sequence[int], b: Sequence[int], bits: int) -> Tuple[int, ...]:
    return tuple(wrap_int(x * y, bits) for x, y in zip(a, b))


def trunc_div(x: int, y: int) -> int:
    """Integer division truncating toward zero; raises ZeroDivisionError."""
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def int_div(a: Sequence[int], b: Sequence[int], bits: int) -> Tuple[int, ...]:
    return tuple(wrap_int(trunc_div(x, y), bits) for x, y in zip(a, b))


def int_neg(a: Sequence[int], bits: int) -> Tuple[int, ...]:
    return tuple(wrap_int(-x, bits) for x in a)
