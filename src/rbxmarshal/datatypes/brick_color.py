"""
BrickColor: a named color from the fixed palette table.

The table itself lives in ``rbxmarshal/data/brick_colors.yaml`` and is loaded
through :mod:`rbxmarshal.catalog`. Lookups that miss (unknown number or name)
fall back to the table's default color, matching how the engine treats stale
palette numbers in saved places. Variant decoding is strict instead: an
unknown number in a variant payload is a conversion error.
"""

import random as _random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..catalog import BrickColorEntry, load_table
from ..errors import error_invalid_value
from ..variant import VariantType
from .base import Datatype, payload_int
from .color3 import Color3


@dataclass(frozen=True)
class BrickColor(Datatype):
    """
    A palette color.

    Callers supply only ``number``; ``name`` and ``rgb`` are always read from
    the palette table and unknown numbers are rejected.
    """
    number: int
    name: str = field(init=False, compare=False)
    rgb: Tuple[int, int, int] = field(init=False, compare=False)

    type_name = "BrickColor"
    variant_type = VariantType.BRICK_COLOR

    def __post_init__(self):
        entry = load_table().lookup_number(self.number)
        if entry is None:
            raise error_invalid_value(self.type_name, f"unknown color number {self.number}")
        object.__setattr__(self, "name", entry.name)
        object.__setattr__(self, "rgb", entry.rgb)

    @classmethod
    def _from_entry(cls, entry: BrickColorEntry) -> "BrickColor":
        return cls(entry.number)

    # --- Lookups ---

    @classmethod
    def from_number(cls, number: int) -> "BrickColor":
        """Color with this number, or the default color when unknown."""
        table = load_table()
        return cls._from_entry(table.lookup_number(number) or table.default_entry)

    @classmethod
    def from_name(cls, name: str) -> "BrickColor":
        """First color with this name, or the default color when unknown."""
        table = load_table()
        return cls._from_entry(table.lookup_name(name) or table.default_entry)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "BrickColor":
        """Closest palette color to an RGB triple with channels in [0, 1]."""
        return cls.from_color3(Color3(r, g, b))

    @classmethod
    def from_color3(cls, color: Color3) -> "BrickColor":
        return cls._from_entry(load_table().closest(color.to_rgb_bytes()))

    @classmethod
    def palette(cls, index: int) -> "BrickColor":
        """Color at ``index`` of the 128-entry palette."""
        numbers = load_table().palette
        if not 0 <= index < len(numbers):
            raise error_invalid_value(
                cls.type_name, f"palette index {index} is outside [0, {len(numbers) - 1}]")
        return cls.from_number(numbers[index])

    @classmethod
    def random(cls, rng: Optional[_random.Random] = None) -> "BrickColor":
        """A uniformly chosen palette color."""
        numbers = load_table().palette
        return cls.from_number((rng or _random).choice(numbers))

    # Named shortcuts

    @classmethod
    def white(cls) -> "BrickColor":
        return cls.from_number(1)

    @classmethod
    def gray(cls) -> "BrickColor":
        return cls.from_number(194)

    @classmethod
    def dark_gray(cls) -> "BrickColor":
        return cls.from_number(199)

    @classmethod
    def black(cls) -> "BrickColor":
        return cls.from_number(26)

    @classmethod
    def red(cls) -> "BrickColor":
        return cls.from_number(21)

    @classmethod
    def yellow(cls) -> "BrickColor":
        return cls.from_number(24)

    @classmethod
    def green(cls) -> "BrickColor":
        return cls.from_number(28)

    @classmethod
    def blue(cls) -> "BrickColor":
        return cls.from_number(23)

    # --- Channels ---

    @property
    def r(self) -> float:
        return self.color.r

    @property
    def g(self) -> float:
        return self.color.g

    @property
    def b(self) -> float:
        return self.color.b

    @property
    def color(self) -> Color3:
        return Color3.from_rgb(*self.rgb)

    def __str__(self) -> str:
        return self.name

    def _to_payload(self):
        return self.number

    @classmethod
    def _from_payload(cls, payload):
        return cls(payload_int(payload, 32))
