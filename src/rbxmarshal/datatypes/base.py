"""
Shared datatype contract.

Every datatype is an immutable dataclass deriving from ``Datatype``. The base
class implements the conversion contract once: the discriminant checks live
here, and each datatype only supplies the mapping between itself and its
variant payload (``_to_payload`` / ``_from_payload``).
"""

from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, ClassVar, Optional

from ..errors import (
    InvalidValue,
    error_mismatched_source,
    error_unsupported_target,
)
from ..numeric import int_range
from ..variant import Variant, VariantType


class Datatype(ABC):
    """Base class for all datatypes exposed to the host runtime."""

    type_name: ClassVar[str]
    variant_type: ClassVar[VariantType]

    # --- Conversion contract ---

    @classmethod
    def from_variant(cls, variant: Variant) -> "Datatype":
        """
        Build a datatype from a tagged variant.

        Raises MismatchedSource if the variant's type is not this datatype's
        variant type, or if its payload cannot be decoded into a valid value.
        """
        if variant.type is not cls.variant_type:
            raise error_mismatched_source(variant.variant_name, cls.type_name)
        try:
            return cls._from_payload(variant.value)
        except InvalidValue as exc:
            raise error_mismatched_source(
                variant.variant_name, cls.type_name, exc.message) from exc
        except (TypeError, ValueError) as exc:
            raise error_mismatched_source(
                variant.variant_name, cls.type_name,
                f"malformed payload {variant.value!r}") from exc

    def to_variant(self, desired_type: Optional[VariantType] = None) -> Variant:
        """
        Project this datatype into a tagged variant.

        ``desired_type`` may be None or this datatype's own variant type;
        anything else raises UnsupportedTarget.
        """
        if desired_type is not None and desired_type is not self.variant_type:
            raise error_unsupported_target(self.type_name, desired_type.variant_name)
        return Variant(self.variant_type, self._to_payload())

    @abstractmethod
    def _to_payload(self) -> Any:
        """Return the variant payload for this value."""
        pass

    @classmethod
    @abstractmethod
    def _from_payload(cls, payload: Any) -> "Datatype":
        """Build a value from a variant payload."""
        pass


# Payload field readers; they raise TypeError/ValueError, which
# from_variant reports as a malformed payload.

def payload_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def payload_int(value: Any, bits: int = 32, signed: bool = True) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    lo, hi = int_range(bits, signed)
    if not lo <= value <= hi:
        raise ValueError(f"{value} does not fit in {bits} bits")
    return value


def payload_tuple(value: Any, length: int) -> tuple:
    if not isinstance(value, (tuple, list)) or len(value) != length:
        raise ValueError(f"expected a {length}-tuple, got {value!r}")
    return tuple(value)


def is_scalar(value: Any) -> bool:
    """True for plain numbers usable as scalar operands (bools excluded)."""
    return isinstance(value, Real) and not isinstance(value, bool)
