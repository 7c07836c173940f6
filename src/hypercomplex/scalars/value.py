"""Value scalars: ordinary copyable numpy floating-point numbers."""

from __future__ import annotations

from typing import Any

import numpy as np

from hypercomplex.data.precision_types import (
    PrecisionFormat,
    get_dtype,
    get_spec,
)
from hypercomplex.scalars.contract import ScalarField


class ValueField(ScalarField[np.floating]):
    """Scalar field over a fixed-width numpy dtype.

    Every result is cast back to the field's dtype, so a float16 field stays
    in float16 through the whole Cayley–Dickson recursion.

    Example:
        >>> field = ValueField("fp32")
        >>> field.add(field.coerce(1.5), field.coerce(2))
        np.float32(3.5)
    """

    def __init__(self, fmt: PrecisionFormat | str = PrecisionFormat.FP64) -> None:
        spec = get_spec(fmt)
        if not spec.is_value_type:
            raise ValueError(
                f"Format '{spec.format.value}' is not a value-scalar format"
            )
        self.format = spec.format
        self._type = np.dtype(get_dtype(spec.format)).type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueField):
            return NotImplemented
        return self.format is other.format

    def __hash__(self) -> int:
        return hash((ValueField, self.format))

    def __repr__(self) -> str:
        return f"ValueField({self.format.value!r})"

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype of the scalars."""
        return np.dtype(self._type)

    def coerce(self, value: Any) -> np.floating:
        if isinstance(value, str):
            value = float(value)
        elif not isinstance(value, (int, float, np.number)):
            # e.g. arbitrary-precision cells or mpmath numbers
            value = float(value)
        return self._type(value)

    def set(self, target: np.floating, value: Any) -> np.floating:
        return self.coerce(value)

    def zero(self) -> np.floating:
        return self._type(0)

    def add(self, a: np.floating, b: np.floating) -> np.floating:
        return self._type(a + b)

    def sub(self, a: np.floating, b: np.floating) -> np.floating:
        return self._type(a - b)

    def mul(self, a: np.floating, b: np.floating) -> np.floating:
        return self._type(a * b)

    def div(self, a: np.floating, b: np.floating) -> np.floating:
        return self._type(a / b)

    def neg(self, a: np.floating) -> np.floating:
        return self._type(-a)

    def eq(self, a: np.floating, b: np.floating) -> bool:
        return bool(a == b)

    def sqrt(self, a: np.floating) -> np.floating:
        return self._type(np.sqrt(a))

    def sin(self, a: np.floating) -> np.floating:
        return self._type(np.sin(a))

    def cos(self, a: np.floating) -> np.floating:
        return self._type(np.cos(a))

    def exp(self, a: np.floating) -> np.floating:
        return self._type(np.exp(a))

    def render(self, a: np.floating) -> str:
        return str(a)

    def to_float(self, a: np.floating) -> float:
        return float(a)


FLOAT64 = ValueField(PrecisionFormat.FP64)
"""Default field for numbers constructed without an explicit one."""


__all__ = ["FLOAT64", "ValueField"]
