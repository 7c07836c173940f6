"""Scalar fields hypercomplex numbers are built over.

- ValueField: copyable numpy scalars (fp64, fp32, fp16, fp8)
- PrecisionContext: arbitrary-precision MPFRCell storage with explicit release
"""

from __future__ import annotations

from hypercomplex.data.precision_types import PrecisionFormat, get_spec
from hypercomplex.scalars.contract import NULL_SCOPE, OwnershipScope, ScalarField
from hypercomplex.scalars.mpfr import (
    MPFRCell,
    PrecisionContext,
    default_context,
    format_mantissa_exponent,
    get_mpfr_precision,
    set_mpfr_precision,
)
from hypercomplex.scalars.value import FLOAT64, ValueField


def make_field(
    fmt: PrecisionFormat | str = PrecisionFormat.FP64,
    *,
    bits: int | None = None,
) -> ScalarField:
    """Build the scalar field for a format name.

    Args:
        fmt: Scalar format ('fp64', 'fp32', 'fp16', 'fp8_e4m3', 'fp8_e5m2', 'mpfr').
        bits: Precision for 'mpfr'. When given, a fresh PrecisionContext is
            returned; otherwise the process-wide default context.

    Example:
        >>> make_field("mpfr", bits=64).precision
        64
    """
    spec = get_spec(fmt)
    if spec.format is PrecisionFormat.MPFR:
        if bits is None:
            return default_context()
        return PrecisionContext(bits)
    if bits is not None:
        raise ValueError(f"bits only applies to 'mpfr', not '{spec.format.value}'")
    return ValueField(spec.format)


__all__ = [
    "FLOAT64",
    "MPFRCell",
    "NULL_SCOPE",
    "OwnershipScope",
    "PrecisionContext",
    "ScalarField",
    "ValueField",
    "default_context",
    "format_mantissa_exponent",
    "get_mpfr_precision",
    "make_field",
    "set_mpfr_precision",
]
