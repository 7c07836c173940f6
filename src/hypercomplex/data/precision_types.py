"""
Scalar Format Definitions - Single Source of Truth

This module defines every scalar format a hypercomplex number can be built
over: the fixed-width IEEE formats backed by numpy value scalars, and the
arbitrary-precision MPFR-style format backed by mpmath.

References:
    - IEEE 754-2019 Standard for Floating-Point Arithmetic
    - Fousse et al.: "MPFR: A Multiple-Precision Binary Floating-Point Library
      with Correct Rounding", ACM TOMS 33(2), 2007
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, cast

import numpy as np
from numpy.typing import DTypeLike

# Try to import ml_dtypes for FP8 support
try:
    import ml_dtypes

    HAS_FP8 = True
except ImportError:
    ml_dtypes = None  # type: ignore[assignment,unused-ignore]
    HAS_FP8 = False


class PrecisionFormat(Enum):
    """Supported scalar formats."""

    FP64 = "fp64"
    FP32 = "fp32"
    FP16 = "fp16"
    FP8_E4M3 = "fp8_e4m3"  # 4 exponent, 3 mantissa bits
    FP8_E5M2 = "fp8_e5m2"  # 5 exponent, 2 mantissa bits (wider range)
    MPFR = "mpfr"  # arbitrary precision, bits chosen per context


DEFAULT_MPFR_PRECISION: int = 128
"""Bit precision used by the CLI when none is given."""

MIN_MPFR_PRECISION: int = 2
"""Smallest precision accepted for arbitrary-precision storage."""


@dataclass(frozen=True, slots=True)
class PrecisionSpec:
    """Specification for a scalar format.

    For value formats ``bits`` is the storage width; for mpfr it is the
    significand precision, leading bit included. ``mantissa_bits`` always
    counts the stored fraction bits, so epsilon is 2^(-mantissa_bits).
    """

    format: PrecisionFormat
    bits: int
    mantissa_bits: int
    machine_epsilon: float
    is_value_type: bool  # False for formats whose storage must be released


# =============================================================================
# FORMAT SPECIFICATIONS
# =============================================================================
# Machine epsilon: 2^(-mantissa_bits)
# MPFR figures describe the default precision; the real precision lives on
# each PrecisionContext.

_PRECISION_SPECS: dict[PrecisionFormat, PrecisionSpec] = {
    PrecisionFormat.FP64: PrecisionSpec(
        format=PrecisionFormat.FP64,
        bits=64,
        mantissa_bits=52,
        machine_epsilon=2.22e-16,  # 2^(-52)
        is_value_type=True,
    ),
    PrecisionFormat.FP32: PrecisionSpec(
        format=PrecisionFormat.FP32,
        bits=32,
        mantissa_bits=23,
        machine_epsilon=1.19e-7,  # 2^(-23)
        is_value_type=True,
    ),
    PrecisionFormat.FP16: PrecisionSpec(
        format=PrecisionFormat.FP16,
        bits=16,
        mantissa_bits=10,
        machine_epsilon=9.77e-4,  # 2^(-10)
        is_value_type=True,
    ),
    PrecisionFormat.FP8_E4M3: PrecisionSpec(
        format=PrecisionFormat.FP8_E4M3,
        bits=8,
        mantissa_bits=3,
        machine_epsilon=0.125,  # 2^(-3)
        is_value_type=True,
    ),
    PrecisionFormat.FP8_E5M2: PrecisionSpec(
        format=PrecisionFormat.FP8_E5M2,
        bits=8,
        mantissa_bits=2,
        machine_epsilon=0.25,  # 2^(-2)
        is_value_type=True,
    ),
    PrecisionFormat.MPFR: PrecisionSpec(
        format=PrecisionFormat.MPFR,
        bits=DEFAULT_MPFR_PRECISION,
        mantissa_bits=DEFAULT_MPFR_PRECISION - 1,
        machine_epsilon=2.0 ** (1 - DEFAULT_MPFR_PRECISION),
        is_value_type=False,
    ),
}


# =============================================================================
# COMPARISON TOLERANCES
# =============================================================================
# equality_tol: max component-wise deviation accepted by Hypercomplex.isclose
# norm_tol: relative deviation accepted for norm identities (|ab| = |a||b|)

_COMPARISON_TOLERANCES: dict[PrecisionFormat, dict[str, float]] = {
    PrecisionFormat.FP64: {
        "equality_tol": 1e-12,
        "norm_tol": 1e-10,
    },
    PrecisionFormat.FP32: {
        "equality_tol": 1e-5,
        "norm_tol": 1e-4,
    },
    PrecisionFormat.FP16: {
        "equality_tol": 1e-2,
        "norm_tol": 5e-2,
    },
    PrecisionFormat.FP8_E4M3: {
        "equality_tol": 5e-1,
        "norm_tol": 5e-1,
    },
    PrecisionFormat.FP8_E5M2: {
        "equality_tol": 5e-1,
        "norm_tol": 5e-1,
    },
    PrecisionFormat.MPFR: {
        "equality_tol": 1e-30,
        "norm_tol": 1e-30,
    },
}


# =============================================================================
# PUBLIC API
# =============================================================================


def get_spec(fmt: PrecisionFormat | str) -> PrecisionSpec:
    """
    Get the full specification for a scalar format.

    Args:
        fmt: Scalar format (enum or string like 'fp32', 'FP16', 'fp8-e4m3')

    Returns:
        PrecisionSpec with all format properties

    Raises:
        ValueError: If format is unknown

    Example:
        >>> spec = get_spec("fp32")
        >>> spec.machine_epsilon
        1.19e-07
    """
    if isinstance(fmt, str):
        fmt = _parse_format(fmt)
    return _PRECISION_SPECS[fmt]


def get_dtype(fmt: PrecisionFormat | str) -> DTypeLike:
    """
    Get the numpy dtype backing a value-scalar format.

    Args:
        fmt: Scalar format

    Returns:
        Numpy dtype object

    Raises:
        ValueError: If format is unknown or is not a value-scalar format
        ImportError: If FP8 format requested but ml_dtypes not installed

    Example:
        >>> get_dtype("fp32")
        dtype('float32')
    """
    if isinstance(fmt, str):
        fmt = _parse_format(fmt)

    if fmt is PrecisionFormat.MPFR:
        raise ValueError(
            "Format 'mpfr' has no numpy dtype; use a PrecisionContext instead"
        )

    dtype_map: dict[PrecisionFormat, Any] = {
        PrecisionFormat.FP64: np.float64,
        PrecisionFormat.FP32: np.float32,
        PrecisionFormat.FP16: np.float16,
    }

    if fmt in dtype_map:
        return cast("DTypeLike", dtype_map[fmt])

    # FP8 formats require ml_dtypes
    if not HAS_FP8:
        raise ImportError(
            f"FP8 format '{fmt.value}' requires ml_dtypes package. "
            "Install with: pip install ml-dtypes"
        )

    fp8_map: dict[PrecisionFormat, Any] = {
        PrecisionFormat.FP8_E4M3: ml_dtypes.float8_e4m3fn,
        PrecisionFormat.FP8_E5M2: ml_dtypes.float8_e5m2,
    }
    return cast("DTypeLike", fp8_map[fmt])


def get_eps(fmt: PrecisionFormat | str, *, bits: int | None = None) -> float:
    """
    Get machine epsilon for a scalar format.

    Machine epsilon is the smallest positive number ε such that 1.0 + ε ≠ 1.0
    in the given floating-point representation.

    Args:
        fmt: Scalar format
        bits: Precision in bits, only meaningful for 'mpfr'

    Returns:
        Machine epsilon value

    Example:
        >>> get_eps("fp64")
        2.22e-16
        >>> get_eps("mpfr", bits=53)
        2.220446049250313e-16
    """
    spec = get_spec(fmt)
    if spec.format is PrecisionFormat.MPFR and bits is not None:
        return 2.0 ** (1 - bits)
    return spec.machine_epsilon


def get_tolerance(
    fmt: PrecisionFormat | str,
    tolerance_type: str = "equality_tol",
) -> float:
    """
    Get comparison tolerance for a scalar format.

    Args:
        fmt: Scalar format
        tolerance_type: One of 'equality_tol', 'norm_tol'

    Returns:
        Tolerance value

    Example:
        >>> get_tolerance("fp32", "equality_tol")
        1e-05
    """
    if isinstance(fmt, str):
        fmt = _parse_format(fmt)

    tols = _COMPARISON_TOLERANCES[fmt]
    if tolerance_type not in tols:
        valid = list(tols.keys())
        raise ValueError(f"Unknown tolerance type: {tolerance_type}. Valid: {valid}")

    return tols[tolerance_type]


def list_available_formats() -> list[PrecisionFormat]:
    """
    List all scalar formats available in current environment.

    FP8 formats are only available if ml_dtypes is installed.

    Returns:
        List of available PrecisionFormat values
    """
    available = [
        PrecisionFormat.FP64,
        PrecisionFormat.FP32,
        PrecisionFormat.FP16,
        PrecisionFormat.MPFR,
    ]

    if HAS_FP8:
        available.extend([PrecisionFormat.FP8_E4M3, PrecisionFormat.FP8_E5M2])

    return available


def parse_format(name: str) -> PrecisionFormat:
    """Parse a user-facing format name ('FP32', 'fp8-e4m3', 'mpfr')."""
    return _parse_format(name)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _parse_format(name: str) -> PrecisionFormat:
    """Parse a string into a PrecisionFormat enum."""
    normalized = name.lower().replace("-", "_").replace(" ", "_")

    for fmt in PrecisionFormat:
        if fmt.value == normalized:
            return fmt

    valid = [f.value for f in PrecisionFormat]
    raise ValueError(f"Unknown precision format: '{name}'. Valid: {valid}")
