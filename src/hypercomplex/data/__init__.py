"""Data module for scalar formats and algebra descriptions."""

from hypercomplex.data.algebras import (
    AlgebraInfo,
    algebra_info,
    check_dimension,
    is_power_of_two,
    list_algebras,
)
from hypercomplex.data.precision_types import (
    DEFAULT_MPFR_PRECISION,
    HAS_FP8,
    MIN_MPFR_PRECISION,
    PrecisionFormat,
    PrecisionSpec,
    get_dtype,
    get_eps,
    get_spec,
    get_tolerance,
    list_available_formats,
    parse_format,
)

__all__ = [
    "AlgebraInfo",
    "DEFAULT_MPFR_PRECISION",
    "HAS_FP8",
    "MIN_MPFR_PRECISION",
    "PrecisionFormat",
    "PrecisionSpec",
    "algebra_info",
    "check_dimension",
    "get_dtype",
    "get_eps",
    "get_spec",
    "get_tolerance",
    "is_power_of_two",
    "list_algebras",
    "list_available_formats",
    "parse_format",
]
