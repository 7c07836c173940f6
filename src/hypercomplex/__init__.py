"""Hypercomplex: Cayley–Dickson algebras over value and arbitrary-precision scalars."""

__version__ = "0.1.0"

from hypercomplex.algorithms import exp, imag_part, multiply, real_part
from hypercomplex.data.precision_types import PrecisionFormat
from hypercomplex.errors import (
    AllocationLeak,
    DivisionByZero,
    HypercomplexError,
    IndexOutOfRange,
    InvalidDimension,
    InvalidExponent,
    InvalidPrecision,
    PrecisionNotSet,
    StorageReleased,
)
from hypercomplex.number import Hypercomplex, basis
from hypercomplex.scalars import (
    FLOAT64,
    MPFRCell,
    PrecisionContext,
    ScalarField,
    ValueField,
    default_context,
    get_mpfr_precision,
    make_field,
    set_mpfr_precision,
)

__all__ = [
    "__version__",
    # Numbers
    "Hypercomplex",
    "basis",
    "exp",
    "imag_part",
    "multiply",
    "real_part",
    # Scalars
    "FLOAT64",
    "MPFRCell",
    "PrecisionContext",
    "PrecisionFormat",
    "ScalarField",
    "ValueField",
    "default_context",
    "get_mpfr_precision",
    "make_field",
    "set_mpfr_precision",
    # Errors
    "AllocationLeak",
    "DivisionByZero",
    "HypercomplexError",
    "IndexOutOfRange",
    "InvalidDimension",
    "InvalidExponent",
    "InvalidPrecision",
    "PrecisionNotSet",
    "StorageReleased",
]
