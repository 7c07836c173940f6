"""Error taxonomy for hypercomplex numbers and their scalar fields.

Every error derives from HypercomplexError and from the builtin exception a
caller would naturally expect, so both ``except InvalidDimension`` and
``except ValueError`` work.
"""


class HypercomplexError(Exception):
    """Base class for all library errors."""


class InvalidDimension(HypercomplexError, ValueError):
    """Dimension is zero, not a power of two, or unusable for the operation."""


class DivisionByZero(HypercomplexError, ZeroDivisionError):
    """Inverse or division of a number whose norm is the additive identity."""


class InvalidExponent(HypercomplexError, ValueError):
    """Power requested with an exponent that is not a positive integer."""


class IndexOutOfRange(HypercomplexError, IndexError):
    """Component access outside ``0..dim-1``."""


class PrecisionNotSet(HypercomplexError, RuntimeError):
    """Arbitrary-precision storage requested before a precision was configured."""


class InvalidPrecision(HypercomplexError, ValueError):
    """Precision is not an integer number of bits at or above the minimum."""


class StorageReleased(HypercomplexError, RuntimeError):
    """A released storage cell was read or written."""


class AllocationLeak(HypercomplexError, RuntimeError):
    """Storage cells are still live when none were expected."""


__all__ = [
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
