"""Arbitrary-precision scalars with explicit storage lifecycle.

Each scalar is an MPFRCell: a handle to precision-tagged storage that is
allocated by a PrecisionContext, overwritten in place, and explicitly
released. Arithmetic uses mpmath's correctly rounded ``libmp`` kernels with
round-to-nearest, the precision being passed explicitly on every call, so no
mpmath global state is touched.

Precision is a property of the context, not of the process. A process-wide
default context backs ``get_mpfr_precision`` / ``set_mpfr_precision``; code
that needs isolation creates its own PrecisionContext.

Key Invariants:
- A cell keeps the precision it was allocated with; changing the context's
  precision only affects cells allocated afterwards.
- Every allocation is counted until released (``live_allocations``).
- While a scope is active, every new cell is owned by exactly one scope.

References:
- Fousse et al., "MPFR: A Multiple-Precision Binary Floating-Point Library
  with Correct Rounding", ACM TOMS 33(2), 2007
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import numpy as np
from mpmath.libmp import (
    finf,
    fnan,
    fninf,
    from_float,
    from_int,
    from_str,
    fzero,
    mpf_add,
    mpf_cos,
    mpf_div,
    mpf_eq,
    mpf_exp,
    mpf_mul,
    mpf_neg,
    mpf_pos,
    mpf_sin,
    mpf_sqrt,
    mpf_sub,
    round_nearest,
    to_float,
    to_str,
)

from hypercomplex.data.precision_types import (
    MIN_MPFR_PRECISION,
    PrecisionFormat,
    get_eps,
)
from hypercomplex.errors import (
    AllocationLeak,
    InvalidPrecision,
    PrecisionNotSet,
    StorageReleased,
)
from hypercomplex.scalars.contract import OwnershipScope, Releasable, ScalarField

logger = logging.getLogger(__name__)

# mpmath raw values are (sign, mantissa, exponent, bitcount) tuples
RawMPF = tuple

_R = TypeVar("_R", bound=Releasable)

_SCIENTIFIC = re.compile(r"^([-+]?)(\d+)(?:\.(\d*))?(?:e([-+]?\d+))?$")


class MPFRCell:
    """Handle to one arbitrary-precision storage cell.

    Cells are created by ``PrecisionContext.allocate`` (or any context
    operation) and must be released exactly once, either explicitly or by
    the scope that owns them. Reading a released cell raises StorageReleased.
    """

    __slots__ = ("_raw", "_precision", "_context")

    def __init__(self, context: PrecisionContext, precision: int, raw: RawMPF) -> None:
        self._context = context
        self._precision = precision
        self._raw: RawMPF | None = raw

    @property
    def precision(self) -> int:
        """Precision in bits this cell was allocated with."""
        return self._precision

    @property
    def context(self) -> PrecisionContext:
        """Context that allocated this cell."""
        return self._context

    @property
    def released(self) -> bool:
        return self._raw is None

    @property
    def raw(self) -> RawMPF:
        """The mpmath raw value; raises StorageReleased after release."""
        if self._raw is None:
            raise StorageReleased("cell has been released")
        return self._raw

    def store(self, raw: RawMPF) -> None:
        """Overwrite the cell in place, rounding to the cell's own precision."""
        if self._raw is None:
            raise StorageReleased("cannot write to a released cell")
        self._raw = mpf_pos(raw, self._precision, round_nearest)

    def set(self, value: Any) -> MPFRCell:
        """Overwrite with ``value`` (cell, number, numeric string or mpmath value)."""
        return self._context.set(self, value)

    def set_zero(self) -> None:
        self.store(fzero)

    def release(self) -> None:
        """Give the storage back. Releasing twice is harmless."""
        if self._raw is None:
            return
        self._raw = None
        self._context._on_release()

    def __enter__(self) -> MPFRCell:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __float__(self) -> float:
        return to_float(self.raw)

    def __str__(self) -> str:
        return self._context.render(self)

    def __repr__(self) -> str:
        if self._raw is None:
            return f"MPFRCell(<released>, precision={self._precision})"
        digits = _decimal_digits(self._precision)
        return f"MPFRCell({to_str(self._raw, digits)}, precision={self._precision})"


class PrecisionContext(ScalarField[MPFRCell]):
    """Arbitrary-precision scalar field and allocator for MPFRCell storage.

    Args:
        precision: Bits of precision for new cells. May be left unset and
            configured later; allocating before it is set raises
            PrecisionNotSet.

    Example:
        >>> ctx = PrecisionContext(256)
        >>> with ctx.coerce("2") as two, ctx.sqrt(two) as root:
        ...     float(root)
        1.4142135623730951
        >>> ctx.live_allocations
        0
    """

    mutable = True
    format = PrecisionFormat.MPFR

    def __init__(self, precision: int | None = None) -> None:
        self._precision: int | None = None
        self._live = 0
        self._scopes: list[OwnershipScope] = []
        if precision is not None:
            self.precision = precision

    def __repr__(self) -> str:
        return (
            f"PrecisionContext(precision={self._precision}, "
            f"live_allocations={self._live})"
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def precision(self) -> int | None:
        """Bits of precision for newly allocated cells (None while unset)."""
        return self._precision

    @precision.setter
    def precision(self, bits: int) -> None:
        if isinstance(bits, bool) or not isinstance(bits, (int, np.integer)):
            raise InvalidPrecision(f"precision must be an integer, got {bits!r}")
        if bits < MIN_MPFR_PRECISION:
            raise InvalidPrecision(
                f"precision must be at least {MIN_MPFR_PRECISION} bits, got {bits}"
            )
        logger.debug("MPFR precision set to %d bits (was %s)", bits, self._precision)
        self._precision = int(bits)

    def _require_precision(self) -> int:
        if self._precision is None:
            raise PrecisionNotSet(
                "MPFR precision is not set; call set_mpfr_precision() "
                "or pass a precision to PrecisionContext"
            )
        return self._precision

    # ------------------------------------------------------------------
    # Allocation accounting
    # ------------------------------------------------------------------

    @property
    def live_allocations(self) -> int:
        """Number of cells allocated and not yet released."""
        return self._live

    def assert_no_leaks(self) -> None:
        """Raise AllocationLeak if any cell is still live."""
        if self._live:
            logger.warning("%d MPFR cells still allocated", self._live)
            raise AllocationLeak(f"{self._live} MPFR cells still allocated")

    def allocate(self, value: Any = 0) -> MPFRCell:
        """Allocate a cell at the current precision holding ``value``."""
        return self._new_cell(self._to_raw(value))

    def _new_cell(self, raw: RawMPF) -> MPFRCell:
        precision = self._require_precision()
        cell = MPFRCell(self, precision, mpf_pos(raw, precision, round_nearest))
        self._live += 1
        return self.track(cell)

    def _on_release(self) -> None:
        self._live -= 1

    # ------------------------------------------------------------------
    # Ownership scopes
    # ------------------------------------------------------------------

    @contextmanager
    def scope(self) -> Iterator[OwnershipScope]:
        parent = self._scopes[-1] if self._scopes else None
        scope = OwnershipScope(parent)
        self._scopes.append(scope)
        try:
            yield scope
        finally:
            self._scopes.pop()
            scope.close()

    def track(self, resource: _R) -> _R:
        if self._scopes:
            self._scopes[-1].track(resource)
        return resource

    def untrack(self, resource: Releasable) -> None:
        for scope in reversed(self._scopes):
            if scope.disown(resource):
                return

    def release(self, x: MPFRCell) -> None:
        x.release()

    # ------------------------------------------------------------------
    # Scalar contract
    # ------------------------------------------------------------------

    def coerce(self, value: Any) -> MPFRCell:
        return self.allocate(value)

    def set(self, target: MPFRCell, value: Any) -> MPFRCell:
        target.store(self._to_raw(value))
        return target

    def zero(self) -> MPFRCell:
        return self._new_cell(fzero)

    def add(self, a: MPFRCell, b: MPFRCell) -> MPFRCell:
        return self._compute(mpf_add, a.raw, b.raw)

    def sub(self, a: MPFRCell, b: MPFRCell) -> MPFRCell:
        return self._compute(mpf_sub, a.raw, b.raw)

    def mul(self, a: MPFRCell, b: MPFRCell) -> MPFRCell:
        return self._compute(mpf_mul, a.raw, b.raw)

    def div(self, a: MPFRCell, b: MPFRCell) -> MPFRCell:
        return self._compute(mpf_div, a.raw, b.raw)

    def neg(self, a: MPFRCell) -> MPFRCell:
        return self._compute(mpf_neg, a.raw)

    def eq(self, a: MPFRCell, b: MPFRCell) -> bool:
        return bool(mpf_eq(a.raw, b.raw))

    def sqrt(self, a: MPFRCell) -> MPFRCell:
        return self._compute(mpf_sqrt, a.raw)

    def sin(self, a: MPFRCell) -> MPFRCell:
        return self._compute(mpf_sin, a.raw)

    def cos(self, a: MPFRCell) -> MPFRCell:
        return self._compute(mpf_cos, a.raw)

    def exp(self, a: MPFRCell) -> MPFRCell:
        return self._compute(mpf_exp, a.raw)

    def _compute(self, kernel: Callable[..., RawMPF], *args: RawMPF) -> MPFRCell:
        # Result is computed before allocation so a failing kernel leaks nothing.
        precision = self._require_precision()
        return self._new_cell(kernel(*args, precision, round_nearest))

    def render(self, a: MPFRCell) -> str:
        """Mantissa/exponent pair ``<digits>E<exp>`` meaning 0.<digits> × 10^exp."""
        return format_mantissa_exponent(a.raw, a.precision)

    def to_float(self, a: MPFRCell) -> float:
        return to_float(a.raw)

    def tolerance(self, kind: str = "equality_tol") -> float:
        # 128 ulps at the working precision, never tighter than the table value
        if self._precision is None:
            return super().tolerance(kind)
        eps = get_eps(self.format, bits=self._precision)
        return max(128 * eps, super().tolerance(kind))

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _to_raw(self, value: Any) -> RawMPF:
        precision = self._require_precision()
        if isinstance(value, MPFRCell):
            return value.raw
        if hasattr(value, "_mpf_"):
            return value._mpf_
        if isinstance(value, bool):
            return from_int(int(value))
        if isinstance(value, (int, np.integer)):
            return from_int(int(value))
        if isinstance(value, (float, np.floating)):
            return from_float(float(value))
        if isinstance(value, str):
            return from_str(value.strip(), precision, round_nearest)
        if hasattr(value, "__float__"):
            return from_float(float(value))
        raise TypeError(f"cannot convert {type(value).__name__} to an MPFR value")


def format_mantissa_exponent(raw: RawMPF, precision: int) -> str:
    """Render a raw value as ``[-]<digits>E<exp>`` with value 0.<digits> × 10^exp.

    Uses enough decimal digits to round-trip ``precision`` bits.
    """
    if raw == fzero:
        return "0E0"
    if raw == fnan:
        return "@NaN@"
    if raw == finf:
        return "@Inf@"
    if raw == fninf:
        return "-@Inf@"

    digits = _decimal_digits(precision)
    text = to_str(raw, digits, strip_zeros=False, min_fixed=0, max_fixed=0)
    match = _SCIENTIFIC.match(text)
    if match is None:
        raise ValueError(f"unexpected mpmath rendering: {text!r}")

    sign, whole, fraction, exponent = match.groups()
    mantissa = (whole + (fraction or "")).lstrip("0")
    leading_zeros = len(whole + (fraction or "")) - len(mantissa)
    mantissa = (mantissa + "0" * digits)[:digits]
    exponent10 = int(exponent or 0) + len(whole) - leading_zeros
    sign = "-" if sign == "-" else ""
    return f"{sign}{mantissa}E{exponent10}"


def _decimal_digits(precision: int) -> int:
    # Same digit count MPFR uses for a round-trippable base-10 string.
    return 1 + math.ceil(precision * math.log10(2))


_default_context = PrecisionContext()


def default_context() -> PrecisionContext:
    """Process-wide context used when no explicit one is given."""
    return _default_context


def get_mpfr_precision() -> int | None:
    """Precision in bits of the process-wide context (None while unset)."""
    return _default_context.precision


def set_mpfr_precision(bits: int) -> None:
    """Set the precision of the process-wide context.

    Treat this as configuration: set once at startup, not concurrently with
    number construction. Existing numbers keep their precision.
    """
    _default_context.precision = bits


__all__ = [
    "MPFRCell",
    "PrecisionContext",
    "default_context",
    "format_mantissa_exponent",
    "get_mpfr_precision",
    "set_mpfr_precision",
]
