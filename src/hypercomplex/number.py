"""Hypercomplex numbers of dimension 2^n over a pluggable scalar field.

The same class serves both scalar models:

- over a ValueField the components are plain numpy scalars and every
  lifecycle hook is free;
- over a PrecisionContext the components are MPFRCell handles, each
  operation allocates its outputs at the context's current precision and
  releases its temporaries through ownership scopes, including when it
  raises.

Numbers over a PrecisionContext own their cells. Release them explicitly
with ``release()`` or use them as context managers:

    >>> from hypercomplex import PrecisionContext
    >>> ctx = PrecisionContext(128)
    >>> with Hypercomplex([1, 2], ctx) as a, a * a as sq:
    ...     print(sq.tolist())
    [-3.0, 4.0]
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Iterator
from typing import Any

from hypercomplex.algorithms.cayley_dickson import multiply
from hypercomplex.data.algebras import algebra_info, check_dimension
from hypercomplex.errors import (
    DivisionByZero,
    IndexOutOfRange,
    InvalidDimension,
    InvalidExponent,
)
from hypercomplex.scalars.contract import ScalarField
from hypercomplex.scalars.value import FLOAT64


class Hypercomplex:
    """Element of the Cayley–Dickson algebra of dimension ``dim``.

    Component 0 is the real part, components 1..dim-1 the imaginary part.

    Args:
        components: Raw values (numbers, numeric strings, scalars of any
            field) or an existing Hypercomplex to copy.
        field: Scalar field of the components. Defaults to the field of a
            copied number, otherwise float64 value scalars.
        dim: Expected dimension; checked against ``len(components)``.

    Raises:
        InvalidDimension: If the dimension is 0, not a power of two, or
            disagrees with ``dim``.

    Example:
        >>> i = Hypercomplex([0, 1, 0, 0])
        >>> j = Hypercomplex([0, 0, 1, 0])
        >>> print(i * j)
        0.0 0.0 0.0 1.0
    """

    __slots__ = ("_field", "_components")

    def __init__(
        self,
        components: Iterable[Any] | Hypercomplex,
        field: ScalarField | None = None,
        *,
        dim: int | None = None,
    ) -> None:
        if isinstance(components, Hypercomplex):
            values = list(components._components)
            if field is None:
                field = components._field
        else:
            values = list(components)
        if field is None:
            field = FLOAT64

        if dim is not None and dim != len(values):
            raise InvalidDimension(
                f"invalid dimension: expected {dim} components, got {len(values)}"
            )
        check_dimension(len(values))

        with field.scope() as scope:
            cells = [field.coerce(value) for value in values]
            scope.disown_all(cells)

        self._field = field
        self._components = cells
        field.track(self)

    @classmethod
    def adopt(cls, field: ScalarField, cells: list[Any]) -> Hypercomplex:
        """Build a number that takes ownership of already allocated scalars.

        The scalars must be fresh results of ``field`` operations that no
        other number holds. They are removed from whichever scope owns them
        and the new number is registered with the active scope instead.
        """
        check_dimension(len(cells))
        number = cls.__new__(cls)
        number._field = field
        number._components = cells
        for cell in cells:
            field.untrack(cell)
        field.track(number)
        return number

    def _build(self, cells: list[Any]) -> Hypercomplex:
        return type(self).adopt(self._field, cells)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def release(self) -> None:
        """Give component storage back to the field. Safe to call twice."""
        for cell in self._components:
            self._field.release(cell)

    def __enter__(self) -> Hypercomplex:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def copy(self) -> Hypercomplex:
        """Deep copy with independent storage."""
        return type(self)(self)

    def __copy__(self) -> Hypercomplex:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Hypercomplex:
        return self.copy()

    def assign(self, other: Hypercomplex) -> Hypercomplex:
        """Overwrite this number's components with ``other``'s, in place.

        Raises:
            InvalidDimension: If the dimensions differ.
            TypeError: If the scalar fields differ.
        """
        if other is self:
            return self
        self.ensure_compatible(other)
        field = self._field
        for i, value in enumerate(other._components):
            self._components[i] = field.set(self._components[i], value)
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        """Algebraic dimension."""
        return len(self._components)

    @property
    def field(self) -> ScalarField:
        return self._field

    @property
    def algebra(self) -> str:
        """Name of the algebra this number lives in ('quaternion', ...)."""
        return algebra_info(self.dim).name

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._components))

    def __getitem__(self, i: int) -> Any:
        return self._components[check_index(i, self.dim)]

    def __setitem__(self, i: int, value: Any) -> None:
        i = check_index(i, self.dim)
        self._components[i] = self._field.set(self._components[i], value)

    def ensure_compatible(self, other: object) -> None:
        """Check that ``other`` can be combined with this number.

        Raises:
            TypeError: If ``other`` is not a Hypercomplex over the same field.
            InvalidDimension: If the dimensions differ.
        """
        if not isinstance(other, Hypercomplex):
            raise TypeError(f"expected Hypercomplex, got {type(other).__name__}")
        if other.dim != self.dim:
            raise InvalidDimension(
                f"dimension mismatch: {self.dim} vs {other.dim}"
            )
        if other._field != self._field:
            raise TypeError(
                f"scalar field mismatch: {self._field!r} vs {other._field!r}"
            )

    # ------------------------------------------------------------------
    # Unary operations
    # ------------------------------------------------------------------

    def conjugate(self) -> Hypercomplex:
        """Negate every component except the real part."""
        field = self._field
        with field.scope() as scope:
            cells = [field.copy(self._components[0])]
            cells.extend(field.neg(c) for c in self._components[1:])
            return scope.keep(self._build(cells))

    def __invert__(self) -> Hypercomplex:
        return self.conjugate()

    def __neg__(self) -> Hypercomplex:
        field = self._field
        with field.scope() as scope:
            cells = [field.neg(c) for c in self._components]
            return scope.keep(self._build(cells))

    def __pos__(self) -> Hypercomplex:
        return self.copy()

    def norm(self) -> Any:
        """Euclidean norm, as a scalar of this number's field.

        Over a PrecisionContext the result is a new MPFRCell owned by the
        caller; see ``norm_into`` for the out-parameter form.
        """
        field = self._field
        with field.scope() as scope:
            total = field.zero()
            for c in self._components:
                total = field.add(total, field.mul(c, c))
            return scope.keep(field.sqrt(total))

    def norm_into(self, out: Any) -> Any:
        """Write the norm into caller-supplied storage and return it.

        Raises:
            TypeError: If the field's scalars cannot be written in place.
        """
        field = self._field
        if not field.mutable:
            raise TypeError(
                f"{field!r} scalars are immutable values; use norm() instead"
            )
        with field.scope():
            return field.set(out, self.norm())

    def inverse(self) -> Hypercomplex:
        """Multiplicative inverse ``conjugate(x) / norm(x)**2``.

        Raises:
            DivisionByZero: If the norm is zero.
        """
        field = self._field
        with field.scope() as scope:
            norm = self.norm()
            if field.eq(norm, field.zero()):
                raise DivisionByZero("division by zero")
            norm2 = field.mul(norm, norm)
            cells = [field.div(self._components[0], norm2)]
            cells.extend(
                field.div(field.neg(c), norm2) for c in self._components[1:]
            )
            return scope.keep(self._build(cells))

    def expand(self, newdim: int) -> Hypercomplex:
        """Embed into dimension ``newdim`` by zero-padding.

        Raises:
            InvalidDimension: If newdim is not a power of two larger than dim.
        """
        if isinstance(newdim, numbers.Integral) and newdim <= self.dim:
            raise InvalidDimension(
                f"invalid dimension: cannot expand {self.dim} to {newdim}"
            )
        newdim = check_dimension(newdim)
        field = self._field
        with field.scope() as scope:
            cells = [field.copy(c) for c in self._components]
            cells.extend(field.zero() for _ in range(newdim - self.dim))
            return scope.keep(self._build(cells))

    # ------------------------------------------------------------------
    # Binary operations
    # ------------------------------------------------------------------

    def _componentwise(self, other: Hypercomplex, op: Any) -> Hypercomplex:
        self.ensure_compatible(other)
        field = self._field
        with field.scope() as scope:
            cells = [op(a, b) for a, b in zip(self._components, other._components)]
            return scope.keep(self._build(cells))

    def __add__(self, other: object) -> Hypercomplex:
        if not isinstance(other, Hypercomplex):
            return NotImplemented
        return self._componentwise(other, self._field.add)

    def __sub__(self, other: object) -> Hypercomplex:
        if not isinstance(other, Hypercomplex):
            return NotImplemented
        return self._componentwise(other, self._field.sub)

    def __mul__(self, other: object) -> Hypercomplex:
        if not isinstance(other, Hypercomplex):
            return NotImplemented
        return multiply(self, other)

    def __truediv__(self, other: object) -> Hypercomplex:
        if not isinstance(other, Hypercomplex):
            return NotImplemented
        self.ensure_compatible(other)
        with self._field.scope() as scope:
            return scope.keep(multiply(self, other.inverse()))

    def __pow__(self, exponent: int) -> Hypercomplex:
        """Raise to a positive integer power by repeated right multiplication.

        ``h ** 3`` is ``(h * h) * h``: products are grouped left to right.

        Raises:
            InvalidExponent: If exponent is not an integer >= 1.
        """
        if (
            isinstance(exponent, bool)
            or not isinstance(exponent, numbers.Integral)
            or exponent < 1
        ):
            raise InvalidExponent(f"exponent must be a positive integer, got {exponent!r}")
        with self._field.scope() as scope:
            result = self.copy()
            for _ in range(int(exponent) - 1):
                step = multiply(result, self)
                result.release()
                result = step
            return scope.keep(result)

    def _update(self, result: Hypercomplex) -> Hypercomplex:
        if result is NotImplemented:
            return NotImplemented
        try:
            self.assign(result)
        finally:
            result.release()
        return self

    def __iadd__(self, other: object) -> Hypercomplex:
        return self._update(self.__add__(other))

    def __isub__(self, other: object) -> Hypercomplex:
        return self._update(self.__sub__(other))

    def __imul__(self, other: object) -> Hypercomplex:
        return self._update(self.__mul__(other))

    def __itruediv__(self, other: object) -> Hypercomplex:
        return self._update(self.__truediv__(other))

    def __ipow__(self, exponent: int) -> Hypercomplex:
        return self._update(self.__pow__(exponent))

    # ------------------------------------------------------------------
    # Comparison and presentation
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hypercomplex):
            return NotImplemented
        if other.dim != self.dim or other._field != self._field:
            return False
        field = self._field
        return all(
            field.eq(a, b) for a, b in zip(self._components, other._components)
        )

    __hash__ = None  # type: ignore[assignment]

    def isclose(self, other: Hypercomplex, *, tol: float | None = None) -> bool:
        """Component-wise comparison within ``tol``.

        The default tolerance comes from the field's format
        (see ``get_tolerance(fmt, "equality_tol")``).
        """
        self.ensure_compatible(other)
        field = self._field
        if tol is None:
            tol = field.tolerance("equality_tol")
        with field.scope():
            return all(
                abs(field.to_float(field.sub(a, b))) <= tol
                for a, b in zip(self._components, other._components)
            )

    def tolist(self) -> list[float]:
        """Components as Python floats."""
        return [self._field.to_float(c) for c in self._components]

    def __str__(self) -> str:
        return " ".join(self._field.render(c) for c in self._components)

    def __repr__(self) -> str:
        body = ", ".join(self._field.render(c) for c in self._components)
        return f"{type(self).__name__}([{body}], field={self._field!r})"


def basis(dim: int, index: int, field: ScalarField | None = None) -> Hypercomplex:
    """Unit vector ``e_index`` of the algebra of dimension ``dim``.

    Example:
        >>> print(basis(4, 2))
        0.0 0.0 1.0 0.0
    """
    dim = check_dimension(dim)
    values = [0] * dim
    values[check_index(index, dim)] = 1
    return Hypercomplex(values, field)


def check_index(i: int, dim: int) -> int:
    """Validate a component index for dimension ``dim`` and return it as int.

    Raises:
        TypeError: If ``i`` is not an integer.
        IndexOutOfRange: If ``i`` is outside ``0..dim-1``.
    """
    if isinstance(i, bool) or not isinstance(i, numbers.Integral):
        raise TypeError(f"component index must be an integer, got {i!r}")
    if not 0 <= i < dim:
        raise IndexOutOfRange(f"component index {i} out of range for dimension {dim}")
    return int(i)


__all__ = ["Hypercomplex", "basis", "check_index"]
