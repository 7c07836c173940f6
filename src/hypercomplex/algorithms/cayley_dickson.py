"""Cayley–Dickson multiplication by recursive dimension halving.

Writing x = (a, b) with a, b the lower and upper halves of x, the doubling
product is

    (a1, b1) * (a2, b2) = (a1·a2 − conj(b2)·b1,  b2·a1 + b1·conj(a2))

with the halves multiplied recursively down to ordinary scalar products.
The formula is not symmetric in its operands: from quaternions on the
product is non-commutative, from octonions on non-associative. Callers
must never reorder or regroup factors.

Every recursion level runs inside its own ownership scope, so the halves
and partial products of a level are released before the level returns.

References:
- Baez, J.: "The Octonions", Bull. AMS 39 (2002), §2.2
- Schafer, R.D.: "On the algebras formed by the Cayley-Dickson process",
  Amer. J. Math. 76 (1954)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hypercomplex.number import Hypercomplex


def split(number: Hypercomplex) -> tuple[Hypercomplex, Hypercomplex]:
    """Copy the lower and upper halves of ``number`` into two new numbers.

    Raises:
        InvalidDimension: If ``number`` has dimension 1.
    """
    field = number.field
    half = number.dim // 2
    with field.scope() as scope:
        lower = type(number).adopt(field, [field.copy(number[i]) for i in range(half)])
        upper = type(number).adopt(
            field, [field.copy(number[i]) for i in range(half, number.dim)]
        )
        return scope.keep(lower), scope.keep(upper)


def concat(lower: Hypercomplex, upper: Hypercomplex) -> Hypercomplex:
    """Join two numbers of equal dimension d into one of dimension 2d."""
    lower.ensure_compatible(upper)
    field = lower.field
    with field.scope() as scope:
        cells = [field.copy(c) for c in lower]
        cells.extend(field.copy(c) for c in upper)
        return scope.keep(type(lower).adopt(field, cells))


def multiply(left: Hypercomplex, right: Hypercomplex) -> Hypercomplex:
    """Cayley–Dickson product ``left * right``.

    Raises:
        InvalidDimension: If the operands have different dimensions.
        TypeError: If the operands use different scalar fields.

    Example:
        >>> from hypercomplex import Hypercomplex
        >>> i = Hypercomplex([0, 1, 0, 0])
        >>> j = Hypercomplex([0, 0, 1, 0])
        >>> multiply(j, i).tolist()
        [0.0, 0.0, 0.0, -1.0]
    """
    left.ensure_compatible(right)
    return _product(left, right)


def _product(h1: Hypercomplex, h2: Hypercomplex) -> Hypercomplex:
    field = h1.field
    with field.scope() as scope:
        if h1.dim == 1:
            cells = [field.mul(h1[0], h2[0])]
            return scope.keep(type(h1).adopt(field, cells))

        a1, b1 = split(h1)
        a2, b2 = split(h2)

        r1 = _product(a1, a2)
        r2 = _product(b2.conjugate(), b1)
        r3 = _product(b2, a1)
        r4 = _product(b1, a2.conjugate())

        return scope.keep(concat(r1 - r2, r3 + r4))


__all__ = ["concat", "multiply", "split"]
