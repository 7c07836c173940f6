"""Real/imaginary projections and the exponential of a hypercomplex number.

For h = s + v with real part s and imaginary part v, |v| = n:

    exp(h) = e^s · (cos n + v · sin(n)/n)

which reduces to Euler's formula for complex numbers and to the rotation
formula exp(θu) = cos θ + u sin θ for a unit imaginary u.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hypercomplex.number import Hypercomplex


def real_part(number: Hypercomplex) -> Hypercomplex:
    """Copy of ``number`` with every imaginary component set to zero."""
    field = number.field
    with field.scope() as scope:
        result = number.copy()
        for i in range(1, result.dim):
            result[i] = field.zero()
        return scope.keep(result)


def imag_part(number: Hypercomplex) -> Hypercomplex:
    """Copy of ``number`` with the real component set to zero."""
    field = number.field
    with field.scope() as scope:
        result = number.copy()
        result[0] = field.zero()
        return scope.keep(result)


def exp(number: Hypercomplex) -> Hypercomplex:
    """Exponential of a hypercomplex number.

    Example:
        >>> import math
        >>> from hypercomplex import Hypercomplex
        >>> exp(Hypercomplex([0.0, math.pi])).isclose(Hypercomplex([-1.0, 0.0]))
        True
    """
    field = number.field
    with field.scope() as scope:
        result = imag_part(number)
        norm = result.norm()
        exp_real = field.exp(number[0])

        if field.eq(norm, field.zero()):
            result[0] = exp_real
            for i in range(1, result.dim):
                result[i] = field.zero()
        else:
            sin_ratio = field.div(field.sin(norm), norm)
            for i in range(result.dim):
                result[i] = field.mul(result[i], sin_ratio)
            result[0] = field.add(result[0], field.cos(norm))
            for i in range(result.dim):
                result[i] = field.mul(result[i], exp_real)

        return scope.keep(result)


__all__ = ["exp", "imag_part", "real_part"]
