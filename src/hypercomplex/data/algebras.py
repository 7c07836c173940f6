"""Names and dimension rules for the Cayley–Dickson tower.

Each doubling step of the construction loses a property of the algebra:
complex numbers lose ordering, quaternions commutativity, octonions
associativity, and from sedenions on the norm is no longer multiplicative.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass

from hypercomplex.errors import InvalidDimension


@dataclass(frozen=True, slots=True)
class AlgebraInfo:
    """Properties of the algebra of a given dimension."""

    dim: int
    """Number of real components (a power of two)."""

    name: str
    """Conventional name of the algebra."""

    commutative: bool
    """Whether a*b == b*a for all elements."""

    associative: bool
    """Whether (a*b)*c == a*(b*c) for all elements."""

    composition: bool
    """Whether norm(a*b) == norm(a) * norm(b) for all elements."""


_ALGEBRA_NAMES: tuple[str, ...] = (
    "real",
    "complex",
    "quaternion",
    "octonion",
    "sedenion",
    "trigintaduonion",
    "sexagintaquatronion",
    "centumduodetrigintanion",
    "ducentiquinquagintasexion",
)


def is_power_of_two(dim: int) -> bool:
    """Return True for 1, 2, 4, 8, ...; False for 0, negatives and non-ints."""
    if isinstance(dim, bool) or not isinstance(dim, numbers.Integral):
        return False
    dim = int(dim)
    return dim > 0 and (dim & (dim - 1)) == 0


def check_dimension(dim: int) -> int:
    """Validate an algebra dimension and return it.

    Raises:
        InvalidDimension: If dim is zero or not a power of two.
    """
    if not is_power_of_two(dim):
        raise InvalidDimension(
            f"invalid dimension: {dim!r} (must be a positive power of two)"
        )
    return int(dim)


def algebra_info(dim: int) -> AlgebraInfo:
    """Describe the algebra of dimension ``dim``.

    Example:
        >>> algebra_info(8).name
        'octonion'
    """
    dim = check_dimension(dim)
    level = dim.bit_length() - 1
    if level < len(_ALGEBRA_NAMES):
        name = _ALGEBRA_NAMES[level]
    else:
        name = f"{dim}-ion"

    return AlgebraInfo(
        dim=dim,
        name=name,
        commutative=dim <= 2,
        associative=dim <= 4,
        composition=dim <= 8,
    )


def list_algebras(max_dim: int = 256) -> list[AlgebraInfo]:
    """List algebras from the reals up to ``max_dim`` (inclusive)."""
    check_dimension(max_dim)
    algebras = []
    dim = 1
    while dim <= max_dim:
        algebras.append(algebra_info(dim))
        dim *= 2
    return algebras
