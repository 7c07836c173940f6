"""Algebraic identities checked over both scalar models.

Each test body runs inside an ownership scope, so every number and cell it
creates is released on exit; the field fixture then checks that nothing
leaked.
"""

import math

import numpy as np
import pytest

from hypercomplex import FLOAT64, Hypercomplex, PrecisionContext, basis, exp
from hypercomplex.scalars import ScalarField


@pytest.fixture(params=["fp64", "mpfr256"])
def field(request: pytest.FixtureRequest):
    """float64 value scalars or a fresh 256-bit precision context."""
    if request.param == "fp64":
        yield FLOAT64
        return
    context = PrecisionContext(256)
    yield context
    context.assert_no_leaks()


def random_number(
    rng: np.random.Generator, dim: int, field: ScalarField
) -> Hypercomplex:
    """Hypercomplex with standard-normal components."""
    return Hypercomplex(rng.standard_normal(dim).tolist(), field)


def assert_scalar_close(field: ScalarField, actual, expected, kind: str) -> None:
    """|actual - expected| <= tol * max(1, |expected|) at the field's tolerance."""
    tol = field.tolerance(kind)
    scale = max(1.0, abs(field.to_float(expected)))
    assert abs(field.to_float(field.sub(actual, expected))) <= tol * scale


class TestNormIdentities:
    """Norm and inverse identities."""

    @pytest.mark.parametrize("dim", [1, 2, 4, 8])
    def test_norm_multiplicative(
        self, dim: int, field: ScalarField, rng: np.random.Generator
    ) -> None:
        """|a*b| == |a|*|b| up to the octonions."""
        with field.scope():
            a, b = random_number(rng, dim, field), random_number(rng, dim, field)
            expected = field.mul(a.norm(), b.norm())
            assert_scalar_close(field, (a * b).norm(), expected, "norm_tol")

    @pytest.mark.parametrize("dim", [1, 2, 4, 8, 16])
    def test_times_inverse_is_one(
        self, dim: int, field: ScalarField, rng: np.random.Generator
    ) -> None:
        """h * inverse(h) == 1."""
        with field.scope():
            h = random_number(rng, dim, field)
            assert (h * h.inverse()).isclose(basis(dim, 0, field))

    def test_fixed_octonion_inverse(self, field: ScalarField) -> None:
        """A decimal-valued octonion times its inverse is one."""
        with field.scope():
            h = Hypercomplex(["1", "-2", "0.5", "3", "0", "1", "-1", "2"], field)
            assert (h * h.inverse()).isclose(basis(8, 0, field))
            assert (h.inverse() * h).isclose(basis(8, 0, field))


class TestStructure:
    """Conjugation, non-associativity and embedding."""

    def test_conjugate_is_involution(
        self, field: ScalarField, rng: np.random.Generator
    ) -> None:
        """conj(conj(h)) == h exactly."""
        with field.scope():
            h = random_number(rng, 16, field)
            assert h.conjugate().conjugate() == h

    def test_quaternion_units(self, field: ScalarField) -> None:
        """i*j == k and j*i == -k."""
        with field.scope():
            i, j, k = basis(4, 1, field), basis(4, 2, field), basis(4, 3, field)
            assert i * j == k
            assert j * i == -k

    def test_octonions_not_associative(self, field: ScalarField) -> None:
        """(e1*e2)*e4 == e7 while e1*(e2*e4) == -e7."""
        with field.scope():
            e1, e2, e4 = basis(8, 1, field), basis(8, 2, field), basis(8, 4, field)
            e7 = basis(8, 7, field)
            left = (e1 * e2) * e4
            right = e1 * (e2 * e4)
            assert left != right
            assert left == e7
            assert right == -e7

    def test_expand(self, field: ScalarField) -> None:
        """(1,2,3,4) expands to (1,2,3,4,0,0,0,0)."""
        with field.scope():
            h = Hypercomplex([1, 2, 3, 4], field)
            assert h.expand(8) == Hypercomplex([1, 2, 3, 4, 0, 0, 0, 0], field)


class TestExponential:
    """Exponential identities."""

    def test_exp_of_zero(self, field: ScalarField) -> None:
        """exp((0,0)) == (1,0) exactly."""
        with field.scope():
            assert exp(Hypercomplex([0, 0], field)) == Hypercomplex([1, 0], field)

    def test_rotation_formula(self, field: ScalarField) -> None:
        """exp(theta*u) == cos(theta) + u*sin(theta) for a unit imaginary u."""
        with field.scope():
            theta = Hypercomplex(["0.7"], field)[0]
            u = [field.zero(), field.coerce("0.6"), field.zero(), field.coerce("0.8")]
            h = Hypercomplex([field.mul(theta, c) for c in u], field)
            sin_theta = field.sin(theta)
            expected = Hypercomplex(
                [field.cos(theta)] + [field.mul(sin_theta, c) for c in u[1:]], field
            )
            assert exp(h).isclose(expected, tol=field.tolerance("norm_tol"))

    def test_norm_is_exp_of_real_part(self, field: ScalarField) -> None:
        """|exp(h)| == e^Re(h)."""
        with field.scope():
            h = Hypercomplex(["0.25", "-0.5", "1", "0.75"], field)
            expected = field.exp(h[0])
            assert_scalar_close(field, exp(h).norm(), expected, "norm_tol")
            assert math.isclose(field.to_float(expected), math.exp(0.25))
