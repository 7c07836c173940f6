"""Tests for Cayley–Dickson multiplication and its algebraic properties."""

import numpy as np
import pytest

from hypercomplex import FLOAT64, Hypercomplex, ValueField, basis, multiply
from hypercomplex.algorithms.cayley_dickson import concat, split
from hypercomplex.data.precision_types import get_tolerance


def random_number(rng: np.random.Generator, dim: int, field=FLOAT64) -> Hypercomplex:
    """Hypercomplex with standard-normal components."""
    return Hypercomplex(rng.standard_normal(dim).tolist(), field)


class TestSplitConcat:
    """Tests for halving and joining numbers."""

    def test_split(self) -> None:
        """split returns the lower and upper halves."""
        lower, upper = split(Hypercomplex([1, 2, 3, 4]))
        assert lower == Hypercomplex([1, 2])
        assert upper == Hypercomplex([3, 4])

    def test_concat_inverts_split(self, rng: np.random.Generator) -> None:
        """concat(split(h)) == h."""
        h = random_number(rng, 8)
        assert concat(*split(h)) == h

    def test_concat_requires_equal_halves(self) -> None:
        """Halves must have the same dimension."""
        with pytest.raises(ValueError):
            concat(Hypercomplex([1, 2]), Hypercomplex([1]))


class TestQuaternions:
    """Tests for the quaternion multiplication table."""

    @pytest.fixture
    def units(self) -> tuple[Hypercomplex, Hypercomplex, Hypercomplex]:
        """Imaginary units i, j, k."""
        return basis(4, 1), basis(4, 2), basis(4, 3)

    def test_ij_equals_k(self, units) -> None:
        """i * j = k."""
        i, j, k = units
        assert i * j == k
        assert (i * j).tolist() == [0.0, 0.0, 0.0, 1.0]

    def test_ji_equals_minus_k(self, units) -> None:
        """j * i = -k."""
        i, j, k = units
        assert j * i == -k

    def test_squares_are_minus_one(self, units) -> None:
        """i^2 = j^2 = k^2 = ijk = -1."""
        i, j, k = units
        minus_one = Hypercomplex([-1, 0, 0, 0])
        for unit in units:
            assert unit * unit == minus_one
        assert (i * j) * k == minus_one

    def test_multiply_function(self, units) -> None:
        """multiply is the same product as the * operator."""
        i, j, _ = units
        assert multiply(i, j) == i * j

    def test_associative(self, rng: np.random.Generator) -> None:
        """Quaternion multiplication is associative."""
        a, b, c = (random_number(rng, 4) for _ in range(3))
        assert ((a * b) * c).isclose(a * (b * c))


class TestOctonions:
    """Tests for octonion non-associativity."""

    def test_not_associative_on_basis_triple(self) -> None:
        """e1, e2, e4 generate the octonions and anti-associate."""
        e1, e2, e4 = basis(8, 1), basis(8, 2), basis(8, 4)
        left = (e1 * e2) * e4
        right = e1 * (e2 * e4)
        assert left != right
        assert left == -right

    def test_alternative(self, rng: np.random.Generator) -> None:
        """Octonions are alternative: (a*a)*b == a*(a*b)."""
        a, b = random_number(rng, 8), random_number(rng, 8)
        assert ((a * a) * b).isclose(a * (a * b))


class TestNormProperties:
    """Tests for norm identities across the tower."""

    @pytest.mark.parametrize("dim", [1, 2, 4, 8])
    def test_norm_multiplicative(self, dim: int, rng: np.random.Generator) -> None:
        """|a*b| == |a|*|b| up to the octonions."""
        a, b = random_number(rng, dim), random_number(rng, dim)
        expected = float(a.norm()) * float(b.norm())
        tol = get_tolerance("fp64", "norm_tol")
        assert np.isclose(float((a * b).norm()), expected, rtol=tol)

    def test_norm_not_multiplicative_for_sedenions(self) -> None:
        """Sedenions have zero divisors."""
        # (e1 + e10)(e5 + e14) = 0
        a = basis(16, 1) + basis(16, 10)
        b = basis(16, 5) + basis(16, 14)
        product = a * b
        assert float(product.norm()) == 0.0
        assert float(a.norm()) * float(b.norm()) == pytest.approx(2.0)

    @pytest.mark.parametrize("dim", [1, 2, 4, 8, 16, 32])
    def test_times_conjugate_is_norm_squared(
        self, dim: int, rng: np.random.Generator
    ) -> None:
        """h * conj(h) == |h|^2 in every algebra."""
        h = random_number(rng, dim)
        norm2 = float(h.norm()) ** 2
        expected = Hypercomplex([norm2] + [0.0] * (dim - 1))
        assert (h * h.conjugate()).isclose(expected, tol=1e-10)

    @pytest.mark.parametrize("dim", [1, 2, 4, 8, 16])
    def test_times_inverse_is_one(self, dim: int, rng: np.random.Generator) -> None:
        """h * inverse(h) == 1."""
        h = random_number(rng, dim)
        assert (h * h.inverse()).isclose(basis(dim, 0))

    def test_fp32_results_stay_fp32(self, rng: np.random.Generator) -> None:
        """The recursion keeps every component in the field's dtype."""
        field = ValueField("fp32")
        a, b = random_number(rng, 8, field), random_number(rng, 8, field)
        product = a * b
        assert all(isinstance(c, np.float32) for c in product)
        expected = float(a.norm()) * float(b.norm())
        tol = get_tolerance("fp32", "norm_tol")
        assert np.isclose(float(product.norm()), expected, rtol=tol)
