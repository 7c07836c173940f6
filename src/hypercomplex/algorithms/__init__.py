"""Algorithms on hypercomplex numbers.

This module contains implementations of:
- Cayley–Dickson recursive multiplication
- Real/imaginary projections and the hypercomplex exponential
"""

from hypercomplex.algorithms.cayley_dickson import concat, multiply, split
from hypercomplex.algorithms.transcendental import exp, imag_part, real_part

__all__ = [
    # Cayley–Dickson
    "concat",
    "multiply",
    "split",
    # Transcendental
    "exp",
    "imag_part",
    "real_part",
]
