"""Utilities shared by the solvers and quadrature rules."""

from .exceptions import InvalidInputError
from numbers import Integral, Real
from typing import Callable
import numpy as np


def check_count(value: int, name: str, minimum: int = 1) -> int:
    """Validate an integer count such as a number of nodes or subintervals.

    :param value: The count to check.
    :param name: The parameter name used in the error message.
    :param minimum: The smallest admissible value.

    :returns: The count as a Python ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidInputError(f"{name} must be at least {minimum}, got {value}")
    return int(value)


def check_finite(value: float, name: str) -> float:
    """Validate a finite real number and convert it to a float."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a real number, got {value!r}")
    if not np.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return float(value)


def check_positive(value: float, name: str) -> float:
    """Validate a finite, strictly positive real number."""
    value = check_finite(value, name)
    if value <= 0.0:
        raise InvalidInputError(f"{name} must be positive, got {value}")
    return value


def check_interval(a: float, b: float) -> tuple[float, float]:
    """Validate an integration interval ``[a, b]`` with ``a < b``."""
    a = check_finite(a, "a")
    b = check_finite(b, "b")
    if a >= b:
        raise InvalidInputError(f"Interval requires a < b, got [{a}, {b}]")
    return a, b


def check_callable(f: Callable, name: str = "f") -> Callable:
    if not callable(f):
        raise InvalidInputError(f"{name} must be callable, got {type(f).__name__}")
    return f


def uniform_grid(a: float, b: float, n: int) -> np.ndarray:
    """Construct ``n + 1`` equally spaced nodes on ``[a, b]``.

    The nodes are computed as ``a + i * h`` so that they coincide with the
    nodes of the finite difference and finite element stencils, while the
    last node is set to ``b`` exactly.

    :param a: The left endpoint.
    :param b: The right endpoint.
    :param n: The number of subintervals.

    :returns: An array of shape (n + 1,).
    """
    h = (b - a) / n
    nodes = a + h * np.arange(n + 1, dtype=np.float64)
    nodes[-1] = b
    return nodes


def evaluate(f: Callable, points: np.ndarray, vectorized: bool = False) -> np.ndarray:
    """Evaluate a scalar function at each of the points.

    :param f: A function of a single real argument returning a real number.
    :param points: The points at which to evaluate.
    :param vectorized: If True, f accepts an array and is called only once.

    :returns: A float array with the shape of ``points``.
    """
    points = np.asarray(points, dtype=np.float64)
    if vectorized:
        values = np.asarray(f(points), dtype=np.float64)
        return np.broadcast_to(values, points.shape).copy()

    values = np.array([f(p) for p in points.ravel()], dtype=np.float64)
    return values.reshape(points.shape)
