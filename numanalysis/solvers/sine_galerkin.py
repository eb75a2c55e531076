"""Galerkin approximation in a basis of sine functions."""

from numanalysis.log import get_logger
from numanalysis.utils import check_callable, check_count, check_positive

from dataclasses import dataclass
from scipy.integrate import quad
from typing import Callable
import numpy as np

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SineSeries:
    """A truncated sine series ``sum c_i sin(i pi x / L)`` for i = 1, ..., m."""

    coefficients: np.ndarray
    L: float

    @property
    def m(self) -> int:
        return len(self.coefficients)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        frequencies = np.arange(1, self.m + 1) * np.pi / self.L
        return np.sin(np.multiply.outer(x, frequencies)) @ self.coefficients


def sine_galerkin(f: Callable, k: float, L: float, m: int) -> SineSeries:
    """Solve -k u'' = f on (0, L) with u(0) = u(L) = 0 in the sine basis.

    The sine functions are eigenfunctions of the second derivative and
    orthogonal, so the Galerkin system is diagonal:
    ``c_i = 2 / (L k w_i^2) * integral of f(x) sin(w_i x)`` with
    ``w_i = i pi / L``.

    :param f: The source term.
    :param k: The conductivity.
    :param L: The length of the domain.
    :param m: The number of basis functions.

    :returns: The truncated series.
    """
    check_callable(f)
    k = check_positive(k, "k")
    L = check_positive(L, "L")
    m = check_count(m, "m")

    coefficients = np.zeros(m)
    for i in range(1, m + 1):
        w = i * np.pi / L
        # Oscillatory weight for the sine moments
        moment, _ = quad(f, 0.0, L, weight="sin", wvar=w)
        coefficients[i - 1] = 2.0 * moment / (L * k * w**2)

    logger.debug(f"Computed {m} sine coefficients")
    return SineSeries(coefficients, L)


def sine_solution(m: int, x: np.ndarray) -> np.ndarray:
    """Evaluate the sine series solution of -u'' = x on (0, pi).

    The coefficients ``2 (-1)^(i+1) / i^3`` are known in closed form and the
    series converges to ``x (pi^2 - x^2) / 6``.

    :param m: The number of terms.
    :param x: The points at which to evaluate.
    """
    m = check_count(m, "m")
    i = np.arange(1, m + 1)
    coefficients = 2.0 * (-1.0) ** (i + 1) / i**3
    return SineSeries(coefficients, np.pi)(x)
