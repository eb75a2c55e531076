"""Tests for the sine series Galerkin method."""

from numanalysis.convergence import convergence_order
from numanalysis.exceptions import InvalidInputError
from numanalysis.solvers.sine_galerkin import sine_galerkin, sine_solution
import numpy as np
import pytest

exact_sol = lambda x: x * (np.pi**2 - x**2) / 6  # noqa: E731


def test_coefficients():
    """The coefficients for a linear source are 2 (-1)^(i+1) / i^3."""
    series = sine_galerkin(lambda x: x, 1.0, np.pi, 20)
    i = np.arange(1, 21)

    assert series.m == 20
    assert np.allclose(series.coefficients, 2 * (-1.0) ** (i + 1) / i**3)


def test_reference():
    x = np.linspace(0, np.pi, 101)

    assert np.allclose(sine_solution(300, x), exact_sol(x), atol=1e-4)
    assert np.allclose(sine_galerkin(lambda x: x, 1.0, np.pi, 300)(x), exact_sol(x), atol=1e-4)


def test_single_mode():
    """A sine source is resolved by a single basis function."""
    L, k = 2.0, 3.0
    w = 2 * np.pi / L
    series = sine_galerkin(lambda x: np.sin(w * x), k, L, 5)
    x = np.linspace(0, L, 17)

    assert np.allclose(series(x), np.sin(w * x) / (k * w**2))
    assert np.isclose(series(0.25), np.sin(w * 0.25) / (k * w**2))


def test_convergence():
    """The sine series converges as O(m^-2)."""
    m_vals = np.array([5, 10, 20, 40, 80, 160])
    x = np.linspace(0, np.pi, 1000)

    errors = [np.max(np.abs(sine_solution(m, x) - exact_sol(x))) for m in m_vals]

    assert np.isclose(convergence_order(m_vals, errors), -2, atol=0.3)


@pytest.mark.parametrize(
    "args", [(np.sin, 1.0, np.pi, 0), (np.sin, -1.0, np.pi, 3), (np.sin, 1.0, 0.0, 3)]
)
def test_invalid_input(args):
    with pytest.raises(InvalidInputError):
        sine_galerkin(*args)
