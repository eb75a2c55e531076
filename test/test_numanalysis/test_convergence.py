"""Tests for the convergence utilities."""

from numanalysis.convergence import (
    convergence_order,
    convergence_study,
    max_error,
    observed_rates,
)
from numanalysis.exceptions import InvalidInputError
from numanalysis.quadrature import trapezoid
import numpy as np
import pytest


@pytest.mark.parametrize("p", [1, 2, 4])
def test_convergence_order(p):
    h = 2.0 ** -np.arange(1, 8)

    assert np.isclose(convergence_order(h, 3.0 * h**p), p)
    assert np.allclose(observed_rates(h, 3.0 * h**p), p)


def test_convergence_order_invalid():
    with pytest.raises(InvalidInputError):
        convergence_order([0.1], [0.01])

    with pytest.raises(InvalidInputError):
        convergence_order([0.1, 0.05], [0.01])


def test_max_error():
    assert max_error([1.0, 2.0, 3.0], [1.0, 2.5, 2.0]) == 1.0


def test_convergence_study():
    ns = [2, 4, 8, 16]

    hs, errors = convergence_study(
        lambda n: trapezoid(np.exp, 0, 1, n),
        lambda res: abs(res.integral - (np.e - 1)),
        ns,
    )

    assert np.allclose(hs, 1 / np.array(ns))
    assert np.all(np.diff(errors) < 0)
    assert np.isclose(convergence_order(hs, errors), 2, atol=0.1)
