"""Composite quadrature rules, Richardson extrapolation and Romberg integration.

All rules work on ``n`` equal subintervals of ``[a, b]``. The integrand is
evaluated pointwise, so any function of a single real argument can be used.
"""

from .constants import (
    DEFAULT_INITIAL_SUBINTERVALS,
    DEFAULT_TOLERANCE,
    MAX_REFINEMENTS,
    ROMBERG_LEVELS,
    TRAPEZOID_ORDER,
)
from .exceptions import ToleranceNotAchievedError
from .log import get_logger
from .utils import (
    check_callable,
    check_count,
    check_interval,
    check_positive,
    evaluate,
    uniform_grid,
)
from dataclasses import dataclass
from numpy.polynomial.legendre import leggauss
from typing import Callable
import numpy as np

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuadratureResult:
    """An approximate integral.

    :param integral: The approximation of the integral.
    :param h: The distance between neighbouring quadrature nodes.
    :param n: The number of subintervals.
    :param evaluations: The number of function evaluations used.
    """

    integral: float
    h: float
    n: int
    evaluations: int


@dataclass(frozen=True)
class AdaptiveQuadratureResult:
    """An approximate integral from :func:`trapezoid_adaptive`.

    :param integral: The extrapolated approximation of the integral.
    :param h: The node distance of the finest trapezoidal rule.
    :param n: The number of subintervals of the finest trapezoidal rule.
    :param error_estimate: The discrepancy between the extrapolated and the
        finest trapezoidal approximation.
    :param refinements: The number of node doublings performed.
    :param evaluations: The total number of function evaluations.
    :param converged: Whether ``error_estimate`` reached the tolerance.
    """

    integral: float
    h: float
    n: int
    error_estimate: float
    refinements: int
    evaluations: int
    converged: bool


@dataclass(frozen=True, eq=False)
class RombergResult:
    """The Romberg table of :func:`romberg`.

    ``table[j, i]`` holds the ``i``-times extrapolated value on level ``j``;
    column 0 are trapezoidal rules, column 1 Simpson's rules.
    """

    integral: float
    h: float
    n: int
    table: np.ndarray
    evaluations: int


def gauss_quadrature(degree: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute Gauss-Legendre points and weights on the interval [0, 1].

    :param degree: The polynomial degree the rule integrates exactly.

    :returns: A tuple containing the quadrature points and weights.
    """
    degree = check_count(degree, "degree", minimum=0)

    # Map the quadrature points from [-1, 1] to [0, 1]
    npoints = (degree + 2) // 2
    points, weights = leggauss(npoints)

    return (points + 1.0) / 2.0, weights / 2.0


def trapezoid(
    f: Callable, a: float, b: float, n: int, vectorized: bool = False
) -> QuadratureResult:
    """Approximate the integral of f over [a, b] with the trapezoidal rule.

    The rule has degree of exactness 1 and converges with order 2.

    :param f: The integrand.
    :param a: The left end of the interval.
    :param b: The right end of the interval.
    :param n: The number of subintervals.
    :param vectorized: If True, f is called once on an array of all nodes
        instead of once per node.

    :returns: The approximation and the node distance ``h = (b - a) / n``.
    """
    check_callable(f)
    a, b = check_interval(a, b)
    n = check_count(n, "n")

    h = (b - a) / n
    y = evaluate(f, uniform_grid(a, b, n), vectorized)
    integral = h * (0.5 * y[0] + np.sum(y[1:-1]) + 0.5 * y[-1])

    return QuadratureResult(float(integral), h, n, n + 1)


def simpson(
    f: Callable, a: float, b: float, n: int, vectorized: bool = False
) -> QuadratureResult:
    """Approximate the integral of f over [a, b] with Simpson's rule.

    On each of the ``n`` subintervals f is replaced by its quadratic
    interpolant through the endpoints and the midpoint. The rule has degree of
    exactness 3 and converges with order 4.

    :param f: The integrand.
    :param a: The left end of the interval.
    :param b: The right end of the interval.
    :param n: The number of subintervals.
    :param vectorized: See :func:`trapezoid`.

    :returns: The approximation and the node distance ``h = (b - a) / (2n)``,
        which is half the subinterval width since the midpoints are nodes too.
    """
    check_callable(f)
    a, b = check_interval(a, b)
    n = check_count(n, "n")

    width = (b - a) / n
    t = uniform_grid(a, b, n)  # Subinterval boundaries
    m = t[:-1] + width / 2  # Subinterval midpoints

    ft = evaluate(f, t, vectorized)
    fm = evaluate(f, m, vectorized)
    integral = width * (
        ft[0] / 6 + np.sum(ft[1:-1]) / 3 + 2 * np.sum(fm) / 3 + ft[-1] / 6
    )

    return QuadratureResult(float(integral), width / 2, n, 2 * n + 1)


def richardson_extrapolate(q_n: float, q_2n: float, p: int) -> float:
    """Combine two approximations to cancel the leading error term.

    Given ``I = Q_n + c n^-p + O(n^-q)`` the result is of order at least q.

    :param q_n: The approximation on n subintervals.
    :param q_2n: The approximation on 2n subintervals.
    :param p: The order of the leading error term.

    :returns: ``(2^p Q_2n - Q_n) / (2^p - 1)``.
    """
    p = check_count(p, "p")
    factor = 2.0**p
    return (factor * q_2n - q_n) / (factor - 1.0)


def trapezoid_refine(
    f: Callable, a: float, b: float, n: int, t_n: float, vectorized: bool = False
) -> QuadratureResult:
    """Compute the trapezoidal rule on 2n subintervals from the one on n.

    The nodes of the coarse rule are reused, so f is only evaluated at the n
    new odd nodes: ``T_2n = T_n / 2 + h * sum(f(a + (2i - 1) h))``.

    :param f: The integrand.
    :param a: The left end of the interval.
    :param b: The right end of the interval.
    :param n: The number of subintervals of the coarse rule.
    :param t_n: The trapezoidal approximation on n subintervals.
    :param vectorized: See :func:`trapezoid`.

    :returns: The approximation on 2n subintervals. ``evaluations`` only
        counts the new function evaluations.
    """
    check_callable(f)
    a, b = check_interval(a, b)
    n = check_count(n, "n")

    h = (b - a) / (2 * n)
    odd_nodes = a + h * np.arange(1, 2 * n, 2, dtype=np.float64)
    integral = t_n / 2 + h * np.sum(evaluate(f, odd_nodes, vectorized))

    return QuadratureResult(float(integral), h, 2 * n, n)


def simpson_extrapolated(
    f: Callable, a: float, b: float, n: int, vectorized: bool = False
) -> QuadratureResult:
    """Simpson's rule obtained by Richardson extrapolation of the trapezoidal rule.

    ``S = (4 T_2n - T_n) / 3`` agrees with :func:`simpson` on n subintervals.
    """
    coarse = trapezoid(f, a, b, n, vectorized)
    fine = trapezoid_refine(f, a, b, n, coarse.integral, vectorized)
    integral = richardson_extrapolate(coarse.integral, fine.integral, TRAPEZOID_ORDER)

    return QuadratureResult(
        integral, fine.h, n, coarse.evaluations + fine.evaluations
    )


def romberg(
    f: Callable,
    a: float,
    b: float,
    levels: int = ROMBERG_LEVELS,
    n0: int = 1,
    vectorized: bool = False,
) -> RombergResult:
    """Romberg integration by repeated Richardson extrapolation.

    The first column holds trapezoidal rules on ``n0 * 2^j`` subintervals,
    computed by node doubling. The trapezoidal error expands in even powers
    of h, so column i is of order ``2i + 2``.

    :param f: The integrand.
    :param a: The left end of the interval.
    :param b: The right end of the interval.
    :param levels: The number of rows of the table.
    :param n0: The number of subintervals of the first trapezoidal rule.
    :param vectorized: See :func:`trapezoid`.

    :returns: The most extrapolated value along with the full table.
    """
    levels = check_count(levels, "levels")
    n0 = check_count(n0, "n0")

    table = np.full((levels, levels), np.nan)

    coarse = trapezoid(f, a, b, n0, vectorized)
    table[0, 0] = coarse.integral
    n, h, evaluations = n0, coarse.h, coarse.evaluations

    for j in range(1, levels):
        fine = trapezoid_refine(f, a, b, n, table[j - 1, 0], vectorized)
        n, h = fine.n, fine.h
        evaluations += fine.evaluations
        table[j, 0] = fine.integral

        for i in range(1, j + 1):
            table[j, i] = richardson_extrapolate(
                table[j - 1, i - 1], table[j, i - 1], TRAPEZOID_ORDER * i
            )

    return RombergResult(float(table[-1, -1]), h, n, table, evaluations)


def trapezoid_adaptive(
    f: Callable,
    a: float,
    b: float,
    n0: int = DEFAULT_INITIAL_SUBINTERVALS,
    tol: float = DEFAULT_TOLERANCE,
    max_refinements: int = MAX_REFINEMENTS,
    strict: bool = False,
    vectorized: bool = False,
) -> AdaptiveQuadratureResult:
    """Integrate f over [a, b] to a tolerance by extrapolated node doubling.

    Starting from the trapezoidal rule on n0 subintervals the number of
    subintervals is doubled, reusing all previous function values, and each
    new trapezoidal value is extrapolated to Simpson's rule. The discrepancy
    between the extrapolated and the trapezoidal value at the same resolution
    serves as error estimate; the extrapolated value is returned once it is
    below tol.

    :param f: The integrand.
    :param a: The left end of the interval.
    :param b: The right end of the interval.
    :param n0: The initial number of subintervals.
    :param tol: The requested tolerance.
    :param max_refinements: The maximal number of node doublings.
    :param strict: If True, raise instead of returning an unconverged result.
    :param vectorized: See :func:`trapezoid`. Each doubling then costs a
        single call of f.

    :returns: The extrapolated approximation with its error estimate.

    :raises ToleranceNotAchievedError: If strict and the tolerance was not
        reached within max_refinements doublings.
    """
    check_callable(f)
    a, b = check_interval(a, b)
    n0 = check_count(n0, "n0")
    tol = check_positive(tol, "tol")
    max_refinements = check_count(max_refinements, "max_refinements")

    current = trapezoid(f, a, b, n0, vectorized)
    evaluations = current.evaluations

    extrapolated = current.integral
    eta = np.inf
    refinements = 0
    while eta > tol and refinements < max_refinements:
        fine = trapezoid_refine(
            f, a, b, current.n, current.integral, vectorized
        )
        extrapolated = richardson_extrapolate(
            current.integral, fine.integral, TRAPEZOID_ORDER
        )
        eta = abs(extrapolated - fine.integral)

        current = fine
        evaluations += fine.evaluations
        refinements += 1
        logger.debug(f"n = {current.n}: estimate {extrapolated}, eta = {eta:.3e}")

    result = AdaptiveQuadratureResult(
        integral=float(extrapolated),
        h=current.h,
        n=current.n,
        error_estimate=float(eta),
        refinements=refinements,
        evaluations=evaluations,
        converged=bool(eta <= tol),
    )

    if not result.converged:
        message = (
            f"Tolerance {tol:.1e} not achieved after {refinements} refinements "
            f"(error estimate {eta:.3e})"
        )
        if strict:
            raise ToleranceNotAchievedError(message, result)
        logger.warning(message)

    return result
