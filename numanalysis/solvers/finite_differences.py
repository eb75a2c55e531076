"""Solve the 1D Dirichlet boundary value problem with finite differences."""

from numanalysis.constants import CONDITION_NUMBER_WARNING
from numanalysis.exceptions import IllConditionedWarning
from numanalysis.log import get_logger
from numanalysis.tridiagonal import SymTridiagonal
from numanalysis.utils import (
    check_callable,
    check_count,
    check_finite,
    check_positive,
    evaluate,
    uniform_grid,
)

from dataclasses import dataclass
from typing import Callable
import numpy as np
import warnings

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class FiniteDifferenceResult:
    """The finite difference approximation and its intermediates.

    :param u: The approximation at the interior nodes, of shape (N,).
    :param x: The interior nodes, of shape (N,).
    :param h: The step size.
    :param A: The system matrix.
    :param b: The right-hand side including the boundary terms.
    :param b0: The boundary value at x = 0.
    :param bL: The boundary value at x = L.
    :param L: The length of the domain.
    """

    u: np.ndarray
    x: np.ndarray
    h: float
    A: SymTridiagonal
    b: np.ndarray
    b0: float
    bL: float
    L: float

    @property
    def nodes(self) -> np.ndarray:
        """All N + 2 nodes, including both ends of the domain."""
        return np.concatenate([[0.0], self.x, [self.L]])

    @property
    def values(self) -> np.ndarray:
        """The full nodal approximation, including the boundary values."""
        return np.concatenate([[self.b0], self.u, [self.bL]])


def fd_dirichlet(
    f: Callable,
    L: float,
    b0: float,
    bL: float,
    N: int,
    condition_threshold: float = CONDITION_NUMBER_WARNING,
) -> FiniteDifferenceResult:
    """Solve -u'' = f on (0, L) with u(0) = b0 and u(L) = bL.

    The second derivative is replaced by the central difference quotient on N
    equally spaced interior nodes, which gives a symmetric positive definite
    tridiagonal system. The error decreases as O(h^2) until round-off,
    amplified by the O(N^2) condition number, takes over.

    :param f: The source term, e.g. an external heat source.
    :param L: The length of the domain.
    :param b0: The boundary value at x = 0.
    :param bL: The boundary value at x = L.
    :param N: The number of interior nodes.
    :param condition_threshold: Warn if the condition number of the system
        matrix exceeds this value. Pass None to skip the check.

    :returns: A :class:`FiniteDifferenceResult`.
    """
    check_callable(f)
    L = check_positive(L, "L")
    b0 = check_finite(b0, "b0")
    bL = check_finite(bL, "bL")
    N = check_count(N, "N")

    h = L / (N + 1)  # Step size
    x = uniform_grid(0.0, L, N + 1)[1:-1]  # Interior nodes

    # Build the system matrix
    A = SymTridiagonal.constant(N, 2.0 / h**2, -1.0 / h**2)

    # Build the right-hand side and fold in the boundary conditions
    b = evaluate(f, x)
    b[0] += b0 / h**2
    b[-1] += bL / h**2

    if condition_threshold is not None:
        kappa = A.cond()
        if kappa > condition_threshold:
            warnings.warn(
                f"Condition number {kappa:.2e} of the {N} x {N} system exceeds "
                f"{condition_threshold:.2e}; round-off may dominate the error",
                IllConditionedWarning,
                stacklevel=2,
            )

    logger.debug(f"Solving finite difference system with N = {N}, h = {h:.3e}")
    u = A.solve(b)

    return FiniteDifferenceResult(u, x, h, A, b, b0, bL, L)
