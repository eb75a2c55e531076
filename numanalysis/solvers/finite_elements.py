"""Solve the 1D heat equation with piecewise linear finite elements."""

from numanalysis.exceptions import InvalidInputError
from numanalysis.log import get_logger
from numanalysis.quadrature import gauss_quadrature
from numanalysis.tridiagonal import SymTridiagonal
from numanalysis.utils import (
    check_callable,
    check_count,
    check_positive,
    evaluate,
    uniform_grid,
)

from dataclasses import dataclass
from typing import Callable
import numpy as np

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class GalerkinResult:
    """The finite element approximation and its intermediates.

    By the cardinality of the hat functions the coefficients ``u`` are the
    values of the approximation at the interior nodes.

    :param x: The interior nodes, of shape (n - 1,).
    :param u: The approximation at the interior nodes, of shape (n - 1,).
    :param h: The element width.
    :param A: The stiffness matrix.
    :param M: The mass matrix, or None if it was not included.
    :param f: The load vector.
    :param L: The length of the domain.
    """

    x: np.ndarray
    u: np.ndarray
    h: float
    A: SymTridiagonal
    M: SymTridiagonal
    f: np.ndarray
    L: float

    @property
    def nodes(self) -> np.ndarray:
        return np.concatenate([[0.0], self.x, [self.L]])

    @property
    def values(self) -> np.ndarray:
        return np.concatenate([[0.0], self.u, [0.0]])

    def __call__(self, points: np.ndarray) -> np.ndarray:
        """Evaluate the piecewise linear approximation.

        :param points: Points in [0, L].

        :returns: The approximation at each point.
        """
        return np.interp(points, self.nodes, self.values)


def hat_function(nodes: np.ndarray, i: int) -> Callable:
    """Construct the hat function of node i.

    The hat function is linear on each element, one at ``nodes[i]`` and zero at
    all other nodes, so it is supported on ``[nodes[i - 1], nodes[i + 1]]``.

    :param nodes: The increasing nodes of the mesh.
    :param i: The index of the node.

    :returns: A vectorised function.
    """
    nodes = np.asarray(nodes, dtype=np.float64)
    if not 0 <= i < len(nodes):
        raise InvalidInputError(f"Node index {i} out of range for {len(nodes)} nodes")

    cardinal = np.zeros(len(nodes))
    cardinal[i] = 1.0

    def H(x):
        return np.interp(x, nodes, cardinal)

    return H


def stiffness_matrix(k: float, h: float, n: int) -> SymTridiagonal:
    """Assemble the stiffness matrix of the integrals k H_i' H_j'.

    :param k: The conductivity.
    :param h: The element width.
    :param n: The number of elements.

    :returns: The (n - 1) x (n - 1) matrix for the interior hat functions.
    """
    return SymTridiagonal.constant(n - 1, 2.0 * k / h, -k / h)


def mass_matrix(h: float, n: int) -> SymTridiagonal:
    """Assemble the mass matrix coupling the interior hat functions.

    :param h: The element width.
    :param n: The number of elements.

    :returns: The (n - 1) x (n - 1) matrix with diagonal 2h/3 and
        off-diagonal -h/3.
    """
    return SymTridiagonal.constant(n - 1, 2.0 * h / 3.0, -h / 3.0)


def load_vector(
    f: Callable, nodes: np.ndarray, rule: str = "trapezoid", degree: int = 4
) -> np.ndarray:
    """Approximate the integrals of f H_i for the interior hat functions.

    :param f: The source term.
    :param nodes: The equally spaced nodes of the mesh, including both ends.
    :param rule: "trapezoid" for ``h/4 (f(x_{i-1}) + 2 f(x_i) + f(x_{i+1}))``,
        or "gauss" to integrate on each element with Gauss-Legendre points.
    :param degree: The degree of the Gauss rule.

    :returns: An array of shape (n - 1,).
    """
    nodes = np.asarray(nodes, dtype=np.float64)
    h = nodes[1] - nodes[0]

    if rule == "trapezoid":
        fx = evaluate(f, nodes)
        return h / 4 * (fx[:-2] + 2 * fx[1:-1] + fx[2:])

    elif rule == "gauss":
        points, weights = gauss_quadrature(degree)

        # Local shape functions on the reference interval
        phi = np.stack([1.0 - points, points], axis=-1)

        # Map the quadrature points onto every element
        fq = evaluate(f, nodes[:-1, np.newaxis] + h * points[np.newaxis, :])

        f_loc = np.einsum("eq,qa,q->ea", fq, phi, weights, optimize=True) * h

        # Assemble the global load vector
        f_glob = np.zeros(len(nodes))
        f_glob[:-1] += f_loc[:, 0]
        f_glob[1:] += f_loc[:, 1]
        return f_glob[1:-1]

    else:
        raise InvalidInputError(f"Unknown load vector rule {rule!r}")


def heat_equation_1d_fem(
    f: Callable,
    k: float,
    L: float,
    n: int,
    mass: bool = True,
    rule: str = "trapezoid",
) -> GalerkinResult:
    """Solve -k u'' = f on (0, L) with u(0) = u(L) = 0 by the Galerkin method.

    The approximation is a linear combination of the hat functions of the
    n - 1 interior nodes of a uniform mesh with n elements. Since each hat
    function only overlaps with its neighbours, the stiffness and mass
    matrices are tridiagonal.

    :param f: The external heat source.
    :param k: The thermal conductivity.
    :param L: The length of the rod.
    :param n: The number of elements.
    :param mass: If True solve (A + M) u = f, otherwise A u = f.
    :param rule: The quadrature rule of the load vector, see
        :func:`load_vector`.

    :returns: A :class:`GalerkinResult`.
    """
    check_callable(f)
    k = check_positive(k, "k")
    L = check_positive(L, "L")
    n = check_count(n, "n", minimum=2)

    h = L / n  # Element width
    nodes = uniform_grid(0.0, L, n)  # Nodes x_0, ..., x_n

    A = stiffness_matrix(k, h, n)
    M = mass_matrix(h, n) if mass else None
    f_vec = load_vector(f, nodes, rule)

    logger.debug(f"Solving Galerkin system with n = {n}, h = {h:.3e}")
    u = (A + M).solve(f_vec) if mass else A.solve(f_vec)

    return GalerkinResult(nodes[1:-1], u, h, A, M, f_vec, L)
