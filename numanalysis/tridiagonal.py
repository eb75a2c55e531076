"""Symmetric tridiagonal matrices."""

from .exceptions import InvalidInputError
from .log import get_logger
from dataclasses import dataclass
import numpy as np
import scipy.linalg as la

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SymTridiagonal:
    """A real symmetric tridiagonal matrix of size m x m.

    :param diagonal: An array of shape (m,) containing the diagonal.
    :param offdiagonal: An array of shape (m - 1,) containing the sub- and
        super-diagonal.
    """

    diagonal: np.ndarray
    offdiagonal: np.ndarray

    def __post_init__(self):
        diagonal = np.asarray(self.diagonal, dtype=np.float64)
        offdiagonal = np.asarray(self.offdiagonal, dtype=np.float64)

        if diagonal.ndim != 1 or len(diagonal) == 0:
            raise InvalidInputError("diagonal must be a non-empty 1D array")
        if offdiagonal.shape != (len(diagonal) - 1,):
            raise InvalidInputError(
                f"offdiagonal must have shape {(len(diagonal) - 1,)}, "
                f"got {offdiagonal.shape}"
            )

        object.__setattr__(self, "diagonal", diagonal)
        object.__setattr__(self, "offdiagonal", offdiagonal)

    @classmethod
    def constant(cls, size: int, diagonal: float, offdiagonal: float):
        """Construct the Toeplitz matrix with constant diagonals."""
        return cls(np.full(size, diagonal), np.full(size - 1, offdiagonal))

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.diagonal), len(self.diagonal)

    def __len__(self):
        return len(self.diagonal)

    def __add__(self, other):
        if not isinstance(other, SymTridiagonal):
            return NotImplemented
        if self.shape != other.shape:
            raise InvalidInputError(f"Shape mismatch: {self.shape} and {other.shape}")
        return SymTridiagonal(
            self.diagonal + other.diagonal, self.offdiagonal + other.offdiagonal
        )

    def __matmul__(self, u):
        u = np.asarray(u, dtype=np.float64)
        if u.shape != (len(self),):
            raise InvalidInputError(f"u must have shape {(len(self),)}, got {u.shape}")

        y = self.diagonal * u
        y[1:] += self.offdiagonal * u[:-1]
        y[:-1] += self.offdiagonal * u[1:]
        return y

    def toarray(self) -> np.ndarray:
        """The matrix as a dense array."""
        return (
            np.diag(self.diagonal)
            + np.diag(self.offdiagonal, 1)
            + np.diag(self.offdiagonal, -1)
        )

    def banded(self) -> np.ndarray:
        """The upper banded storage used by :func:`scipy.linalg.solveh_banded`."""
        ab = np.zeros((2, len(self)))
        ab[0, 1:] = self.offdiagonal
        ab[1] = self.diagonal
        return ab

    def solve(self, b: np.ndarray) -> np.ndarray:
        """Solve the linear system with the matrix.

        A banded Cholesky factorisation is used, falling back to a banded LU
        factorisation if the matrix is not positive definite.

        :param b: The right-hand side, of shape (m,).

        :returns: The solution, of shape (m,).
        """
        b = np.asarray(b, dtype=np.float64)
        if b.shape != (len(self),):
            raise InvalidInputError(f"b must have shape {(len(self),)}, got {b.shape}")

        if len(self) == 1:
            if self.diagonal[0] == 0.0:
                raise la.LinAlgError("Singular matrix")
            return b / self.diagonal

        try:
            return la.solveh_banded(self.banded(), b, lower=False)
        except la.LinAlgError:
            logger.debug("Matrix is not positive definite, using LU")

        ab = np.zeros((3, len(self)))
        ab[0, 1:] = self.offdiagonal
        ab[1] = self.diagonal
        ab[2, :-1] = self.offdiagonal
        return la.solve_banded((1, 1), ab, b)

    def is_toeplitz(self) -> bool:
        """Whether both diagonals are constant."""
        return bool(
            np.all(self.diagonal == self.diagonal[0])
            and np.all(self.offdiagonal == self.offdiagonal[:1])
        )

    def eigvals(self) -> np.ndarray:
        """The eigenvalues in ascending order.

        For constant diagonals ``d`` and ``e`` the eigenvalues are known in
        closed form, ``d + 2 e cos(j pi / (m + 1))`` for ``j = 1, ..., m``.
        """
        m = len(self)
        if m == 1:
            return self.diagonal.copy()

        if self.is_toeplitz():
            d, e = self.diagonal[0], self.offdiagonal[0]
            j = np.arange(1, m + 1)
            return np.sort(d + 2.0 * e * np.cos(j * np.pi / (m + 1)))

        return la.eigvalsh_tridiagonal(self.diagonal, self.offdiagonal)

    def cond(self) -> float:
        """The condition number in the 2-norm, ``max |lambda| / min |lambda|``."""
        m = len(self)
        if m == 1:
            return 1.0 if self.diagonal[0] != 0.0 else np.inf

        if self.is_toeplitz():
            # Extreme eigenvalues d -+ 2 |e| cos(pi / (m + 1))
            d, e = self.diagonal[0], self.offdiagonal[0]
            spread = 2.0 * abs(e) * np.cos(np.pi / (m + 1))
            lo, hi = d - spread, d + spread
        else:
            # Only the extreme eigenvalues are needed
            lo, hi = (
                la.eigvalsh_tridiagonal(
                    self.diagonal, self.offdiagonal, select="i", select_range=(i, i)
                )[0]
                for i in (0, m - 1)
            )

        if lo <= 0.0 <= hi:
            eigs = np.abs(self.eigvals())
        else:
            eigs = np.abs([lo, hi])

        smallest = eigs.min()
        if smallest == 0.0:
            return np.inf
        return float(eigs.max() / smallest)
