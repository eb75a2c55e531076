"""Tests for the symmetric tridiagonal matrices."""

from numanalysis.exceptions import InvalidInputError
from numanalysis.tridiagonal import SymTridiagonal
import numpy as np
import pytest
import scipy.linalg as la

rng = np.random.default_rng(42)


def random_spd(m):
    """A diagonally dominant, hence positive definite, matrix."""
    off = rng.uniform(-1, 1, m - 1)
    diag = 2.5 + rng.uniform(0, 1, m)
    return SymTridiagonal(diag, off)


def test_toarray():
    T = SymTridiagonal([2.0, 3.0, 4.0], [-1.0, 0.5])

    assert np.allclose(
        T.toarray(), np.array([[2, -1, 0], [-1, 3, 0.5], [0, 0.5, 4]])
    )


def test_addition():
    T = SymTridiagonal.constant(4, 2.0, -1.0)
    S = SymTridiagonal.constant(4, 1.0, 0.5)

    assert np.allclose((T + S).toarray(), T.toarray() + S.toarray())


def test_matvec():
    T = random_spd(7)
    u = rng.uniform(-1, 1, 7)

    assert np.allclose(T @ u, T.toarray() @ u)


@pytest.mark.parametrize("m", [1, 2, 5, 50])
def test_solve(m):
    T = random_spd(m)
    b = rng.uniform(-1, 1, m)

    assert np.allclose(T.solve(b), np.linalg.solve(T.toarray(), b))


def test_solve_indefinite():
    """The LU fallback handles matrices which are not positive definite."""
    T = SymTridiagonal([1.0, -2.0, 3.0], [2.0, 1.0])
    b = np.array([1.0, 2.0, 3.0])

    assert np.allclose(T.solve(b), np.linalg.solve(T.toarray(), b))


@pytest.mark.parametrize("m", [2, 10, 100])
def test_toeplitz_eigvals(m):
    T = SymTridiagonal.constant(m, 2.0, -1.0)

    assert T.is_toeplitz()
    assert np.allclose(T.eigvals(), np.linalg.eigvalsh(T.toarray()))
    assert np.isclose(T.cond(), np.linalg.cond(T.toarray()))


@pytest.mark.parametrize("m", [3, 10, 60])
def test_cond(m):
    T = random_spd(m)

    assert not T.is_toeplitz()
    assert np.allclose(T.eigvals(), np.linalg.eigvalsh(T.toarray()))
    assert np.isclose(T.cond(), np.linalg.cond(T.toarray()))


def test_cond_single():
    assert SymTridiagonal([4.0], []).cond() == 1.0


def test_solve_single():
    T = SymTridiagonal([4.0], [])

    assert np.allclose(T.solve([2.0]), [0.5])
    assert np.allclose(SymTridiagonal([-2.0], []).solve([1.0]), [-0.5])

    with pytest.raises(la.LinAlgError):
        SymTridiagonal([0.0], []).solve([1.0])


@pytest.mark.parametrize("m", [2, 3, 10, 1000])
@pytest.mark.parametrize("d, e", [(2.0, -1.0), (2.0, 1.0), (5.0, 0.3)])
def test_toeplitz_cond_closed_form(m, d, e):
    """The extreme eigenvalues give the condition number of a Toeplitz matrix."""
    T = SymTridiagonal.constant(m, d, e)
    eigs = np.abs(np.linalg.eigvalsh(T.toarray()))

    assert np.isclose(T.cond(), eigs.max() / eigs.min())


def test_toeplitz_cond_indefinite():
    T = SymTridiagonal.constant(6, 0.5, 1.0)
    eigs = np.abs(np.linalg.eigvalsh(T.toarray()))

    assert np.isclose(T.cond(), eigs.max() / eigs.min())


@pytest.mark.parametrize(
    "diagonal, offdiagonal",
    [([], []), ([1.0, 2.0], []), ([1.0, 2.0], [1.0, 2.0]), ([[1.0]], [])],
)
def test_invalid_shapes(diagonal, offdiagonal):
    with pytest.raises(InvalidInputError):
        SymTridiagonal(diagonal, offdiagonal)


def test_shape_mismatch():
    with pytest.raises(InvalidInputError):
        SymTridiagonal.constant(3, 2.0, -1.0) + SymTridiagonal.constant(4, 2.0, -1.0)

    with pytest.raises(InvalidInputError):
        SymTridiagonal.constant(3, 2.0, -1.0).solve(np.ones(4))
