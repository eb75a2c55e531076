"""Tests for the convergence table script."""

from numanalysis.scripts.convergence_tables import (
    adaptive_table,
    fd_table,
    fem_table,
    main,
    quadrature_table,
)
import numpy as np


def test_fd_table():
    table = fd_table([20, 40, 80, 160])

    assert list(table.columns) == ["n", "h", "error", "rate"]
    assert np.isnan(table["rate"][0])
    assert np.allclose(table["rate"][1:], 2, atol=0.3)


def test_fem_table():
    table = fem_table([10, 20, 40], mass=False, rule="gauss")

    assert np.all(table["error"] < 1e-10)


def test_quadrature_table():
    table = quadrature_table([2, 4, 8, 16])

    assert set(table["rule"]) == {"trapezoid", "simpson"}
    rates = table.groupby("rule")["rate"].last()
    assert np.isclose(rates["trapezoid"], 2, atol=0.1)
    assert np.isclose(rates["simpson"], 4, atol=0.1)


def test_adaptive_table():
    table = adaptive_table([1e-3, 1e-6])

    assert table["converged"].all()
    assert np.all(table["error"] <= table["tol"])
    assert table["evaluations"].is_monotonic_increasing


def test_main(tmp_path, capsys):
    path = tmp_path / "fd.png"

    table = main(["fd", "--ns", "10", "20", "40", "--plot", str(path)])

    assert len(table) == 3
    assert path.exists()
    assert "rate" in capsys.readouterr().out


def test_main_adaptive(capsys):
    table = main(["adaptive", "--tols", "1e-4"])

    assert len(table) == 1
    assert "converged" in capsys.readouterr().out
