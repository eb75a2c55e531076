#! /usr/bin/env python
"""Tabulate and plot the convergence of the solvers and quadrature rules."""

from numanalysis.constants import (
    FEM_CONDUCTIVITY,
    FEM_LENGTH,
    LEFT_TEMPERATURE,
    RIGHT_TEMPERATURE,
    ROD_LENGTH,
)
from numanalysis.convergence import (
    convergence_order,
    convergence_study,
    max_error,
    observed_rates,
)
from numanalysis.log import set_log_level
from numanalysis.quadrature import simpson, trapezoid, trapezoid_adaptive
from numanalysis.solvers.finite_differences import fd_dirichlet
from numanalysis.solvers.finite_elements import heat_equation_1d_fem

from argparse import ArgumentParser
from pathlib import Path
from scipy.integrate import quad
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


def rod_exact(x):
    """Exact solution of -u'' = sin(x) on (0, 2pi) with u(0) = 1, u(2pi) = 2."""
    return np.sin(x) + x / (2 * np.pi) + 1


def fem_exact(x):
    """Exact solution of -u'' = x on (0, pi) with zero boundary values."""
    return x * (np.pi**2 - x**2) / 6


def error_table(hs, errors, ns):
    """Tabulate errors along with the order observed between refinements."""
    return pd.DataFrame(
        {
            "n": ns,
            "h": hs,
            "error": errors,
            "rate": np.concatenate([[np.nan], observed_rates(hs, errors)]),
        }
    )


def fd_table(ns, progress=False):
    """Convergence of finite differences for the heated rod."""
    hs, errors = convergence_study(
        lambda N: fd_dirichlet(
            np.sin, ROD_LENGTH, LEFT_TEMPERATURE, RIGHT_TEMPERATURE, N
        ),
        lambda res: max_error(res.u, rod_exact(res.x)),
        ns,
        title="Finite differences..." if progress else None,
    )
    return error_table(hs, errors, ns)


def fem_table(ns, mass=True, rule="trapezoid", progress=False):
    """Convergence of the Galerkin method for -u'' = x."""
    hs, errors = convergence_study(
        lambda n: heat_equation_1d_fem(
            lambda x: x, FEM_CONDUCTIVITY, FEM_LENGTH, n, mass=mass, rule=rule
        ),
        lambda res: max_error(res.u, fem_exact(res.x)),
        ns,
        title="Finite elements..." if progress else None,
    )
    return error_table(hs, errors, ns)


def quadrature_table(ns, a=0.0, b=1.0):
    """Errors of the trapezoidal and Simpson's rules for the exponential."""
    exact = np.exp(b) - np.exp(a)

    tables = []
    for name, rule in [("trapezoid", trapezoid), ("simpson", simpson)]:
        results = [rule(np.exp, a, b, n) for n in ns]
        hs = np.array([res.h for res in results])
        errors = np.array([abs(res.integral - exact) for res in results])
        table = error_table(hs, errors, ns)
        table.insert(0, "rule", name)
        tables.append(table)

    return pd.concat(tables, ignore_index=True)


def adaptive_table(tols, a=0.0, b=2.0):
    """Accuracy and cost of adaptive quadrature for x^2 exp(-2x)."""
    g = lambda x: x**2 * np.exp(-2 * x)  # noqa: E731
    reference, _ = quad(g, a, b, epsabs=1e-14, epsrel=1e-14)

    rows = []
    for tol in tols:
        res = trapezoid_adaptive(g, a, b, tol=tol, vectorized=True)
        rows.append(
            {
                "tol": tol,
                "n": res.n,
                "evaluations": res.evaluations,
                "estimate": res.error_estimate,
                "error": abs(res.integral - reference),
                "converged": res.converged,
            }
        )
    return pd.DataFrame(rows)


def plot_convergence(table, path, title=""):
    """Plot the errors on a log-log scale with a line of best fit."""
    plt.figure(figsize=(8, 6))
    groups = table.groupby("rule") if "rule" in table else [("error", table)]
    for label, group in groups:
        plt.loglog(group["h"], group["error"], "o-", label=label)

        # plot line of best fit
        m = convergence_order(group["h"], group["error"])
        x = np.log(group["h"])
        c = np.mean(np.log(group["error"]) - m * x)
        plt.loglog(group["h"], np.exp(m * x + c), "k:", label=f"$s = {m:.2f}$")

    plt.xlabel(r"$h$")
    plt.ylabel("Error")
    plt.title(title)
    plt.legend()
    plt.savefig(path, dpi=300)
    plt.close()


def build_parser():
    parser = ArgumentParser(description=__doc__)
    parser.add_argument("--verbose", action="store_true", help="Log solver details.")
    commands = parser.add_subparsers(dest="command", required=True)

    fd = commands.add_parser("fd", help="Finite differences for the heated rod.")
    fd.add_argument(
        "--ns", type=int, nargs="+", default=[5 * 2**k for k in range(10)]
    )

    fem = commands.add_parser("fem", help="Galerkin method for -u'' = x.")
    fem.add_argument(
        "--ns", type=int, nargs="+", default=[5 * 2**k for k in range(8)]
    )
    fem.add_argument(
        "--no-mass", action="store_true", help="Solve with the stiffness matrix only."
    )
    fem.add_argument("--rule", choices=["trapezoid", "gauss"], default="trapezoid")

    rules = commands.add_parser("quadrature", help="Trapezoidal and Simpson's rule.")
    rules.add_argument("--ns", type=int, nargs="+", default=[2**k for k in range(1, 9)])

    adaptive = commands.add_parser("adaptive", help="Adaptive extrapolation.")
    adaptive.add_argument(
        "--tols", type=float, nargs="+", default=[10.0**-k for k in range(2, 11, 2)]
    )

    for sub in [fd, fem, rules]:
        sub.add_argument("--plot", type=Path, help="Save a convergence plot here.")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_log_level("DEBUG")

    if args.command == "fd":
        table = fd_table(args.ns, progress=True)
        title = "Convergence of Dirichlet finite differences"
    elif args.command == "fem":
        table = fem_table(args.ns, mass=not args.no_mass, rule=args.rule, progress=True)
        title = "Convergence of the Galerkin method"
    elif args.command == "quadrature":
        table = quadrature_table(args.ns)
        title = "Convergence of composite quadrature"
    else:
        table = adaptive_table(args.tols)
        title = None

    print(table.to_string(index=False))

    if title is not None and args.plot is not None:
        plot_convergence(table, args.plot, title)
        print(f"Saved plot to {args.plot}")

    return table


if __name__ == "__main__":
    main()
