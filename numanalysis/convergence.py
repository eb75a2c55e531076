"""Empirical convergence analysis."""

from .exceptions import InvalidInputError
from alive_progress import alive_it
from typing import Callable, Iterable
import numpy as np


def convergence_order(h: np.ndarray, errors: np.ndarray) -> float:
    """Fit the order p in ``error ~ C h^p`` by least squares on a log-log scale.

    :param h: The step sizes (or, for a negative order, the node counts).
    :param errors: The corresponding errors.

    :returns: The slope of the fitted line.
    """
    h = np.asarray(h, dtype=np.float64)
    errors = np.asarray(errors, dtype=np.float64)
    if h.shape != errors.shape or len(h) < 2:
        raise InvalidInputError("Need at least two matching step sizes and errors")

    slope, _ = np.polyfit(np.log(h), np.log(errors), 1)
    return float(slope)


def observed_rates(h: np.ndarray, errors: np.ndarray) -> np.ndarray:
    """Compute the order observed between consecutive refinements.

    :returns: An array of length ``len(h) - 1``.
    """
    h = np.asarray(h, dtype=np.float64)
    errors = np.asarray(errors, dtype=np.float64)
    return np.log(errors[1:] / errors[:-1]) / np.log(h[1:] / h[:-1])


def max_error(approx: np.ndarray, exact: np.ndarray) -> float:
    """The largest absolute deviation."""
    return float(np.max(np.abs(np.asarray(approx) - np.asarray(exact))))


def convergence_study(
    solve: Callable, error: Callable, ns: Iterable[int], title: str = None
) -> tuple[np.ndarray, np.ndarray]:
    """Run a solver for a sequence of resolutions and record the errors.

    :param solve: Maps a resolution n to a result with a step size ``h``.
    :param error: Maps a result to its error.
    :param ns: The resolutions.
    :param title: If given, show a progress bar with this title.

    :returns: A tuple containing the step sizes and errors.
    """
    ns = list(ns)
    it = alive_it(ns, title=title) if title is not None else ns

    hs, errors = [], []
    for n in it:
        result = solve(n)
        hs.append(result.h)
        errors.append(error(result))

    return np.array(hs), np.array(errors)
