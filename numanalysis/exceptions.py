"""Errors and warnings raised by the numerical routines."""


class NumanalysisError(Exception):
    """Base class for all errors raised by :mod:`numanalysis`."""


class InvalidInputError(NumanalysisError, ValueError):
    """Raised when problem data is rejected before any grid is constructed.

    Examples are a subdivision count below its minimum, a degenerate interval
    ``a >= b`` or a non-finite boundary value.
    """


class ToleranceNotAchievedError(NumanalysisError, RuntimeError):
    """Raised by strict adaptive quadrature when the refinement cap is hit.

    The unconverged :class:`~numanalysis.quadrature.AdaptiveQuadratureResult`
    is available as :attr:`result`.
    """

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result


class IllConditionedWarning(RuntimeWarning):
    """Issued when a system matrix is too ill-conditioned for its accuracy."""
