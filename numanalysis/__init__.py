from .exceptions import (  # noqa: F401
    IllConditionedWarning,
    InvalidInputError,
    NumanalysisError,
    ToleranceNotAchievedError,
)
from .quadrature import (  # noqa: F401
    richardson_extrapolate,
    romberg,
    simpson,
    simpson_extrapolated,
    trapezoid,
    trapezoid_adaptive,
    trapezoid_refine,
)
from .solvers.finite_differences import fd_dirichlet  # noqa: F401
from .solvers.finite_elements import heat_equation_1d_fem, hat_function  # noqa: F401
from .solvers.sine_galerkin import sine_galerkin, sine_solution  # noqa: F401
from .tridiagonal import SymTridiagonal  # noqa: F401
