"""Constants for the numerical routines."""

import numpy as np

DEFAULT_TOLERANCE = 1e-12  # Adaptive quadrature stopping tolerance
DEFAULT_INITIAL_SUBINTERVALS = 2
MAX_REFINEMENTS = 20  # Node doublings before adaptive quadrature gives up
ROMBERG_LEVELS = 5

CONDITION_NUMBER_WARNING = 1e10  # Round-off dominates the FD error beyond this

TRAPEZOID_ORDER = 2
SIMPSON_ORDER = 4

# Heated rod: -u'' = sin(x) on (0, 2pi)
ROD_LENGTH = 2.0 * np.pi
LEFT_TEMPERATURE = 1.0
RIGHT_TEMPERATURE = 2.0

# Galerkin example: -k u'' = x on (0, pi)
FEM_LENGTH = np.pi
FEM_CONDUCTIVITY = 1.0
