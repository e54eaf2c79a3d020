"""
highsmodel Python Package

Model construction and result mapping for the HiGHS linear, mixed-integer
and quadratic programming solver.
"""

from .solver import Solver, Envelope, build_envelope, solve
from .parameters import Parameters
from .results import Solution, compute_objective, map_result
from .model import Model, ProblemSpec
from .backend import HighsSession
from .sparse import CSRMatrix, canonicalize, encode_csr, to_csr, nonzeros_from_matrix
from .dimensions import Dimensions, infer_dimensions, normalize_bounds
from .types import (
    Nonzero, VariableType, BasisStatus, ModelStatus, ObjectiveSense,
    MatrixFormat, ProblemKind,
)
from .errors import (
    HighsModelError, ModelDefinitionError, InvalidIndexError,
    NotUpperTriangularError, LengthMismatchError, DimensionMismatchError,
    UnsupportedFormatError, BackendError, BackendWarning,
)

__version__ = "0.1.0"

__all__ = [
    'Solver',
    'Model',
    'ProblemSpec',
    'solve',
    'Parameters',
    'Solution',
    'HighsSession',
    '__version__',
    # Envelope and result mapping
    'Envelope',
    'build_envelope',
    'map_result',
    'compute_objective',
    # Sparse matrices and dimensions
    'CSRMatrix',
    'canonicalize',
    'encode_csr',
    'to_csr',
    'nonzeros_from_matrix',
    'Dimensions',
    'infer_dimensions',
    'normalize_bounds',
    # Types
    'Nonzero',
    'VariableType',
    'BasisStatus',
    'ModelStatus',
    'ObjectiveSense',
    'MatrixFormat',
    'ProblemKind',
    # Errors
    'HighsModelError',
    'ModelDefinitionError',
    'InvalidIndexError',
    'NotUpperTriangularError',
    'LengthMismatchError',
    'DimensionMismatchError',
    'UnsupportedFormatError',
    'BackendError',
    'BackendWarning',
]
