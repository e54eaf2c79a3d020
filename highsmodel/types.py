"""
Basic types shared by models, envelopes and solutions
"""
from enum import Enum, IntEnum
from typing import NamedTuple


class Nonzero(NamedTuple):
    """
    One entry of a sparse matrix.

    Rows and columns are indexed from zero. Zero values are legal and are
    stored like any other value.
    """
    row: int
    col: int
    value: float


class ObjectiveSense(IntEnum):
    """Objective sense, valued as the backend's ``ObjSense`` codes"""
    MINIMIZE = 1
    MAXIMIZE = -1


class MatrixFormat(IntEnum):
    """Constraint-matrix storage format, valued as ``MatrixFormat`` codes"""
    COLWISE = 1
    ROWWISE = 2


class HessianFormat(IntEnum):
    """Hessian storage format, valued as ``HessianFormat`` codes"""
    TRIANGULAR = 1
    SQUARE = 2


class ProblemKind(Enum):
    """Which solver path a problem takes"""
    LP = 'lp'
    MIP = 'mip'
    QP = 'qp'


class VariableType(IntEnum):
    """Type of a model variable, valued as the backend's ``HighsVarType``"""
    CONTINUOUS = 0
    INTEGER = 1
    SEMI_CONTINUOUS = 2
    SEMI_INTEGER = 3
    IMPLICIT_INTEGER = 4


class BasisStatus(IntEnum):
    """Basis status of a row or column"""
    UNKNOWN = 0
    LOWER = 1
    BASIC = 2
    UPPER = 3
    ZERO = 4
    NONBASIC = 5


class ModelStatus(IntEnum):
    """Status of an attempt to solve a model"""
    UNKNOWN = 0
    NOT_SET = 1
    LOAD_ERROR = 2
    MODEL_ERROR = 3
    PRESOLVE_ERROR = 4
    SOLVE_ERROR = 5
    POSTSOLVE_ERROR = 6
    MODEL_EMPTY = 7
    OPTIMAL = 8
    INFEASIBLE = 9
    UNBOUNDED_OR_INFEASIBLE = 10
    UNBOUNDED = 11
    OBJECTIVE_BOUND = 12
    OBJECTIVE_TARGET = 13
    TIME_LIMIT = 14
    ITERATION_LIMIT = 15


# Backend status codes (kHighsStatus*)
STATUS_ERROR = -1
STATUS_OK = 0
STATUS_WARNING = 1

# kHighsSolutionStatusFeasible and kHighsBasisValidityValid
SOLUTION_STATUS_FEASIBLE = 2
BASIS_VALIDITY_VALID = 1

# kHighsModelStatus* -> ModelStatus
_MODEL_STATUS_CODES = {
    0: ModelStatus.NOT_SET,
    1: ModelStatus.LOAD_ERROR,
    2: ModelStatus.MODEL_ERROR,
    3: ModelStatus.PRESOLVE_ERROR,
    4: ModelStatus.SOLVE_ERROR,
    5: ModelStatus.POSTSOLVE_ERROR,
    6: ModelStatus.MODEL_EMPTY,
    7: ModelStatus.OPTIMAL,
    8: ModelStatus.INFEASIBLE,
    9: ModelStatus.UNBOUNDED_OR_INFEASIBLE,
    10: ModelStatus.UNBOUNDED,
    11: ModelStatus.OBJECTIVE_BOUND,
    12: ModelStatus.OBJECTIVE_TARGET,
    13: ModelStatus.TIME_LIMIT,
    14: ModelStatus.ITERATION_LIMIT,
}

# kHighsBasisStatus* -> BasisStatus
_BASIS_STATUS_CODES = {
    0: BasisStatus.LOWER,
    1: BasisStatus.BASIC,
    2: BasisStatus.UPPER,
    3: BasisStatus.ZERO,
    4: BasisStatus.NONBASIC,
}


def model_status_from_code(code) -> ModelStatus:
    """
    Map a backend model-status code to a ``ModelStatus``.

    Codes this package does not know about (for example, ones added by a
    newer backend) map to ``ModelStatus.UNKNOWN`` instead of raising.
    """
    return _MODEL_STATUS_CODES.get(int(code), ModelStatus.UNKNOWN)


def basis_status_from_code(code) -> BasisStatus:
    """Map a backend basis-status code to a ``BasisStatus``."""
    return _BASIS_STATUS_CODES.get(int(code), BasisStatus.UNKNOWN)


def variable_type_to_code(vtype) -> int:
    """Map a ``VariableType`` (or its integer value) to a backend code."""
    return int(VariableType(vtype))
