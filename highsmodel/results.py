"""
Solution class and result mapping for highsmodel
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .errors import BackendError, BackendWarning
from .logging import get_logger
from .types import (
    BASIS_VALIDITY_VALID, SOLUTION_STATUS_FEASIBLE, STATUS_ERROR,
    STATUS_WARNING, BasisStatus, ModelStatus, Nonzero,
    basis_status_from_code, model_status_from_code,
)

logger = get_logger(__name__)


def _frozen(arr):
    if isinstance(arr, np.ndarray):
        arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Solution:
    """
    Result of one solve.

    Attributes
    ----------
    status : ModelStatus
        Model status reported by the backend
    col_primal : np.ndarray
        Primal value of each column
    row_primal : np.ndarray
        Primal value of each row (activity ``A*x``)
    col_dual, row_dual : np.ndarray or None
        Dual values; None unless the backend reports a feasible dual solution
    col_basis, row_basis : tuple of BasisStatus or None
        Basis status of each column/row; None unless the basis is valid
    objective : float
        Objective value recomputed from the primal solution
    backend_objective : float or None
        Objective value as reported by the backend
    mip_node_count : int or None
        Branch-and-bound nodes explored
    mip_gap : float or None
        Relative MIP gap
    max_integrality_violation : float or None
        Largest distance of an integer column from an integer value
    warning : BackendWarning or None
        Set when a backend call completed with a warning

    Methods
    -------
    is_optimal()
        Check if solution is optimal
    to_dict()
        Convert solution to dictionary
    """
    status: ModelStatus
    col_primal: np.ndarray
    row_primal: np.ndarray
    objective: float
    col_dual: Optional[np.ndarray] = None
    row_dual: Optional[np.ndarray] = None
    col_basis: Optional[Tuple[BasisStatus, ...]] = None
    row_basis: Optional[Tuple[BasisStatus, ...]] = None
    backend_objective: Optional[float] = None
    mip_node_count: Optional[int] = None
    mip_gap: Optional[float] = None
    max_integrality_violation: Optional[float] = None
    warning: Optional[BackendWarning] = None

    def __post_init__(self):
        for arr in (self.col_primal, self.row_primal, self.col_dual, self.row_dual):
            _frozen(arr)

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.status == ModelStatus.OPTIMAL

    def has_duals(self) -> bool:
        return self.col_dual is not None

    def has_basis(self) -> bool:
        return self.col_basis is not None

    def __repr__(self):
        return (f"Solution(status={self.status.name}, "
                f"objective={self.objective!r}, "
                f"n_cols={len(self.col_primal)}, "
                f"n_rows={len(self.row_primal)})")

    def __str__(self):
        lines = [
            "HiGHS Solution",
            "=" * 50,
            f"Status:          {self.status.name}",
            f"Objective:       {self.objective:.6e}",
            f"Columns:         {len(self.col_primal)}",
            f"Rows:            {len(self.row_primal)}",
            f"Duals:           {'yes' if self.has_duals() else 'no'}",
            f"Basis:           {'yes' if self.has_basis() else 'no'}",
        ]
        if self.mip_node_count is not None and self.mip_node_count >= 0:
            lines.append(f"MIP nodes:       {self.mip_node_count}")
        if self.warning is not None:
            lines.append(f"Warning:         {self.warning}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert solution to dictionary"""
        def _list(arr):
            return arr.tolist() if arr is not None else None

        def _names(arr):
            return [s.name for s in arr] if arr is not None else None

        return {
            'status': self.status.name,
            'col_primal': _list(self.col_primal),
            'row_primal': _list(self.row_primal),
            'col_dual': _list(self.col_dual),
            'row_dual': _list(self.row_dual),
            'col_basis': _names(self.col_basis),
            'row_basis': _names(self.row_basis),
            'objective': self.objective,
            'backend_objective': self.backend_objective,
            'mip_node_count': self.mip_node_count,
            'mip_gap': self.mip_gap,
            'max_integrality_violation': self.max_integrality_violation,
            'warning': self.warning.call_name if self.warning is not None else None,
        }


def compute_objective(
    offset: float,
    costs: Sequence[float],
    primal: Sequence[float],
    hessian: Optional[Sequence[Nonzero]] = None,
) -> float:
    """
    Evaluate the objective at a primal point.

    Parameters
    ----------
    offset : float
        Constant term
    costs : sequence of float
        Linear coefficients
    primal : sequence of float
        Column values
    hessian : sequence of Nonzero, optional
        Canonical upper-triangular Hessian entries. Each off-diagonal entry
        stands for itself and its mirror image below the diagonal.

    Returns
    -------
    float
        ``offset + c'x + (1/2) x'Qx``
    """
    x = np.asarray(primal, dtype=np.float64)
    objective = float(offset) + float(np.dot(np.asarray(costs, dtype=np.float64), x))
    for r, c, h in hessian or ():
        term = x[r] * x[c] * h / 2.0
        if r != c:
            term *= 2.0
        objective += term
    return float(objective)


def _check_statuses(statuses: Sequence[Tuple[str, int]]) -> Optional[BackendWarning]:
    warning = None
    for call_name, status in statuses:
        code = int(status)
        if code == STATUS_ERROR:
            raise BackendError(call_name, code)
        if code == STATUS_WARNING and warning is None:
            warning = BackendWarning(call_name)
    return warning


def _basis_tuple(codes) -> Tuple[BasisStatus, ...]:
    return tuple(basis_status_from_code(c) for c in codes)


def _sized(values: np.ndarray, length: int) -> np.ndarray:
    # The backend may leave the solution empty when it has none
    values = np.asarray(values, dtype=np.float64)
    if len(values) == length:
        return values
    return np.zeros(length)


def map_result(session, spec, statuses: Sequence[Tuple[str, int]]) -> Solution:
    """
    Translate the backend's response into a ``Solution``.

    Parameters
    ----------
    session : HighsSession
        Open session the model was solved in
    spec : ProblemSpec
        The snapshot that was solved
    statuses : sequence of (str, int)
        Backend call names and the status codes they returned, in call
        order

    Returns
    -------
    Solution

    Raises
    ------
    BackendError
        If any of the statuses is an error
    """
    warning = _check_statuses(statuses)

    status = model_status_from_code(session.model_status())
    col_value, col_dual, row_value, row_dual = session.solution()
    col_value = _sized(col_value, spec.num_cols)
    row_value = _sized(row_value, spec.num_rows)

    dual_status = session.info("dual_solution_status")
    if dual_status is None or int(dual_status) != SOLUTION_STATUS_FEASIBLE:
        col_dual = row_dual = None

    col_basis = row_basis = None
    basis_validity = session.info("basis_validity")
    if basis_validity is not None and int(basis_validity) == BASIS_VALIDITY_VALID:
        col_codes, row_codes = session.basis()
        col_basis = _basis_tuple(col_codes)
        row_basis = _basis_tuple(row_codes)

    objective = compute_objective(spec.offset, spec.col_costs, col_value, spec.hessian)
    backend_objective = session.info("objective_function_value")
    logger.debug("Mapped result: status=%s objective=%r (backend %r)",
                 status.name, objective, backend_objective)

    return Solution(
        status=status,
        col_primal=col_value,
        row_primal=row_value,
        objective=objective,
        col_dual=col_dual,
        row_dual=row_dual,
        col_basis=col_basis,
        row_basis=row_basis,
        backend_objective=backend_objective,
        mip_node_count=session.info("mip_node_count"),
        mip_gap=session.info("mip_gap"),
        max_integrality_violation=session.info("max_integrality_violation"),
        warning=warning,
    )
