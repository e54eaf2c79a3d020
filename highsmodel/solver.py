"""
High-level solver interface for highsmodel
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

import numpy as np

from .backend import HighsSession
from .errors import UnsupportedFormatError
from .logging import get_logger, set_log_level
from .model import Model, ProblemSpec
from .parameters import Parameters
from .results import Solution, map_result
from .sparse import CSRMatrix, to_csr
from .types import MatrixFormat, ObjectiveSense, ProblemKind, VariableType

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Envelope:
    """
    Everything the backend needs for one solve, for LP, MIP and QP alike.

    ``integrality`` is present for MIP envelopes and ``hessian`` for QP
    envelopes; an LP envelope has neither.
    """
    num_cols: int
    num_rows: int
    num_nz: int
    matrix_format: MatrixFormat
    sense: ObjectiveSense
    offset: float
    col_cost: np.ndarray
    col_lower: np.ndarray
    col_upper: np.ndarray
    row_lower: np.ndarray
    row_upper: np.ndarray
    a_matrix: CSRMatrix
    hessian: Optional[CSRMatrix] = None
    integrality: Optional[np.ndarray] = None

    @property
    def kind(self) -> ProblemKind:
        if self.hessian is not None:
            return ProblemKind.QP
        if self.integrality is not None:
            return ProblemKind.MIP
        return ProblemKind.LP

    def a_matrix_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Constraint matrix as one-pointer-per-row ``(start, index, value)``"""
        return (self.a_matrix.row_pointers(self.num_rows),
                self.a_matrix.index, self.a_matrix.value)

    def hessian_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Hessian as one-pointer-per-column ``(start, index, value)``"""
        if self.hessian is None:
            raise ValueError("Envelope has no Hessian")
        return (self.hessian.row_pointers(self.num_cols),
                self.hessian.index, self.hessian.value)


def build_envelope(
    spec: ProblemSpec,
    matrix_format: MatrixFormat = MatrixFormat.ROWWISE,
) -> Envelope:
    """
    Assemble the backend call contract for a problem snapshot.

    Parameters
    ----------
    spec : ProblemSpec
        Snapshot produced by ``Model.snapshot()``
    matrix_format : MatrixFormat
        Storage format of the constraint matrix; only ROWWISE is supported

    Returns
    -------
    Envelope

    Raises
    ------
    UnsupportedFormatError
        If any format other than ROWWISE is requested, or a model with a
        Hessian declares non-continuous columns
    """
    if MatrixFormat(matrix_format) != MatrixFormat.ROWWISE:
        raise UnsupportedFormatError(
            f"{MatrixFormat(matrix_format).name} matrices are not supported; "
            f"use ROWWISE"
        )

    a_matrix = to_csr(spec.coeff_matrix)
    hessian = None
    integrality = spec.var_types
    if spec.kind is ProblemKind.QP:
        if integrality is not None and np.any(integrality != int(VariableType.CONTINUOUS)):
            raise UnsupportedFormatError(
                "mixed-integer quadratic models are not supported"
            )
        hessian = to_csr(spec.hessian, upper_triangular=True)
        integrality = None

    envelope = Envelope(
        num_cols=spec.num_cols,
        num_rows=spec.num_rows,
        num_nz=a_matrix.num_nz,
        matrix_format=MatrixFormat.ROWWISE,
        sense=spec.sense,
        offset=spec.offset,
        col_cost=spec.col_costs,
        col_lower=spec.col_lower,
        col_upper=spec.col_upper,
        row_lower=spec.row_lower,
        row_upper=spec.row_upper,
        a_matrix=a_matrix,
        hessian=hessian,
        integrality=integrality,
    )
    logger.debug(
        "Built %s envelope: %d columns, %d rows, %d nonzeros",
        envelope.kind.name, envelope.num_cols, envelope.num_rows, envelope.num_nz,
    )
    return envelope


class Solver:
    """
    High-level interface to the HiGHS solver.

    Each call to ``solve`` validates the model, opens a fresh backend
    session, solves, maps the result and closes the session. Nothing is
    sent to the backend if the model is malformed.

    Parameters
    ----------
    param : Parameters, optional
        Solver parameters. If None, default parameters are used.
    session_factory : callable, optional
        Zero-argument callable returning a new ``HighsSession``.

    Examples
    --------
    >>> from highsmodel import Model, Solver, VariableType
    >>>
    >>> model = Model(maximize=True)
    >>> model.col_costs = [1.0, 1.0, 1.0]
    >>> model.set_column_bounds([1.0] * 3, [6.0] * 3)
    >>> model.set_variable_types([VariableType.INTEGER] * 3)
    >>> model.add_dense_row(0.0, [1.0, -3.0, 2.0], 0.0)
    >>> model.add_dense_row(1.0, [0.0, 1.0, -1.0], float('inf'))
    >>>
    >>> solution = Solver().solve(model)
    >>> solution.col_primal
    array([6., 4., 3.])
    """

    def __init__(
        self,
        param: Optional[Parameters] = None,
        session_factory: Optional[Callable[[], HighsSession]] = None,
    ):
        self.param = param if param is not None else Parameters()
        self._session_factory = session_factory or HighsSession
        if self.param.log_level is not None:
            set_log_level(self.param.log_level)

    def solve(
        self,
        problem: Union[Model, ProblemSpec],
        param: Optional[Parameters] = None,
    ) -> Solution:
        """
        Solve a model.

        Parameters
        ----------
        problem : Model or ProblemSpec
            Model to solve; a ``Model`` is snapshotted first
        param : Parameters, optional
            Overrides the solver's parameters for this call

        Returns
        -------
        Solution

        Raises
        ------
        ModelDefinitionError
            If the model is malformed (raised before the backend is touched)
        BackendError
            If the backend reports an error
        BackendWarning
            If the backend reports a warning and ``warnings_as_errors`` is set
        """
        if param is None:
            param = self.param

        spec = problem.snapshot() if isinstance(problem, Model) else problem
        envelope = build_envelope(spec)

        with self._session_factory() as session:
            with session.suppressed_output(param.suppress_output):
                pass_status = session.pass_model(envelope)
                run_status = session.run()
                solution = map_result(
                    session, spec,
                    [("passModel", pass_status), ("run", run_status)],
                )

        if solution.warning is not None:
            logger.warning("%s", solution.warning)
            if param.warnings_as_errors:
                raise solution.warning
        return solution


def solve(
    model: Union[Model, ProblemSpec],
    param: Optional[Parameters] = None,
) -> Solution:
    """
    Convenience function to solve a model without creating a solver object.

    Parameters
    ----------
    model : Model or ProblemSpec
        Model to solve
    param : Parameters, optional
        Solver parameters. If None, default parameters are used.

    Returns
    -------
    Solution
    """
    solver = Solver(param=param)
    return solver.solve(model)
