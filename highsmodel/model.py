"""
Model class for highsmodel
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from scipy import sparse

from .dimensions import (
    fill_variable_types, fill_vector, infer_dimensions, is_absent,
    normalize_bounds,
)
from .errors import DimensionMismatchError, LengthMismatchError, ModelDefinitionError
from .sparse import (
    as_nonzero, canonicalize, dense_row_to_nonzeros, nonzeros_from_matrix,
)
from .types import Nonzero, ObjectiveSense, ProblemKind, VariableType


MatrixLike = Union[Iterable, np.ndarray, sparse.spmatrix]


def _as_nonzero_list(entries: MatrixLike) -> List[Nonzero]:
    if sparse.issparse(entries) or isinstance(entries, np.ndarray):
        return nonzeros_from_matrix(entries)
    return [as_nonzero(nz) for nz in entries]


def _readonly(arr: Optional[np.ndarray]) -> Optional[np.ndarray]:
    if arr is not None:
        arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class ProblemSpec:
    """
    Fully specified, read-only snapshot of a ``Model``.

    Every vector has exactly the inferred number of entries and the sparse
    matrices are canonical (unique coordinates, row-major order). Produced
    by ``Model.snapshot()``; the caller's model is not modified.

    Attributes
    ----------
    maximize : bool
        True to maximize, False to minimize
    offset : float
        Constant term of the objective
    col_costs, col_lower, col_upper : np.ndarray
        Per-column objective coefficients and bounds (length ``num_cols``)
    row_lower, row_upper : np.ndarray
        Per-row bounds (length ``num_rows``)
    coeff_matrix : tuple of Nonzero
        Canonical constraint matrix
    hessian : tuple of Nonzero or None
        Canonical upper-triangular Hessian (QP only)
    var_types : np.ndarray or None
        Integrality code per column (MIP only)
    """
    maximize: bool
    offset: float
    col_costs: np.ndarray
    col_lower: np.ndarray
    col_upper: np.ndarray
    row_lower: np.ndarray
    row_upper: np.ndarray
    coeff_matrix: Tuple[Nonzero, ...]
    hessian: Optional[Tuple[Nonzero, ...]] = None
    var_types: Optional[np.ndarray] = None

    def __post_init__(self):
        for arr in (self.col_costs, self.col_lower, self.col_upper,
                    self.row_lower, self.row_upper, self.var_types):
            _readonly(arr)

    @property
    def num_cols(self) -> int:
        """Number of columns (variables)"""
        return len(self.col_costs)

    @property
    def num_rows(self) -> int:
        """Number of rows (constraints)"""
        return len(self.row_lower)

    @property
    def sense(self) -> ObjectiveSense:
        return ObjectiveSense.MAXIMIZE if self.maximize else ObjectiveSense.MINIMIZE

    @property
    def kind(self) -> ProblemKind:
        """QP if a Hessian is present, else MIP if variable types are, else LP"""
        if not is_absent(self.hessian):
            return ProblemKind.QP
        if self.var_types is not None:
            return ProblemKind.MIP
        return ProblemKind.LP


class Model:
    """
    Optimization model for the HiGHS solver.

    The model represents a problem of the form:
        minimize (or maximize)  offset + c'*x + (1/2) x'*Q*x
        subject to              row_lower <= A*x <= row_upper
                                col_lower <= x <= col_upper

    with optional integrality restrictions on x. Fields may be assigned
    directly or through the setters; any of them may be left unset, in
    which case the model's dimensions are inferred from the rest and the
    missing vectors are given defaults at solve time (zero costs, infinite
    bounds, continuous variables).

    The quadratic term makes the model a QP; variable types make it a MIP;
    otherwise it is an LP. A quadratic model with integer columns is
    rejected when it is solved.

    Attributes
    ----------
    maximize : bool
        Maximize instead of minimize the objective
    offset : float
        Objective constant term
    col_costs : sequence of float, optional
        Objective coefficient of each column
    col_lower, col_upper : sequence of float, optional
        Column bounds
    row_lower, row_upper : sequence of float, optional
        Row bounds
    coeff_matrix : list of Nonzero
        Constraint matrix entries, in any order
    hessian : list of Nonzero, optional
        Upper-triangular entries of Q
    var_types : sequence of VariableType, optional
        Type of each column

    Examples
    --------
    >>> from highsmodel import Model
    >>>
    >>> model = Model()
    >>> model.offset = 3.0
    >>> model.col_costs = [1.0, 1.0]
    >>> model.set_column_bounds([0.0, 1.0], [4.0, float('inf')])
    >>> model.add_dense_row(-float('inf'), [0.0, 1.0], 7.0)
    >>> model.add_dense_row(5.0, [1.0, 2.0], 15.0)
    >>> model.add_dense_row(6.0, [3.0, 2.0], float('inf'))
    >>> solution = model.solve()
    >>> solution.objective
    5.75
    """

    def __init__(self, maximize: bool = False, offset: float = 0.0):
        self.maximize = maximize
        self.offset = offset
        self.col_costs: Optional[Sequence[float]] = None
        self.col_lower: Optional[Sequence[float]] = None
        self.col_upper: Optional[Sequence[float]] = None
        self.row_lower: Optional[Sequence[float]] = None
        self.row_upper: Optional[Sequence[float]] = None
        self.coeff_matrix: List[Nonzero] = []
        self.hessian: Optional[List[Nonzero]] = None
        self.var_types: Optional[Sequence[VariableType]] = None

    @classmethod
    def from_arrays(
        cls,
        A: MatrixLike,
        row_lower: Optional[Sequence[float]],
        row_upper: Optional[Sequence[float]],
        col_lower: Optional[Sequence[float]],
        col_upper: Optional[Sequence[float]],
        col_costs: Optional[Sequence[float]],
        maximize: bool = False,
        offset: float = 0.0,
        var_types: Optional[Sequence[VariableType]] = None,
        hessian: Optional[MatrixLike] = None,
    ) -> 'Model':
        """
        Create model from constraint matrix and bounds arrays.

        Parameters
        ----------
        A : np.ndarray, scipy.sparse matrix or iterable of Nonzero
            Constraint matrix (m x n)
        row_lower, row_upper : array-like, optional
            Constraint bounds (length m)
        col_lower, col_upper : array-like, optional
            Variable bounds (length n)
        col_costs : array-like, optional
            Objective coefficients (length n)
        maximize : bool
            Maximize instead of minimize
        offset : float
            Objective constant term
        var_types : sequence of VariableType, optional
            Column types; makes the model a MIP
        hessian : np.ndarray, scipy.sparse matrix or iterable of Nonzero, optional
            Quadratic objective term; only its upper triangle may be nonzero

        Returns
        -------
        Model
        """
        model = cls(maximize=maximize, offset=offset)
        model.set_coefficients(A)
        model.set_row_bounds(row_lower, row_upper)
        model.set_column_bounds(col_lower, col_upper)
        model.col_costs = col_costs
        if var_types is not None:
            model.set_variable_types(var_types)
        if hessian is not None:
            model.set_hessian(hessian)
        return model

    def set_column_bounds(self, lower: Optional[Sequence[float]],
                          upper: Optional[Sequence[float]]):
        """Set the column bounds; either side may be None."""
        self.col_lower = lower
        self.col_upper = upper

    def set_row_bounds(self, lower: Optional[Sequence[float]],
                       upper: Optional[Sequence[float]]):
        """Set the row bounds; either side may be None."""
        self.row_lower = lower
        self.row_upper = upper

    def set_coefficients(self, A: MatrixLike):
        """Replace the constraint matrix with nonzeros, triples, or a matrix."""
        self.coeff_matrix = _as_nonzero_list(A)

    def set_hessian(self, Q: Optional[MatrixLike]):
        """Replace the Hessian; pass None to make the model non-quadratic."""
        self.hessian = None if Q is None else _as_nonzero_list(Q)

    def set_variable_types(self, var_types: Optional[Sequence[VariableType]]):
        """Replace the column types; pass None to drop integrality."""
        if var_types is None:
            self.var_types = None
        else:
            self.var_types = [VariableType(vt) for vt in var_types]

    def add_dense_row(self, lower: float, coeffs: Sequence[float], upper: float):
        """
        Append one constraint given as a dense coefficient vector.

        Only nonzero coefficients are stored. The new row goes after the
        rows that already have bounds.
        """
        row = self._append_row_bounds([lower], [upper])
        self.coeff_matrix = list(self.coeff_matrix) + dense_row_to_nonzeros(row, coeffs)

    def add_sparse_rows(
        self,
        lower: Sequence[float],
        start: Sequence[int],
        index: Sequence[int],
        value: Sequence[float],
        upper: Sequence[float],
    ):
        """
        Append constraints given in compressed sparse row form.

        Parameters
        ----------
        lower, upper : sequence of float
            Bounds of the new rows
        start : sequence of int
            Offset into ``index``/``value`` where each new row begins; one
            entry per new row
        index : sequence of int
            Column of each coefficient
        value : sequence of float
            Coefficient values

        Raises
        ------
        LengthMismatchError
            If ``lower`` and ``upper`` differ in length
        DimensionMismatchError
            If ``start`` does not have one entry per row, or ``index`` and
            ``value`` differ in length
        ModelDefinitionError
            If the offsets in ``start`` are not nondecreasing within
            ``[0, len(value)]``
        """
        if len(lower) != len(upper):
            raise LengthMismatchError("row", len(lower), len(upper))
        if len(start) != len(lower):
            raise DimensionMismatchError("start", len(start), len(lower))
        if len(index) != len(value):
            raise DimensionMismatchError("index", len(index), len(value))

        nnz = len(value)
        ends = list(start[1:]) + [nnz]
        for begin, end in zip(start, ends):
            if not 0 <= begin <= end <= nnz:
                raise ModelDefinitionError(
                    f"row offsets {list(start)} are not nondecreasing "
                    f"within [0, {nnz}]"
                )
        if len(start) > 0 and start[0] != 0:
            raise ModelDefinitionError("the first row offset must be 0")

        first_row = self._append_row_bounds(lower, upper)
        new_entries = [
            as_nonzero((first_row + i, index[k], value[k]))
            for i, (begin, end) in enumerate(zip(start, ends))
            for k in range(begin, end)
        ]
        self.coeff_matrix = list(self.coeff_matrix) + new_entries

    def _append_row_bounds(self, lower: Sequence[float], upper: Sequence[float]) -> int:
        # Returns the index of the first appended row
        row_lower, row_upper = normalize_bounds(self.row_lower, self.row_upper, "row")
        row_lower = [] if row_lower is None else row_lower.tolist()
        row_upper = [] if row_upper is None else row_upper.tolist()
        first_row = len(row_lower)

        row_lower.extend(float(v) for v in lower)
        row_upper.extend(float(v) for v in upper)
        self.row_lower = row_lower
        self.row_upper = row_upper
        return first_row

    def snapshot(self) -> ProblemSpec:
        """
        Validate the model and return a fully defaulted ``ProblemSpec``.

        Raises
        ------
        InvalidIndexError, NotUpperTriangularError
            If a sparse matrix is malformed
        LengthMismatchError
            If explicit lower and upper bounds differ in length
        DimensionMismatchError
            If an explicit vector disagrees with the inferred dimensions
        """
        coeffs = canonicalize(self.coeff_matrix)
        hessian = None
        if not is_absent(self.hessian):
            hessian = canonicalize(self.hessian, upper_triangular=True)

        col_lower, col_upper = normalize_bounds(self.col_lower, self.col_upper, "column")
        row_lower, row_upper = normalize_bounds(self.row_lower, self.row_upper, "row")
        dims = infer_dimensions(
            col_costs=self.col_costs,
            col_lower=col_lower,
            col_upper=col_upper,
            row_lower=row_lower,
            row_upper=row_upper,
            coeff_matrix=coeffs,
            hessian=hessian,
            var_types=self.var_types,
        )
        nc, nr = dims.num_cols, dims.num_rows

        var_types = None
        if not is_absent(self.var_types):
            var_types = fill_variable_types(self.var_types, nc)

        return ProblemSpec(
            maximize=bool(self.maximize),
            offset=float(self.offset),
            col_costs=fill_vector(self.col_costs, nc, 0.0, "col_costs"),
            col_lower=fill_vector(col_lower, nc, -np.inf, "col_lower"),
            col_upper=fill_vector(col_upper, nc, np.inf, "col_upper"),
            row_lower=fill_vector(row_lower, nr, -np.inf, "row_lower"),
            row_upper=fill_vector(row_upper, nr, np.inf, "row_upper"),
            coeff_matrix=tuple(coeffs),
            hessian=None if hessian is None else tuple(hessian),
            var_types=var_types,
        )

    def solve(self, parameters: Optional['Parameters'] = None) -> 'Solution':
        """
        Solve the model.

        Parameters
        ----------
        parameters : Parameters, optional
            Solver parameters. If None, default parameters are used.

        Returns
        -------
        Solution
        """
        from .solver import Solver

        return Solver(parameters).solve(self)

    def __repr__(self):
        dims = infer_dimensions(
            self.col_costs, self.col_lower, self.col_upper,
            self.row_lower, self.row_upper,
            self.coeff_matrix, self.hessian, self.var_types,
        )
        return (f"<highsmodel.Model rows={dims.num_rows} cols={dims.num_cols} "
                f"nnz={len(self.coeff_matrix)}>")
