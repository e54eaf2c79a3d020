"""
Dimension inference and bound normalization

A model's row and column counts are never stored; they are derived from
every field that implies one. Missing vectors are then synthesized at the
derived length and explicit ones are checked against it.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, LengthMismatchError
from .logging import get_logger
from .sparse import max_index
from .types import Nonzero, VariableType

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dimensions:
    """Inferred model size"""
    num_cols: int
    num_rows: int


def is_absent(values) -> bool:
    return values is None or len(values) == 0


def normalize_bounds(
    lower: Optional[Sequence[float]],
    upper: Optional[Sequence[float]],
    what: str = "column",
) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
    """
    Complete a pair of lower/upper bound vectors.

    Parameters
    ----------
    lower, upper : sequence of float, optional
        Bound vectors; ``None`` (or an empty sequence) means "not given"
    what : str
        ``'column'`` or ``'row'``, used in error messages

    Returns
    -------
    tuple
        ``(lower, upper)`` as new float64 arrays. If exactly one side was
        given, the other is filled with the matching signed infinity. If
        neither was given, both stay ``None`` so that dimension inference
        can size them later.

    Raises
    ------
    LengthMismatchError
        If both sides were given with different lengths
    """
    lower_absent = is_absent(lower)
    upper_absent = is_absent(upper)

    if lower_absent and upper_absent:
        return None, None
    if lower_absent:
        upper = np.array(upper, dtype=np.float64)
        return np.full(len(upper), -np.inf), upper
    if upper_absent:
        lower = np.array(lower, dtype=np.float64)
        return lower, np.full(len(lower), np.inf)

    if len(lower) != len(upper):
        raise LengthMismatchError(what, len(lower), len(upper))
    return np.array(lower, dtype=np.float64), np.array(upper, dtype=np.float64)


def infer_dimensions(
    col_costs: Optional[Sequence[float]] = None,
    col_lower: Optional[Sequence[float]] = None,
    col_upper: Optional[Sequence[float]] = None,
    row_lower: Optional[Sequence[float]] = None,
    row_upper: Optional[Sequence[float]] = None,
    coeff_matrix: Optional[Sequence[Nonzero]] = None,
    hessian: Optional[Sequence[Nonzero]] = None,
    var_types: Optional[Sequence[VariableType]] = None,
) -> Dimensions:
    """
    Compute the number of columns and rows implied by all model fields.

    The column count is the largest of the constraint and Hessian column
    indices plus one and the lengths of the costs, column bounds and
    variable types. The row count is the largest constraint row index plus
    one and the lengths of the row bounds.
    """
    num_cols = max(
        max_index(coeff_matrix, 1) + 1,
        max_index(hessian, 1) + 1,
        len(col_costs) if col_costs is not None else 0,
        len(col_lower) if col_lower is not None else 0,
        len(col_upper) if col_upper is not None else 0,
        len(var_types) if var_types is not None else 0,
    )
    num_rows = max(
        max_index(coeff_matrix, 0) + 1,
        len(row_lower) if row_lower is not None else 0,
        len(row_upper) if row_upper is not None else 0,
    )
    logger.debug("Inferred %d columns and %d rows", num_cols, num_rows)
    return Dimensions(num_cols=num_cols, num_rows=num_rows)


def fill_vector(
    values: Optional[Sequence],
    length: int,
    default,
    field: str,
    dtype=np.float64,
) -> np.ndarray:
    """
    Return ``values`` as a new array of exactly ``length`` entries.

    Absent values (``None`` or empty) become ``length`` copies of
    ``default``.

    Raises
    ------
    DimensionMismatchError
        If explicit ``values`` have any other length
    """
    if is_absent(values):
        return np.full(length, default, dtype=dtype)
    arr = np.array(values, dtype=dtype)
    if len(arr) != length:
        raise DimensionMismatchError(field, len(arr), length)
    return arr


def fill_variable_types(
    var_types: Optional[Sequence[VariableType]], length: int
) -> np.ndarray:
    """Integrality codes for ``length`` columns, defaulting to continuous."""
    if not is_absent(var_types):
        var_types = [int(VariableType(vt)) for vt in var_types]
    return fill_vector(
        var_types, length, int(VariableType.CONTINUOUS), "var_types",
        dtype=np.int32,
    )
