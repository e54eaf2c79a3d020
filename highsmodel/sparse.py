"""
Sparse-matrix canonicalization and compressed sparse row encoding

Constraint and Hessian matrices are supplied by the caller as lists of
``Nonzero`` triples in any order, possibly with repeated coordinates. This
module turns them into the canonical row-major form and then into the
``(start, index, value)`` arrays the backend consumes.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np
from scipy import sparse

from .errors import InvalidIndexError, NotUpperTriangularError
from .types import Nonzero


def _ensure_contiguous_int32(arr):
    """Ensure array is contiguous int32"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.int32)
    if arr.dtype != np.int32:
        arr = arr.astype(np.int32)
    return np.ascontiguousarray(arr)


def _ensure_contiguous_float64(arr):
    """Ensure array is contiguous float64"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.float64)
    if arr.dtype != np.float64:
        arr = arr.astype(np.float64)
    return np.ascontiguousarray(arr)


def as_nonzero(entry) -> Nonzero:
    """
    Coerce a ``Nonzero`` or a ``(row, col, value)`` sequence to a ``Nonzero``.

    Raises
    ------
    InvalidIndexError
        If the row or column is not a whole number
    """
    row, col, value = entry
    if int(row) != row or int(col) != col:
        raise InvalidIndexError(row, col)
    return Nonzero(int(row), int(col), float(value))


def canonicalize(nonzeros: Iterable, upper_triangular: bool = False) -> List[Nonzero]:
    """
    Sort a list of nonzeros row-major and remove duplicate coordinates.

    Parameters
    ----------
    nonzeros : iterable of Nonzero or (row, col, value)
        Matrix entries in any order
    upper_triangular : bool
        If True, reject entries below the diagonal

    Returns
    -------
    list of Nonzero
        Entries with unique coordinates ordered by row, then column. When a
        coordinate appears more than once, the value of its last occurrence
        in the input is kept.

    Raises
    ------
    InvalidIndexError
        If any entry has a negative row or column
    NotUpperTriangularError
        If ``upper_triangular`` is set and any entry has ``row > col``
    """
    entries = [as_nonzero(nz) for nz in nonzeros]

    for nz in entries:
        if nz.row < 0 or nz.col < 0:
            raise InvalidIndexError(nz.row, nz.col)

    if upper_triangular:
        for nz in entries:
            if nz.row > nz.col:
                raise NotUpperTriangularError(nz.row, nz.col)

    # sorted() is stable, so duplicates stay in insertion order
    ordered = sorted(entries, key=lambda nz: (nz.row, nz.col))

    unique: List[Nonzero] = []
    for nz in ordered:
        if unique and unique[-1].row == nz.row and unique[-1].col == nz.col:
            unique[-1] = nz
        else:
            unique.append(nz)
    return unique


@dataclass(frozen=True)
class CSRMatrix:
    """
    Compressed sparse row arrays for a canonical list of nonzeros.

    ``start`` holds one offset per row that has at least one entry; rows
    without entries get no ``start`` slot. ``rows`` records which row each
    ``start`` slot belongs to, which is what ``row_pointers`` needs to
    rebuild the one-pointer-per-row layout.

    Attributes
    ----------
    start : np.ndarray
        Offset into ``index``/``value`` where each nonempty row begins
    index : np.ndarray
        Column of each entry
    value : np.ndarray
        Coefficient of each entry
    rows : np.ndarray
        Row number of each ``start`` entry
    """
    start: np.ndarray
    index: np.ndarray
    value: np.ndarray
    rows: np.ndarray

    @property
    def num_nz(self) -> int:
        """Number of stored entries"""
        return len(self.value)

    def entry_rows(self) -> np.ndarray:
        """Row number of every stored entry"""
        if self.num_nz == 0:
            return np.zeros(0, dtype=np.int32)
        ends = np.append(self.start[1:], self.num_nz)
        return np.repeat(self.rows, ends - self.start)

    def to_nonzeros(self) -> List[Nonzero]:
        """Decode back to the canonical list of nonzeros"""
        return [
            Nonzero(int(r), int(c), float(v))
            for r, c, v in zip(self.entry_rows(), self.index, self.value)
        ]

    def row_pointers(self, num_rows: int) -> np.ndarray:
        """
        Expand ``start`` to one pointer per row plus a final end pointer.

        Parameters
        ----------
        num_rows : int
            Number of rows in the full matrix, including empty ones

        Returns
        -------
        np.ndarray
            int32 array of length ``num_rows + 1``
        """
        if len(self.rows) > 0 and self.rows[-1] >= num_rows:
            raise ValueError(
                f"matrix has entries in row {int(self.rows[-1])} but only "
                f"{num_rows} rows were requested"
            )
        counts = np.bincount(self.entry_rows(), minlength=num_rows)
        pointers = np.zeros(num_rows + 1, dtype=np.int64)
        np.cumsum(counts, out=pointers[1:])
        return _ensure_contiguous_int32(pointers)

    def to_scipy(self, shape: Tuple[int, int]) -> sparse.csr_matrix:
        """Return the matrix as a ``scipy.sparse.csr_matrix``"""
        return sparse.csr_matrix(
            (self.value, self.index, self.row_pointers(shape[0])), shape=shape
        )


def encode_csr(nonzeros: List[Nonzero]) -> CSRMatrix:
    """
    Encode an already-canonical list of nonzeros as compressed sparse rows.

    A new ``start`` entry is emitted only when the row number increases past
    the previous nonempty row.
    """
    start = []
    rows = []
    prev_row = -1
    for offset, nz in enumerate(nonzeros):
        if nz.row > prev_row:
            start.append(offset)
            rows.append(nz.row)
            prev_row = nz.row
    return CSRMatrix(
        start=_ensure_contiguous_int32(start),
        index=_ensure_contiguous_int32([nz.col for nz in nonzeros]),
        value=_ensure_contiguous_float64([nz.value for nz in nonzeros]),
        rows=_ensure_contiguous_int32(rows),
    )


def to_csr(nonzeros: Iterable, upper_triangular: bool = False) -> CSRMatrix:
    """Canonicalize ``nonzeros`` and encode the result as a ``CSRMatrix``."""
    return encode_csr(canonicalize(nonzeros, upper_triangular=upper_triangular))


def nonzeros_from_matrix(A: Union[np.ndarray, sparse.spmatrix]) -> List[Nonzero]:
    """
    Convert a dense or scipy sparse matrix to row-major nonzeros.

    Dense inputs drop their zero entries; explicitly stored zeros of a
    sparse input are kept. Duplicate entries of a sparse input are summed,
    which is how scipy itself interprets them.
    """
    if sparse.issparse(A):
        A_csr = sparse.csr_matrix(A, copy=True)
    elif isinstance(A, (np.ndarray, list)):
        A_csr = sparse.csr_matrix(np.atleast_2d(np.asarray(A, dtype=np.float64)))
    else:
        raise TypeError("A must be a numpy array or scipy sparse matrix")

    A_csr.sum_duplicates()
    A_csr.sort_indices()
    coo = A_csr.tocoo()
    return [
        Nonzero(int(r), int(c), float(v))
        for r, c, v in zip(coo.row, coo.col, coo.data)
    ]


def dense_row_to_nonzeros(row: int, coeffs: Iterable[float]) -> List[Nonzero]:
    """Sparsify one dense row, skipping zero coefficients."""
    return [
        Nonzero(row, col, float(v))
        for col, v in enumerate(coeffs)
        if v != 0.0
    ]


def max_index(nonzeros: Optional[Iterable[Nonzero]], axis: int) -> int:
    """Largest row (``axis=0``) or column (``axis=1``) index, or -1 if empty."""
    if not nonzeros:
        return -1
    return max((nz[axis] for nz in nonzeros), default=-1)
