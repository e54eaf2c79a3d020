"""
Exception types raised by highsmodel

Two families are distinguished:

* ``ModelDefinitionError`` and its subclasses describe problems with the
  caller's model (bad indices, inconsistent lengths, unsupported formats).
  They are always raised before any call into the backend.
* ``BackendError`` describes a hard failure reported by the native solver.
  ``BackendWarning`` describes a call that succeeded with caveats; it is
  attached to the returned ``Solution`` rather than raised by default.
"""
from typing import Optional


class HighsModelError(Exception):
    """Base class for all highsmodel errors"""


class ModelDefinitionError(HighsModelError, ValueError):
    """The model is malformed; nothing was sent to the backend"""


class InvalidIndexError(ModelDefinitionError):
    """A sparse-matrix entry has a negative row or column"""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(
            f"({row}, {col}) is not a valid coordinate for a matrix coefficient"
        )


class NotUpperTriangularError(ModelDefinitionError):
    """A Hessian entry lies below the diagonal"""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(
            f"({row}, {col}) is not a valid upper-triangular coordinate "
            f"for a matrix coefficient"
        )


class LengthMismatchError(ModelDefinitionError):
    """Explicit lower and upper bound vectors differ in length"""

    def __init__(self, what: str, n_lower: int, n_upper: int):
        self.what = what
        self.n_lower = n_lower
        self.n_upper = n_upper
        super().__init__(
            f"different numbers of lower and upper {what} bounds were provided "
            f"({n_lower} vs. {n_upper})"
        )


class DimensionMismatchError(ModelDefinitionError):
    """An explicitly supplied vector disagrees with the inferred dimension"""

    def __init__(self, field: str, actual: int, expected: int):
        self.field = field
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"{field} has length {actual} but the model has {expected} entries "
            f"along that dimension"
        )


class UnsupportedFormatError(ModelDefinitionError):
    """A matrix storage format other than row-wise was requested"""


class BackendError(HighsModelError, RuntimeError):
    """
    The native solver reported a hard error.

    Attributes
    ----------
    call_name : str
        Name of the backend entry point that failed
    status : int
        Raw status code returned by that entry point
    """

    def __init__(self, call_name: str, status: Optional[int] = None,
                 detail: Optional[str] = None):
        self.call_name = call_name
        self.status = status
        message = f"{call_name} failed with an error"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class BackendWarning(UserWarning):
    """The native solver completed a call with a warning"""

    def __init__(self, call_name: str):
        self.call_name = call_name
        super().__init__(f"{call_name} completed with a warning")

    def __eq__(self, other):
        return (isinstance(other, BackendWarning)
                and other.call_name == self.call_name)

    def __hash__(self):
        return hash((type(self), self.call_name))
