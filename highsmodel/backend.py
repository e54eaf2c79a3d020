"""
Scoped access to the native HiGHS solver

A ``HighsSession`` owns exactly one ``highspy.Highs`` instance for the
lifetime of a ``with`` block. The instance is released when the block
exits, whether it exits normally or through an exception.
"""
from contextlib import contextmanager
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from .errors import BackendError
from .logging import get_logger
from .types import STATUS_ERROR, HessianFormat, MatrixFormat, variable_type_to_code

logger = get_logger(__name__)


def _code(value) -> int:
    """Integer value of a backend enum member or plain int"""
    return int(value)


def _import_highspy():
    try:
        import highspy
    except ImportError as e:
        raise ImportError(
            f"Failed to import the HiGHS Python module: {e}\n\n"
            f"Please install it with:\n"
            f"  python -m pip install highspy\n"
        ) from e
    return highspy


class HighsSession:
    """
    One exclusively owned backend solver instance.

    Parameters
    ----------
    highs_factory : callable, optional
        Zero-argument callable returning a new ``highspy.Highs``-like
        object. Defaults to ``highspy.Highs``.

    Examples
    --------
    >>> with HighsSession() as session:
    ...     with session.suppressed_output():
    ...         session.pass_model(envelope)
    ...         status = session.run()
    """

    def __init__(self, highs_factory: Optional[Callable[[], Any]] = None):
        self._factory = highs_factory
        self._highs = None

    @property
    def is_open(self) -> bool:
        return self._highs is not None

    @property
    def highs(self):
        """The underlying backend object"""
        if self._highs is None:
            raise RuntimeError("Session is not open")
        return self._highs

    def open(self) -> 'HighsSession':
        """Create the backend instance"""
        if self._highs is not None:
            raise RuntimeError("Session is already open")
        factory = self._factory
        if factory is None:
            factory = _import_highspy().Highs
        self._highs = factory()
        logger.debug("Opened backend session")
        return self

    def close(self):
        """
        Release the backend instance.

        Safe to call more than once. After closing, the session can be
        opened again.
        """
        if self._highs is None:
            return
        highs, self._highs = self._highs, None
        highs.clear()
        logger.debug("Closed backend session")

    def __enter__(self):
        """Context manager entry"""
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - always release the backend instance"""
        self.close()
        return False

    def __repr__(self):
        state = "open" if self.is_open else "closed"
        return f"<highsmodel.HighsSession ({state})>"

    def _check(self, status, call_name: str) -> int:
        code = _code(status)
        if code == STATUS_ERROR:
            raise BackendError(call_name, code)
        return code

    def get_output_flag(self) -> bool:
        return bool(self.highs.getOptions().output_flag)

    def set_output_flag(self, value: bool):
        self._check(self.highs.setOptionValue("output_flag", bool(value)),
                    "setOptionValue")

    @contextmanager
    def suppressed_output(self, enabled: bool = True):
        """
        Turn backend output off inside the block and restore it on exit.

        With ``enabled`` False the block runs with the output flag untouched.
        If the block raises, a failure to restore the flag is logged so the
        original exception is the one that propagates.
        """
        if not enabled:
            yield self
            return
        previous = self.get_output_flag()
        self.set_output_flag(False)
        try:
            yield self
        except BaseException:
            status = _code(self.highs.setOptionValue("output_flag", bool(previous)))
            if status == STATUS_ERROR:
                logger.warning("Could not restore output_flag to %s", previous)
            raise
        self.set_output_flag(previous)

    def pass_model(self, envelope: 'Envelope') -> int:
        """
        Hand an envelope to the backend.

        The same routine serves LP, MIP and QP envelopes: the integrality
        and Hessian parts are filled in only when the envelope carries them.

        Returns
        -------
        int
            Backend status code (OK or WARNING)
        """
        highspy = _import_highspy()

        lp = highspy.HighsLp()
        lp.num_col_ = envelope.num_cols
        lp.num_row_ = envelope.num_rows
        lp.sense_ = highspy.ObjSense(int(envelope.sense))
        lp.offset_ = envelope.offset
        lp.col_cost_ = envelope.col_cost
        lp.col_lower_ = envelope.col_lower
        lp.col_upper_ = envelope.col_upper
        lp.row_lower_ = envelope.row_lower
        lp.row_upper_ = envelope.row_upper

        a_start, a_index, a_value = envelope.a_matrix_arrays()
        lp.a_matrix_.format_ = highspy.MatrixFormat(int(MatrixFormat.ROWWISE))
        lp.a_matrix_.num_col_ = envelope.num_cols
        lp.a_matrix_.num_row_ = envelope.num_rows
        lp.a_matrix_.start_ = a_start
        lp.a_matrix_.index_ = a_index
        lp.a_matrix_.value_ = a_value

        if envelope.integrality is not None:
            lp.integrality_ = [highspy.HighsVarType(variable_type_to_code(code))
                               for code in envelope.integrality]

        if envelope.hessian is None:
            return self._check(self.highs.passModel(lp), "passModel")

        q_start, q_index, q_value = envelope.hessian_arrays()
        model = highspy.HighsModel()
        model.lp_ = lp
        model.hessian_.dim_ = envelope.num_cols
        model.hessian_.format_ = highspy.HessianFormat(int(HessianFormat.TRIANGULAR))
        model.hessian_.start_ = q_start
        model.hessian_.index_ = q_index
        model.hessian_.value_ = q_value
        return self._check(self.highs.passModel(model), "passModel")

    def run(self) -> int:
        """Solve the passed model and return the raw status code"""
        return _code(self.highs.run())

    def model_status(self) -> int:
        return _code(self.highs.getModelStatus())

    def solution(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Column values, column duals, row values and row duals"""
        soln = self.highs.getSolution()
        return (
            np.array(soln.col_value, dtype=np.float64),
            np.array(soln.col_dual, dtype=np.float64),
            np.array(soln.row_value, dtype=np.float64),
            np.array(soln.row_dual, dtype=np.float64),
        )

    def info(self, name: str, default=None):
        """Named scalar from the backend's info record, or ``default``"""
        return getattr(self.highs.getInfo(), name, default)

    def basis(self) -> Tuple[List[int], List[int]]:
        """Raw basis-status codes for columns and rows"""
        basis = self.highs.getBasis()
        return ([_code(c) for c in basis.col_status],
                [_code(r) for r in basis.row_status])
