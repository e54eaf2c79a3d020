import io
import logging

import pytest

from highsmodel import Parameters, Solver
from highsmodel.logging import (
    get_logger, reset_logging, set_log_level, setup_root_logger,
)


@pytest.fixture
def clean_logging():
    reset_logging()
    yield
    reset_logging()


def test_parameter_defaults():
    param = Parameters()
    assert param.suppress_output is True
    assert param.warnings_as_errors is False
    assert param.log_level is None


def test_parameters_round_trip_through_dict():
    param = Parameters.from_dict({
        'suppress_output': False,
        'log_level': 'DEBUG',
        'not_an_option': 1,
    })
    assert param.suppress_output is False
    assert param.log_level == 'DEBUG'
    assert not hasattr(param, 'not_an_option')
    assert param.to_dict() == {
        'suppress_output': False,
        'warnings_as_errors': False,
        'log_level': 'DEBUG',
    }
    assert "suppress_output=False" in repr(param)


def test_get_logger_namespaces_names(clean_logging):
    assert get_logger("highsmodel.solver").name == "highsmodel.solver"
    assert get_logger("custom").name == "highsmodel.custom"


def test_set_log_level_by_name(clean_logging):
    set_log_level("debug")
    assert logging.getLogger("highsmodel").level == logging.DEBUG
    set_log_level(logging.ERROR)
    assert logging.getLogger("highsmodel").level == logging.ERROR


def test_solver_applies_log_level(clean_logging):
    param = Parameters()
    param.log_level = "INFO"
    Solver(param=param)
    assert logging.getLogger("highsmodel").level == logging.INFO


def test_debug_records_for_snapshot(clean_logging, lp_model, caplog):
    with caplog.at_level(logging.DEBUG, logger="highsmodel"):
        lp_model.snapshot()
    assert any(r.name.startswith("highsmodel.") for r in caplog.records)


def test_library_default_is_null_handler(clean_logging):
    get_logger("highsmodel.solver")
    handlers = logging.getLogger("highsmodel").handlers
    assert handlers
    assert all(isinstance(h, logging.NullHandler) for h in handlers)


def test_setup_root_logger_is_opt_in(clean_logging):
    stream = io.StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(stream))
    get_logger("custom").info("hello")
    assert "[INFO] highsmodel.custom: hello" in stream.getvalue()
