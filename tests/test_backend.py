import logging

import pytest

from highsmodel import BackendError, HighsSession


def test_session_opens_and_closes(fake_highs):
    highs = fake_highs()
    session = HighsSession(highs_factory=lambda: highs)
    assert not session.is_open
    with session as s:
        assert s is session
        assert s.highs is highs
    assert not session.is_open
    assert highs.cleared


def test_session_closes_on_exception(fake_highs):
    highs = fake_highs()
    session = HighsSession(highs_factory=lambda: highs)
    with pytest.raises(KeyError):
        with session:
            raise KeyError("boom")
    assert not session.is_open
    assert highs.cleared


def test_double_open_raises(fake_highs):
    session = HighsSession(highs_factory=fake_highs)
    session.open()
    with pytest.raises(RuntimeError):
        session.open()
    session.close()
    session.close()
    assert not session.is_open


def test_closed_session_has_no_backend():
    session = HighsSession(highs_factory=object)
    with pytest.raises(RuntimeError):
        session.highs
    assert repr(session) == "<highsmodel.HighsSession (closed)>"


def test_suppressed_output_restores_flag(fake_highs):
    highs = fake_highs(output_flag=True)
    with HighsSession(highs_factory=lambda: highs) as session:
        with session.suppressed_output():
            assert highs.output_flag is False
        assert highs.output_flag is True
    assert highs.option_calls == [("output_flag", False), ("output_flag", True)]


def test_suppressed_output_restores_flag_on_exception(fake_highs):
    highs = fake_highs(output_flag=True)
    with HighsSession(highs_factory=lambda: highs) as session:
        with pytest.raises(ValueError):
            with session.suppressed_output():
                raise ValueError("inside")
        assert highs.output_flag is True


def test_suppressed_output_disabled_leaves_flag(fake_highs):
    highs = fake_highs(output_flag=True)
    with HighsSession(highs_factory=lambda: highs) as session:
        with session.suppressed_output(enabled=False):
            assert highs.output_flag is True
    assert highs.option_calls == []


def test_option_error_raises_backend_error(fake_highs):
    highs = fake_highs(option_status=-1)
    with HighsSession(highs_factory=lambda: highs) as session:
        with pytest.raises(BackendError) as excinfo:
            session.set_output_flag(False)
    assert excinfo.value.call_name == "setOptionValue"


def test_queries(fake_highs):
    highs = fake_highs(
        model_status=7, col_value=[1.0], col_dual=[0.5],
        row_value=[2.0], row_dual=[0.25], col_basis=[1], row_basis=[0],
    )
    with HighsSession(highs_factory=lambda: highs) as session:
        assert session.run() == 0
        assert session.model_status() == 7
        col_value, col_dual, row_value, row_dual = session.solution()
        assert col_value.tolist() == [1.0]
        assert row_dual.tolist() == [0.25]
        assert session.info("basis_validity") == 1
        assert session.info("no_such_field", default=-7) == -7
        assert session.basis() == ([1], [0])


def test_failed_restore_does_not_mask_block_error(fake_highs, caplog):
    highs = fake_highs(output_flag=True)
    with caplog.at_level(logging.WARNING, logger="highsmodel"):
        with HighsSession(highs_factory=lambda: highs) as session:
            with pytest.raises(BackendError) as excinfo:
                with session.suppressed_output():
                    highs.option_status = -1
                    raise BackendError("run", -1)
    assert excinfo.value.call_name == "run"
    assert "Could not restore output_flag" in caplog.text


def test_failed_restore_after_clean_block_raises(fake_highs):
    highs = fake_highs(output_flag=True)
    with HighsSession(highs_factory=lambda: highs) as session:
        with pytest.raises(BackendError) as excinfo:
            with session.suppressed_output():
                highs.option_status = -1
    assert excinfo.value.call_name == "setOptionValue"
