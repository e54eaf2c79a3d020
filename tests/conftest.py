from types import SimpleNamespace

import numpy as np
import pytest

from highsmodel.backend import HighsSession


class FakeHighs:
    """Stands in for ``highspy.Highs`` with canned responses."""

    def __init__(self, run_status=0, model_status=7, col_value=(), row_value=(),
                 col_dual=(), row_dual=(), dual_solution_status=2,
                 basis_validity=1, col_basis=(), row_basis=(),
                 objective=0.0, output_flag=True, option_status=0):
        self.run_status = run_status
        self.model_status = model_status
        self.col_value = list(col_value)
        self.row_value = list(row_value)
        self.col_dual = list(col_dual)
        self.row_dual = list(row_dual)
        self.dual_solution_status = dual_solution_status
        self.basis_validity = basis_validity
        self.col_basis = list(col_basis)
        self.row_basis = list(row_basis)
        self.objective = objective
        self.output_flag = output_flag
        self.option_status = option_status

        self.option_calls = []
        self.output_flag_during_run = None
        self.run_count = 0
        self.basis_queries = 0
        self.cleared = False

    def getOptions(self):
        return SimpleNamespace(output_flag=self.output_flag)

    def setOptionValue(self, name, value):
        self.option_calls.append((name, value))
        if name == "output_flag":
            self.output_flag = value
        return self.option_status

    def run(self):
        self.run_count += 1
        self.output_flag_during_run = self.output_flag
        return self.run_status

    def getModelStatus(self):
        return self.model_status

    def getSolution(self):
        return SimpleNamespace(
            col_value=self.col_value, col_dual=self.col_dual,
            row_value=self.row_value, row_dual=self.row_dual,
        )

    def getInfo(self):
        return SimpleNamespace(
            dual_solution_status=self.dual_solution_status,
            basis_validity=self.basis_validity,
            objective_function_value=self.objective,
            mip_node_count=-1,
            mip_gap=np.inf,
            max_integrality_violation=-1.0,
        )

    def getBasis(self):
        self.basis_queries += 1
        return SimpleNamespace(col_status=self.col_basis, row_status=self.row_basis)

    def clear(self):
        self.cleared = True
        return 0


class FakeSession(HighsSession):
    """A real ``HighsSession`` whose model hand-off is recorded, not sent."""

    def __init__(self, highs, pass_status=0):
        super().__init__(highs_factory=lambda: highs)
        self.fake = highs
        self.pass_status = pass_status
        self.envelopes = []

    def pass_model(self, envelope):
        self.envelopes.append(envelope)
        return self._check(self.pass_status, "passModel")


@pytest.fixture
def fake_highs():
    """Factory for ``FakeHighs`` instances"""
    return FakeHighs


@pytest.fixture
def session_factory():
    """
    Build a zero-argument session factory around one ``FakeHighs``.

    The returned factory records every session it creates in ``.sessions``.
    """
    def make(highs, pass_status=0):
        def factory():
            session = FakeSession(highs, pass_status=pass_status)
            factory.sessions.append(session)
            return session
        factory.sessions = []
        return factory
    return make


@pytest.fixture
def lp_model():
    """Scenario A: min x0 + x1 + 3 over three rows"""
    from highsmodel import Model, Nonzero

    model = Model()
    model.offset = 3.0
    model.col_costs = [1.0, 1.0]
    model.set_column_bounds([0.0, 1.0], [4.0, np.inf])
    model.set_row_bounds([-np.inf, 5.0, 6.0], [7.0, 15.0, np.inf])
    model.coeff_matrix = [
        Nonzero(0, 1, 1.0),
        Nonzero(1, 0, 1.0),
        Nonzero(1, 1, 2.0),
        Nonzero(2, 0, 3.0),
        Nonzero(2, 1, 2.0),
    ]
    return model
