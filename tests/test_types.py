import pytest

from highsmodel import BasisStatus, ModelStatus, VariableType
from highsmodel.types import (
    basis_status_from_code, model_status_from_code, variable_type_to_code,
)


@pytest.mark.parametrize("code, expected", [
    (0, ModelStatus.NOT_SET),
    (1, ModelStatus.LOAD_ERROR),
    (6, ModelStatus.MODEL_EMPTY),
    (7, ModelStatus.OPTIMAL),
    (8, ModelStatus.INFEASIBLE),
    (9, ModelStatus.UNBOUNDED_OR_INFEASIBLE),
    (10, ModelStatus.UNBOUNDED),
    (13, ModelStatus.TIME_LIMIT),
    (14, ModelStatus.ITERATION_LIMIT),
])
def test_model_status_from_code(code, expected):
    assert model_status_from_code(code) is expected


@pytest.mark.parametrize("code", [15, 18, 99, -3])
def test_unrecognized_model_status_is_unknown(code):
    assert model_status_from_code(code) is ModelStatus.UNKNOWN


def test_every_known_model_status_is_reachable():
    reached = {model_status_from_code(code) for code in range(15)}
    assert reached == set(ModelStatus) - {ModelStatus.UNKNOWN}


@pytest.mark.parametrize("code, expected", [
    (0, BasisStatus.LOWER),
    (1, BasisStatus.BASIC),
    (2, BasisStatus.UPPER),
    (3, BasisStatus.ZERO),
    (4, BasisStatus.NONBASIC),
    (5, BasisStatus.UNKNOWN),
])
def test_basis_status_from_code(code, expected):
    assert basis_status_from_code(code) is expected


def test_variable_type_codes():
    assert variable_type_to_code(VariableType.CONTINUOUS) == 0
    assert variable_type_to_code(VariableType.IMPLICIT_INTEGER) == 4
    assert variable_type_to_code(1) == 1
    with pytest.raises(ValueError):
        variable_type_to_code(9)
