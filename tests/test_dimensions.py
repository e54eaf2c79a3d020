import numpy as np
import pytest

from highsmodel import (
    DimensionMismatchError, LengthMismatchError, Nonzero, VariableType,
    infer_dimensions, normalize_bounds,
)
from highsmodel.dimensions import fill_variable_types, fill_vector


def test_normalize_bounds_both_absent():
    assert normalize_bounds(None, None) == (None, None)
    assert normalize_bounds([], None) == (None, None)


def test_normalize_bounds_missing_lower():
    lower, upper = normalize_bounds(None, [1.0, 2.0])
    np.testing.assert_array_equal(lower, [-np.inf, -np.inf])
    np.testing.assert_array_equal(upper, [1.0, 2.0])


def test_normalize_bounds_missing_upper():
    lower, upper = normalize_bounds([0.0, 0.0, 0.0], None)
    np.testing.assert_array_equal(lower, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(upper, [np.inf, np.inf, np.inf])


def test_normalize_bounds_length_mismatch():
    with pytest.raises(LengthMismatchError) as excinfo:
        normalize_bounds([0.0, 0.0, 0.0], [1.0] * 5, "column")
    assert excinfo.value.n_lower == 3
    assert excinfo.value.n_upper == 5
    assert "column" in str(excinfo.value)


def test_normalize_bounds_copies_inputs():
    lower_in = [0.0, 1.0]
    upper_in = np.array([2.0, 3.0])
    lower, upper = normalize_bounds(lower_in, upper_in)
    upper[0] = 99.0
    assert upper_in[0] == 2.0
    assert isinstance(lower, np.ndarray)


def test_infer_dimensions_from_matrix():
    dims = infer_dimensions(coeff_matrix=[Nonzero(0, 1, 1.0), Nonzero(2, 0, 3.0)])
    assert (dims.num_cols, dims.num_rows) == (2, 3)


def test_infer_dimensions_takes_largest_source():
    dims = infer_dimensions(
        col_costs=[1.0, 1.0],
        col_lower=[0.0, 0.0, 0.0],
        row_upper=[1.0] * 4,
        coeff_matrix=[Nonzero(1, 1, 1.0)],
        hessian=[Nonzero(0, 4, 1.0)],
        var_types=[VariableType.INTEGER],
    )
    assert dims.num_cols == 5
    assert dims.num_rows == 4


def test_infer_dimensions_hessian_rows_do_not_add_constraints():
    dims = infer_dimensions(hessian=[Nonzero(3, 3, 1.0)])
    assert dims.num_cols == 4
    assert dims.num_rows == 0


def test_infer_dimensions_empty():
    dims = infer_dimensions()
    assert (dims.num_cols, dims.num_rows) == (0, 0)


def test_fill_vector_defaults():
    np.testing.assert_array_equal(fill_vector(None, 3, 0.0, "col_costs"), [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(fill_vector([], 2, np.inf, "col_upper"), [np.inf, np.inf])


def test_fill_vector_explicit_length_mismatch():
    with pytest.raises(DimensionMismatchError) as excinfo:
        fill_vector([1.0], 2, 0.0, "col_costs")
    assert excinfo.value.field == "col_costs"
    assert (excinfo.value.actual, excinfo.value.expected) == (1, 2)


def test_fill_variable_types():
    codes = fill_variable_types(None, 2)
    np.testing.assert_array_equal(codes, [0, 0])
    codes = fill_variable_types([VariableType.INTEGER, 4], 2)
    np.testing.assert_array_equal(codes, [1, 4])
    assert codes.dtype == np.int32


def test_fill_variable_types_rejects_unknown_type():
    with pytest.raises(ValueError):
        fill_variable_types([7], 1)
