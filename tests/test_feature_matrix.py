import numpy as np
import pytest

from feature_matrix import FeatureMatrix, as_feature_matrix
from tree_errors import EmptyInputError, ShapeMismatchError


SCENARIO_MATRIX = "1.1 2.4; 1.1 0.0; 5.5 3.1; 4.0 4.0; 4.0 1.25; 6.1 3.1"


def test_from_string_parses_rows_and_columns():
    x = FeatureMatrix.from_string("1 2 3; 4 5 6; 7 8 9")

    assert x.rows == 3
    assert x.cols == 3
    assert x.values[0, 0] == 1.0
    assert np.array_equal(x.column(0), [1.0, 4.0, 7.0])


def test_from_string_skips_trailing_separator():
    x = FeatureMatrix.from_string("1 2; 3 4;")
    assert x.shape == (2, 2)


def test_ragged_rows_are_rejected():
    with pytest.raises(ShapeMismatchError):
        FeatureMatrix.from_string("1 2; 3")
    with pytest.raises(EmptyInputError):
        FeatureMatrix.from_string(" ; ")


def test_from_random_uses_given_generator():
    a = FeatureMatrix.from_random(10, 3, np.random.default_rng(5))
    b = FeatureMatrix.from_random(10, 3, np.random.default_rng(5))

    assert a.shape == (10, 3)
    assert a == b
    assert np.all((a.values >= 0.0) & (a.values < 1.0))


def test_column_out_of_range_raises_index_error():
    x = FeatureMatrix.from_string(SCENARIO_MATRIX)
    with pytest.raises(IndexError):
        x.column(2)
    with pytest.raises(IndexError):
        x.less_equal_mask(5, 1.0)
    with pytest.raises(IndexError):
        x.unique_sorted(-1)


def test_less_equal_mask_on_second_column():
    x = FeatureMatrix.from_string(SCENARIO_MATRIX)

    # Column 1 is [2.4, 0.0, 3.1, 4.0, 1.25, 3.1].
    assert x.less_equal_mask(1, 2.0).tolist() == [False, True, False, False, True, False]
    assert x.less_equal_mask(1, 2.4).tolist() == [True, True, False, False, True, False]


def test_unique_sorted_merges_exact_duplicates():
    x = FeatureMatrix.from_string(SCENARIO_MATRIX)

    assert x.unique_sorted(0).tolist() == [1.1, 4.0, 5.5, 6.1]
    assert x.unique_sorted(1).tolist() == [0.0, 1.25, 2.4, 3.1, 4.0]


def test_unique_sorted_keeps_nearly_equal_values():
    x = FeatureMatrix.from_rows([[0.1 + 0.2], [0.3], [0.3]])
    assert x.unique_sorted(0).size == 2


def test_select_rows_preserves_order_and_columns():
    x = FeatureMatrix.from_string(SCENARIO_MATRIX)

    picked = x.select_rows([False, True, False, True, False, True])
    assert picked.shape == (3, 2)
    assert picked.values.tolist() == [[1.1, 0.0], [4.0, 4.0], [6.1, 3.1]]

    empty = x.select_rows(np.zeros(x.rows, dtype=bool))
    assert empty.rows == 0
    assert empty.cols == 2

    with pytest.raises(ShapeMismatchError):
        x.select_rows([True, False])


def test_matrix_is_read_only():
    source = np.array([[1.0, 2.0], [3.0, 4.0]])
    x = as_feature_matrix(source)
    source[0, 0] = 99.0

    assert x.values[0, 0] == 1.0
    with pytest.raises(ValueError):
        x.values[0, 0] = 5.0
