import dataclasses

import numpy as np
import pytest

from src.ahp.engine import (
    AHPCalculator,
    compute_priorities,
    consistency_metrics,
    random_index,
)
from src.ahp.errors import StructuralError, ValidationError
from src.ahp.matrix import ReciprocalMatrixBuilder

TEXTBOOK = [
    [1, 3, 5],
    [1 / 3, 1, 2],
    [1 / 5, 1 / 2, 1],
]


def test_textbook_example():
    result = compute_priorities(TEXTBOOK)
    assert result.priority_vector.tolist() == pytest.approx([0.6479, 0.2299, 0.1222], abs=1e-3)
    assert result.lambda_max == pytest.approx(3.0037, abs=1e-3)
    assert result.ri == 0.58
    assert result.cr < 0.10
    assert result.consistent


def test_textbook_example_through_builder():
    builder = ReciprocalMatrixBuilder.from_upper_triangle(3, {(0, 1): "3", (0, 2): "5", (1, 2): "2"})
    result = compute_priorities(builder.matrix)
    assert result.priority_vector.tolist() == pytest.approx([0.6479, 0.2299, 0.1222], abs=1e-3)
    assert result.consistent


@pytest.mark.parametrize("matrix", [
    TEXTBOOK,
    [[1, 9, 1 / 5, 2], [1 / 9, 1, 1 / 3, 4], [5, 3, 1, 7], [1 / 2, 1 / 4, 1 / 7, 1]],
])
def test_normalization_and_priority_sums(matrix):
    result = compute_priorities(matrix)
    assert result.normalized_matrix.sum(axis=0) == pytest.approx(np.ones(len(matrix)), abs=1e-9)
    assert result.priority_vector.sum() == pytest.approx(1.0, abs=1e-9)
    assert (result.priority_vector > 0).all()


@pytest.mark.parametrize("n", [2, 3, 7, 12])
def test_all_ones_is_perfectly_consistent(n):
    result = compute_priorities(np.ones((n, n)))
    assert result.lambda_max == pytest.approx(n)
    assert result.ci == pytest.approx(0.0, abs=1e-12)
    assert result.cr == pytest.approx(0.0, abs=1e-12)
    assert result.consistent


def test_inconsistent_matrix_is_flagged():
    matrix = [[1, 9, 1 / 9], [1 / 9, 1, 9], [9, 1 / 9, 1]]
    result = compute_priorities(matrix)
    assert result.cr >= 0.10
    assert not result.consistent


def test_random_index_lookup():
    assert random_index(1) == 0.0
    assert random_index(2) == 0.0
    assert random_index(9) == 1.45
    assert random_index(12) == 1.48
    assert random_index(13) == 1.49
    assert random_index(10, ri_values={9: 1.45}, fallback=1.6) == 1.6


def test_small_and_large_sizes():
    one = compute_priorities([[1]])
    assert (one.ri, one.ci, one.cr) == (0.0, 0.0, 0.0)

    two = compute_priorities([[1, 3], [1 / 3, 1]])
    assert two.ri == 0.0
    assert two.cr == 0.0
    assert two.priority_vector.tolist() == pytest.approx([0.75, 0.25])

    thirteen = compute_priorities(np.ones((13, 13)))
    assert thirteen.ri == 1.49


def test_consistency_metrics():
    ci, ri, cr = consistency_metrics(3.1, 3)
    assert ci == pytest.approx(0.05)
    assert ri == 0.58
    assert cr == pytest.approx(0.05 / 0.58)


def test_zero_column_uses_epsilon():
    result = compute_priorities([[0, 1], [0, 1]], validate=False)
    assert result.normalized_matrix[:, 0].tolist() == [0.0, 0.0]
    assert np.isfinite(result.priority_vector).all()


def test_invalid_inputs():
    with pytest.raises(ValidationError) as exc_info:
        compute_priorities([[1, -2], [0, 1]])
    assert {(e.row, e.col) for e in exc_info.value.errors} == {(0, 1), (1, 0)}

    with pytest.raises(StructuralError):
        compute_priorities([[1, 2, 3], [1, 1, 1]])
    with pytest.raises(StructuralError):
        compute_priorities([1, 2, 3])

    builder = ReciprocalMatrixBuilder(3)
    builder.set_upper(0, 2, "")
    with pytest.raises(ValidationError):
        compute_priorities(builder.matrix)


def test_oversized_integer_is_a_cell_error():
    with pytest.raises(ValidationError) as exc_info:
        compute_priorities([[1, 10 ** 400], [1, 1]])
    assert [(e.row, e.col) for e in exc_info.value.errors] == [(0, 1)]


def test_token_grid_is_accepted():
    result = compute_priorities([["1", "1/3"], ["3", "1"]])
    assert result.priority_vector.tolist() == pytest.approx([0.25, 0.75])


def test_result_is_read_only():
    result = compute_priorities(TEXTBOOK)
    with pytest.raises(ValueError):
        result.priority_vector[0] = 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.cr = 0.0
    data = result.to_dict()
    assert data["consistent"] is True
    assert len(data["normalized_matrix"]) == 3


class TestAHPCalculator:
    def test_weights_and_consistency(self):
        calculator = AHPCalculator()
        weights, lambda_max = calculator.calculate_weights(TEXTBOOK)
        assert weights.sum() == pytest.approx(1.0)
        cr = calculator.calculate_consistency_ratio(TEXTBOOK, lambda_max)
        passed, cr_again = calculator.validate_consistency(TEXTBOOK)
        assert passed
        assert cr == pytest.approx(cr_again)

    def test_custom_threshold(self):
        calculator = AHPCalculator(threshold=0.001)
        assert not calculator.compute(TEXTBOOK).consistent
        passed, _ = calculator.validate_consistency(TEXTBOOK, threshold=0.5)
        assert passed

    def test_build_comparison_matrix(self):
        calculator = AHPCalculator()
        matrix = calculator.build_comparison_matrix(
            ["A", "B", "C"],
            {("A", "B"): 3, ("C", "A"): 5, ("B", "C"): "1/2"}
        )
        assert matrix[0, 1] == 3.0
        assert matrix[1, 0] == pytest.approx(0.3333)
        assert matrix[2, 0] == pytest.approx(5.0)
        assert matrix[0, 2] == pytest.approx(0.2)
        assert matrix[2, 1] == pytest.approx(2.0)

    def test_build_comparison_matrix_unknown_label(self):
        calculator = AHPCalculator()
        with pytest.raises(StructuralError):
            calculator.build_comparison_matrix(["A", "B"], {("A", "Z"): 3})
        with pytest.raises(StructuralError):
            calculator.build_comparison_matrix(["A", "B"], {("A", "A"): 3})
