import pytest

from src.ahp.errors import StructuralError, ValidationError
from src.ahp.matrix import PairwiseMatrix, ReciprocalMatrixBuilder


def test_new_matrix_is_all_ones():
    matrix = PairwiseMatrix(4)
    assert matrix.rows() == [["1"] * 4 for _ in range(4)]
    assert matrix.labels == ["C1", "C2", "C3", "C4"]
    assert (matrix.to_array() == 1.0).all()


def test_set_upper_updates_reciprocal():
    builder = ReciprocalMatrixBuilder(3)
    mirrored = builder.set_upper(0, 1, "5")
    assert mirrored == "0.2000"
    assert builder.matrix.raw(0, 1) == "5"
    assert builder.matrix.value(1, 0) == pytest.approx(0.2, abs=1e-4)


def test_blank_or_zero_clears_reciprocal():
    builder = ReciprocalMatrixBuilder(3)
    builder.set_upper(0, 1, "5")
    builder.set_upper(0, 1, "")
    assert builder.matrix.raw(1, 0) == ""
    builder.set_upper(0, 2, "0")
    assert builder.matrix.raw(2, 0) == ""
    builder.set_upper(1, 2, "abc")
    assert builder.matrix.raw(2, 1) == ""


def test_reciprocity_and_diagonal_after_edits():
    builder = ReciprocalMatrixBuilder(4)
    builder.set_judgments({(0, 1): "3", (0, 2): "1/7", (0, 3): 9, (1, 2): "0.25", (2, 3): "1/3"})
    values = builder.matrix.to_array()
    for i in range(4):
        assert values[i, i] == 1.0
        for j in range(4):
            if i != j:
                assert abs(values[i, j] * values[j, i] - 1) < 1e-3


def test_fraction_reciprocal_is_rounded():
    builder = ReciprocalMatrixBuilder(2)
    builder.set_upper(0, 1, "3")
    assert builder.matrix.raw(1, 0) == "0.3333"


def test_precision_is_configurable():
    builder = ReciprocalMatrixBuilder(2, precision=2)
    builder.set_upper(0, 1, "3")
    assert builder.matrix.raw(1, 0) == "0.33"


@pytest.mark.parametrize("i, j", [(0, 0), (1, 0), (2, 1), (0, 3), (-1, 1)])
def test_only_upper_triangle_is_writable(i, j):
    builder = ReciprocalMatrixBuilder(3)
    before = builder.matrix.rows()
    with pytest.raises(StructuralError):
        builder.set_upper(i, j, "4")
    assert builder.matrix.rows() == before


def test_from_upper_triangle_and_reset():
    builder = ReciprocalMatrixBuilder.from_upper_triangle(3, [(0, 1, "2"), (1, 2, "4")])
    assert builder.judgments() == {(0, 1): "2", (0, 2): "1", (1, 2): "4"}
    assert builder.matrix.raw(2, 1) == "0.2500"
    builder.reset()
    assert builder.matrix.rows() == [["1"] * 3 for _ in range(3)]


@pytest.mark.parametrize("size", [1, 21, "3", 2.5])
def test_size_limits(size):
    with pytest.raises(StructuralError):
        PairwiseMatrix(size)


def test_custom_max_size():
    with pytest.raises(StructuralError):
        PairwiseMatrix(13, max_size=12)
    assert PairwiseMatrix(20).size == 20


def test_label_count_must_match():
    with pytest.raises(StructuralError):
        PairwiseMatrix(3, labels=["a", "b"])


def test_from_rows():
    matrix = PairwiseMatrix.from_rows([["1", "1/3"], ["3", "1"]], labels=["x", "y"])
    assert matrix.labels == ["x", "y"]
    assert matrix.value(0, 1) == pytest.approx(1 / 3)


def test_from_rows_rejects_bad_shape_and_diagonal():
    with pytest.raises(StructuralError):
        PairwiseMatrix.from_rows([["1", "2"], ["0.5"]])
    with pytest.raises(StructuralError):
        PairwiseMatrix.from_rows([["2", "2"], ["0.5", "1"]])


def test_from_cells():
    cells = {(0, 1): "4", (1, 0): "0.25"}
    matrix = PairwiseMatrix.from_cells(cells, 2)
    assert matrix.rows() == [["1", "4"], ["0.25", "1"]]


def test_from_cells_reports_every_missing_cell():
    with pytest.raises(StructuralError) as exc_info:
        PairwiseMatrix.from_cells({(0, 1): "4", (5, 5): "1"}, 3)
    # (5, 5) 범위 밖 + 누락 5개
    assert len(exc_info.value.problems) == 6


def test_to_array_raises_with_all_bad_cells():
    builder = ReciprocalMatrixBuilder(3, name="criteria")
    builder.set_upper(0, 1, "")
    builder.set_upper(1, 2, "x")
    with pytest.raises(ValidationError) as exc_info:
        builder.matrix.to_array()
    positions = {(e.row, e.col) for e in exc_info.value.errors}
    assert positions == {(0, 1), (1, 0), (1, 2), (2, 1)}
    assert all(e.matrix == "criteria" for e in exc_info.value.errors)


@pytest.mark.parametrize("i, j", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_accessors_reject_out_of_range_cells(i, j):
    matrix = PairwiseMatrix(2)
    with pytest.raises(StructuralError):
        matrix.raw(i, j)
    with pytest.raises(StructuralError):
        matrix.value(i, j)
