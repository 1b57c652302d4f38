import logging

import numpy as np
import pytest

from src.ahp.errors import StructuralError, ValidationError
from src.ahp.matrix import ReciprocalMatrixBuilder
from src.ahp.validator import check_reciprocity, validate_matrix


def test_valid_matrix_returns_values():
    builder = ReciprocalMatrixBuilder(3)
    builder.set_upper(0, 1, "2")
    report = validate_matrix(builder.matrix)
    assert report.ok
    assert report.errors == []
    assert report.values[0, 1] == 2.0
    assert report.values[1, 0] == 0.5


def test_validation_collects_every_bad_cell():
    builder = ReciprocalMatrixBuilder(4)
    builder.set_upper(0, 1, "abc")
    builder.set_upper(2, 3, "")
    report = validate_matrix(builder.matrix)
    assert not report.ok
    assert report.values is None
    positions = {(e.row, e.col) for e in report.errors}
    assert {(0, 1), (2, 3)} <= positions
    assert {(1, 0), (3, 2)} <= positions
    assert report.errors[0].raw_value == "abc"


def test_raise_for_errors():
    report = validate_matrix([["1", "-2"], ["0", "1"]], name="grid")
    with pytest.raises(ValidationError) as exc_info:
        report.raise_for_errors()
    assert [(e.row, e.col, e.matrix) for e in exc_info.value.errors] == [
        (0, 1, "grid"), (1, 0, "grid")
    ]
    assert "2" in report.summary()


def test_token_grid_must_be_square():
    with pytest.raises(StructuralError):
        validate_matrix([["1", "2", "3"], ["1", "1", "1"]])
    with pytest.raises(StructuralError):
        validate_matrix([])


def test_check_reciprocity():
    assert check_reciprocity(np.array([[1, 3], [0.3333, 1]])) == []
    assert check_reciprocity(np.array([[1, 2, 1], [2, 1, 1], [1, 1, 1]])) == [(0, 1)]


def test_non_reciprocal_grid_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="src.ahp.validator"):
        report = validate_matrix([["1", "2"], ["2", "1"]], name="grid")
    assert report.ok
    assert "역수 조건 불일치" in caplog.text
    assert "grid" in caplog.text


def test_reciprocal_grid_logs_nothing(caplog):
    with caplog.at_level(logging.WARNING, logger="src.ahp.validator"):
        validate_matrix([["1", "1/3"], ["3", "1"]])
    assert caplog.records == []
