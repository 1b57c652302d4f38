"""
Matrix Validator
쌍대 비교 행렬의 모든 셀을 검사하고 오류 위치를 한 번에 수집
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from config.ahp_config import RECIPROCITY_TOLERANCE
from .errors import CellError, StructuralError, ValidationError
from .matrix import PairwiseMatrix
from .parser import try_parse_value

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """행렬 검증 결과"""
    ok: bool
    errors: List[CellError] = field(default_factory=list)
    values: Optional[np.ndarray] = None  # ok일 때만 채워짐

    def raise_for_errors(self) -> np.ndarray:
        """오류가 있으면 ValidationError, 없으면 실수 행렬 반환"""
        if not self.ok:
            raise ValidationError(self.errors)
        return self.values

    def summary(self) -> str:
        if self.ok:
            return "모든 셀이 유효합니다"
        lines = [f"유효하지 않은 셀 {len(self.errors)}개:"]
        lines.extend(f"  - {e.describe()}" for e in self.errors)
        return "\n".join(lines)


def _token_grid(matrix: Union[PairwiseMatrix, Sequence[Sequence[Any]]]) -> List[List[Any]]:
    if isinstance(matrix, PairwiseMatrix):
        return matrix.rows()
    rows = [list(row) for row in matrix]
    size = len(rows)
    problems = [
        f"{i + 1}행의 길이({len(row)})가 행 수({size})와 다릅니다"
        for i, row in enumerate(rows) if len(row) != size
    ]
    if not rows:
        problems.append("빈 행렬입니다")
    if problems:
        raise StructuralError("정사각 행렬이 아닙니다", problems)
    return rows


def check_reciprocity(
    values: np.ndarray,
    tolerance: float = RECIPROCITY_TOLERANCE
) -> List[Tuple[int, int]]:
    """
    역수 조건 a[i][j] * a[j][i] == 1 위반 위치 (i < j)

    Args:
        values: 실수 행렬
        tolerance: 허용 오차 (하삼각이 4자리로 반올림되어 저장되므로 0이 아님)

    Returns:
        위반한 (i, j) 목록
    """
    values = np.asarray(values, dtype=float)
    deviation = np.abs(values * values.T - 1.0)
    rows, cols = np.nonzero(np.triu(deviation > tolerance, k=1))
    return [(int(i), int(j)) for i, j in zip(rows, cols)]


def validate_matrix(
    matrix: Union[PairwiseMatrix, Sequence[Sequence[Any]]],
    name: Optional[str] = None
) -> ValidationReport:
    """
    행렬 검증 (첫 오류에서 멈추지 않고 모든 셀 검사)

    Args:
        matrix: PairwiseMatrix 또는 토큰 격자
        name: 오류에 기록할 행렬 이름 (None이면 matrix.name)

    Returns:
        ValidationReport

    Raises:
        StructuralError: 정사각 격자가 아닌 경우
    """
    if name is None and isinstance(matrix, PairwiseMatrix):
        name = matrix.name
    rows = _token_grid(matrix)
    size = len(rows)

    errors = []
    values = np.zeros((size, size), dtype=float)
    for i, row in enumerate(rows):
        for j, raw in enumerate(row):
            value = try_parse_value(raw)
            if value is None:
                errors.append(CellError(i, j, "" if raw is None else str(raw), name))
            else:
                values[i, j] = value

    if errors:
        logger.debug(f"행렬 {name or ''} 검증 실패: {len(errors)}개 셀")
        return ValidationReport(ok=False, errors=errors)

    violations = check_reciprocity(values)
    if violations:
        logger.warning(f"행렬 {name or ''} 역수 조건 불일치: {violations}")

    return ValidationReport(ok=True, values=values)
