"""
Pairwise Matrix
쌍대 비교 행렬 저장 및 역수(reciprocal) 자동 유지 모듈
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from config.ahp_config import (
    CRITERION_LABEL_PREFIX,
    MATRIX_SIZE_LIMITS,
    MIN_MATRIX_SIZE,
    RECIPROCAL_DECIMALS,
    default_labels,
)
from .errors import CellError, StructuralError, ValidationError
from .parser import try_parse_value

logger = logging.getLogger(__name__)

# 모드와 무관하게 허용하는 최대 크기
ABSOLUTE_MAX_SIZE = max(limit[1] for limit in MATRIX_SIZE_LIMITS.values())


def _check_size(size: Any, max_size: Optional[int]) -> int:
    max_size = max_size or ABSOLUTE_MAX_SIZE
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise StructuralError(f"행렬 크기는 정수여야 합니다: {size!r}")
    if size < MIN_MATRIX_SIZE or size > max_size:
        raise StructuralError(
            f"행렬 크기는 {MIN_MATRIX_SIZE}~{max_size} 사이여야 합니다: {size}"
        )
    return int(size)


def _token(value: Any) -> str:
    return "" if value is None else str(value)


class PairwiseMatrix:
    """
    n x n 쌍대 비교 행렬

    셀은 사용자가 입력한 원본 문자열 그대로 저장하고, 값이 필요할 때마다
    다시 파싱한다. 대각선은 항상 "1"이며 상삼각/하삼각 쓰기는
    ReciprocalMatrixBuilder를 통해서만 이루어진다.
    """

    def __init__(
        self,
        size: int,
        labels: Optional[Sequence[str]] = None,
        label_prefix: str = CRITERION_LABEL_PREFIX,
        name: Optional[str] = None,
        max_size: Optional[int] = None
    ):
        """
        초기화 (대각선 외 모든 셀은 "1")

        Args:
            size: 행렬 크기 n
            labels: 행/열 라벨 (None이면 C1..Cn)
            label_prefix: 기본 라벨 접두사
            name: 오류 메시지에 쓰이는 행렬 이름
            max_size: 최대 크기 (None이면 모드 중 가장 큰 제한)
        """
        self._size = _check_size(size, max_size)
        if labels is None:
            labels = default_labels(self._size, label_prefix)
        labels = [str(label) for label in labels]
        if len(labels) != self._size:
            raise StructuralError(
                f"라벨 수({len(labels)})가 행렬 크기({self._size})와 다릅니다"
            )
        self._labels = labels
        self.name = name
        self._cells = [["1"] * self._size for _ in range(self._size)]

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        labels: Optional[Sequence[str]] = None,
        label_prefix: str = CRITERION_LABEL_PREFIX,
        name: Optional[str] = None,
        max_size: Optional[int] = None
    ) -> "PairwiseMatrix":
        """
        전체 토큰 격자로부터 행렬 생성

        대각선은 1이어야 하며, 하삼각 값은 입력 그대로 보존된다
        (역수 일치 여부는 검증 단계에서 확인).
        """
        rows = [list(row) for row in rows]
        size = len(rows)
        problems = [
            f"{i + 1}행의 길이({len(row)})가 행 수({size})와 다릅니다"
            for i, row in enumerate(rows) if len(row) != size
        ]
        if problems:
            raise StructuralError("정사각 행렬이 아닙니다", problems)

        matrix = cls(size, labels=labels, label_prefix=label_prefix, name=name, max_size=max_size)
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                if i == j:
                    if try_parse_value(value) != 1.0:
                        problems.append(f"대각선 ({i + 1}, {j + 1}) 값은 1이어야 합니다: {value!r}")
                    continue
                matrix._set(i, j, _token(value))
        if problems:
            raise StructuralError("대각선 값이 1이 아닙니다", problems)
        return matrix

    @classmethod
    def from_cells(
        cls,
        cells: Mapping[Tuple[int, int], Any],
        size: int,
        labels: Optional[Sequence[str]] = None,
        label_prefix: str = CRITERION_LABEL_PREFIX,
        name: Optional[str] = None,
        max_size: Optional[int] = None
    ) -> "PairwiseMatrix":
        """
        {(행, 열): 토큰} 매핑으로부터 행렬 생성

        대각선 셀은 생략 가능하고, 대각선 외 셀은 모두 있어야 한다.
        """
        size = _check_size(size, max_size)
        problems = [
            f"범위를 벗어난 셀: ({i}, {j})"
            for (i, j) in cells
            if not (0 <= i < size and 0 <= j < size)
        ]
        missing = [
            f"누락된 셀: ({i}, {j})"
            for i in range(size) for j in range(size)
            if i != j and (i, j) not in cells
        ]
        problems.extend(missing)
        if problems:
            raise StructuralError(f"{size}x{size} 격자와 입력 셀이 맞지 않습니다", problems)

        rows = [
            [cells.get((i, j), "1") if i == j else cells[(i, j)] for j in range(size)]
            for i in range(size)
        ]
        return cls.from_rows(rows, labels=labels, label_prefix=label_prefix, name=name, max_size=max_size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"PairwiseMatrix(size={self._size}, name={self.name!r})"

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self._size and 0 <= j < self._size):
            raise StructuralError(f"범위를 벗어난 셀: ({i}, {j})")

    def raw(self, i: int, j: int) -> str:
        """원본 토큰 조회"""
        self._check_index(i, j)
        return self._cells[i][j]

    def value(self, i: int, j: int) -> Optional[float]:
        """파싱된 양의 실수 (유효하지 않으면 None)"""
        self._check_index(i, j)
        return try_parse_value(self._cells[i][j])

    def rows(self) -> List[List[str]]:
        """토큰 격자 복사본"""
        return [list(row) for row in self._cells]

    def cell_errors(self) -> List[CellError]:
        """파싱/양수 조건을 만족하지 않는 모든 셀"""
        errors = []
        for i in range(self._size):
            for j in range(self._size):
                raw = self._cells[i][j]
                if try_parse_value(raw) is None:
                    errors.append(CellError(i, j, raw, self.name))
        return errors

    def to_array(self) -> np.ndarray:
        """
        실수 행렬로 변환

        Raises:
            ValidationError: 유효하지 않은 셀이 하나라도 있는 경우
        """
        errors = self.cell_errors()
        if errors:
            raise ValidationError(errors)
        return np.array(
            [[try_parse_value(raw) for raw in row] for row in self._cells],
            dtype=float
        )

    def _set(self, i: int, j: int, token: str) -> None:
        self._cells[i][j] = token


class ReciprocalMatrixBuilder:
    """상삼각 입력 시 하삼각 역수를 자동으로 갱신하는 빌더"""

    def __init__(
        self,
        size: Optional[int] = None,
        labels: Optional[Sequence[str]] = None,
        label_prefix: str = CRITERION_LABEL_PREFIX,
        name: Optional[str] = None,
        precision: int = RECIPROCAL_DECIMALS,
        max_size: Optional[int] = None,
        matrix: Optional[PairwiseMatrix] = None
    ):
        """
        초기화

        Args:
            size: 새 행렬 크기 (matrix를 넘기면 무시)
            labels: 행/열 라벨
            label_prefix: 기본 라벨 접두사
            name: 행렬 이름
            precision: 역수 저장 소수 자릿수
            max_size: 최대 크기
            matrix: 소유할 기존 행렬 (None이면 새로 생성)
        """
        if matrix is None:
            if size is None:
                raise StructuralError("size 또는 matrix가 필요합니다")
            matrix = PairwiseMatrix(
                size, labels=labels, label_prefix=label_prefix, name=name, max_size=max_size
            )
        self._matrix = matrix
        self.precision = precision

    @classmethod
    def from_upper_triangle(
        cls,
        size: int,
        judgments: Any,
        **kwargs
    ) -> "ReciprocalMatrixBuilder":
        """
        상삼각 판단값으로 빌더 생성

        Args:
            size: 행렬 크기
            judgments: {(i, j): 값} 또는 [(i, j, 값), ...]
            **kwargs: ReciprocalMatrixBuilder 초기화 인자
        """
        builder = cls(size, **kwargs)
        builder.set_judgments(judgments)
        return builder

    @property
    def matrix(self) -> PairwiseMatrix:
        return self._matrix

    @property
    def size(self) -> int:
        return self._matrix.size

    def reciprocal_token(self, value: Any) -> str:
        """상삼각 값에 대응하는 하삼각 토큰 (유효하지 않거나 0이면 빈 문자열)"""
        parsed = try_parse_value(value)
        if parsed is None:
            return ""
        return f"{1.0 / parsed:.{self.precision}f}"

    def set_upper(self, i: int, j: int, value: Any) -> str:
        """
        상삼각 셀 (i < j) 입력 및 하삼각 역수 갱신

        Args:
            i: 행 인덱스
            j: 열 인덱스
            value: 입력값 (문자열 또는 숫자)

        Returns:
            갱신된 하삼각 토큰 ("" 이면 수정 필요 상태)

        Raises:
            StructuralError: 범위 밖이거나 대각선/하삼각 셀인 경우
        """
        n = self._matrix.size
        if not (0 <= i < n and 0 <= j < n):
            raise StructuralError(f"범위를 벗어난 셀: ({i}, {j})")
        if i >= j:
            raise StructuralError(f"상삼각(i < j) 셀만 입력할 수 있습니다: ({i}, {j})")

        token = _token(value)
        mirrored = self.reciprocal_token(token)
        self._matrix._set(i, j, token)
        self._matrix._set(j, i, mirrored)
        if not mirrored:
            logger.debug(f"({i}, {j}) 값 {token!r} 이(가) 유효하지 않아 ({j}, {i})를 비웁니다")
        return mirrored

    def set_judgments(self, judgments: Any) -> None:
        """여러 상삼각 셀을 한 번에 입력"""
        if isinstance(judgments, Mapping):
            items: Iterable = ((i, j, v) for (i, j), v in judgments.items())
        else:
            items = judgments
        for i, j, value in items:
            self.set_upper(int(i), int(j), value)

    def judgments(self) -> Dict[Tuple[int, int], str]:
        """현재 상삼각 토큰"""
        n = self._matrix.size
        return {
            (i, j): self._matrix.raw(i, j)
            for i in range(n) for j in range(i + 1, n)
        }

    def reset(self) -> None:
        """모든 셀을 1로 초기화"""
        n = self._matrix.size
        for i in range(n):
            for j in range(n):
                self._matrix._set(i, j, "1")
