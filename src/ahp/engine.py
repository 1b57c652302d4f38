"""
AHP (Analytic Hierarchy Process) Calculator
열 정규화(column normalization) 방식의 가중치 및 일관성 계산 모듈
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from config.ahp_config import (
    CONSISTENCY_THRESHOLD,
    RECIPROCAL_DECIMALS,
    RI_FALLBACK,
    RI_VALUES,
    ZERO_COLUMN_EPSILON,
)
from .errors import CellError, StructuralError, ValidationError
from .matrix import PairwiseMatrix, ReciprocalMatrixBuilder
from .parser import try_parse_value
from .validator import validate_matrix

logger = logging.getLogger(__name__)


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class PriorityResult:
    """단일 쌍대 비교 행렬의 계산 결과 (읽기 전용)"""
    normalized_matrix: np.ndarray
    priority_vector: np.ndarray
    weighted_sum: np.ndarray
    lambda_vector: np.ndarray
    lambda_max: float
    ci: float
    ri: float
    cr: float
    threshold: float = CONSISTENCY_THRESHOLD

    @property
    def size(self) -> int:
        return len(self.priority_vector)

    @property
    def consistent(self) -> bool:
        """CR < 임계값이면 일관성 통과"""
        return self.cr < self.threshold

    def to_dict(self) -> Dict:
        return {
            "normalized_matrix": self.normalized_matrix.tolist(),
            "priority_vector": self.priority_vector.tolist(),
            "lambda_max": self.lambda_max,
            "ci": self.ci,
            "ri": self.ri,
            "cr": self.cr,
            "consistent": self.consistent
        }


def random_index(
    n: int,
    ri_values: Optional[Mapping[int, float]] = None,
    fallback: float = RI_FALLBACK
) -> float:
    """
    크기 n에 대한 무작위 지수(RI) 조회

    Args:
        n: 행렬 크기
        ri_values: RI 표 (None이면 기본 표)
        fallback: 표에 없는 크기에 사용할 값

    Returns:
        RI 값
    """
    table = RI_VALUES if ri_values is None else ri_values
    return float(table.get(n, fallback))


def consistency_metrics(
    lambda_max: float,
    n: int,
    ri_values: Optional[Mapping[int, float]] = None,
    fallback: float = RI_FALLBACK
) -> Tuple[float, float, float]:
    """
    (CI, RI, CR) 계산

    CI = (λmax - n) / (n - 1), CR = CI / RI (RI가 0이면 CR = 0)
    """
    ci = (lambda_max - n) / (n - 1) if n > 1 else 0.0
    ri = random_index(n, ri_values, fallback)
    cr = 0.0 if ri == 0 else ci / ri
    return ci, ri, cr


def _as_array(matrix: Any, validate: bool) -> np.ndarray:
    if isinstance(matrix, PairwiseMatrix):
        return validate_matrix(matrix).raise_for_errors()

    try:
        values = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError, OverflowError):
        # "1/3" 같은 토큰이 섞인 격자 또는 float 범위를 넘는 정수
        return validate_matrix(matrix).raise_for_errors()

    if values.ndim != 2 or values.shape[0] != values.shape[1] or values.shape[0] == 0:
        raise StructuralError(f"정사각 행렬이 아닙니다: shape={values.shape}")

    if validate:
        bad = np.argwhere(~np.isfinite(values) | (values <= 0))
        if len(bad):
            raise ValidationError([
                CellError(int(i), int(j), str(values[i, j])) for i, j in bad
            ])
    return values


def compute_priorities(
    matrix: Any,
    ri_values: Optional[Mapping[int, float]] = None,
    ri_fallback: float = RI_FALLBACK,
    threshold: float = CONSISTENCY_THRESHOLD,
    epsilon: float = ZERO_COLUMN_EPSILON,
    validate: bool = True
) -> PriorityResult:
    """
    쌍대 비교 행렬로부터 가중치와 일관성 지표 계산

    1. 열 합계로 각 열을 정규화
    2. 정규화 행렬의 행 평균 = 가중치
    3. A·w / w 의 평균 = λmax
    4. CI, RI, CR

    Args:
        matrix: PairwiseMatrix 또는 n x n 양의 실수 배열
        ri_values: RI 표 (None이면 기본 표)
        ri_fallback: 표에 없는 크기의 RI
        threshold: 일관성 통과 CR 임계값
        epsilon: 열 합계가 0일 때의 대체값
        validate: False면 양수 검사를 생략 (이미 검증된 배열용)

    Returns:
        PriorityResult

    Raises:
        ValidationError: 유효하지 않은 셀이 있는 경우
        StructuralError: 정사각 행렬이 아닌 경우
    """
    a = _as_array(matrix, validate)
    n = a.shape[0]

    col_sums = a.sum(axis=0)
    zero_cols = col_sums == 0
    if zero_cols.any():
        logger.warning(f"열 합계가 0인 열 {np.flatnonzero(zero_cols).tolist()} -> {epsilon}로 대체")
        col_sums = np.where(zero_cols, epsilon, col_sums)

    normalized = a / col_sums
    priorities = normalized.mean(axis=1)
    weighted = a @ priorities
    lambda_vec = weighted / priorities
    lambda_max = float(lambda_vec.mean())
    ci, ri, cr = consistency_metrics(lambda_max, n, ri_values, ri_fallback)

    logger.debug(f"n={n} λmax={lambda_max:.4f} CI={ci:.4f} RI={ri:.4f} CR={cr:.4f}")
    if cr >= threshold:
        logger.warning(f"일관성 미달: CR={cr:.4f} (임계값 {threshold})")

    return PriorityResult(
        normalized_matrix=_frozen(normalized),
        priority_vector=_frozen(priorities),
        weighted_sum=_frozen(weighted),
        lambda_vector=_frozen(lambda_vec),
        lambda_max=lambda_max,
        ci=float(ci),
        ri=ri,
        cr=float(cr),
        threshold=threshold
    )


class AHPCalculator:
    """AHP 알고리즘 계산 클래스"""

    def __init__(
        self,
        ri_values: Optional[Mapping[int, float]] = None,
        ri_fallback: float = RI_FALLBACK,
        threshold: float = CONSISTENCY_THRESHOLD,
        precision: int = RECIPROCAL_DECIMALS
    ):
        """
        초기화

        Args:
            ri_values: RI (Random Index) 표 - 일관성 검증용
            ri_fallback: 표에 없는 크기의 RI
            threshold: CR 임계값
            precision: build_comparison_matrix에서 역수 저장 자릿수
        """
        self.ri_values = dict(RI_VALUES if ri_values is None else ri_values)
        self.ri_fallback = ri_fallback
        self.threshold = threshold
        self.precision = precision

    def compute(self, matrix: Any) -> PriorityResult:
        """설정된 RI 표와 임계값으로 compute_priorities 실행"""
        return compute_priorities(
            matrix,
            ri_values=self.ri_values,
            ri_fallback=self.ri_fallback,
            threshold=self.threshold
        )

    def calculate_weights(
        self,
        comparison_matrix: Any
    ) -> Tuple[np.ndarray, float]:
        """
        쌍대 비교 행렬로부터 가중치 계산

        Args:
            comparison_matrix: 쌍대 비교 행렬 (n x n)

        Returns:
            (가중치 벡터, 최대 고유값 추정치)
        """
        result = self.compute(comparison_matrix)
        return result.priority_vector, result.lambda_max

    def calculate_consistency_ratio(
        self,
        comparison_matrix: Any,
        max_eigenvalue: float
    ) -> float:
        """
        일관성 비율(Consistency Ratio) 계산

        Args:
            comparison_matrix: 쌍대 비교 행렬
            max_eigenvalue: 최대 고유값

        Returns:
            Consistency Ratio (CR)
        """
        n = len(comparison_matrix)
        _, _, cr = consistency_metrics(max_eigenvalue, n, self.ri_values, self.ri_fallback)
        return cr

    def validate_consistency(
        self,
        comparison_matrix: Any,
        threshold: Optional[float] = None
    ) -> Tuple[bool, float]:
        """
        일관성 검증

        Returns:
            (일관성 통과 여부, CR 값)
        """
        threshold = self.threshold if threshold is None else threshold
        result = self.compute(comparison_matrix)
        return result.cr < threshold, result.cr

    def build_comparison_matrix(
        self,
        criteria: List[str],
        comparisons: Dict[Tuple[str, str], Any]
    ) -> np.ndarray:
        """
        쌍대 비교 딕셔너리로부터 비교 행렬 생성

        Args:
            criteria: 기준 리스트
            comparisons: {(기준1, 기준2): 중요도비율} 형태의 딕셔너리
                (기준1이 기준2보다 뒤에 있으면 역수로 상삼각에 기록)

        Returns:
            쌍대 비교 행렬
        """
        index = {name: i for i, name in enumerate(criteria)}
        builder = ReciprocalMatrixBuilder(
            len(criteria), labels=criteria, precision=self.precision
        )
        for (first, second), ratio in comparisons.items():
            if first not in index or second not in index:
                raise StructuralError(f"알 수 없는 기준: ({first}, {second})")
            i, j = index[first], index[second]
            if i < j:
                builder.set_upper(i, j, ratio)
            elif i > j:
                parsed = try_parse_value(ratio)
                builder.set_upper(j, i, "" if parsed is None else f"1/{parsed!r}")
            else:
                raise StructuralError(f"같은 기준끼리는 비교할 수 없습니다: {first}")
        return builder.matrix.to_array()
