"""
Hierarchy Model
기준 행렬 1개 + 기준별 대안 행렬로 구성된 계층 AHP 평가 모듈
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from config.ahp_config import (
    ALTERNATIVE_LABEL_PREFIX,
    CRITERION_LABEL_PREFIX,
    RECIPROCAL_DECIMALS,
    default_labels,
    size_limits,
)
from src.ahp.engine import AHPCalculator, PriorityResult
from src.ahp.errors import StructuralError, ValidationError
from src.ahp.matrix import PairwiseMatrix, ReciprocalMatrixBuilder
from src.ahp.validator import validate_matrix
from .aggregator import aggregate
from .ranker import RankingResult

logger = logging.getLogger(__name__)

CRITERIA_MATRIX_NAME = "criteria"


def alternative_matrix_name(criterion_label: str) -> str:
    return f"alternatives[{criterion_label}]"


@dataclass(frozen=True, eq=False)
class HierarchyResult:
    """계층 AHP 계산 결과"""
    criteria: PriorityResult
    alternatives: List[PriorityResult]   # 기준 순서와 동일
    ranking: RankingResult
    criteria_labels: List[str]
    alternative_labels: List[str]

    @property
    def consistent(self) -> bool:
        """모든 행렬이 일관성 통과인지 여부"""
        return self.criteria.consistent and all(r.consistent for r in self.alternatives)

    def to_dict(self) -> Dict:
        return {
            "criteria_labels": self.criteria_labels,
            "alternative_labels": self.alternative_labels,
            "criteria": self.criteria.to_dict(),
            "alternatives": {
                label: result.to_dict()
                for label, result in zip(self.criteria_labels, self.alternatives)
            },
            "ranking": [
                {"rank": e.rank, "label": e.label, "weight": e.weight}
                for e in self.ranking.entries
            ]
        }


def evaluate_hierarchy(
    criteria_matrix: PairwiseMatrix,
    alternative_matrices: Sequence[Optional[PairwiseMatrix]],
    alternative_count: int,
    alternative_labels: Optional[Sequence[str]] = None,
    calculator: Optional[AHPCalculator] = None
) -> HierarchyResult:
    """
    기준 행렬 + 기준별 대안 행렬 → 종합 순위

    기준 행렬 오류는 먼저 보고하고, 대안 행렬은 모든 오류를 모은 뒤
    한 번에 보고한다. 오류가 하나라도 있으면 집계하지 않는다.

    Args:
        criteria_matrix: 기준 쌍대 비교 행렬
        alternative_matrices: 기준 순서대로 대안 쌍대 비교 행렬 (None은 누락)
        alternative_count: 선언된 대안 수
        alternative_labels: 대안 라벨 (None이면 A1..Am)
        calculator: AHPCalculator (None이면 기본 설정)

    Returns:
        HierarchyResult

    Raises:
        ValidationError: 유효하지 않은 셀이 있는 경우
        StructuralError: 행렬 누락 또는 크기 불일치
    """
    calculator = calculator or AHPCalculator()
    criteria_labels = criteria_matrix.labels
    if alternative_labels is None:
        alternative_labels = default_labels(alternative_count, ALTERNATIVE_LABEL_PREFIX)
    alternative_labels = [str(label) for label in alternative_labels]
    if len(alternative_labels) != alternative_count:
        raise StructuralError(
            f"대안 라벨 수({len(alternative_labels)})가 대안 수({alternative_count})와 다릅니다"
        )

    criteria_report = validate_matrix(criteria_matrix, name=criteria_matrix.name or CRITERIA_MATRIX_NAME)
    criteria_values = criteria_report.raise_for_errors()
    criteria_result = calculator.compute(criteria_values)

    problems: List[str] = []
    cell_errors = []
    alternative_results: List[PriorityResult] = []
    for k, label in enumerate(criteria_labels):
        name = alternative_matrix_name(label)
        matrix = alternative_matrices[k] if k < len(alternative_matrices) else None
        if matrix is None:
            problems.append(f"누락된 행렬: {name}")
            continue
        report = validate_matrix(matrix, name=matrix.name or name)
        if not report.ok:
            cell_errors.extend(report.errors)
            continue
        if matrix.size != alternative_count:
            problems.append(
                f"대안 행렬 크기 불일치: {name} ({matrix.size} != {alternative_count})"
            )
            continue
        alternative_results.append(calculator.compute(report.values))

    if len(alternative_matrices) > len(criteria_labels):
        problems.append(
            f"대안 행렬 수({len(alternative_matrices)})가 기준 수({len(criteria_labels)})보다 많습니다"
        )

    if problems:
        logger.error(f"계층 구조 오류로 계산 중단: {problems}")
        raise StructuralError(
            problems[0],
            problems + [error.describe() for error in cell_errors]
        )
    if cell_errors:
        raise ValidationError(cell_errors)

    ranking = aggregate(
        criteria_result.priority_vector,
        [result.priority_vector for result in alternative_results],
        labels=alternative_labels
    )
    logger.info(
        f"계층 AHP 완료: 기준 {len(criteria_labels)}개, 대안 {alternative_count}개, "
        f"1위 {ranking.top().label} ({ranking.top().weight:.4f})"
    )
    return HierarchyResult(
        criteria=criteria_result,
        alternatives=alternative_results,
        ranking=ranking,
        criteria_labels=criteria_labels,
        alternative_labels=alternative_labels
    )


class HierarchyModel:
    """기준 빌더 1개와 기준별 대안 빌더를 소유하는 계층 모델"""

    def __init__(
        self,
        criteria_count: int,
        alternative_count: int,
        criteria_labels: Optional[Sequence[str]] = None,
        alternative_labels: Optional[Sequence[str]] = None,
        precision: int = RECIPROCAL_DECIMALS,
        max_size: Optional[int] = None,
        criteria: Optional[ReciprocalMatrixBuilder] = None,
        alternatives: Optional[Sequence[ReciprocalMatrixBuilder]] = None
    ):
        """
        초기화 (새로 만드는 행렬은 1로 채워진 상태)

        Args:
            criteria_count: 기준 수
            alternative_count: 대안 수
            criteria_labels: 기준 라벨 (None이면 C1..Cn)
            alternative_labels: 대안 라벨 (None이면 A1..Am)
            precision: 역수 저장 자릿수
            max_size: 최대 행렬 크기 (None이면 계층 모드 제한)
            criteria: 이미 만들어진 기준 빌더 (None이면 새로 생성)
            alternatives: 이미 만들어진 대안 빌더 목록 (None이면 기준마다 새로 생성)
        """
        max_size = max_size or size_limits("hierarchical")[1]
        if criteria is None:
            criteria = ReciprocalMatrixBuilder(
                criteria_count,
                labels=criteria_labels,
                label_prefix=CRITERION_LABEL_PREFIX,
                name=CRITERIA_MATRIX_NAME,
                precision=precision,
                max_size=max_size
            )
        self.criteria = criteria
        self.alternative_count = alternative_count
        if alternatives is None:
            alternatives = [
                ReciprocalMatrixBuilder(
                    alternative_count,
                    labels=alternative_labels,
                    label_prefix=ALTERNATIVE_LABEL_PREFIX,
                    name=alternative_matrix_name(label),
                    precision=precision,
                    max_size=max_size
                )
                for label in self.criteria.matrix.labels
            ]
        self.alternatives = list(alternatives)

    @classmethod
    def from_matrices(
        cls,
        criteria_matrix: PairwiseMatrix,
        alternative_matrices: Sequence[PairwiseMatrix],
        alternative_count: Optional[int] = None,
        precision: int = RECIPROCAL_DECIMALS
    ) -> "HierarchyModel":
        """
        이미 만들어진 행렬들로 모델 구성 (구조 검사는 evaluate에서 수행)
        """
        if alternative_count is None:
            if not alternative_matrices:
                raise StructuralError("대안 수를 알 수 없습니다 (대안 행렬 없음)")
            alternative_count = alternative_matrices[0].size
        return cls(
            criteria_matrix.size,
            alternative_count,
            precision=precision,
            criteria=ReciprocalMatrixBuilder(matrix=criteria_matrix, precision=precision),
            alternatives=[
                ReciprocalMatrixBuilder(matrix=matrix, precision=precision)
                for matrix in alternative_matrices
            ]
        )

    @property
    def criteria_labels(self) -> List[str]:
        return self.criteria.matrix.labels

    @property
    def alternative_labels(self) -> List[str]:
        if self.alternatives:
            labels = self.alternatives[0].matrix.labels
            if len(labels) == self.alternative_count:
                return labels
        return default_labels(self.alternative_count, ALTERNATIVE_LABEL_PREFIX)

    def alternatives_for(self, criterion: int) -> ReciprocalMatrixBuilder:
        """criterion번째 기준 아래의 대안 빌더"""
        return self.alternatives[criterion]

    def evaluate(self, calculator: Optional[AHPCalculator] = None) -> HierarchyResult:
        """현재 행렬 상태로 계층 AHP 계산"""
        return evaluate_hierarchy(
            self.criteria.matrix,
            [builder.matrix for builder in self.alternatives],
            self.alternative_count,
            alternative_labels=self.alternative_labels,
            calculator=calculator
        )
