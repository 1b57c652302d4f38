"""
Priority Aggregator
기준 가중치와 기준별 대안 가중치를 결합하여 종합 가중치 계산
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from src.ahp.errors import StructuralError
from .ranker import RankingResult, rank_items

logger = logging.getLogger(__name__)


def composite_weights(
    criteria_priorities: Sequence[float],
    alternative_priorities: Sequence[Sequence[float]]
) -> np.ndarray:
    """
    종합 가중치 계산

    composite[j] = Σ_i criteria[i] * alternatives[i][j]

    Args:
        criteria_priorities: 기준 가중치 (길이 n)
        alternative_priorities: 기준별 대안 가중치 n개 (각 길이 m)

    Returns:
        대안별 종합 가중치 (길이 m)

    Raises:
        StructuralError: 개수/길이가 맞지 않는 경우 (잘라내지 않음)
    """
    criteria = np.asarray(criteria_priorities, dtype=float)
    if criteria.ndim != 1 or criteria.size == 0:
        raise StructuralError(f"기준 가중치는 1차원 벡터여야 합니다: shape={criteria.shape}")

    vectors: List[np.ndarray] = [np.asarray(v, dtype=float) for v in alternative_priorities]
    problems = []
    if len(vectors) != len(criteria):
        problems.append(
            f"대안 가중치 벡터 수({len(vectors)})가 기준 수({len(criteria)})와 다릅니다"
        )
    lengths = {v.shape for v in vectors}
    if any(v.ndim != 1 for v in vectors):
        problems.append("대안 가중치는 모두 1차원 벡터여야 합니다")
    elif len(lengths) > 1:
        problems.append(
            f"대안 가중치 벡터 길이가 서로 다릅니다: {[len(v) for v in vectors]}"
        )
    if problems:
        raise StructuralError(problems[0], problems)

    composite = np.zeros(len(vectors[0]), dtype=float)
    for weight, vector in zip(criteria, vectors):
        composite += weight * vector
    return composite


def aggregate(
    criteria_priorities: Sequence[float],
    alternative_priorities: Sequence[Sequence[float]],
    labels: Optional[Sequence[str]] = None
) -> RankingResult:
    """
    종합 가중치 계산 후 순위 매기기

    Args:
        criteria_priorities: 기준 가중치
        alternative_priorities: 기준별 대안 가중치
        labels: 대안 라벨 (None이면 A1..Am)

    Returns:
        RankingResult
    """
    composite = composite_weights(criteria_priorities, alternative_priorities)
    ranking = rank_items(composite, labels)
    logger.debug(f"종합 가중치: {[round(w, 4) for w in composite.tolist()]}")
    return ranking
