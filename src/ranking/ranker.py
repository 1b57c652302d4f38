"""
Ranker
가중치 기준 내림차순 순위 매기기 모듈
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence

import numpy as np

from config.ahp_config import ALTERNATIVE_LABEL_PREFIX, default_labels
from src.ahp.errors import StructuralError


@dataclass(frozen=True)
class RankedItem:
    """순위가 매겨진 항목"""
    rank: int
    index: int      # 원래 입력 순서 (0부터)
    label: str
    weight: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True, eq=False)
class RankingResult:
    """종합 가중치와 순위"""
    composite: np.ndarray           # 원래 순서의 가중치
    entries: List[RankedItem]       # 가중치 내림차순

    @property
    def labels(self) -> List[str]:
        return [entry.label for entry in self.entries]

    def top(self) -> RankedItem:
        return self.entries[0]

    def to_dict(self) -> Dict:
        return {
            "composite": self.composite.tolist(),
            "ranking": [entry.to_dict() for entry in self.entries]
        }


def rank_items(
    weights: Sequence[float],
    labels: Optional[Sequence[str]] = None,
    label_prefix: str = ALTERNATIVE_LABEL_PREFIX
) -> RankingResult:
    """
    가중치 내림차순 정렬 (동점이면 원래 순서 유지)

    Args:
        weights: 항목별 가중치
        labels: 항목 라벨 (None이면 A1..Am)
        label_prefix: 기본 라벨 접두사

    Returns:
        RankingResult
    """
    weights = np.array(weights, dtype=float).reshape(-1)
    if labels is None:
        labels = default_labels(len(weights), label_prefix)
    labels = [str(label) for label in labels]
    if len(labels) != len(weights):
        raise StructuralError(
            f"라벨 수({len(labels)})가 가중치 수({len(weights)})와 다릅니다"
        )

    # sorted는 안정 정렬이므로 동점은 인덱스 오름차순
    order = sorted(range(len(weights)), key=lambda idx: weights[idx], reverse=True)

    entries = [
        RankedItem(rank=rank, index=idx, label=labels[idx], weight=float(weights[idx]))
        for rank, idx in enumerate(order, 1)
    ]
    weights.setflags(write=False)
    return RankingResult(composite=weights, entries=entries)
