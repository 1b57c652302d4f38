"""
Ranking Module
AHP 종합 가중치 집계 및 순위
"""

from .ranker import RankedItem, RankingResult, rank_items
from .aggregator import aggregate, composite_weights
from .hierarchy import HierarchyModel, HierarchyResult, evaluate_hierarchy

__all__ = [
    "RankedItem",
    "RankingResult",
    "rank_items",
    "aggregate",
    "composite_weights",
    "HierarchyModel",
    "HierarchyResult",
    "evaluate_hierarchy"
]
