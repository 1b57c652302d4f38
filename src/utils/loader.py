"""
Input Loader
JSON 입력(딕셔너리)을 PairwiseMatrix / HierarchyModel로 변환

입력 형식:
    {
        "mode": "single" | "hierarchical",
        "criteria": {"labels": [...], "upper": [[i, j, "값"], ...]},
        "alternatives": {
            "labels": [...],
            "matrices": [{"upper": [...]} | {"rows": [[...], ...]}, ...]
        }
    }
행렬은 "upper"(상삼각 판단값) 또는 "rows"(전체 격자) 중 하나로 지정한다.
"""

from typing import Any, Dict, Optional, Sequence

from config.ahp_config import (
    ALTERNATIVE_LABEL_PREFIX,
    CRITERION_LABEL_PREFIX,
    RECIPROCAL_DECIMALS,
    size_limits,
)
from src.ahp.errors import StructuralError
from src.ahp.matrix import PairwiseMatrix, ReciprocalMatrixBuilder
from src.ranking.hierarchy import (
    CRITERIA_MATRIX_NAME,
    HierarchyModel,
    alternative_matrix_name,
)

MODES = ("single", "hierarchical")


def matrix_from_dict(
    spec: Dict[str, Any],
    labels: Optional[Sequence[str]] = None,
    label_prefix: str = CRITERION_LABEL_PREFIX,
    name: Optional[str] = None,
    max_size: Optional[int] = None,
    precision: int = RECIPROCAL_DECIMALS
) -> PairwiseMatrix:
    """
    행렬 정의 딕셔너리 → PairwiseMatrix

    Args:
        spec: {"rows": [[...]]} 또는 {"upper": [[i, j, 값], ...], "size": n}
        labels: 라벨 (spec의 "labels"가 우선)
        label_prefix: 기본 라벨 접두사
        name: 행렬 이름
        max_size: 최대 크기
        precision: 역수 저장 자릿수

    Returns:
        PairwiseMatrix
    """
    labels = spec.get("labels", labels)
    if "rows" in spec:
        return PairwiseMatrix.from_rows(
            spec["rows"], labels=labels, label_prefix=label_prefix, name=name, max_size=max_size
        )
    if "upper" in spec:
        size = spec.get("size") or (len(labels) if labels is not None else None)
        if size is None:
            raise StructuralError(f"{name or '행렬'}: 'size' 또는 'labels'가 필요합니다")
        builder = ReciprocalMatrixBuilder.from_upper_triangle(
            size,
            spec["upper"],
            labels=labels,
            label_prefix=label_prefix,
            name=name,
            precision=precision,
            max_size=max_size
        )
        return builder.matrix
    raise StructuralError(f"{name or '행렬'}: 'rows' 또는 'upper'가 필요합니다")


def single_from_dict(data: Dict[str, Any]) -> PairwiseMatrix:
    """단일 모드 입력 → 기준 행렬"""
    if "criteria" not in data:
        raise StructuralError("'criteria' 행렬이 없습니다")
    return matrix_from_dict(
        data["criteria"],
        name=CRITERIA_MATRIX_NAME,
        max_size=size_limits("single")[1]
    )


def model_from_dict(data: Dict[str, Any]) -> HierarchyModel:
    """계층 모드 입력 → HierarchyModel (구조 검사는 evaluate에서)"""
    if "criteria" not in data:
        raise StructuralError("'criteria' 행렬이 없습니다")
    max_size = size_limits("hierarchical")[1]
    criteria = matrix_from_dict(data["criteria"], name=CRITERIA_MATRIX_NAME, max_size=max_size)

    alt_data = data.get("alternatives") or {}
    alt_labels = alt_data.get("labels")
    alt_specs = alt_data.get("matrices") or []
    alternative_count = alt_data.get("count") or (len(alt_labels) if alt_labels else None)

    criteria_labels = criteria.labels
    matrices = []
    for k, spec in enumerate(alt_specs):
        label = criteria_labels[k] if k < len(criteria_labels) else f"#{k + 1}"
        matrices.append(matrix_from_dict(
            spec,
            labels=alt_labels,
            label_prefix=ALTERNATIVE_LABEL_PREFIX,
            name=alternative_matrix_name(label),
            max_size=max_size
        ))
    return HierarchyModel.from_matrices(criteria, matrices, alternative_count=alternative_count)


def detect_mode(data: Dict[str, Any]) -> str:
    mode = data.get("mode") or ("hierarchical" if "alternatives" in data else "single")
    if mode not in MODES:
        raise StructuralError(f"알 수 없는 모드입니다: {mode}")
    return mode
