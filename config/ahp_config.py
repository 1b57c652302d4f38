"""
AHP 설정
쌍대 비교 행렬 계산에 쓰이는 상수 및 기본값
"""

# ============================================================
# 무작위 지수 (Random Index) - 일관성 비율 계산용
# ============================================================
RI_VALUES = {
    1: 0.00, 2: 0.00, 3: 0.58, 4: 0.90, 5: 1.12, 6: 1.24,
    7: 1.32, 8: 1.41, 9: 1.45, 10: 1.49, 11: 1.51, 12: 1.48
}

# 표에 없는 크기(13 이상)에 사용하는 근사값
RI_FALLBACK = 1.49

# ============================================================
# 일관성 검증 임계값
# ============================================================
CONSISTENCY_THRESHOLD = 0.1  # CR < 0.1이면 일관성 통과

# ============================================================
# 수치 처리
# ============================================================
RECIPROCAL_DECIMALS = 4        # 하삼각 역수 저장 자릿수 (1/3 -> "0.3333")
DISPLAY_DECIMALS = 4           # 요약 출력 자릿수
ZERO_COLUMN_EPSILON = 1e-12    # 열 합계가 0일 때 대체값
RECIPROCITY_TOLERANCE = 1e-3   # a[i][j] * a[j][i] 허용 오차

# ============================================================
# 행렬 크기 제한
# ============================================================
MIN_MATRIX_SIZE = 2

MATRIX_SIZE_LIMITS = {
    "single": (2, 20),         # 기준만 비교
    "hierarchical": (2, 12)    # 기준 + 대안
}

# ============================================================
# 라벨
# ============================================================
CRITERION_LABEL_PREFIX = "C"
ALTERNATIVE_LABEL_PREFIX = "A"

# ============================================================
# 내보내기 시트 이름
# ============================================================
SINGLE_SHEET_NAMES = {
    "pairwise": "Pairwise Matrix",
    "normalized": "Normalized Matrix",
    "priorities": "Priority Vector",
    "consistency": "Consistency Info"
}

CRITERIA_SHEET_NAMES = {
    "pairwise": "Criteria_Pairwise",
    "normalized": "Criteria_Normalized",
    "priorities": "Criteria_Priorities",
    "consistency": "Criteria_Consistency"
}

# {k}: 기준 번호 (1부터)
ALTERNATIVE_SHEET_NAMES = {
    "pairwise": "Alt_Pair_C{k}",
    "normalized": "Alt_Norm_C{k}",
    "priorities": "Alt_Prio_C{k}",
    "consistency": "Alt_Cons_C{k}"
}

FINAL_RANKING_SHEET = "Final_Ranking"


def default_labels(count: int, prefix: str = CRITERION_LABEL_PREFIX) -> list:
    """
    기본 라벨 생성

    Args:
        count: 항목 수
        prefix: 라벨 접두사 ("C" 또는 "A")

    Returns:
        ["C1", "C2", ...] 형태의 라벨 리스트
    """
    return [f"{prefix}{i + 1}" for i in range(count)]


def size_limits(mode: str = "hierarchical") -> tuple:
    """
    모드별 행렬 크기 제한 조회

    Args:
        mode: "single" 또는 "hierarchical"

    Returns:
        (최소 크기, 최대 크기)
    """
    if mode not in MATRIX_SIZE_LIMITS:
        raise ValueError(f"알 수 없는 모드입니다: {mode}")
    return MATRIX_SIZE_LIMITS[mode]
