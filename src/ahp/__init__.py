"""
AHP Core
파싱 → 역수 행렬 → 검증 → 가중치/일관성 계산
"""

from .errors import (
    AHPError,
    ParseError,
    CellError,
    ValidationError,
    StructuralError
)
from .parser import parse_value, try_parse_value
from .matrix import PairwiseMatrix, ReciprocalMatrixBuilder
from .validator import ValidationReport, validate_matrix, check_reciprocity
from .engine import (
    PriorityResult,
    AHPCalculator,
    compute_priorities,
    consistency_metrics,
    random_index
)

__all__ = [
    # Errors
    "AHPError",
    "ParseError",
    "CellError",
    "ValidationError",
    "StructuralError",
    # Parser
    "parse_value",
    "try_parse_value",
    # Matrix
    "PairwiseMatrix",
    "ReciprocalMatrixBuilder",
    # Validator
    "ValidationReport",
    "validate_matrix",
    "check_reciprocity",
    # Engine
    "PriorityResult",
    "AHPCalculator",
    "compute_priorities",
    "consistency_metrics",
    "random_index",
]
