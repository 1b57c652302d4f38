"""
AHP Errors
파싱/검증/구조 오류 정의
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


class AHPError(ValueError):
    """AHP 계산 관련 오류의 기본 클래스"""


class ParseError(AHPError):
    """단일 입력값을 양의 실수로 해석할 수 없음"""

    def __init__(self, token: Any, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"잘못된 값 {token!r}: {reason}")


@dataclass(frozen=True)
class CellError:
    """검증에 실패한 셀 위치와 원본 값"""
    row: int
    col: int
    raw_value: str
    matrix: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)

    def describe(self) -> str:
        """사람이 읽을 수 있는 한 줄 설명 (행/열은 1부터)"""
        where = f'table "{self.matrix}" ' if self.matrix else ""
        return f'Invalid at {where}row {self.row + 1}, col {self.col + 1}: "{self.raw_value}"'


class ValidationError(AHPError):
    """하나 이상의 셀이 유효하지 않음 (모든 오류 셀 포함)"""

    def __init__(self, errors: List[CellError]):
        self.errors = list(errors)
        super().__init__(f"유효하지 않은 셀 {len(self.errors)}개")


class StructuralError(AHPError):
    """행렬 크기/개수 불일치 또는 필수 행렬 누락"""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = list(problems) if problems else [message]
        super().__init__(message)
