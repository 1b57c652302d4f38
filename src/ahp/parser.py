"""
Value Parser
사용자가 입력한 값("3", "0.25", "1/3")을 양의 실수로 변환
"""

import math
from typing import Any, Optional

from .errors import ParseError


def _to_float(part: str, token: Any) -> float:
    # float()는 "1_0" 같은 밑줄 숫자 리터럴도 허용하므로 직접 거부
    if "_" in part:
        raise ParseError(token, f"숫자가 아닙니다: {part!r}")
    try:
        return float(part)
    except OverflowError:
        raise ParseError(token, "유한한 값이 아닙니다") from None
    except ValueError:
        raise ParseError(token, f"숫자가 아닙니다: {part!r}") from None


def parse_value(token: Any, require_positive: bool = True) -> float:
    """
    입력 토큰을 실수로 변환

    Args:
        token: 문자열("5", "1/3") 또는 숫자
        require_positive: True면 0 이하 값도 오류로 처리

    Returns:
        변환된 실수

    Raises:
        ParseError: 빈 값, 잘못된 분수, 0 분모, 숫자가 아닌 값, 비유한값
    """
    if token is None or isinstance(token, bool):
        raise ParseError(token, "값이 없습니다")

    if isinstance(token, (int, float)):
        try:
            value = float(token)
        except OverflowError:
            raise ParseError(token, "유한한 값이 아닙니다") from None
    else:
        text = str(token).strip()
        if not text:
            raise ParseError(token, "빈 값입니다")

        if "/" in text:
            parts = text.split("/")
            if len(parts) != 2:
                raise ParseError(token, "분수는 a/b 형식이어야 합니다")
            numerator, denominator = (p.strip() for p in parts)
            if not numerator or not denominator:
                raise ParseError(token, "분자와 분모가 모두 필요합니다")
            a = _to_float(numerator, token)
            b = _to_float(denominator, token)
            if not math.isfinite(a) or not math.isfinite(b):
                raise ParseError(token, "유한한 값이 아닙니다")
            if b == 0:
                raise ParseError(token, "분모가 0입니다")
            value = a / b
        else:
            value = _to_float(text, token)

    if not math.isfinite(value):
        raise ParseError(token, "유한한 값이 아닙니다")
    if require_positive and value <= 0:
        raise ParseError(token, "양수가 아닙니다")
    return value


def try_parse_value(token: Any, require_positive: bool = True) -> Optional[float]:
    """parse_value와 동일하지만 실패 시 None 반환"""
    try:
        return parse_value(token, require_positive=require_positive)
    except ParseError:
        return None
