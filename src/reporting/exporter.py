"""
Result Exporter
시트별 표를 엑셀 파일(xlsx)로, 계산 결과를 JSON으로 저장
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from src.ahp.engine import PriorityResult
from src.ahp.matrix import PairwiseMatrix
from src.ranking.hierarchy import HierarchyResult
from src.ranking.ranker import RankingResult
from src.utils.helpers import save_json

logger = logging.getLogger(__name__)

# 엑셀 시트 이름 최대 길이
MAX_SHEET_NAME_LENGTH = 31


def sheets_to_frames(sheets: Dict[str, List[List[Any]]]) -> Dict[str, pd.DataFrame]:
    """첫 행을 헤더로 하는 DataFrame 변환"""
    frames = {}
    for name, rows in sheets.items():
        header, body = rows[0], rows[1:]
        frames[name[:MAX_SHEET_NAME_LENGTH]] = pd.DataFrame(body, columns=header)
    return frames


def _write(sheets: Dict[str, List[List[Any]]], target: Any) -> None:
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for name, df in sheets_to_frames(sheets).items():
            df.to_excel(writer, sheet_name=name, index=False)


def write_workbook(
    sheets: Dict[str, List[List[Any]]],
    file_path: Union[str, Path]
) -> Path:
    """
    시트별 표를 xlsx 파일로 저장

    Args:
        sheets: {시트 이름: 행 리스트}
        file_path: 저장 경로

    Returns:
        저장된 파일 경로
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _write(sheets, path)
    logger.info(f"엑셀 저장: {path} (시트 {len(sheets)}개)")
    return path


def workbook_bytes(sheets: Dict[str, List[List[Any]]]) -> bytes:
    """다운로드 버튼용 xlsx 바이트"""
    output = io.BytesIO()
    _write(sheets, output)
    output.seek(0)
    return output.getvalue()


def save_result_json(data: Dict[str, Any], file_path: Union[str, Path]) -> Path:
    """계산 결과 딕셔너리를 JSON으로 저장"""
    save_json(data, str(file_path))
    logger.info(f"JSON 저장: {file_path}")
    return Path(file_path)


def result_to_json(
    result: Union[PriorityResult, HierarchyResult],
    matrix: Optional[PairwiseMatrix] = None,
    ranking: Optional[RankingResult] = None
) -> Dict[str, Any]:
    """
    계산 결과 → JSON 저장용 딕셔너리

    Args:
        result: 단일 행렬 결과(PriorityResult) 또는 계층 결과(HierarchyResult)
        matrix: 단일 모드의 원본 행렬 (라벨과 입력 토큰 기록용)
        ranking: 단일 모드의 가중치 순위

    Returns:
        {"mode": ..., ...} 딕셔너리
    """
    if isinstance(result, HierarchyResult):
        return {"mode": "hierarchical", **result.to_dict()}

    output: Dict[str, Any] = {"mode": "single"}
    if matrix is not None:
        output["labels"] = matrix.labels
        output["pairwise_matrix"] = matrix.rows()
    output["result"] = result.to_dict()
    if ranking is not None:
        output["ranking"] = [entry.to_dict() for entry in ranking.entries]
    return output
