"""
Reporting Module
요약 텍스트 및 엑셀/JSON 내보내기
"""

from .formatter import ReportFormatter
from .exporter import write_workbook, workbook_bytes, save_result_json, sheets_to_frames, result_to_json

__all__ = [
    "ReportFormatter",
    "write_workbook",
    "workbook_bytes",
    "save_result_json",
    "sheets_to_frames",
    "result_to_json"
]
