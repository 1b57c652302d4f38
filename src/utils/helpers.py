"""
Helper Functions
JSON 입출력, 디렉토리, 로깅 설정
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from config.settings import LOG_FORMAT, LOG_LEVEL


def load_json(file_path: str) -> Any:
    """JSON 파일을 불러옵니다."""
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def save_json(data: Any, file_path: str):
    """데이터를 JSON 파일로 저장합니다."""
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def ensure_dir(dir_path: str):
    """디렉토리가 없으면 생성합니다."""
    Path(dir_path).mkdir(parents=True, exist_ok=True)


def setup_logging(name: str = "ahp", level: str = LOG_LEVEL, log_dir: Optional[str] = None):
    """
    로깅 설정 - 콘솔과 (선택) 파일에 동시 출력

    Args:
        name: 로그 파일 이름 접두사
        level: 로그 레벨 문자열
        log_dir: 로그 파일 디렉토리 (None이면 콘솔만)

    Returns:
        파일 로그 경로 (파일 출력이 없으면 None)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 기존 핸들러 제거
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    # 콘솔 핸들러
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    # 파일 핸들러
    ensure_dir(log_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = Path(log_dir) / f"{name}_{timestamp}.log"
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    return log_file
