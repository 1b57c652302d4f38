"""
AHP 계산 실행 스크립트
JSON 입력 파일을 읽어서 가중치/일관성/순위를 계산하고 결과를 저장
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from config.settings import (
    AHP_RESULTS_DIR,
    DEFAULT_INPUT_FILE,
    HIERARCHY_EXPORT_FILENAME,
    LOG_DIR,
    LOG_LEVEL,
    SINGLE_EXPORT_FILENAME,
)
from src.ahp.engine import compute_priorities
from src.ahp.errors import AHPError, StructuralError, ValidationError
from src.ranking.ranker import rank_items
from src.reporting.exporter import result_to_json, save_result_json, write_workbook
from src.reporting.formatter import ReportFormatter
from src.utils.helpers import load_json, setup_logging
from src.utils.loader import detect_mode, model_from_dict, single_from_dict


def parse_args():
    parser = argparse.ArgumentParser(description="AHP 쌍대 비교 행렬 계산")
    parser.add_argument(
        "--input",
        type=str,
        default=DEFAULT_INPUT_FILE,
        help="입력 JSON 파일 경로"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=AHP_RESULTS_DIR,
        help="결과 출력 디렉토리"
    )
    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="엑셀 파일을 저장하지 않음"
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="logs/ 디렉토리에 로그 파일도 저장"
    )
    return parser.parse_args()


def print_errors(error: AHPError):
    """수집된 모든 오류 출력"""
    if isinstance(error, ValidationError):
        print(f"Error: 입력값을 수정해주세요 ({len(error.errors)}개 셀)")
        for cell in error.errors:
            print(f"  - {cell.describe()}")
    elif isinstance(error, StructuralError):
        print(f"Error: 행렬 구조 오류 - {error}")
        for problem in error.problems:
            print(f"  - {problem}")
    else:
        print(f"Error: {error}")


def run_single(data, formatter: ReportFormatter):
    matrix = single_from_dict(data)
    result = compute_priorities(matrix)
    ranking = rank_items(result.priority_vector, matrix.labels)
    print(formatter.summarize(result, matrix.labels, title="Results", ranking=ranking))
    output = result_to_json(result, matrix=matrix, ranking=ranking)
    return output, formatter.single_sheets(matrix, result), SINGLE_EXPORT_FILENAME


def run_hierarchical(data, formatter: ReportFormatter):
    model = model_from_dict(data)
    result = model.evaluate()
    print(formatter.summarize_hierarchy(result))
    output = result_to_json(result)
    return output, formatter.hierarchy_sheets(model, result), HIERARCHY_EXPORT_FILENAME


def main():
    """AHP 계산 실행"""
    args = parse_args()
    setup_logging("ahp", LOG_LEVEL, LOG_DIR if args.log_file else None)

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"Error: 입력 파일을 찾을 수 없습니다: {input_file}")
        return 1

    print("=" * 60)
    print("AHP 계산 시작")
    print("=" * 60)
    print(f"입력 파일: {input_file}")

    try:
        data = load_json(str(input_file))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"Error: 입력 JSON을 읽을 수 없습니다: {e}")
        return 1
    if not isinstance(data, dict):
        print("Error: 입력 JSON의 최상위는 객체여야 합니다")
        return 1
    formatter = ReportFormatter()

    try:
        mode = detect_mode(data)
        print(f"모드: {mode}\n")
        if mode == "single":
            output, sheets, excel_name = run_single(data, formatter)
        else:
            output, sheets, excel_name = run_hierarchical(data, formatter)
    except AHPError as e:
        print_errors(e)
        return 1

    # 결과 저장
    print("\n결과 저장 중...")
    output_dir = Path(args.output_dir)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output["timestamp"] = timestamp
    json_file = save_result_json(output, output_dir / f"ahp_results_{timestamp}.json")
    print(f"  ✓ JSON 저장: {json_file}")

    if not args.no_excel:
        excel_file = write_workbook(sheets, output_dir / excel_name)
        print(f"  ✓ 엑셀 저장: {excel_file}")

    print("=" * 60)
    print("AHP 계산 완료!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
