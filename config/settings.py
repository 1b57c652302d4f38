"""
프로젝트 설정
"""

# 결과 경로 설정
RESULTS_DIR = "results"
AHP_RESULTS_DIR = "results/ahp"
LOG_DIR = "logs"

# 입력 예시
DEFAULT_INPUT_FILE = "data/sample_hierarchy.json"

# 엑셀 내보내기 파일명
SINGLE_EXPORT_FILENAME = "AHP_Full_Result.xlsx"
HIERARCHY_EXPORT_FILENAME = "AHP_Criteria_Alternatives_Result.xlsx"

# 로깅 설정
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
