"""
Report Formatter
계산 결과를 요약 텍스트와 시트별 표(행 리스트)로 변환
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from config.ahp_config import (
    ALTERNATIVE_SHEET_NAMES,
    CRITERIA_SHEET_NAMES,
    DISPLAY_DECIMALS,
    FINAL_RANKING_SHEET,
    SINGLE_SHEET_NAMES,
    default_labels,
)
from src.ahp.engine import PriorityResult
from src.ahp.errors import CellError
from src.ahp.matrix import PairwiseMatrix
from src.ranking.hierarchy import HierarchyModel, HierarchyResult
from src.ranking.ranker import RankingResult

Rows = List[List[Any]]


class ReportFormatter:
    """PriorityResult / RankingResult 표시 및 내보내기용 변환기"""

    def __init__(self, decimals: int = DISPLAY_DECIMALS):
        self.decimals = decimals

    def _fmt(self, value: float) -> str:
        return f"{value:.{self.decimals}f}"

    # ============================================================
    # 요약 텍스트
    # ============================================================

    def verdict(self, result: PriorityResult) -> str:
        threshold = f"{result.threshold:.2f}"
        if result.consistent:
            return f"✓ Consistency acceptable (CR < {threshold})"
        return f"✗ Consistency NOT acceptable (CR ≥ {threshold})"

    def metrics_line(self, result: PriorityResult) -> str:
        return (
            f"n: {result.size}  λmax: {self._fmt(result.lambda_max)}  "
            f"CI: {self._fmt(result.ci)}  RI: {self._fmt(result.ri)}  "
            f"CR: {self._fmt(result.cr)}"
        )

    def vector_line(self, values: Iterable[float]) -> str:
        return "[ " + ", ".join(self._fmt(v) for v in values) + " ]"

    def table_lines(self, header: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[str]:
        """고정폭 텍스트 표"""
        cells = [[str(h) for h in header]] + [
            [self._fmt(c) if isinstance(c, float) else str(c) for c in row]
            for row in rows
        ]
        widths = [max(len(row[k]) for row in cells) for k in range(len(header))]
        return [
            "  ".join(cell.rjust(widths[k]) for k, cell in enumerate(row))
            for row in cells
        ]

    def summarize(
        self,
        result: PriorityResult,
        labels: Optional[Sequence[str]] = None,
        title: str = "Results",
        ranking: Optional[RankingResult] = None
    ) -> str:
        """
        단일 행렬 결과 요약

        Args:
            result: PriorityResult
            labels: 행/열 라벨 (None이면 C1..Cn)
            title: 제목
            ranking: 함께 출력할 순위 (단일 모드의 기준 순위)

        Returns:
            여러 줄 문자열
        """
        labels = list(labels) if labels is not None else default_labels(result.size)
        lines = [
            title,
            self.metrics_line(result),
            self.verdict(result),
            "",
            "Priority vector:",
            self.vector_line(result.priority_vector),
            "",
            "Normalized matrix:"
        ]
        lines.extend(self.table_lines(
            [""] + labels,
            [[label] + list(map(float, row)) for label, row in zip(labels, result.normalized_matrix)]
        ))
        if ranking is not None:
            lines.append("")
            lines.extend(self.ranking_lines(ranking, item_header="Criteria"))
        return "\n".join(lines)

    def ranking_lines(self, ranking: RankingResult, item_header: str = "Alternative") -> List[str]:
        return self.table_lines(
            ["Rank", item_header, "Weight"],
            [[e.rank, e.label, e.weight] for e in ranking.entries]
        )

    def summarize_hierarchy(self, result: HierarchyResult) -> str:
        """계층 모드 결과 요약 (기준 → 기준별 대안 → 최종 순위)"""
        sections = [
            self.summarize(result.criteria, result.criteria_labels, title="Criteria")
        ]
        for label, alt_result in zip(result.criteria_labels, result.alternatives):
            sections.append(self.summarize(
                alt_result,
                result.alternative_labels,
                title=f"Alternatives under criterion {label}"
            ))
        final = ["Composite weights & ranking:"] + self.ranking_lines(result.ranking)
        sections.append("\n".join(final))
        return ("\n" + "-" * 60 + "\n").join(sections)

    def error_lines(self, errors: Iterable[CellError]) -> List[str]:
        return [error.describe() for error in errors]

    # ============================================================
    # 내보내기용 표 (첫 행 = 헤더)
    # ============================================================

    def pairwise_rows(self, matrix: PairwiseMatrix) -> Rows:
        labels = matrix.labels
        return [[""] + labels] + [
            [label] + row for label, row in zip(labels, matrix.rows())
        ]

    def normalized_rows(self, result: PriorityResult, labels: Sequence[str]) -> Rows:
        labels = list(labels)
        return [[""] + labels] + [
            [label] + [float(v) for v in row]
            for label, row in zip(labels, result.normalized_matrix)
        ]

    def priority_rows(
        self,
        result: PriorityResult,
        labels: Sequence[str],
        item_header: str = "Criteria"
    ) -> Rows:
        return [[item_header, "Weight"]] + [
            [label, float(w)] for label, w in zip(labels, result.priority_vector)
        ]

    def consistency_rows(self, result: PriorityResult) -> Rows:
        return [
            ["Metric", "Value"],
            ["lambda_max", result.lambda_max],
            ["CI", result.ci],
            ["RI", result.ri],
            ["CR", result.cr]
        ]

    def ranking_rows(self, ranking: RankingResult) -> Rows:
        return [["Rank", "Alternative", "Weight"]] + [
            [e.rank, e.label, e.weight] for e in ranking.entries
        ]

    def _sheet_group(
        self,
        names: Dict[str, str],
        matrix: PairwiseMatrix,
        result: PriorityResult,
        item_header: str
    ) -> Dict[str, Rows]:
        return {
            names["pairwise"]: self.pairwise_rows(matrix),
            names["normalized"]: self.normalized_rows(result, matrix.labels),
            names["priorities"]: self.priority_rows(result, matrix.labels, item_header),
            names["consistency"]: self.consistency_rows(result)
        }

    def single_sheets(self, matrix: PairwiseMatrix, result: PriorityResult) -> Dict[str, Rows]:
        """단일 모드 시트 4개"""
        return self._sheet_group(SINGLE_SHEET_NAMES, matrix, result, "Criteria")

    def hierarchy_sheets(self, model: HierarchyModel, result: HierarchyResult) -> Dict[str, Rows]:
        """계층 모드: 기준 시트 4개 + 기준별 대안 시트 4개 + 최종 순위"""
        sheets = self._sheet_group(
            CRITERIA_SHEET_NAMES, model.criteria.matrix, result.criteria, "Criteria"
        )
        for k, (builder, alt_result) in enumerate(zip(model.alternatives, result.alternatives), 1):
            names = {key: name.format(k=k) for key, name in ALTERNATIVE_SHEET_NAMES.items()}
            sheets.update(self._sheet_group(names, builder.matrix, alt_result, "Alternative"))
        sheets[FINAL_RANKING_SHEET] = self.ranking_rows(result.ranking)
        return sheets
