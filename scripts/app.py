"""
Streamlit 앱 - AHP 쌍대 비교 계산기
1. 기준만 비교 → 기준 가중치 / 일관성
2. 기준 + 대안 비교 → 기준별 대안 가중치 → 종합 순위
"""

import streamlit as st
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

sys.path.append(str(Path(__file__).parent.parent))
from config.ahp_config import (
    ALTERNATIVE_LABEL_PREFIX,
    CRITERION_LABEL_PREFIX,
    default_labels,
    size_limits,
)
from config.settings import HIERARCHY_EXPORT_FILENAME, SINGLE_EXPORT_FILENAME
from src.ahp.engine import compute_priorities
from src.ahp.errors import AHPError, StructuralError, ValidationError
from src.ahp.matrix import ReciprocalMatrixBuilder
from src.ahp.validator import validate_matrix
from src.ranking.hierarchy import HierarchyModel
from src.ranking.ranker import rank_items
from src.reporting.exporter import workbook_bytes
from src.reporting.formatter import ReportFormatter

MODE_SINGLE = "기준만 비교"
MODE_HIERARCHY = "기준 + 대안 비교"

formatter = ReportFormatter()


def _parse_labels(text: str, count: int, prefix: str) -> Optional[List[str]]:
    """쉼표로 구분된 라벨 (비어 있으면 기본 라벨, 개수가 틀리면 None)"""
    labels = [t.strip() for t in text.split(",") if t.strip()]
    if not labels:
        return default_labels(count, prefix)
    return labels if len(labels) == count else None


def _on_upper_change(builder: ReciprocalMatrixBuilder, key: str, i: int, j: int):
    builder.set_upper(i, j, st.session_state[key])


def render_matrix(builder: ReciprocalMatrixBuilder, key_prefix: str):
    """상삼각만 입력 가능한 행렬 입력 격자"""
    matrix = builder.matrix
    labels = matrix.labels
    header = st.columns(matrix.size + 1)
    for j, label in enumerate(labels):
        header[j + 1].markdown(f"**{label}**")
    for i in range(matrix.size):
        cols = st.columns(matrix.size + 1)
        cols[0].markdown(f"**{labels[i]}**")
        for j in range(matrix.size):
            if i < j:
                key = f"{key_prefix}-{i}-{j}"
                cols[j + 1].text_input(
                    f"{labels[i]} vs {labels[j]}",
                    value=matrix.raw(i, j),
                    key=key,
                    label_visibility="collapsed",
                    on_change=_on_upper_change,
                    args=(builder, key, i, j)
                )
            else:
                raw = matrix.raw(i, j)
                cols[j + 1].markdown(f"`{raw}`" if raw else "⚠️")


def render_inline_result(builder: ReciprocalMatrixBuilder):
    """행렬별 즉시 계산 결과"""
    report = validate_matrix(builder.matrix)
    if not report.ok:
        st.warning("입력값을 수정해주세요.")
        st.code("\n".join(formatter.error_lines(report.errors)))
        return None
    result = compute_priorities(report.values)
    st.caption(formatter.metrics_line(result))
    if result.consistent:
        st.success(formatter.verdict(result))
    else:
        st.error(formatter.verdict(result))
    st.code(formatter.vector_line(result.priority_vector))
    return result


def show_ahp_error(error: AHPError):
    if isinstance(error, ValidationError):
        st.error(f"❌ 입력값 오류 ({len(error.errors)}개 셀)")
        st.code("\n".join(formatter.error_lines(error.errors)))
    elif isinstance(error, StructuralError):
        st.error(f"❌ 행렬 구조 오류: {error}")
        st.code("\n".join(error.problems))
    else:
        st.error(f"❌ 오류 발생: {error}")


# 페이지 설정
st.set_page_config(
    page_title="AHP 쌍대 비교 계산기",
    page_icon="📐",
    layout="wide",
    initial_sidebar_state="collapsed"
)

st.markdown("## AHP 쌍대 비교 계산기")
st.caption("상삼각 셀에 중요도(예: 3, 0.5, 1/3)를 입력하면 하삼각은 역수로 자동 채워집니다.")
st.markdown("---")

mode = st.radio("모드", [MODE_SINGLE, MODE_HIERARCHY], horizontal=True)
hierarchical = mode == MODE_HIERARCHY
min_size, max_size = size_limits("hierarchical" if hierarchical else "single")

with st.form("setup_form", clear_on_submit=False):
    col_n, col_m = st.columns(2)
    with col_n:
        criteria_count = st.number_input("기준 수", min_value=min_size, max_value=max_size, value=3, step=1)
        criteria_text = st.text_input("기준 이름 (쉼표로 구분, 선택)", value="")
    with col_m:
        alternative_count = st.number_input(
            "대안 수", min_value=min_size, max_value=max_size, value=3, step=1,
            disabled=not hierarchical
        )
        alternative_text = st.text_input("대안 이름 (쉼표로 구분, 선택)", value="", disabled=not hierarchical)
    submitted = st.form_submit_button("행렬 생성", type="primary")

if submitted:
    criteria_labels = _parse_labels(criteria_text, int(criteria_count), CRITERION_LABEL_PREFIX)
    alternative_labels = _parse_labels(alternative_text, int(alternative_count), ALTERNATIVE_LABEL_PREFIX)
    if criteria_labels is None or (hierarchical and alternative_labels is None):
        st.error("⚠️ 이름 개수가 입력한 수와 다릅니다.")
    else:
        # 이전 입력 위젯 상태 제거
        for key in [k for k in st.session_state if str(k).startswith("cell-")]:
            st.session_state.pop(key)
        st.session_state["ahp_mode"] = mode
        if hierarchical:
            st.session_state["ahp_model"] = HierarchyModel(
                int(criteria_count), int(alternative_count),
                criteria_labels=criteria_labels,
                alternative_labels=alternative_labels
            )
        else:
            st.session_state["ahp_model"] = ReciprocalMatrixBuilder(
                int(criteria_count), labels=criteria_labels, max_size=max_size
            )

model = st.session_state.get("ahp_model")
if model is not None and st.session_state.get("ahp_mode") == mode:
    if isinstance(model, HierarchyModel):
        st.markdown("### Criteria Pairwise Comparison")
        render_matrix(model.criteria, "cell-criteria")
        render_inline_result(model.criteria)
        for k, label in enumerate(model.criteria_labels):
            st.markdown(f"### Alternatives Pairwise under Criterion {label}")
            builder = model.alternatives_for(k)
            render_matrix(builder, f"cell-alt{k}")
            render_inline_result(builder)

        st.markdown("---")
        if st.button("🚀 종합 순위 계산", type="primary"):
            try:
                result = model.evaluate()
            except AHPError as e:
                show_ahp_error(e)
            else:
                st.markdown("### Final Results")
                st.caption(formatter.metrics_line(result.criteria))
                st.dataframe(
                    pd.DataFrame(
                        [e.to_dict() for e in result.ranking.entries],
                        columns=["rank", "label", "weight"]
                    ),
                    hide_index=True
                )
                st.download_button(
                    label="📥 엑셀 다운로드",
                    data=workbook_bytes(formatter.hierarchy_sheets(model, result)),
                    file_name=HIERARCHY_EXPORT_FILENAME,
                    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
                )
    else:
        st.markdown("### Criteria Pairwise Comparison")
        render_matrix(model, "cell-single")
        result = render_inline_result(model)
        if result is not None:
            ranking = rank_items(result.priority_vector, model.matrix.labels)
            with st.expander("📋 요약 보기"):
                st.text(formatter.summarize(result, model.matrix.labels, ranking=ranking))
            st.download_button(
                label="📥 엑셀 다운로드",
                data=workbook_bytes(formatter.single_sheets(model.matrix, result)),
                file_name=SINGLE_EXPORT_FILENAME,
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            )
