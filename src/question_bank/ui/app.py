from __future__ import annotations

import traceback
from typing import Dict, List, Mapping, Optional

import plotly.express as px
import streamlit as st

from question_bank.config import (
    APP_NAME,
    APP_VERSION,
    DIFFICULTY_OPTIONS,
    ROLE_OPTIONS,
    TOPIC_LABELS,
    YOE_OPTIONS,
)
from question_bank.core.aggregation import aggregate, insight_summary
from question_bank.core.data_loader import DatasetLoaderError, load_companies
from question_bank.core.filter_pipeline import (
    filter_questions,
    role_options,
    search_companies,
    year_options,
    yoe_options,
)
from question_bank.core.models import AggregateResult, AssessmentType, Company, FilterCriteria, Question
from question_bank.exports import (
    DocumentRendererUnavailable,
    export_csv,
    export_markdown,
    export_pdf,
    render_table_html,
)

FACET_KEYS = ["role", "yoe", "assessment_type", "topic", "year", "difficulty"]

ASSESSMENT_LABELS = {"": "Select Round", "OA": "Online Assessment", "Interview": "Interview"}

PIE_PALETTE = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#6366F1", "#DB2777",
    "#8B5CF6", "#14B8A6",
]


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

def _init_state() -> None:
    if "searched_query" not in st.session_state:
        st.session_state.searched_query = None
    if "ticked" not in st.session_state:
        st.session_state.ticked = {}
    if "simple_view" not in st.session_state:
        st.session_state.simple_view = False


def toggle_tick(ticked: Mapping[str, bool], link: str) -> Dict[str, bool]:
    """Return a new tick map with `link` flipped. Ticks never affect filtering."""
    updated = dict(ticked)
    updated[link] = not updated.get(link, False)
    return updated


def facet_choices(values: List[str], labels: Mapping[str, str]) -> Dict[str, str]:
    """Selector entries for the values present in the data, labelled from `labels` when known."""
    return {v: labels.get(v, v) for v in values}


def _reset_facets() -> None:
    for key in FACET_KEYS:
        st.session_state[f"facet_{key}"] = ""
    st.session_state.simple_view = False
    st.session_state.ticked = {}


def _selector(label: str, options: Mapping[str, str], key: str, placeholder: str) -> str:
    values = [""] + list(options.keys())
    labels = {"": placeholder, **options}
    return st.selectbox(label, options=values, format_func=lambda v: labels.get(v, v), key=key)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _render_search() -> Optional[str]:
    col_input, col_button = st.columns([4, 1])
    with col_input:
        query = st.text_input("Search Company", placeholder="Search Company (e.g., Microsoft)")
    with col_button:
        st.write("")
        clicked = st.button("Search", type="primary")

    normalized = query.strip().lower()
    if clicked and normalized != (st.session_state.searched_query or ""):
        # filters reset only when the company search changes
        _reset_facets()
        st.session_state.searched_query = normalized

    return st.session_state.searched_query


def _render_filters(selected: List[Company]) -> FilterCriteria:
    col_role, col_yoe = st.columns(2)
    with col_role:
        roles = facet_choices(role_options(selected), ROLE_OPTIONS)
        role = _selector("Role", roles, "facet_role", "Select Role")
    with col_yoe:
        yoe_choices = facet_choices(yoe_options(selected), YOE_OPTIONS)
        yoe = _selector("Experience", yoe_choices, "facet_yoe", "Years of Experience")

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kind_value = st.selectbox(
            "Round",
            options=list(ASSESSMENT_LABELS.keys()),
            format_func=lambda v: ASSESSMENT_LABELS[v],
            key="facet_assessment_type",
        )
    kind = AssessmentType.parse(kind_value)
    with c2:
        topic = _selector("Topic", TOPIC_LABELS, "facet_topic", "All Topics")
    with c3:
        years = year_options(selected, kind)
        year = _selector("Year", {y: y for y in years}, "facet_year", "All Years")
    with c4:
        difficulty = _selector(
            "Difficulty", {d: d for d in DIFFICULTY_OPTIONS}, "facet_difficulty", "All Levels"
        )

    return FilterCriteria(
        company_query=st.session_state.searched_query or "",
        role=role,
        yoe=yoe,
        assessment_type=kind,
        topic=topic,
        year=year,
        difficulty=difficulty,
    )


def _render_exports(questions: List[Question]) -> None:
    c1, c2, c3, c4 = st.columns(4)

    csv_artifact = export_csv(questions)
    c1.download_button("CSV", data=csv_artifact.data, file_name=csv_artifact.filename,
                       mime=csv_artifact.mime_type)

    md_artifact = export_markdown(questions)
    c2.download_button("Markdown", data=md_artifact.data, file_name=md_artifact.filename,
                       mime=md_artifact.mime_type)

    if c3.button("PDF"):
        try:
            pdf_artifact = export_pdf(questions)
        except DocumentRendererUnavailable as exc:
            st.warning(str(exc))
        else:
            c3.download_button("Download PDF", data=pdf_artifact.data,
                               file_name=pdf_artifact.filename, mime=pdf_artifact.mime_type)

    label = "Detailed View" if st.session_state.simple_view else "Table View"
    if c4.button(label):
        st.session_state.simple_view = not st.session_state.simple_view
        st.rerun()


def tick_widget_key(link: str, position: int) -> str:
    return f"tick_{position}_{link}"


def _on_tick(link: str) -> None:
    st.session_state.ticked = toggle_tick(st.session_state.ticked, link)


def _render_question_list(questions: List[Question]) -> None:
    for idx, q in enumerate(questions):
        with st.container(border=True):
            col_text, col_tick = st.columns([8, 1])
            with col_text:
                st.markdown(f"**{q.title}**")
                st.caption(f"Difficulty: {q.difficulty}  \nTopic: {q.topic}")
                if q.link.startswith("http"):
                    st.markdown(f"[{q.link}]({q.link})")
            with col_tick:
                key = tick_widget_key(q.link, idx)
                # every widget mirrors the link-keyed store, so duplicate links stay in sync
                st.session_state[key] = bool(st.session_state.ticked.get(q.link))
                st.checkbox("Done", key=key, on_change=_on_tick, args=(q.link,), label_visibility="collapsed")


def _render_insights(
    query: str,
    criteria: FilterCriteria,
    result: AggregateResult,
) -> None:
    st.markdown("**Questions by Topic**")
    st.caption(f"{result.total} question(s)")
    topics = sorted(result.topic_counts)
    fig = px.pie(
        names=topics,
        values=[result.topic_counts[t] for t in topics],
        color=topics,
        color_discrete_sequence=PIE_PALETTE,
    )
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), legend=dict(orientation="h"))
    st.plotly_chart(fig, use_container_width=True)

    st.info("📌 Company Insights\n\n" + insight_summary(query, criteria.role, criteria.assessment_type, result))

    if criteria.assessment_type is AssessmentType.INTERVIEW and result.year_histogram:
        st.markdown("**📆 Year-wise Frequency**")
        st.markdown("\n".join(f"- {yr}: {n} question(s)" for yr, n in result.year_histogram.items()))

    if result.repeated_questions:
        st.markdown("**🔥 Most Repeated Questions**")
        st.markdown("\n".join(f"- {r.link} – {r.count} times" for r in result.repeated_questions))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_app() -> None:
    st.set_page_config(page_title=APP_NAME, page_icon="📚", layout="wide")
    st.title(APP_NAME)
    st.caption(f"Version {APP_VERSION}")
    _init_state()

    try:
        companies = load_companies()
    except DatasetLoaderError as exc:
        st.error(f"Could not load the question dataset: {exc}")
        st.text_area("Traceback", value=traceback.format_exc(), height=220)
        return

    query = _render_search()
    if query is None:
        return

    selected = search_companies(companies, query)
    if not selected:
        st.error("No questions found for this company.")
        return

    criteria = _render_filters(selected)
    questions = filter_questions(companies, criteria)

    if not questions:
        st.warning("No questions found for the selected filters.")
        return

    _render_exports(questions)

    col_list, col_insights = st.columns([3, 1])
    with col_list:
        if st.session_state.simple_view:
            st.markdown(render_table_html(questions), unsafe_allow_html=True)
        else:
            _render_question_list(questions)
    with col_insights:
        _render_insights(query, criteria, aggregate(questions, criteria.assessment_type))
