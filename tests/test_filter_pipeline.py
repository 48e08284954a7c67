from __future__ import annotations

import pytest

from question_bank.core.models import AssessmentType, FilterCriteria
from question_bank.core.filter_pipeline import (
    filter_questions,
    role_options,
    search_companies,
    year_options,
    yoe_options,
)
from question_bank.core.normalizer import normalize_dataset

OA = AssessmentType.OA
INTERVIEW = AssessmentType.INTERVIEW


def _links(questions):
    return [q.link for q in questions]


def _is_subsequence(small, big) -> bool:
    it = iter(big)
    return all(any(x is y for y in it) for x in small)


def test_empty_query_short_circuits(companies):
    criteria = FilterCriteria(company_query="", role="SDE-1", assessment_type=OA, difficulty="Easy")
    assert filter_questions(companies, criteria) == []
    assert filter_questions(companies, FilterCriteria(company_query="   ")) == []


def test_search_is_case_insensitive_substring(companies):
    assert [c.name for c in search_companies(companies, "MICRO")] == ["Microsoft", "Micron"]
    assert [c.name for c in search_companies(companies, " google ")] == ["Google"]
    assert search_companies(companies, "amazon") == []


def test_oa_results_in_company_year_item_order(companies):
    result = filter_questions(companies, FilterCriteria(company_query="micro", assessment_type=OA))
    assert _links(result) == ["q1", "q2", "q1", "q3", "m1"]
    assert all(q.type is OA for q in result)


def test_role_and_yoe_drop_whole_companies(companies):
    by_role = filter_questions(companies, FilterCriteria(company_query="micro", role="SDE-1", assessment_type=OA))
    assert _links(by_role) == ["q1", "q2", "q1", "q3"]

    by_yoe = filter_questions(companies, FilterCriteria(company_query="micro", yoe="2", assessment_type=OA))
    assert _links(by_yoe) == ["m1"]


def test_oa_year_restricts_only_when_bucket_exists(companies):
    result = filter_questions(companies, FilterCriteria(company_query="micro", assessment_type=OA, year="2024"))
    # Micron has no 2024 bucket, so all of its years are used
    assert _links(result) == ["q1", "q3", "m1"]


def test_oa_difficulty(companies):
    result = filter_questions(
        companies, FilterCriteria(company_query="microsoft", assessment_type=OA, difficulty="Easy")
    )
    assert _links(result) == ["q1", "q1"]


def test_interview_all_sections(companies):
    result = filter_questions(companies, FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW))
    assert _links(result) == [
        "i1", "i2", "Design a rate limiter", "Design a chat app", "Tell me about yourself",
    ]


def test_interview_topic_matches_lowercased_section_key(companies):
    result = filter_questions(
        companies, FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW, topic="dsa")
    )
    assert _links(result) == ["i1", "i2"]


def test_difficulty_excludes_free_text_questions(companies):
    result = filter_questions(
        companies, FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW, difficulty="Hard")
    )
    assert _links(result) == ["i2", "Design a chat app"]

    easy = filter_questions(
        companies, FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW, difficulty="Easy")
    )
    assert easy == []


def test_interview_year_applies_to_structured_questions_only(companies):
    result = filter_questions(
        companies, FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW, year="2024")
    )
    assert _links(result) == [
        "i2", "Design a rate limiter", "Design a chat app", "Tell me about yourself",
    ]


def test_unset_assessment_type_returns_oa_then_interview_per_company(companies):
    result = filter_questions(companies, FilterCriteria(company_query="o"))
    assert _links(result) == [
        "q1", "q2", "q1", "q3",
        "i1", "i2", "Design a rate limiter", "Design a chat app", "Tell me about yourself",
        "m1",
        "g1", "q1",
    ]


def test_no_match_is_empty_not_error(companies):
    criteria = FilterCriteria(company_query="microsoft", role="Backend Developer", assessment_type=OA)
    assert filter_questions(companies, criteria) == []


@pytest.mark.parametrize(
    "base",
    [
        FilterCriteria(company_query="o"),
        FilterCriteria(company_query="micro", assessment_type=OA),
        FilterCriteria(company_query="microsoft", assessment_type=INTERVIEW),
        FilterCriteria(company_query="o", year="2023"),
    ],
)
@pytest.mark.parametrize(
    "facet,value",
    [
        ("role", "SDE-1"),
        ("yoe", "College Graduate"),
        ("assessment_type", OA),
        ("assessment_type", INTERVIEW),
        ("topic", "dsa"),
        ("year", "2024"),
        ("difficulty", "Hard"),
    ],
)
def test_adding_a_facet_only_narrows(companies, base, facet, value):
    if getattr(base, facet):
        pytest.skip("facet already set on the base criteria")
    wide = filter_questions(companies, base)
    narrow = filter_questions(companies, base.replace(**{facet: value}))
    assert _is_subsequence(narrow, wide)


def test_filter_is_idempotent(companies):
    criteria = FilterCriteria(company_query="micro", assessment_type=OA, difficulty="Easy")
    assert filter_questions(companies, criteria) == filter_questions(companies, criteria)


def test_microsoft_scenario():
    data = {"Microsoft": {"oa": {"2023": [{"link": "q1", "difficulty": "Easy", "topic": "dsa"}]}}}
    companies = normalize_dataset(data, {})
    result = filter_questions(companies, FilterCriteria(company_query="micro", assessment_type=OA))
    assert len(result) == 1
    assert result[0].link == "q1"


def test_year_options(companies):
    selected = search_companies(companies, "micro")
    assert year_options(selected, OA) == ["2023", "2024", "2022"]
    assert year_options(selected, INTERVIEW) == ["2023", "2024"]
    assert year_options(selected, None) == ["2023", "2024"]


def test_role_and_yoe_options(companies):
    assert role_options(companies) == ["SDE-1", "SDE-2"]
    assert yoe_options(companies) == ["College Graduate", "2"]


@pytest.mark.parametrize("kind", ["OA", "Interview"])
def test_string_assessment_type_matches_enum(companies, kind):
    by_string = filter_questions(companies, FilterCriteria(company_query="micro", assessment_type=kind))
    by_enum = filter_questions(
        companies, FilterCriteria(company_query="micro", assessment_type=AssessmentType(kind))
    )
    assert by_string
    assert by_string == by_enum


def test_criteria_normalizes_assessment_type():
    assert FilterCriteria(assessment_type="OA").assessment_type is OA
    assert FilterCriteria(assessment_type="").assessment_type is None
    assert FilterCriteria().replace(assessment_type="Interview").assessment_type is INTERVIEW
