from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from question_bank.core.models import (
    NOT_AVAILABLE,
    AssessmentType,
    Company,
    FilterCriteria,
    Question,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stage 1 + 2: company selection
# ---------------------------------------------------------------------------

def search_companies(companies: Sequence[Company], query: str) -> List[Company]:
    """
    Case-insensitive substring search on company names.

    An empty query selects nothing: questions are only returned after an
    explicit search.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [c for c in companies if needle in c.name.lower()]


def _company_matches_facets(company: Company, criteria: FilterCriteria) -> bool:
    if criteria.role and company.role != criteria.role:
        return False
    if criteria.yoe and company.yoe != criteria.yoe:
        return False
    return True


# ---------------------------------------------------------------------------
# Stage 3: assessment-type branches
# ---------------------------------------------------------------------------

def _oa_questions(company: Company, criteria: FilterCriteria) -> Iterable[Question]:
    buckets = company.oa
    if criteria.year and criteria.year in buckets:
        years = [criteria.year]
    else:
        years = list(buckets.keys())

    for year in years:
        for q in buckets[year]:
            if criteria.difficulty and q.difficulty != criteria.difficulty:
                continue
            yield q


def _interview_item_matches(q: Question, criteria: FilterCriteria) -> bool:
    if q.free_text:
        # free-text questions have no difficulty (and no year) dimension
        return not criteria.difficulty
    if criteria.year and q.year != criteria.year:
        return False
    if criteria.difficulty and q.difficulty != criteria.difficulty:
        return False
    return True


def _interview_questions(company: Company, criteria: FilterCriteria) -> Iterable[Question]:
    topic = criteria.topic
    for section_key, items in company.interview.items():
        if topic and section_key.lower() != topic:
            continue
        for q in items:
            if _interview_item_matches(q, criteria):
                yield q


def _company_questions(company: Company, criteria: FilterCriteria) -> Iterable[Question]:
    kind = criteria.assessment_type
    if kind is None or kind is AssessmentType.OA:
        yield from _oa_questions(company, criteria)
    if kind is None or kind is AssessmentType.INTERVIEW:
        yield from _interview_questions(company, criteria)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def filter_questions(companies: Sequence[Company], criteria: FilterCriteria) -> List[Question]:
    """
    Run the filter pipeline and return matching questions.

    Order is company, then year bucket / interview section, then item, exactly
    as they appear in the dataset. No sorting and no dedup: exports and the
    question list rely on this order.
    """
    selected = search_companies(companies, criteria.company_query)
    if not selected:
        return []

    results: List[Question] = []
    for company in selected:
        if not _company_matches_facets(company, criteria):
            continue
        results.extend(_company_questions(company, criteria))

    logger.debug("Filter %s matched %d questions across %d companies.", criteria, len(results), len(selected))
    return results


# ---------------------------------------------------------------------------
# Facet options (selector contents)
# ---------------------------------------------------------------------------

def _distinct(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen


def year_options(companies: Sequence[Company], assessment_type: Optional[AssessmentType]) -> List[str]:
    """
    Years offered by the year selector.

    OA: bucket keys in dataset order. Otherwise: distinct interview years
    (excluding "N/A"), sorted ascending.
    """
    if assessment_type is AssessmentType.OA:
        return _distinct(year for c in companies for year in c.oa.keys())

    years = {
        q.year
        for c in companies
        for items in c.interview.values()
        for q in items
        if not q.free_text and q.year and q.year != NOT_AVAILABLE
    }
    return sorted(years)


def role_options(companies: Sequence[Company]) -> List[str]:
    return _distinct(c.role for c in companies)


def yoe_options(companies: Sequence[Company]) -> List[str]:
    return _distinct(c.yoe for c in companies)
