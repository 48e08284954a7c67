from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence

from question_bank.core.models import (
    NOT_AVAILABLE,
    AggregateResult,
    AssessmentType,
    Question,
    RepeatedQuestion,
    TopicShare,
)

TOP_TOPICS = 5


def _percent_half_up(count: int, total: int) -> int:
    # integer arithmetic: round(count / total * 100) with halves rounded up
    return (200 * count + total) // (2 * total)


def topic_counts(questions: Sequence[Question]) -> Dict[str, int]:
    # Counter keeps first-seen order
    return dict(Counter(q.topic for q in questions))


def topic_percentages(counts: Dict[str, int], total: int, limit: int = TOP_TOPICS) -> List[TopicShare]:
    """
    Top `limit` topics by count with their share of `total`.

    Ties keep first-seen order (sorted() is stable). An empty list short-circuits
    before any division.
    """
    if total <= 0:
        return []
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    return [TopicShare(topic=topic, pct=_percent_half_up(count, total)) for topic, count in ranked]


def repeated_questions(questions: Sequence[Question]) -> List[RepeatedQuestion]:
    counts = Counter(q.link or "" for q in questions)
    repeated = [(link, count) for link, count in counts.items() if count > 1]
    repeated.sort(key=lambda kv: kv[1], reverse=True)
    return [RepeatedQuestion(link=link, count=count) for link, count in repeated]


def year_histogram(questions: Sequence[Question]) -> Dict[str, int]:
    counts = Counter(q.year for q in questions if q.year and q.year != NOT_AVAILABLE)
    return {year: counts[year] for year in sorted(counts)}


def aggregate(
    questions: Sequence[Question],
    assessment_type: Optional[AssessmentType] = None,
) -> AggregateResult:
    """
    Compute the insights panel data for a filtered question list.

    Pure function of the list's contents and order. The year histogram is only
    computed for Interview results.
    """
    counts = topic_counts(questions)
    histogram: Dict[str, int] = {}
    if AssessmentType.parse(assessment_type) is AssessmentType.INTERVIEW:
        histogram = year_histogram(questions)

    return AggregateResult(
        topic_counts=counts,
        topic_percentages=topic_percentages(counts, len(questions)),
        repeated_questions=repeated_questions(questions),
        year_histogram=histogram,
    )


def insight_summary(
    query: str,
    role: str,
    assessment_type: Optional[AssessmentType],
    result: AggregateResult,
) -> str:
    """
    One-line "company insights" text, e.g. "microsoft SDE-1 OA: 67% dsa, 33% os".
    """
    kind = AssessmentType.parse(assessment_type)
    label = "OA" if kind is AssessmentType.OA else "Interview"
    head = " ".join(part for part in ((query or "").strip(), (role or "").strip(), label) if part)
    shares = ", ".join(f"{share.pct}% {share.topic}" for share in result.topic_percentages)
    return f"{head}: {shares}"
