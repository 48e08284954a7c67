from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from question_bank.core.models import (
    NOT_AVAILABLE,
    AssessmentType,
    Company,
    Difficulty,
    Question,
    RawQuestion,
    RawRecord,
    RawText,
)

logger = logging.getLogger(__name__)

OA_DEFAULT_TOPIC = "General"
OA_DEFAULT_TITLE = "Question"


# ---------------------------------------------------------------------------
# Shape resolution
# ---------------------------------------------------------------------------

def classify_raw(item: Any) -> Optional[RawQuestion]:
    """
    Resolve a raw dataset entry into the tagged union.

    Returns None for shapes that cannot describe a question (numbers, lists,
    null, ...). This is the only place the engine looks at raw entry shapes.
    """
    if isinstance(item, str):
        return RawText(text=item)
    if isinstance(item, Mapping):
        return RawRecord(fields=item)
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ""


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_items(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _describe(topic: str, difficulty: str) -> str:
    return f"{topic} ({difficulty})"


def section_label(section_key: str, topic_labels: Mapping[str, str]) -> str:
    key = str(section_key).lower()
    return topic_labels.get(key) or str(section_key)


# ---------------------------------------------------------------------------
# Per-branch normalization
# ---------------------------------------------------------------------------

def _normalize_oa_item(raw: RawRecord, bucket_year: str) -> Question:
    difficulty = raw.text("difficulty") or Difficulty.UNKNOWN.value
    topic = raw.text("topic") or OA_DEFAULT_TOPIC
    return Question(
        link=raw.text("link"),
        title=raw.text("title") or OA_DEFAULT_TITLE,
        description=raw.text("description") or _describe(topic, difficulty),
        difficulty=difficulty,
        topic=topic,
        year=raw.text("year") or bucket_year or NOT_AVAILABLE,
        type=AssessmentType.OA,
    )


def _normalize_interview_item(raw: RawQuestion, position: int, label: str) -> Question:
    title = f"Interview Question {position}"

    if isinstance(raw, RawText):
        text = raw.text.strip()
        return Question(
            link=text,
            title=title,
            description=text,
            difficulty=Difficulty.EASY.value,
            topic=label,
            year=NOT_AVAILABLE,
            type=AssessmentType.INTERVIEW,
            free_text=True,
        )

    difficulty = raw.text("difficulty") or Difficulty.UNKNOWN.value
    topic = raw.text("topic") or label
    return Question(
        link=raw.text("link") or raw.text("question"),
        title=raw.text("title") or title,
        description=raw.text("description") or _describe(topic, difficulty),
        difficulty=difficulty,
        topic=topic,
        year=raw.text("year") or NOT_AVAILABLE,
        type=AssessmentType.INTERVIEW,
    )


def _normalize_oa(raw_oa: Any) -> Tuple[Dict[str, Tuple[Question, ...]], int]:
    buckets: Dict[str, Tuple[Question, ...]] = {}
    dropped = 0
    for year, items in _as_mapping(raw_oa).items():
        questions: List[Question] = []
        for item in _as_items(items):
            raw = classify_raw(item)
            # string OA questions are not supported
            if not isinstance(raw, RawRecord):
                dropped += 1
                continue
            questions.append(_normalize_oa_item(raw, str(year)))
        buckets[str(year)] = tuple(questions)
    return buckets, dropped


def _normalize_interview(
    raw_interview: Any,
    topic_labels: Mapping[str, str],
) -> Tuple[Dict[str, Tuple[Question, ...]], int]:
    sections: Dict[str, Tuple[Question, ...]] = {}
    dropped = 0
    for section_key, items in _as_mapping(raw_interview).items():
        label = section_label(section_key, topic_labels)
        questions: List[Question] = []
        for idx, item in enumerate(_as_items(items)):
            raw = classify_raw(item)
            if raw is None:
                dropped += 1
                continue
            questions.append(_normalize_interview_item(raw, idx + 1, label))
        sections[str(section_key)] = tuple(questions)
    return sections, dropped


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_company(name: str, raw: Any, topic_labels: Mapping[str, str]) -> Company:
    """
    Convert one raw company entry into a canonical Company.

    Missing or malformed fields are absorbed into defaults; nothing is
    rejected and nothing is raised. Extra unknown fields are ignored.
    """
    fields = _as_mapping(raw)
    oa, oa_dropped = _normalize_oa(fields.get("oa"))
    interview, interview_dropped = _normalize_interview(fields.get("interview"), topic_labels)

    if oa_dropped or interview_dropped:
        logger.debug(
            "Company %s: dropped %d OA and %d interview entries with unsupported shapes.",
            name, oa_dropped, interview_dropped,
        )

    return Company(
        name=str(name),
        role=_as_text(fields.get("role")),
        yoe=_as_text(fields.get("yoe")),
        oa=oa,
        interview=interview,
    )


def normalize_dataset(raw_dataset: Any, topic_labels: Mapping[str, str]) -> List[Company]:
    """Normalize every company of a dataset keyed by company name, in dataset order."""
    return [
        normalize_company(name, raw, topic_labels)
        for name, raw in _as_mapping(raw_dataset).items()
    ]
