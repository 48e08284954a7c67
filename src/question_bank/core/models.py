from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

NOT_AVAILABLE = "N/A"


class AssessmentType(str, Enum):
    OA = "OA"
    INTERVIEW = "Interview"

    @classmethod
    def parse(cls, value: Any) -> Optional["AssessmentType"]:
        """
        Map a selector value onto an assessment type.

        Empty or unrecognised values mean "no constraint" and return None.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for member in cls:
            if member.value == text:
                return member
        return None


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    UNKNOWN = "Unknown"


# ---------------------------------------------------------------------------
# Raw dataset entries (resolved only by the normalizer)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawText:
    """A free-text question given as a plain string."""
    text: str


@dataclass(frozen=True)
class RawRecord:
    """A partially populated question object."""
    fields: Mapping[str, Any]

    def text(self, key: str) -> str:
        value = self.fields.get(key)
        if value is None:
            return ""
        return str(value).strip()


RawQuestion = Union[RawText, RawRecord]


# ---------------------------------------------------------------------------
# Canonical records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Question:
    """
    Canonical, fully defaulted question record.

    `link` identifies the question for repeated-question detection but is not
    unique: the same question observed in several years or sources appears
    once per observation.

    `free_text` is True for questions that came from plain-string interview
    entries. Those carry no difficulty dimension of their own.
    """
    link: str
    title: str
    description: str
    difficulty: str
    topic: str
    year: str
    type: AssessmentType
    free_text: bool = False


@dataclass(frozen=True, eq=False)
class Company:
    """Read-only company record; compared and hashed by identity."""
    name: str
    role: str
    yoe: str
    oa: Mapping[str, Tuple[Question, ...]] = field(default_factory=dict)
    interview: Mapping[str, Tuple[Question, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only views; the dataset is never mutated after load
        object.__setattr__(self, "oa", MappingProxyType(dict(self.oa)))
        object.__setattr__(self, "interview", MappingProxyType(dict(self.interview)))


@dataclass(frozen=True)
class FilterCriteria:
    """
    One user interaction's worth of filter settings.

    Empty strings (and None for the assessment type) mean "no constraint on
    that facet".
    """
    company_query: str = ""
    role: str = ""
    yoe: str = ""
    assessment_type: Optional[AssessmentType] = None
    topic: str = ""
    year: str = ""
    difficulty: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "assessment_type", AssessmentType.parse(self.assessment_type))

    def replace(self, **changes: Any) -> "FilterCriteria":
        return replace(self, **changes)


@dataclass(frozen=True)
class TopicShare:
    topic: str
    pct: int


@dataclass(frozen=True)
class RepeatedQuestion:
    link: str
    count: int


@dataclass(frozen=True)
class AggregateResult:
    topic_counts: Dict[str, int]
    topic_percentages: List[TopicShare]
    repeated_questions: List[RepeatedQuestion]
    year_histogram: Dict[str, int]

    @property
    def total(self) -> int:
        return sum(self.topic_counts.values())
