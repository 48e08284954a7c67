from __future__ import annotations

from typing import Any, Dict, List

import pytest

from question_bank.core.models import AssessmentType, Company, Question
from question_bank.core.normalizer import normalize_dataset

TOPIC_LABELS = {
    "dsa": "Data Structures & Algorithms",
    "system_design": "System Design",
    "behavioral": "HR / Behavioral",
}


@pytest.fixture
def topic_labels() -> Dict[str, str]:
    return dict(TOPIC_LABELS)


@pytest.fixture
def raw_dataset() -> Dict[str, Any]:
    return {
        "Microsoft": {
            "role": "SDE-1",
            "yoe": "College Graduate",
            "oa": {
                "2023": [
                    {"link": "q1", "difficulty": "Easy", "topic": "dsa"},
                    {"link": "q2", "difficulty": "Hard", "topic": "dp"},
                    "string OA entries are ignored",
                ],
                "2024": [
                    {"link": "q1", "difficulty": "Easy", "topic": "dsa"},
                    {"link": "q3", "difficulty": "Medium"},
                ],
            },
            "interview": {
                "DSA": [
                    {"link": "i1", "difficulty": "Medium", "year": "2023"},
                    {"link": "i2", "difficulty": "Hard", "year": "2024"},
                ],
                "system_design": [
                    "Design a rate limiter",
                    {"question": "Design a chat app", "difficulty": "Hard", "year": "2024"},
                ],
                "behavioral": ["Tell me about yourself"],
            },
            "headquarters": "Redmond",
        },
        "Micron": {
            "role": "SDE-2",
            "yoe": "2",
            "oa": {"2022": [{"link": "m1", "difficulty": "Easy", "topic": "os"}]},
            "interview": {},
        },
        "Google": {
            "role": "SDE-1",
            "yoe": "College Graduate",
            "oa": {"2023": [{"link": "g1", "difficulty": "Medium", "topic": "dsa"}]},
            "interview": {"dsa": [{"link": "q1", "difficulty": "Easy", "year": "2023"}]},
        },
    }


@pytest.fixture
def companies(raw_dataset: Dict[str, Any], topic_labels: Dict[str, str]) -> List[Company]:
    return normalize_dataset(raw_dataset, topic_labels)


def make_question(
    link: str = "",
    topic: str = "dsa",
    year: str = "N/A",
    difficulty: str = "Easy",
    kind: AssessmentType = AssessmentType.OA,
) -> Question:
    return Question(
        link=link,
        title="Question",
        description=f"{topic} ({difficulty})",
        difficulty=difficulty,
        topic=topic,
        year=year,
        type=kind,
    )
