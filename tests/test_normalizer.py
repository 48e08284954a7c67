from __future__ import annotations

import pytest

from question_bank.core.models import AssessmentType, RawRecord, RawText
from question_bank.core.normalizer import classify_raw, normalize_company, normalize_dataset


def test_classify_raw_resolves_shapes():
    assert classify_raw("Tell me about yourself") == RawText(text="Tell me about yourself")
    assert isinstance(classify_raw({"link": "x"}), RawRecord)
    assert classify_raw(42) is None
    assert classify_raw(None) is None
    assert classify_raw(["nested"]) is None


@pytest.mark.parametrize("index", [0, 1, 2])
def test_interview_string_items_get_positional_defaults(index, topic_labels):
    raw = {"interview": {"system_design": ["a", "b", "c"]}}
    company = normalize_company("Acme", raw, topic_labels)

    q = company.interview["system_design"][index]
    assert q.title == f"Interview Question {index + 1}"
    assert q.difficulty == "Easy"
    assert q.topic == "System Design"
    assert q.year == "N/A"
    assert q.type is AssessmentType.INTERVIEW
    assert q.free_text is True
    assert q.link == ["a", "b", "c"][index]


def test_interview_object_fields_default_individually(topic_labels):
    raw = {
        "interview": {
            "dsa": [
                {"link": "l1"},
                {"question": "q text", "difficulty": "Hard", "year": "2022", "topic": "Graphs"},
            ]
        }
    }
    first, second = normalize_company("Acme", raw, topic_labels).interview["dsa"]

    assert first.link == "l1"
    assert first.difficulty == "Unknown"
    assert first.topic == "Data Structures & Algorithms"
    assert first.year == "N/A"
    assert first.title == "Interview Question 1"
    assert first.description == "Data Structures & Algorithms (Unknown)"
    assert first.free_text is False

    assert second.link == "q text"
    assert second.title == "Interview Question 2"
    assert second.description == "Graphs (Hard)"
    assert second.year == "2022"


def test_unlabelled_section_falls_back_to_key(topic_labels):
    company = normalize_company("Acme", {"interview": {"networking": ["What is TCP?"]}}, topic_labels)
    assert company.interview["networking"][0].topic == "networking"


def test_injected_label_table_is_used():
    company = normalize_company("Acme", {"interview": {"dsa": ["x"]}}, {"dsa": "Algorithms"})
    assert company.interview["dsa"][0].topic == "Algorithms"


def test_oa_drops_strings_and_defaults_fields(topic_labels):
    raw = {"oa": {"2023": ["plain", {"difficulty": "Medium"}, {"link": "q9", "year": "2021", "topic": "dp"}]}}
    bucket = normalize_company("Acme", raw, topic_labels).oa["2023"]

    assert len(bucket) == 2
    q = bucket[0]
    assert q.link == ""
    assert q.topic == "General"
    assert q.year == "2023"
    assert q.title == "Question"
    assert q.description == "General (Medium)"
    assert q.type is AssessmentType.OA
    assert bucket[1].year == "2021"


def test_malformed_company_degrades_to_empty(topic_labels):
    company = normalize_company("Broken", {"role": None, "oa": "nope", "interview": {"dsa": "not a list"}}, topic_labels)
    assert company.role == ""
    assert company.yoe == ""
    assert dict(company.oa) == {}
    assert company.interview["dsa"] == ()

    assert normalize_company("Nothing", None, topic_labels).name == "Nothing"


def test_invalid_entries_still_consume_a_position(topic_labels):
    company = normalize_company("Acme", {"interview": {"dsa": [None, "second"]}}, topic_labels)
    (only,) = company.interview["dsa"]
    assert only.title == "Interview Question 2"


def test_normalize_dataset_keeps_order_and_does_not_mutate(raw_dataset, topic_labels):
    import copy

    snapshot = copy.deepcopy(raw_dataset)
    companies = normalize_dataset(raw_dataset, topic_labels)

    assert [c.name for c in companies] == ["Microsoft", "Micron", "Google"]
    assert list(companies[0].interview.keys()) == ["DSA", "system_design", "behavioral"]
    assert raw_dataset == snapshot


def test_company_maps_are_read_only(companies):
    with pytest.raises(TypeError):
        companies[0].oa["2030"] = ()  # type: ignore[index]


def test_companies_are_hashable(companies):
    first, second = companies[0], companies[1]
    assert len({first, second, first}) == 2
    assert first == first
    assert first != second
