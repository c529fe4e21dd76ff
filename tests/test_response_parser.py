import json

import pytest

from career_match_ai.agents.response_parser import (
    ensure_list,
    extract_array_span,
    parse_recommendations,
    strip_code_fences,
)
from career_match_ai.errors import ParseError


def _item(title):
    return {
        "role_title": title,
        "description": f"{title} does things",
        "why_it_fits_professionally": "skills match",
        "why_it_fits_personally": "values match",
    }


THREE = json.dumps([_item("Data Engineer"), _item("ML Engineer"), _item("Analytics Lead")], indent=2)


def test_fenced_json_array_is_unwrapped():
    records = parse_recommendations(f"```json\n{THREE}\n```")
    assert [r.role_title for r in records] == ["Data Engineer", "ML Engineer", "Analytics Lead"]


def test_fence_without_language_tag():
    records = parse_recommendations(f"  ```\n{THREE}\n```  ")
    assert len(records) == 3


def test_prose_around_array_is_discarded():
    raw = f"Sure! Here are your recommendations:\n{THREE}\nLet me know if you need [more] help."
    records = parse_recommendations(raw)
    assert records[2].role_title == "Analytics Lead"


def test_single_object_becomes_one_element_list():
    records = parse_recommendations(json.dumps(_item("UX Researcher")))
    assert len(records) == 1
    assert records[0].role_title == "UX Researcher"


def test_extra_fields_are_ignored():
    item = _item("Designer")
    item["salary"] = "high"
    records = parse_recommendations(json.dumps([item]))
    assert "salary" not in records[0].model_dump()


def test_empty_array_parses_to_no_records():
    assert parse_recommendations("[]") == []


def test_prose_only_raises_with_raw_text():
    raw = "I think you would make a great teacher."
    with pytest.raises(ParseError) as exc:
        parse_recommendations(raw)
    assert exc.value.raw_text == raw


def test_scalar_json_is_rejected():
    with pytest.raises(ParseError):
        parse_recommendations('"just a string"')


def test_missing_field_rejects_whole_response():
    bad = _item("Nurse")
    del bad["why_it_fits_personally"]
    with pytest.raises(ParseError):
        parse_recommendations(json.dumps([_item("Teacher"), bad]))


def test_null_field_is_not_coerced():
    bad = _item("Chef")
    bad["description"] = None
    with pytest.raises(ParseError):
        parse_recommendations(json.dumps([bad]))


def test_non_object_item_rejected():
    with pytest.raises(ParseError):
        parse_recommendations(json.dumps([_item("Pilot"), "oops"]))


def test_strip_code_fences_is_noop_without_fence():
    assert strip_code_fences('[{"a": 1}]') == '[{"a": 1}]'


def test_extract_array_span_skips_brackets_inside_strings():
    text = 'Note [1]: [{"role_title": "A ] tricky [ title"}] trailing ]'
    assert extract_array_span(text) == '[{"role_title": "A ] tricky [ title"}]'


def test_extract_array_span_noop_for_plain_array_of_scalars():
    assert extract_array_span("[1, 2, 3]") == "[1, 2, 3]"


def test_extract_array_span_noop_when_unbalanced():
    assert extract_array_span('[{"a": 1}') == '[{"a": 1}'


def test_ensure_list_wraps_dict():
    assert ensure_list({"a": 1}, "raw") == [{"a": 1}]
