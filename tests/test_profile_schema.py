import pytest
from pydantic import ValidationError

from career_match_ai.schemas.defaults import DEFAULT_RECOMMENDATIONS
from career_match_ai.schemas.profile import CategorySelection, ProfileSnapshot


def test_missing_discovery_data_gives_empty_snapshot():
    profile = ProfileSnapshot.from_discovery_data(None)
    assert not profile.has_discovery_data
    assert not profile.has_resume_text


def test_malformed_categories_become_empty():
    profile = ProfileSnapshot.from_discovery_data({"skills": "python", "values": {"selected": None}})
    assert profile.skills.selected == []
    assert not profile.has_discovery_data


def test_blank_tags_dropped_and_order_kept():
    profile = ProfileSnapshot.from_discovery_data(
        {"interests": {"selected": [" Music ", "", "Art"], "additional_info": None}}
    )
    assert profile.interests.selected == ["Music", "Art"]
    assert profile.interests.additional_info == ""
    assert profile.has_discovery_data


def test_additional_info_alone_counts_as_discovery_data():
    profile = ProfileSnapshot.from_discovery_data({"values": {"selected": [], "additional_info": "Impact"}})
    assert profile.has_discovery_data


def test_with_resume_text_returns_new_snapshot(discovery_data):
    profile = ProfileSnapshot.from_discovery_data(discovery_data)
    updated = profile.with_resume_text("  text  ")
    assert profile.resume_text is None
    assert updated.has_resume_text
    assert updated.timestamp == "2024-05-01T10:00:00+00:00"


def test_whitespace_resume_text_is_not_resume_text():
    assert not ProfileSnapshot(resume_text="   \n").has_resume_text


def test_default_recommendations_are_immutable():
    assert len(DEFAULT_RECOMMENDATIONS) == 3
    with pytest.raises(ValidationError):
        DEFAULT_RECOMMENDATIONS[0].role_title = "Changed"


def test_discovery_data_reloads_to_same_selections(discovery_data):
    profile = ProfileSnapshot.from_discovery_data(discovery_data, resume_text="CV")
    stored = profile.to_discovery_data()
    assert stored == discovery_data
    assert "resume_text" not in stored


def test_form_answers_are_cleaned_before_saving():
    profile = ProfileSnapshot(
        skills=CategorySelection(selected=[" Python ", ""], additional_info="  "),
        values=CategorySelection(additional_info=" Remote work "),
        timestamp="2024-05-01T10:00:00+00:00",
    )
    assert profile.to_discovery_data() == {
        "skills": {"selected": ["Python"], "additional_info": ""},
        "interests": {"selected": [], "additional_info": ""},
        "values": {"selected": [], "additional_info": "Remote work"},
        "timestamp": "2024-05-01T10:00:00+00:00",
    }
