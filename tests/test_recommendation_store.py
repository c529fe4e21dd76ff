import pytest

from career_match_ai.errors import PersistenceError, PreconditionError
from career_match_ai.services.recommendation_store import RecommendationStore

from conftest import make_record
from fakes import FakeSupabase


def _row(title):
    return {"id": title, "user_id": "u1", "created_at": "2024-01-01", **make_record(title).model_dump()}


def test_recent_recommendations_query_and_mapping():
    client = FakeSupabase(data={"role_recommendations": [_row("A"), _row("B"), _row("C")]})
    records = RecommendationStore(client).get_recent_recommendations("u1")

    assert [r.role_title for r in records] == ["A", "B", "C"]
    table, ops = client.calls[0]
    assert table == "role_recommendations"
    assert ("eq", ("user_id", "u1"), {}) in ops
    assert ("order", ("created_at",), {"desc": True}) in ops
    assert ("limit", (3,), {}) in ops


def test_malformed_rows_are_skipped():
    bad = _row("Bad")
    bad["description"] = None
    client = FakeSupabase(data={"role_recommendations": [bad, _row("Good")]})
    records = RecommendationStore(client).get_recent_recommendations("u1")
    assert [r.role_title for r in records] == ["Good"]


def test_get_profile_reads_pipeline_columns():
    client = FakeSupabase(
        data={"profiles": {"discovery_data": {"skills": {}}, "resume_link": "https://x/cv.pdf", "resume_text": ""}}
    )
    profile = RecommendationStore(client).get_profile("u1")
    assert profile.discovery_data == {"skills": {}}
    assert profile.resume_link == "https://x/cv.pdf"
    assert profile.resume_text is None


def test_insert_writes_one_row_with_user_id():
    client = FakeSupabase()
    RecommendationStore(client).insert_recommendation("u1", make_record("Analyst"))
    table, ops = client.calls[0]
    assert table == "role_recommendations"
    name, args, _ = ops[0]
    assert name == "insert"
    assert args[0] == {"user_id": "u1", **make_record("Analyst").model_dump()}


def test_failures_wrapped_as_persistence_error():
    store = RecommendationStore(FakeSupabase(error=RuntimeError("connection reset")))
    with pytest.raises(PersistenceError) as exc:
        store.save_resume_text("u1", "text")
    assert exc.value.operation == "save_resume_text"


def test_save_discovery_data_marks_discovery_done():
    client = FakeSupabase()
    RecommendationStore(client).save_discovery_data("u1", {"skills": {}}, resume_url="https://x/cv.pdf")
    table, ops = client.calls[0]
    assert table == "profiles"
    assert ops[0] == (
        "update",
        ({"discovery_data": {"skills": {}}, "discovery_done": True, "resume_link": "https://x/cv.pdf"},),
        {},
    )
    assert ops[1] == ("eq", ("id", "u1"), {})


def test_select_role_writes_role_selected():
    client = FakeSupabase()
    RecommendationStore(client).select_role("u1", "Data Analyst")
    assert client.calls[0][1][0] == ("update", ({"role_selected": "Data Analyst"},), {})


def test_select_role_requires_title():
    with pytest.raises(PreconditionError):
        RecommendationStore(FakeSupabase()).select_role("u1", "")
