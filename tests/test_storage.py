from datetime import datetime, timezone

from practice_session.models import SessionRecord
from practice_session.services import (
    InMemorySessionStorage,
    JSONLSessionStorage,
    SessionStats,
)
from shared.models import ConditionSet
from yoga_recommendation.services import InMemoryAssessmentStore, JSONAssessmentStore

COMPLETED_AT = datetime(2025, 1, 1, 9, 5, tzinfo=timezone.utc)


def _record(name="Child's Pose (Balasana)", user_id="user_123", duration=300, category="back pain"):
    return SessionRecord(
        user_id=user_id,
        exercise_name=name,
        duration_seconds=duration,
        category=category,
        completed_at=COMPLETED_AT,
    )


def test_jsonl_storage_persists_records(tmp_path):
    storage = JSONLSessionStorage(tmp_path)
    record = _record()

    assert storage.record_session(record)

    reloaded = JSONLSessionStorage(tmp_path).list_sessions()
    assert reloaded == [record]


def test_jsonl_storage_filters_by_user(tmp_path):
    storage = JSONLSessionStorage(tmp_path)
    storage.record_session(_record(user_id="a"))
    storage.record_session(_record(user_id="b"))

    assert [r.user_id for r in storage.list_sessions("b")] == ["b"]
    assert len(storage.list_sessions()) == 2


def test_jsonl_storage_skips_corrupt_lines(tmp_path):
    storage = JSONLSessionStorage(tmp_path)
    storage.record_session(_record())
    with open(storage.sessions_file, "a", encoding="utf-8") as f:
        f.write("{not json\n")
        f.write('{"exercise_name": "missing fields"}\n')
    storage.record_session(_record(name="Tree Pose (Vrikshasana)"))

    names = [r.exercise_name for r in storage.list_sessions()]
    assert names == ["Child's Pose (Balasana)", "Tree Pose (Vrikshasana)"]


def test_stats_aggregate_records():
    storage = InMemorySessionStorage()
    storage.record_session(_record(duration=300))
    storage.record_session(_record(duration=60, category="stress"))
    storage.record_session(_record(name="Tree Pose (Vrikshasana)", duration=120))
    storage.record_session(_record(user_id="someone_else"))

    stats = storage.get_stats("user_123")

    assert stats.total_sessions == 3
    assert stats.total_seconds == 480
    assert stats.total_minutes == 8
    assert stats.exercises == ["Child's Pose (Balasana)", "Tree Pose (Vrikshasana)"]
    assert stats.sessions_by_category == {"back pain": 2, "stress": 1}


def test_stats_of_empty_history():
    stats = SessionStats.from_records([], user_id="nobody")

    assert stats.total_sessions == 0
    assert stats.exercises == []


def test_json_assessment_store_round_trip(tmp_path):
    path = tmp_path / "assessments.json"
    store = JSONAssessmentStore(path)

    assert not store.has_assessment("user_123")
    assert store.get_condition_set("user_123") == ConditionSet()

    assert store.save_condition_set("user_123", ConditionSet.of("stress", "back_pain"))

    reopened = JSONAssessmentStore(path)
    assert reopened.has_assessment("user_123")
    assert reopened.get_condition_set("user_123").keys() == ["back_pain", "stress"]


def test_json_assessment_store_replaces_wholesale(tmp_path):
    store = JSONAssessmentStore(tmp_path / "assessments.json")
    store.save_condition_set("user_123", ConditionSet.of("stress", "back_pain"))

    store.save_condition_set("user_123", ConditionSet.of("migraine"))

    assert store.get_condition_set("user_123").keys() == ["migraine"]


def test_json_assessment_store_corrupt_file_degrades_to_empty(tmp_path):
    path = tmp_path / "assessments.json"
    path.write_text("{broken", encoding="utf-8")

    store = JSONAssessmentStore(path)

    assert store.get_condition_set("user_123") == ConditionSet()
    assert not store.has_assessment("user_123")


def test_in_memory_assessment_store():
    store = InMemoryAssessmentStore({"a": ConditionSet.of("anxiety")})

    assert store.get_condition_set("a").keys() == ["anxiety"]
    assert store.get_condition_set("b") == ConditionSet()
    assert store.save_condition_set("b", ConditionSet())
    assert store.has_assessment("b")


def test_in_memory_assessment_store_starts_empty():
    store = InMemoryAssessmentStore()

    assert not store.has_assessment("a")
    assert store.get_condition_set("a") == ConditionSet()
