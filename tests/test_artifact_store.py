"""Tests for the per-request artifact store."""

import pytest

from models.artifact import Artifact
from services.artifact_store import ArtifactStore, merge_artifact


def test_new_artifact_gets_defaults():
    artifacts, merged = merge_artifact([], {"id": "doc-1"})
    assert len(artifacts) == 1
    assert merged.type == "document"
    assert merged.title == "Untitled Document"
    assert merged.content == ""
    assert merged.metadata == {}


def test_null_fields_fall_back_to_defaults():
    _, merged = merge_artifact([], {"id": "doc-1", "title": None, "metadata": None})
    assert merged.title == "Untitled Document"
    assert merged.metadata == {}


def test_merge_is_idempotent():
    payload = {
        "id": "doc-1",
        "type": "handout",
        "title": "Exit Ticket",
        "content": "Q1",
        "metadata": {"unit": "Binti"},
    }
    once, _ = merge_artifact([], payload)
    twice, merged = merge_artifact(once, payload)
    assert len(twice) == 1
    assert [a.model_dump() for a in twice] == [a.model_dump() for a in once]
    assert merged.title == "Exit Ticket"


def test_merge_does_not_mutate_input():
    original = [Artifact(id="doc-1", title="Old")]
    updated, _ = merge_artifact(original, {"id": "doc-1", "title": "New"})
    assert original[0].title == "Old"
    assert updated[0].title == "New"


def test_metadata_merged_key_by_key():
    first, _ = merge_artifact([], {"id": "a", "metadata": {"x": 1}})
    second, merged = merge_artifact(first, {"id": "a", "metadata": {"y": 2}})
    assert merged.metadata == {"x": 1, "y": 2}
    _, merged = merge_artifact(second, {"id": "a", "metadata": {"x": 3}})
    assert merged.metadata == {"x": 3, "y": 2}


def test_partial_update_keeps_unset_fields():
    store = ArtifactStore([{"id": "doc-1", "type": "lesson_plan", "title": "Plan", "content": "v1"}])
    merged = store.merge({"id": "doc-1", "content": "v2"})
    assert merged.type == "lesson_plan"
    assert merged.title == "Plan"
    assert merged.content == "v2"


def test_position_is_kept_on_update():
    store = ArtifactStore([{"id": "a"}, {"id": "b"}])
    store.merge({"id": "a", "title": "Updated"})
    assert store.ids() == ["a", "b"]


def test_active_follows_latest_merge():
    store = ArtifactStore()
    assert store.active is None
    store.merge({"id": "a"})
    store.merge({"id": "b"})
    assert store.active_id == "b"
    store.merge({"id": "a", "content": "again"})
    assert store.active.id == "a"


def test_select_pins_active():
    store = ArtifactStore([{"id": "a"}, {"id": "b"}])
    store.select("a")
    assert store.active_id == "a"
    with pytest.raises(KeyError):
        store.select("missing")


def test_contains_and_len():
    store = ArtifactStore([Artifact(id="a")])
    assert "a" in store
    assert "b" not in store
    assert len(store) == 1
