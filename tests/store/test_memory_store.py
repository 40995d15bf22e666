from __future__ import annotations

import pytest

from classroom_attendance.core.exceptions import SnapshotTimeout, StoreError
from classroom_attendance.store.memory import InMemoryDocumentStore
from classroom_attendance.store.model import DocumentRef, Query


def test_create_get_update_delete(store):
    doc_id = store.create("Courses", {"courseName": "Algebra", "uid": "t1"})
    assert len(doc_id) == 20

    doc = store.get(f"Courses/{doc_id}")
    assert doc is not None
    assert doc.id == doc_id
    assert doc.data == {"courseName": "Algebra", "uid": "t1"}

    store.update(f"Courses/{doc_id}", {"courseName": "Geometry"})
    assert store.get(f"Courses/{doc_id}").data == {"courseName": "Geometry", "uid": "t1"}

    store.delete(f"Courses/{doc_id}")
    assert store.get(f"Courses/{doc_id}") is None


def test_update_missing_document_raises():
    store = InMemoryDocumentStore()
    with pytest.raises(StoreError):
        store.update("Courses/nope", {"courseName": "x"})


def test_delete_missing_document_is_noop(store):
    store.delete("Courses/nope")


def test_invalid_paths_raise(store):
    with pytest.raises(StoreError):
        store.create("Courses/abc", {})
    with pytest.raises(StoreError):
        store.get("Courses")


def test_returned_data_is_a_copy(store):
    doc_id = store.create("Courses", {"tags": ["a"]})
    store.get(f"Courses/{doc_id}").data["tags"].append("b")
    assert store.get(f"Courses/{doc_id}").data["tags"] == ["a"]


def test_query_equal_on_references(store):
    ref_a = DocumentRef("Courses/a/Sessions/s1")
    ref_b = DocumentRef("Courses/a/Sessions/s2")
    store.create("Attendance", {"sessionRef": ref_a, "status": "Not Scanned"})
    store.create("Attendance", {"sessionRef": ref_b, "status": "Not Scanned"})

    docs = store.query_equal("Attendance", "sessionRef", DocumentRef("Courses/a/Sessions/s1"))
    assert len(docs) == 1
    assert docs[0].data["sessionRef"] == ref_a


def test_query_does_not_match_missing_field(store):
    store.create("Courses", {"courseName": "A"})
    assert store.query(Query("Courses").where("uid", None)) == []


def test_query_is_scoped_to_one_collection(store):
    store.create("Courses/a/Students", {"firstName": "Ann"})
    store.create("Courses/b/Students", {"firstName": "Bob"})

    docs = store.query(Query("Courses/a/Students"))
    assert [d.data["firstName"] for d in docs] == ["Ann"]


def test_subscribe_emits_initial_and_change_snapshots(store):
    store.create("Courses", {"uid": "t1", "courseName": "A"})

    with store.subscribe(Query("Courses").where("uid", "t1")) as sub:
        first = sub.next_snapshot(timeout=1)
        assert [d.data["courseName"] for d in first] == ["A"]

        store.create("Courses", {"uid": "t1", "courseName": "B"})
        second = sub.next_snapshot(timeout=1)
        assert sorted(d.data["courseName"] for d in second) == ["A", "B"]


def test_subscribe_ignores_unrelated_changes(store):
    with store.subscribe(Query("Courses").where("uid", "t1")) as sub:
        sub.next_snapshot(timeout=1)
        store.create("Courses", {"uid": "someone-else"})
        with pytest.raises(SnapshotTimeout):
            sub.next_snapshot(timeout=0.05)


def test_subscribe_emits_when_document_leaves_result_set(store):
    doc_id = store.create("Courses", {"uid": "t1"})
    with store.subscribe(Query("Courses").where("uid", "t1")) as sub:
        assert len(sub.next_snapshot(timeout=1)) == 1
        store.update(f"Courses/{doc_id}", {"uid": "t2"})
        assert sub.next_snapshot(timeout=1) == []


def test_close_detaches_listener_and_ends_iteration(store):
    sub = store.subscribe(Query("Courses"))
    assert store.subscription_count == 1

    sub.close()
    sub.close()

    assert store.subscription_count == 0
    assert sub.closed
    assert list(sub) == []
    with pytest.raises(StoreError):
        sub.next_snapshot(timeout=0.05)


def test_map_applies_transform(store):
    store.create("Courses", {"courseName": "A"})
    with store.subscribe(Query("Courses")).map(len) as sub:
        assert sub.next_snapshot(timeout=1) == 1
    assert store.subscription_count == 0


def test_failure_is_delivered_as_store_error(store):
    sub = store.subscribe(Query("Courses"))
    sub.next_snapshot(timeout=1)
    sub.fail(RuntimeError("permission denied"))
    with pytest.raises(StoreError):
        next(sub)
    sub.close()


def test_generated_ids_can_be_injected():
    ids = iter(["c1", "c2"])
    store = InMemoryDocumentStore(id_factory=lambda: next(ids))
    assert store.create("Courses", {}) == "c1"
    assert store.create("Courses", {}) == "c2"


def test_closed_subscription_is_not_reported_as_timeout(store):
    sub = store.subscribe(Query("Courses"))
    sub.close()
    with pytest.raises(StoreError) as excinfo:
        sub.next_snapshot(timeout=0.05)
    assert not isinstance(excinfo.value, SnapshotTimeout)
