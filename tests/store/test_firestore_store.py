from __future__ import annotations

import itertools

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1 import DocumentReference

from classroom_attendance.core.exceptions import StoreError
from classroom_attendance.store.firestore import FirestoreDocumentStore
from classroom_attendance.store.model import DocumentRef, Query


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument(DocumentReference):
    """Real reference type (so isinstance checks hold) over the fake's dict."""

    def __init__(self, path: str, db: "FakeFirestore"):
        super().__init__(*path.split("/"), client=db)
        self._db = db

    def get(self, *args, **kwargs):
        self._db.check()
        return FakeSnapshot(self, self._db.docs.get(self.path))

    def update(self, data, *args, **kwargs):
        self._db.check()
        self._db.docs[self.path].update(data)

    def delete(self, *args, **kwargs):
        self._db.check()
        self._db.docs.pop(self.path, None)


class FakeWatch:
    def __init__(self, callback):
        self.callback = callback
        self.unsubscribed = False

    def unsubscribe(self):
        self.unsubscribed = True


class FakeQuery:
    def __init__(self, db: "FakeFirestore", collection: str, filters=()):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)

    def where(self, *, filter):
        self._db.filters.append(filter)
        return FakeQuery(self._db, self._collection, self._filters + (filter,))

    def add(self, data):
        self._db.check()
        doc = FakeDocument(f"{self._collection}/doc{next(self._db.ids)}", self._db)
        self._db.docs[doc.path] = dict(data)
        return None, doc

    def stream(self):
        self._db.check()
        for path, data in list(self._db.docs.items()):
            if path.rsplit("/", 1)[0] != self._collection:
                continue
            if all(f.op_string == "==" and data.get(f.field_path) == f.value for f in self._filters):
                yield FakeSnapshot(FakeDocument(path, self._db), data)

    def on_snapshot(self, callback):
        self._db.check()
        watch = FakeWatch(callback)
        self._db.watches.append(watch)
        callback(list(self.stream()), [], None)
        return watch


class FakeFirestore:
    def __init__(self):
        self.docs: dict[str, dict] = {}
        self.filters: list = []
        self.watches: list[FakeWatch] = []
        self.ids = itertools.count(1)
        self.error: Exception | None = None

    def check(self):
        if self.error is not None:
            raise self.error

    def collection(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def document(self, path: str) -> FakeDocument:
        return FakeDocument(path, self)


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def firestore_store(db):
    return FirestoreDocumentStore(db)


def test_refs_are_written_as_native_references_and_read_back(firestore_store, db):
    ref = DocumentRef("Courses/c1/Students/s1")
    doc_id = firestore_store.create("Attendance", {"studentRef": ref, "status": "Not Scanned"})

    stored = db.docs[f"Attendance/{doc_id}"]["studentRef"]
    assert isinstance(stored, DocumentReference)
    assert stored.path == "Courses/c1/Students/s1"

    doc = firestore_store.get(f"Attendance/{doc_id}")
    assert doc.ref == DocumentRef(f"Attendance/{doc_id}")
    assert doc.data == {"studentRef": ref, "status": "Not Scanned"}


def test_get_missing_document_returns_none(firestore_store):
    assert firestore_store.get("Courses/nope") is None


def test_update_encodes_refs(firestore_store, db):
    doc_id = firestore_store.create("Attendance", {"status": "Not Scanned"})
    firestore_store.update(f"Attendance/{doc_id}", {"sessionRef": DocumentRef("Courses/c1/Sessions/x")})
    assert isinstance(db.docs[f"Attendance/{doc_id}"]["sessionRef"], DocumentReference)


def test_ref_filter_reaches_field_filter_as_native_reference(firestore_store, db):
    wanted = DocumentRef("Courses/c1/Sessions/s1")
    firestore_store.create("Attendance", {"sessionRef": wanted})
    firestore_store.create("Attendance", {"sessionRef": DocumentRef("Courses/c1/Sessions/s2")})

    docs = firestore_store.query_equal("Attendance", "sessionRef", wanted)

    (field_filter,) = db.filters
    assert field_filter.field_path == "sessionRef"
    assert field_filter.op_string == "=="
    assert isinstance(field_filter.value, DocumentReference)
    assert field_filter.value.path == wanted.path
    assert [d.data["sessionRef"] for d in docs] == [wanted]


def test_plain_filters_pass_values_through(firestore_store, db):
    firestore_store.create("Courses", {"uid": "instructor-1"})
    docs = firestore_store.query(Query("Courses").where("uid", "instructor-1"))
    assert db.filters[0].value == "instructor-1"
    assert len(docs) == 1


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.create("Courses", {"uid": "x"}),
        lambda s: s.get("Courses/c1"),
        lambda s: s.update("Courses/c1", {"uid": "x"}),
        lambda s: s.delete("Courses/c1"),
        lambda s: s.query(Query("Courses")),
        lambda s: s.subscribe(Query("Courses")),
    ],
)
def test_google_api_errors_surface_as_store_error(firestore_store, db, call):
    db.error = google_exceptions.ServiceUnavailable("backend down")

    with pytest.raises(StoreError) as excinfo:
        call(firestore_store)

    assert isinstance(excinfo.value.__cause__, google_exceptions.GoogleAPIError)


def test_subscription_receives_snapshots_and_close_unsubscribes(firestore_store, db):
    firestore_store.create("Courses", {"uid": "instructor-1"})

    sub = firestore_store.subscribe(Query("Courses").where("uid", "instructor-1"))
    (watch,) = db.watches
    assert [d.data for d in sub.next_snapshot(timeout=1)] == [{"uid": "instructor-1"}]

    firestore_store.create("Courses", {"uid": "instructor-1"})
    watch.callback(list(FakeQuery(db, "Courses").stream()), [], None)
    assert len(sub.next_snapshot(timeout=1)) == 2

    sub.close()
    assert watch.unsubscribed
    with pytest.raises(StoreError):
        sub.next_snapshot(timeout=0.05)


def test_unreadable_snapshot_fails_the_subscription(firestore_store, db):
    sub = firestore_store.subscribe(Query("Courses"))
    sub.next_snapshot(timeout=1)

    db.watches[0].callback([object()], [], None)

    with pytest.raises(StoreError):
        sub.next_snapshot(timeout=1)
    sub.close()
