"""
Unit tests for the document store.

Runs the store against a moto-mocked DynamoDB table and checks path handling,
creation order, type conversion and the non-recursive delete semantics the
harness relies on.
"""

import pytest
from datetime import datetime, timezone

from fittrack.services.document_store import DocumentStore
from tests.conftest import TEST_TABLE_NAME, list_documents

pytestmark = pytest.mark.unit


class TestPaths:
    """Test cases for collection and document path validation."""

    def test_collection_needs_odd_segments(self, document_store):
        """Test that even-length paths are rejected as collections."""
        document_store.collection("users")
        document_store.collection("users/uid-1/programs")

        with pytest.raises(ValueError):
            document_store.collection("users/uid-1")

    def test_document_needs_even_segments(self, document_store):
        """Test that odd-length paths are rejected as documents."""
        document_store.document("users/uid-1")

        with pytest.raises(ValueError):
            document_store.document("users")

    def test_empty_segments_rejected(self, document_store):
        """Test that paths with empty segments are rejected."""
        for path in ["", "users//programs", "/"]:
            with pytest.raises(ValueError):
                document_store.collection(path)

    def test_parents(self, document_store):
        """Test walking up from a nested reference."""
        weeks = document_store.collection("users/uid-1/programs/p1/weeks")

        assert weeks.parent.path == "users/uid-1/programs/p1"
        assert weeks.parent.parent.path == "users/uid-1/programs"
        assert document_store.collection("users").parent is None


class TestReadWrite:
    """Test cases for adding, reading and deleting documents."""

    def test_add_and_get(self, document_store):
        """Test that an added document can be read back by id."""
        ref = document_store.collection("users/uid-1/programs").add(
            {"name": "Test Program", "userId": "uid-1"}
        )

        snapshot = ref.get()

        assert len(ref.id) == 20
        assert snapshot.exists
        assert snapshot.to_dict() == {"name": "Test Program", "userId": "uid-1"}
        assert snapshot.get("name") == "Test Program"

    def test_get_missing_document(self, document_store):
        """Test reading a document that was never written."""
        snapshot = document_store.document("users/uid-1/programs/missing").get()

        assert not snapshot.exists
        assert snapshot.to_dict() == {}

    def test_stream_in_creation_order(self, document_store):
        """Test that documents stream back in the order they were added."""
        weeks = document_store.collection("users/uid-1/programs/p1/weeks")
        ids = [weeks.add({"weekNumber": n}).id for n in range(1, 6)]

        snapshots = list_documents(weeks)

        assert [s.id for s in snapshots] == ids
        assert [s.get("weekNumber") for s in snapshots] == [1, 2, 3, 4, 5]

    def test_value_conversion(self, document_store):
        """Test floats, datetimes and nested values survive a round trip."""
        created = datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc)
        ref = document_store.collection("sets").add(
            {
                "weight": 82.5,
                "reps": 10,
                "checked": False,
                "createdAt": created,
                "tags": ["warmup", {"rpe": 7.5}],
                "target": 100.0,
            }
        )

        data = ref.get().to_dict()

        assert data["weight"] == 82.5
        assert isinstance(data["weight"], float)
        assert data["reps"] == 10
        assert isinstance(data["reps"], int)
        assert data["checked"] is False
        assert data["createdAt"] == created.isoformat()
        assert data["tags"] == ["warmup", {"rpe": 7.5}]
        assert data["target"] == 100.0
        assert isinstance(data["target"], float)

    def test_set_keeps_position(self, document_store):
        """Test that overwriting a document keeps its place in the collection."""
        programs = document_store.collection("users/uid-1/programs")
        first = programs.add({"name": "First"})
        second = programs.add({"name": "Second"})

        first.set({"name": "First (edited)"})

        assert [s.id for s in programs.stream()] == [first.id, second.id]
        assert first.get().get("name") == "First (edited)"

    def test_delete_is_not_recursive(self, document_store):
        """Test that deleting a document leaves its subcollections in place."""
        program = document_store.collection("users/uid-1/programs").add({"name": "P"})
        program.collection("weeks").add({"weekNumber": 1})

        program.delete()

        assert not program.get().exists
        assert program.collection("weeks").count() == 1


class TestTableManagement:
    """Test cases for table provisioning and purging."""

    def test_ensure_table_is_idempotent(self, document_store):
        """Test that provisioning an existing table is not an error."""
        assert document_store.ensure_table() is False

    def test_ensure_table_creates_missing_table(self, document_store):
        """Test that a missing table is created."""
        store = DocumentStore("another-table", dynamodb=document_store.dynamodb)

        assert store.ensure_table() is True
        assert store.collection("users").count() == 0

    def test_table_name_required(self, document_store):
        """Test that a table name must be given."""
        with pytest.raises(ValueError):
            DocumentStore("", dynamodb=document_store.dynamodb)

    def test_purge_deletes_every_level(self, document_store):
        """Test that purge removes documents at any depth."""
        program = document_store.collection("users/uid-1/programs").add({"name": "P"})
        week = program.collection("weeks").add({"weekNumber": 1})
        week.collection("workouts").add({"name": "W"})

        deleted = document_store.purge()

        assert deleted == 3
        assert document_store.table_name == TEST_TABLE_NAME
        assert program.collection("weeks").count() == 0
        assert document_store.collection("users/uid-1/programs").count() == 0
