"""
Document store service for the FitTrack application.

This service keeps Firestore-style hierarchical documents in a single
DynamoDB table. A document lives at a path such as
``users/{uid}/programs/{programId}``; the table is keyed by the path of the
collection holding the document (``parent_path``) and the document id
(``doc_id``), so listing a collection is one query on the hash key.

Subcollections are independent: deleting a document leaves the documents
below it in place, exactly like the hosted document database the app uses.

Classes:
    DocumentStore: DynamoDB-backed store of hierarchical documents
    CollectionReference: Handle on a collection path
    DocumentReference: Handle on a document path
    DocumentSnapshot: Data of a document read from the store
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

PARENT_KEY = "parent_path"
ID_KEY = "doc_id"
ORDER_KEY = "created_ns"
DATA_KEY = "data"

AUTO_ID_LENGTH = 20


def _split_path(path: str) -> List[str]:
    segments = path.strip("/").split("/")
    if not path or any(not segment for segment in segments):
        raise ValueError(f"Invalid document path: {path!r}")
    return segments


def _auto_id() -> str:
    return uuid.uuid4().hex[:AUTO_ID_LENGTH]


def _to_attribute(value: Any) -> Any:
    """Convert a Python value into something DynamoDB accepts."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_attribute(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_attribute(v) for v in value]
    return value


def _from_attribute(value: Any) -> Any:
    """Convert a DynamoDB value back into plain Python types."""
    if isinstance(value, Decimal):
        # Floats are written with a fractional part ("100.0"), integers without
        if value.as_tuple().exponent >= 0:
            return int(value)
        return float(value)
    if isinstance(value, dict):
        return {k: _from_attribute(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_attribute(v) for v in value]
    return value


@dataclass
class DocumentSnapshot:
    """
    Data of a single document at the time it was read.

    Attributes:
        reference: Reference to the document that was read
        data: Document body, or None when the document does not exist
    """

    reference: "DocumentReference"
    data: Optional[Dict[str, Any]] = field(default=None)

    @property
    def id(self) -> str:
        return self.reference.id

    @property
    def exists(self) -> bool:
        return self.data is not None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data or {})

    def get(self, name: str, default: Any = None) -> Any:
        return (self.data or {}).get(name, default)


class CollectionReference:
    """
    Handle on a collection path (odd number of path segments).

    Example:
        >>> programs = store.collection("users/uid-1/programs")
        >>> ref = programs.add({"name": "Test Program", "userId": "uid-1"})
        >>> [doc.id for doc in programs.stream()] == [ref.id]
        True
    """

    def __init__(self, store: "DocumentStore", path: str):
        segments = _split_path(path)
        if len(segments) % 2 == 0:
            raise ValueError(f"Not a collection path: {path!r}")

        self.store = store
        self.path = "/".join(segments)
        self.id = segments[-1]

    @property
    def parent(self) -> Optional["DocumentReference"]:
        """Document owning this collection, None for a top-level collection."""
        head, _, _ = self.path.rpartition("/")
        return DocumentReference(self.store, head) if head else None

    def document(self, doc_id: Optional[str] = None) -> "DocumentReference":
        """Reference a document in this collection, with a fresh id if omitted."""
        return DocumentReference(self.store, f"{self.path}/{doc_id or _auto_id()}")

    def add(self, data: Dict[str, Any]) -> "DocumentReference":
        """
        Create a document with a generated id.

        Args:
            data: Document body

        Returns:
            Reference to the created document
        """
        ref = self.document()
        self.store._put(self.path, ref.id, data, self.store._next_order())
        return ref

    def stream(self) -> Iterator[DocumentSnapshot]:
        """Yield the documents of this collection in creation order."""
        for item in self.store._query(self.path):
            yield DocumentSnapshot(
                reference=self.document(item[ID_KEY]),
                data=_from_attribute(item.get(DATA_KEY, {})),
            )

    def count(self) -> int:
        return len(self.store._query(self.path))

    def __repr__(self) -> str:
        return f"CollectionReference({self.path!r})"


class DocumentReference:
    """Handle on a document path (even number of path segments)."""

    def __init__(self, store: "DocumentStore", path: str):
        segments = _split_path(path)
        if len(segments) % 2 != 0:
            raise ValueError(f"Not a document path: {path!r}")

        self.store = store
        self.path = "/".join(segments)
        self.id = segments[-1]

    @property
    def parent(self) -> CollectionReference:
        return CollectionReference(self.store, self.path.rpartition("/")[0])

    def collection(self, name: str) -> CollectionReference:
        """Reference a subcollection of this document."""
        return CollectionReference(self.store, f"{self.path}/{name}")

    def get(self) -> DocumentSnapshot:
        item = self.store._get(self.parent.path, self.id)
        data = _from_attribute(item.get(DATA_KEY, {})) if item else None
        return DocumentSnapshot(reference=self, data=data)

    def set(self, data: Dict[str, Any]) -> None:
        """Create or overwrite the document, keeping its position if it exists."""
        item = self.store._get(self.parent.path, self.id)
        order = int(item[ORDER_KEY]) if item else self.store._next_order()
        self.store._put(self.parent.path, self.id, data, order)

    def delete(self) -> None:
        """Delete this document; subcollections are left untouched."""
        self.store._delete(self.parent.path, self.id)

    def __repr__(self) -> str:
        return f"DocumentReference({self.path!r})"


class DocumentStore:
    """
    Hierarchical document store backed by one DynamoDB table.

    Attributes:
        table_name: Name of the DynamoDB table holding every document
        dynamodb: Boto3 DynamoDB resource
        table: DynamoDB table resource

    Example:
        >>> store = DocumentStore("demo-project-documents")
        >>> store.ensure_table()
        >>> ref = store.collection("users/uid-1/programs").add({"name": "Test"})
        >>> ref.get().to_dict()
        {'name': 'Test'}
    """

    def __init__(self, table_name: str, dynamodb: Optional[Any] = None):
        """
        Initialize the document store.

        Args:
            table_name: Name of the table holding the documents
            dynamodb: Optional boto3 DynamoDB resource, e.g. one bound to an
                emulator endpoint; the default resource is used otherwise
        """
        if not table_name:
            raise ValueError("Table name must be provided")

        self.table_name = table_name
        self.dynamodb = dynamodb or boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self._last_order = 0

    def ensure_table(self) -> bool:
        """
        Create the documents table if it does not exist yet.

        Returns:
            True if the table was created, False if it already existed
        """
        try:
            table = self.dynamodb.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {"AttributeName": PARENT_KEY, "KeyType": "HASH"},
                    {"AttributeName": ID_KEY, "KeyType": "RANGE"},
                ],
                AttributeDefinitions=[
                    {"AttributeName": PARENT_KEY, "AttributeType": "S"},
                    {"AttributeName": ID_KEY, "AttributeType": "S"},
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceInUseException":
                logger.debug("Table %s already exists", self.table_name)
                return False
            raise

        logger.info("Created document table %s", self.table_name)
        return True

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)

    def document(self, path: str) -> DocumentReference:
        return DocumentReference(self, path)

    def purge(self) -> int:
        """
        Delete every document in the table, at any depth.

        Only meant for emulator tables between test runs.

        Returns:
            Number of documents deleted
        """
        deleted = 0
        scan_kwargs: Dict[str, Any] = {
            "ProjectionExpression": "#p, #d",
            "ExpressionAttributeNames": {"#p": PARENT_KEY, "#d": ID_KEY},
        }

        with self.table.batch_writer() as batch:
            while True:
                response = self.table.scan(**scan_kwargs)
                for item in response.get("Items", []):
                    batch.delete_item(
                        Key={PARENT_KEY: item[PARENT_KEY], ID_KEY: item[ID_KEY]}
                    )
                    deleted += 1

                if "LastEvaluatedKey" not in response:
                    break
                scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

        logger.info("Purged %d documents from %s", deleted, self.table_name)
        return deleted

    def _next_order(self) -> int:
        # Strictly increasing even when two writes share a clock tick
        self._last_order = max(time.time_ns(), self._last_order + 1)
        return self._last_order

    def _put(
        self, parent_path: str, doc_id: str, data: Dict[str, Any], order: int
    ) -> None:
        self.table.put_item(
            Item={
                PARENT_KEY: parent_path,
                ID_KEY: doc_id,
                ORDER_KEY: order,
                DATA_KEY: _to_attribute(dict(data)),
            }
        )

    def _get(self, parent_path: str, doc_id: str) -> Optional[Dict[str, Any]]:
        response = self.table.get_item(Key={PARENT_KEY: parent_path, ID_KEY: doc_id})
        return response.get("Item")

    def _delete(self, parent_path: str, doc_id: str) -> None:
        self.table.delete_item(Key={PARENT_KEY: parent_path, ID_KEY: doc_id})

    def _query(self, parent_path: str) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        query_kwargs: Dict[str, Any] = {
            "KeyConditionExpression": Key(PARENT_KEY).eq(parent_path)
        }

        while True:
            response = self.table.query(**query_kwargs)
            items.extend(response.get("Items", []))
            if "LastEvaluatedKey" not in response:
                break
            query_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

        items.sort(key=lambda item: int(item.get(ORDER_KEY, 0)))
        return items
