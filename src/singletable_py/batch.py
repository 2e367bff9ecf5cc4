from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

MAX_BATCH_WRITE_ITEMS = 25

type WriteOperation = Literal["put", "delete"]
type Item = Mapping[str, Any]


@dataclass(frozen=True)
class WriteRequest:
    """One entry of a batch write.

    For ``delete`` the item only needs to hold the primary key attributes;
    anything else is left out of the request since DynamoDB rejects it.
    """

    operation: WriteOperation
    item: Item

    def to_request(self) -> dict[str, Any]:
        if self.operation == "put":
            return {"PutRequest": {"Item": dict(self.item)}}
        if self.operation == "delete":
            return {"DeleteRequest": {"Key": dict(self.item)}}
        raise ValueError(f"unsupported write operation: {self.operation!r}")


def put_request(item: Item) -> WriteRequest:
    return WriteRequest(operation="put", item=item)


def delete_request(key: Item) -> WriteRequest:
    return WriteRequest(operation="delete", item=key)


def generate_batch_write_requests(items: Sequence[Item | WriteRequest]) -> list[dict[str, Any]]:
    """Wrap items into batch write envelopes; bare mappings are treated as puts."""
    requests: list[dict[str, Any]] = []
    for entry in items:
        if not isinstance(entry, WriteRequest):
            entry = put_request(entry)
        requests.append(entry.to_request())
    return requests


def chunked[T](items: Sequence[T], size: int = MAX_BATCH_WRITE_ITEMS) -> list[Sequence[T]]:
    if size <= 0:
        raise ValueError("size must be > 0")
    return [items[i : i + size] for i in range(0, len(items), size)]
