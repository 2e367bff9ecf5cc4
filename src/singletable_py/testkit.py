from __future__ import annotations

import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from .batch import Item, WriteRequest
from .lifecycle import populate_database, setup_database, teardown_database
from .mocks import ANY, FakeDynamoDBClient, client_error
from .schema import AttributeDescriptor, SecondaryIndex


def unique_table_name(prefix: str = "singletable_py") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def no_sleep(_: float) -> None:
    return None


@contextmanager
def provisioned_table(
    table_name: str,
    descriptors: Sequence[AttributeDescriptor],
    items: Sequence[Item | WriteRequest] = (),
    indexes: Sequence[SecondaryIndex] | None = None,
    *,
    client: Any | None = None,
) -> Iterator[str]:
    """Create and populate ``table_name`` for the duration of the block, then delete it."""
    setup_database(table_name, descriptors, indexes, client=client)()
    try:
        if items:
            populate_database(table_name, items, client=client)()
        yield table_name
    finally:
        teardown_database(table_name, client=client)()


__all__ = [
    "ANY",
    "FakeDynamoDBClient",
    "client_error",
    "no_sleep",
    "provisioned_table",
    "unique_table_name",
]
