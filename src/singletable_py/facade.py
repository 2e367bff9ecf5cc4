from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore import xform_name
from botocore.exceptions import ClientError

from .aws_errors import map_client_error
from .runtime import get_client

_PAGINATED = {"scan", "query"}

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def marshall(item: Mapping[str, Any]) -> dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def unmarshall(item: Mapping[str, Any]) -> dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


def send(operation: str, request: Mapping[str, Any] | None = None, *, client: Any | None = None) -> Any:
    """Call ``operation`` on the client with ``request`` and return the raw response.

    ``operation`` is either the client method name (``"update_item"``) or the
    API name (``"UpdateItem"``). Service errors are raised as the client's own
    ``ClientError``.
    """
    client = client or get_client()
    return getattr(client, xform_name(operation))(**dict(request or {}))


def iter_pages(
    operation: str,
    request: Mapping[str, Any],
    *,
    client: Any | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield raw ``scan``/``query`` responses, following ``LastEvaluatedKey`` until exhausted."""
    method = xform_name(operation)
    if method not in _PAGINATED:
        raise ValueError(f"operation is not paginated: {operation}")

    client = client or get_client()
    req = dict(request)
    while True:
        try:
            resp = getattr(client, method)(**req)
        except ClientError as err:
            raise map_client_error(err) from err
        yield dict(resp)

        last = resp.get("LastEvaluatedKey")
        if not last:
            return
        req["ExclusiveStartKey"] = last


def iter_items(table_name: str, *, client: Any | None = None, **scan_kwargs: Any) -> Iterator[dict[str, Any]]:
    for page in iter_pages("scan", {"TableName": table_name, **scan_kwargs}, client=client):
        for item in page.get("Items", []):
            yield unmarshall(item)


def dump(table_name: str, *, client: Any | None = None) -> dict[str, Any]:
    """Scan the whole table.

    The result carries the last page's response metadata with ``Count`` and
    ``ScannedCount`` summed across pages and ``Items`` converted to plain
    Python values (numbers come back as ``Decimal``).
    """
    result: dict[str, Any] = {}
    items: list[dict[str, Any]] = []
    count = 0
    scanned = 0
    for page in iter_pages("scan", {"TableName": table_name}, client=client):
        result = page
        count += int(page.get("Count", 0))
        scanned += int(page.get("ScannedCount", 0))
        items.extend(unmarshall(item) for item in page.get("Items", []))

    result.pop("LastEvaluatedKey", None)
    return {**result, "Count": count, "ScannedCount": scanned, "Items": items}
