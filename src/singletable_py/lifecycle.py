"""Create, populate and delete tables for tests.

``setup_database``, ``populate_database`` and ``teardown_database`` return
zero-argument actions so they can be handed to whatever runs setup and
teardown hooks (pytest fixtures, ``unittest`` ``setUpClass``, a script's
``try/finally``). Run them in order for a given table; nothing here guards
against concurrent setup/populate of the same name.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from botocore.exceptions import ClientError

from .aws_errors import error_code, map_client_error
from .batch import Item, WriteRequest, chunked, generate_batch_write_requests
from .errors import NotFoundError, ValidationError
from .runtime import get_client
from .schema import AttributeDescriptor, SecondaryIndex, build_create_table_request

logger = logging.getLogger(__name__)


def create_table(request: Mapping[str, Any], *, client: Any | None = None) -> dict[str, Any]:
    client = client or get_client()
    try:
        resp = client.create_table(**request)
    except ClientError as err:
        raise map_client_error(err) from err
    logger.info(f"created table {request.get('TableName')}")
    return dict(resp)


def delete_table(table_name: str, *, client: Any | None = None) -> dict[str, Any]:
    client = client or get_client()
    try:
        resp = client.delete_table(TableName=table_name)
    except ClientError as err:
        raise map_client_error(err) from err
    logger.info(f"deleted table {table_name}")
    return dict(resp)


def batch_write_items(
    table_name: str,
    items: Sequence[Item | WriteRequest],
    *,
    client: Any | None = None,
) -> list[dict[str, Any]]:
    """Write ``items`` in batches of 25 and return whatever DynamoDB left unprocessed.

    Unprocessed requests are not retried.
    """
    client = client or get_client()
    requests = generate_batch_write_requests(items)

    unprocessed: list[dict[str, Any]] = []
    for chunk in chunked(requests):
        try:
            resp = client.batch_write_item(RequestItems={table_name: list(chunk)})
        except ClientError as err:
            raise map_client_error(err) from err
        unprocessed.extend(resp.get("UnprocessedItems", {}).get(table_name, []) or [])

    logger.info(f"wrote {len(requests) - len(unprocessed)}/{len(requests)} items to {table_name}")
    if unprocessed:
        logger.warning(f"{len(unprocessed)} write requests left unprocessed for {table_name}")
    return unprocessed


def setup_database(
    table_name: str,
    descriptors: Sequence[AttributeDescriptor],
    indexes: Sequence[SecondaryIndex] | None = None,
    *,
    client: Any | None = None,
    wait_for_active: bool = True,
    wait_timeout_seconds: float = 60.0,
    poll_interval_seconds: float = 0.25,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[], None]:
    """Return an action creating ``table_name``; an already existing table is left as is."""
    settings = build_create_table_request(table_name, descriptors, indexes)
    logger.debug(f"settings {json.dumps(settings, indent=4)}")

    def create(resolved: Any) -> bool:
        try:
            resolved.create_table(**settings)
        except ClientError as err:
            if error_code(err) != "ResourceInUseException":
                raise map_client_error(err) from err
            logger.warning(f"issues creating table {table_name}: {err}")
            return True
        logger.info(f"created table {table_name}")
        return False

    def wait(resolved: Any, *, missing_is_error: bool) -> None:
        _wait_for_table_active(
            resolved,
            table_name,
            timeout_seconds=wait_timeout_seconds,
            poll_interval_seconds=poll_interval_seconds,
            sleep=sleep,
            missing_is_error=missing_is_error,
        )

    def action() -> None:
        resolved = client or get_client()
        existed = create(resolved)
        if not wait_for_active:
            return

        # an existing table may still be DELETING from a previous teardown
        try:
            wait(resolved, missing_is_error=existed)
        except NotFoundError:
            logger.warning(f"table {table_name} went away while waiting for it, creating it again")
            create(resolved)
            wait(resolved, missing_is_error=False)

    return action


def populate_database(
    table_name: str,
    items: Sequence[Item | WriteRequest],
    *,
    client: Any | None = None,
) -> Callable[[], list[dict[str, Any]]]:
    def action() -> list[dict[str, Any]]:
        return batch_write_items(table_name, items, client=client)

    return action


def teardown_database(
    table_name: str,
    *,
    client: Any | None = None,
    wait_for_delete: bool = False,
    wait_timeout_seconds: float = 60.0,
    poll_interval_seconds: float = 0.25,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[], dict[str, Any]]:
    def action() -> dict[str, Any]:
        resolved = client or get_client()
        resp = delete_table(table_name, client=resolved)
        if wait_for_delete:
            _wait_for_table_deleted(
                resolved,
                table_name,
                timeout_seconds=wait_timeout_seconds,
                poll_interval_seconds=poll_interval_seconds,
                sleep=sleep,
            )
        return resp

    return action


def _wait_for_table_active(
    client: Any,
    table_name: str,
    *,
    timeout_seconds: float,
    poll_interval_seconds: float,
    sleep: Callable[[float], None],
    missing_is_error: bool = False,
) -> None:
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        try:
            resp = client.describe_table(TableName=table_name)
        except ClientError as err:
            if error_code(err) != "ResourceNotFoundException":
                raise map_client_error(err) from err
            if missing_is_error:
                raise NotFoundError(f"table disappeared while waiting for ACTIVE: {table_name}") from err
            resp = {}

        status = str(resp.get("Table", {}).get("TableStatus", ""))
        if status == "ACTIVE":
            return
        sleep(poll_interval_seconds)

    raise ValidationError(f"timed out waiting for table ACTIVE: {table_name}")


def _wait_for_table_deleted(
    client: Any,
    table_name: str,
    *,
    timeout_seconds: float,
    poll_interval_seconds: float,
    sleep: Callable[[float], None],
) -> None:
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        try:
            client.describe_table(TableName=table_name)
        except ClientError as err:
            if error_code(err) == "ResourceNotFoundException":
                return
            raise map_client_error(err) from err
        sleep(poll_interval_seconds)

    raise ValidationError(f"timed out waiting for table deletion: {table_name}")
