from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

_OPERATION_NAMES = {
    "batch_write_item": "BatchWriteItem",
    "create_table": "CreateTable",
    "delete_table": "DeleteTable",
    "describe_table": "DescribeTable",
    "get_item": "GetItem",
    "put_item": "PutItem",
    "query": "Query",
    "scan": "Scan",
    "update_item": "UpdateItem",
}

type RequestCheck = Mapping[str, Any] | Callable[[Mapping[str, Any]], None] | None


class _Anything:
    def __repr__(self) -> str:  # pragma: no cover
        return "ANY"

    def __eq__(self, other: object) -> bool:
        return True

    __hash__ = object.__hash__


ANY: Any = _Anything()


def _first_mismatch(expected: Any, actual: Any, path: str) -> str | None:
    """Describe the first place ``actual`` departs from the ``expected`` subset, or None.

    Dicts match on the keys ``expected`` names; lists match element-wise and
    must have the same length.
    """
    if expected is ANY:
        return None

    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            return f"{path}: expected dict, got {type(actual).__name__}"
        for key, sub in expected.items():
            if key not in actual:
                return f"{path}: missing key {key!r}"
            found = _first_mismatch(sub, actual[key], f"{path}.{key}")
            if found:
                return found
        return None

    if isinstance(expected, list):
        if not isinstance(actual, list):
            return f"{path}: expected list, got {type(actual).__name__}"
        if len(expected) != len(actual):
            return f"{path}: expected {len(expected)} items, got {len(actual)}"
        for i, pair in enumerate(zip(expected, actual, strict=True)):
            found = _first_mismatch(*pair, f"{path}[{i}]")
            if found:
                return found
        return None

    return None if expected == actual else f"{path}: expected {expected!r}, got {actual!r}"


def client_error(method: str, code: str, message: str = "") -> ClientError:
    """Build the ``ClientError`` botocore raises for a failed ``method`` call."""
    return ClientError(
        {"Error": {"Code": code, "Message": message or code}},
        _OPERATION_NAMES.get(method, method),
    )


@dataclass(frozen=True)
class ScriptedCall:
    method: str
    check: RequestCheck = None
    response: Mapping[str, Any] | None = None
    error: Exception | None = None

    def answer(self, method: str, request: dict[str, Any]) -> dict[str, Any]:
        if method != self.method:
            raise AssertionError(f"expected {self.method}, got {method}")

        if callable(self.check):
            self.check(request)
        elif self.check is not None:
            found = _first_mismatch(self.check, request, method)
            if found:
                raise AssertionError(found)

        if self.error is not None:
            raise self.error
        return dict(self.response or {})


class FakeDynamoDBClient:
    """Scripted stand-in for ``boto3.client("dynamodb")``.

    Calls must arrive in the order they were scripted; each one is recorded
    in ``calls`` and answered with the scripted response or error.
    """

    def __init__(self) -> None:
        self._script: list[ScriptedCall] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def expect(
        self,
        method: str,
        expected: RequestCheck = None,
        *,
        response: Mapping[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._script.append(ScriptedCall(method=method, check=expected, response=response, error=error))

    def expect_error(self, method: str, code: str, message: str = "", expected: RequestCheck = None) -> None:
        self.expect(method, expected, error=client_error(method, code, message))

    def expect_table_status(self, table_name: str, *statuses: str | None) -> None:
        """Answer one ``describe_table`` per status; ``None`` means the table is gone."""
        for status in statuses:
            if status is None:
                self.expect_error("describe_table", "ResourceNotFoundException", expected={"TableName": table_name})
            else:
                self.expect(
                    "describe_table",
                    {"TableName": table_name},
                    response={"Table": {"TableName": table_name, "TableStatus": status}},
                )

    def expect_batch_write(
        self,
        table_name: str,
        requests: Sequence[Mapping[str, Any]] | int,
        *,
        unprocessed: Sequence[Mapping[str, Any]] = (),
    ) -> None:
        """Expect one ``batch_write_item`` against ``table_name``.

        ``requests`` is either the exact request list or just how many the
        call should carry.
        """

        def check(req: Mapping[str, Any]) -> None:
            tables = req.get("RequestItems", {})
            if set(tables) != {table_name}:
                raise AssertionError(f"batch_write_item: expected only {table_name!r}, got {sorted(tables)}")
            sent = tables[table_name]
            if isinstance(requests, int):
                if len(sent) != requests:
                    raise AssertionError(f"batch_write_item: expected {requests} requests, got {len(sent)}")
                return
            found = _first_mismatch(list(requests), sent, f"batch_write_item.RequestItems.{table_name}")
            if found:
                raise AssertionError(found)

        response = {"UnprocessedItems": {table_name: list(unprocessed)} if unprocessed else {}}
        self.expect("batch_write_item", check, response=response)

    def assert_no_pending(self) -> None:
        if self._script:
            raise AssertionError(f"pending expected calls: {self._script!r}")

    def methods_called(self) -> list[str]:
        return [method for method, _ in self.calls]

    def _call(self, method: str, request: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, dict(request)))
        if not self._script:
            raise AssertionError(f"unexpected call: {method}")
        return self._script.pop(0).answer(method, request)

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("create_table", kwargs)

    def delete_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("delete_table", kwargs)

    def describe_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("describe_table", kwargs)

    def batch_write_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("batch_write_item", kwargs)

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("scan", kwargs)

    def query(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("query", kwargs)

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("get_item", kwargs)

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("put_item", kwargs)

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        return self._call("update_item", kwargs)
