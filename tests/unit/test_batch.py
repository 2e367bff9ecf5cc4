from __future__ import annotations

import pytest

from singletable_py import (
    MAX_BATCH_WRITE_ITEMS,
    WriteRequest,
    chunked,
    delete_request,
    generate_batch_write_requests,
    put_request,
)


def _item(n: int) -> dict[str, dict[str, str]]:
    return {"PK": {"S": f"USER#{n}"}, "SK": {"S": f"USER#{n}"}}


def test_bare_items_become_put_requests_in_order() -> None:
    items = [_item(n) for n in range(3)]

    reqs = generate_batch_write_requests(items)

    assert len(reqs) == 3
    assert reqs == [{"PutRequest": {"Item": item}} for item in items]


def test_explicit_operation_per_item() -> None:
    reqs = generate_batch_write_requests(
        [
            put_request(_item(1)),
            delete_request({"PK": {"S": "USER#2"}, "SK": {"S": "USER#2"}}),
            _item(3),
        ]
    )

    assert reqs == [
        {"PutRequest": {"Item": _item(1)}},
        {"DeleteRequest": {"Key": {"PK": {"S": "USER#2"}, "SK": {"S": "USER#2"}}}},
        {"PutRequest": {"Item": _item(3)}},
    ]


def test_write_request_does_not_share_the_callers_mapping() -> None:
    item = _item(1)
    req = put_request(item).to_request()
    req["PutRequest"]["Item"]["extra"] = {"S": "x"}

    assert "extra" not in item


def test_unknown_operation_is_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported write operation"):
        WriteRequest(operation="update", item=_item(1)).to_request()  # type: ignore[arg-type]


def test_empty_items() -> None:
    assert generate_batch_write_requests([]) == []


def test_chunked_respects_service_limit() -> None:
    reqs = list(range(60))

    chunks = chunked(reqs)

    assert MAX_BATCH_WRITE_ITEMS == 25
    assert [len(c) for c in chunks] == [25, 25, 10]
    assert [x for c in chunks for x in c] == reqs


def test_chunked_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError, match="size must be > 0"):
        chunked([1, 2], 0)
