from __future__ import annotations

import os
import socket
from typing import Any
from urllib.parse import urlparse

import pytest

from singletable_py import ClientSettings, get_client


def _dynamodb_endpoint() -> str:
    return os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000")


def _reachable(endpoint: str) -> bool:
    parsed = urlparse(endpoint)
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    try:
        with socket.create_connection((parsed.hostname or "localhost", port), timeout=1.0):
            return True
    except OSError:
        return False


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    endpoint = _dynamodb_endpoint()
    if _reachable(endpoint):
        return
    skip = pytest.mark.skip(reason=f"DynamoDB Local not reachable at {endpoint}")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture()
def client() -> Any:
    return get_client(ClientSettings.from_env())
