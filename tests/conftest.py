from __future__ import annotations

import os

import pytest

from singletable_py.runtime import _reset_clients_for_tests


@pytest.fixture(autouse=True)
def _isolated_aws_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("AWS_PROFILE", "AWS_DEFAULT_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_DEFAULT_REGION", os.environ.get("AWS_REGION", "us-east-1"))
    _reset_clients_for_tests()
    yield
    _reset_clients_for_tests()
