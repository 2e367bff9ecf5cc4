from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import boto3
from botocore.config import Config

from .config import ClientSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwsCallMetric:
    service: str
    operation: str
    seconds: float
    ok: bool


class _InstrumentedClient:
    def __init__(self, client: Any, service: str, on_call: Callable[[AwsCallMetric], None]) -> None:
        self._client = client
        self._service = service
        self._on_call = on_call

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._client, name)
        if name.startswith("_") or not callable(attr):
            return attr

        def wrapped(*args: Any, **kwargs: Any) -> Any:
            start = time.monotonic()
            ok = False
            try:
                out = attr(*args, **kwargs)
                ok = True
                return out
            finally:
                self._on_call(
                    AwsCallMetric(
                        service=self._service,
                        operation=name,
                        seconds=time.monotonic() - start,
                        ok=ok,
                    )
                )

        return wrapped


def instrument_client(
    client: Any,
    *,
    on_call: Callable[[AwsCallMetric], None],
    service: str = "dynamodb",
) -> Any:
    return _InstrumentedClient(client, service, on_call)


def log_call_metric(metric: AwsCallMetric) -> None:
    logger.debug(
        f"{metric.service}.{metric.operation} {'ok' if metric.ok else 'failed'} in {metric.seconds:.3f}s"
    )


def create_client(
    settings: ClientSettings | None = None,
    *,
    session: Any | None = None,
    config: Config | None = None,
) -> Any:
    settings = settings or ClientSettings.from_env()
    sess = session or boto3.session.Session()
    return cast(Any, sess).client("dynamodb", config=config, **settings.client_kwargs())


_clients: dict[ClientSettings, Any] = {}


def get_client(
    settings: ClientSettings | None = None,
    *,
    session: Any | None = None,
    metrics: Callable[[AwsCallMetric], None] | None = None,
) -> Any:
    """Return the process-wide client for ``settings`` (environment by default)."""
    settings = settings or ClientSettings.from_env()
    existing = _clients.get(settings)
    if existing is not None:
        return existing

    logger.debug(f"creating dynamodb client for endpoint={settings.endpoint_url} region={settings.region_name}")
    client = create_client(settings, session=session)
    if metrics is not None:
        client = instrument_client(client, on_call=metrics)

    _clients[settings] = client
    return client


def _reset_clients_for_tests() -> None:
    _clients.clear()
