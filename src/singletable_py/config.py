from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_ENDPOINT = "http://localhost:8000"
DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for the shared DynamoDB client.

    ``endpoint_url=None`` targets the regular AWS endpoint for the region.
    The dummy credentials are what DynamoDB Local expects; against real AWS
    leave them unset in the environment and pass ``None`` to fall back to the
    default credential chain.
    """

    endpoint_url: str | None = DEFAULT_ENDPOINT
    region_name: str = DEFAULT_REGION
    aws_access_key_id: str | None = "dummy"
    aws_secret_access_key: str | None = "dummy"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> ClientSettings:
        endpoint = environ.get("DYNAMODB_ENDPOINT", DEFAULT_ENDPOINT).strip() or None
        return cls(
            endpoint_url=endpoint,
            region_name=environ.get("AWS_REGION", DEFAULT_REGION),
            aws_access_key_id=environ.get("AWS_ACCESS_KEY_ID", "dummy"),
            aws_secret_access_key=environ.get("AWS_SECRET_ACCESS_KEY", "dummy"),
        )

    def client_kwargs(self) -> dict[str, str]:
        kwargs = {"region_name": self.region_name}
        if self.endpoint_url is not None:
            kwargs["endpoint_url"] = self.endpoint_url
        if self.aws_access_key_id is not None and self.aws_secret_access_key is not None:
            kwargs["aws_access_key_id"] = self.aws_access_key_id
            kwargs["aws_secret_access_key"] = self.aws_secret_access_key
        return kwargs
