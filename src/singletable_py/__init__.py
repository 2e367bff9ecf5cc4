from __future__ import annotations

import json
import re
from importlib.resources import files
from typing import TYPE_CHECKING, Any

from .batch import (
    MAX_BATCH_WRITE_ITEMS,
    WriteRequest,
    chunked,
    delete_request,
    generate_batch_write_requests,
    put_request,
)
from .config import ClientSettings
from .errors import (
    AwsError,
    ConditionFailedError,
    NotFoundError,
    SingletablePyError,
    TableInUseError,
    ValidationError,
)
from .schema import (
    AttributeDescriptor,
    SecondaryIndex,
    TableSchema,
    add_secondary_index_attribute_definitions,
    build_create_table_request,
    generate_table_schema,
    gsi,
    lsi,
    partition_key,
    sort_key,
)

if TYPE_CHECKING:
    from .facade import dump, iter_items, iter_pages, marshall, send, unmarshall
    from .lifecycle import (
        batch_write_items,
        create_table,
        delete_table,
        populate_database,
        setup_database,
        teardown_database,
    )
    from .runtime import AwsCallMetric, create_client, get_client, instrument_client


def _read_repo_version() -> str:
    try:
        data = json.loads(files(__package__).joinpath("version.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "0.0.0"

    version = data.get("version")
    return version if isinstance(version, str) and version else "0.0.0"


def _normalize_repo_version(repo_version: str) -> str:
    match = re.match(r"^(\d+\.\d+\.\d+)-rc\.?([0-9]+)$", repo_version)
    if match:
        return f"{match.group(1)}rc{match.group(2)}"
    return repo_version


__repo_version__ = _read_repo_version()
__version__ = _normalize_repo_version(__repo_version__)


def __getattr__(name: str) -> Any:
    if name in {"dump", "iter_items", "iter_pages", "marshall", "send", "unmarshall"}:
        from . import facade

        return getattr(facade, name)
    if name in {
        "batch_write_items",
        "create_table",
        "delete_table",
        "populate_database",
        "setup_database",
        "teardown_database",
    }:
        from . import lifecycle

        return getattr(lifecycle, name)
    if name in {"AwsCallMetric", "create_client", "get_client", "instrument_client"}:
        from . import runtime

        return getattr(runtime, name)
    raise AttributeError(name)


__all__ = [
    "AttributeDescriptor",
    "AwsCallMetric",
    "AwsError",
    "ClientSettings",
    "ConditionFailedError",
    "MAX_BATCH_WRITE_ITEMS",
    "NotFoundError",
    "SecondaryIndex",
    "SingletablePyError",
    "TableInUseError",
    "TableSchema",
    "ValidationError",
    "WriteRequest",
    "__repo_version__",
    "__version__",
    "add_secondary_index_attribute_definitions",
    "batch_write_items",
    "build_create_table_request",
    "chunked",
    "create_client",
    "create_table",
    "delete_request",
    "delete_table",
    "dump",
    "generate_batch_write_requests",
    "generate_table_schema",
    "get_client",
    "gsi",
    "instrument_client",
    "iter_items",
    "iter_pages",
    "lsi",
    "marshall",
    "partition_key",
    "populate_database",
    "put_request",
    "send",
    "setup_database",
    "sort_key",
    "teardown_database",
    "unmarshall",
]
