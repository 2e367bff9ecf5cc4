from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from .lifecycle import teardown_database


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="singletable-delete-table",
        description="Delete a DynamoDB table on the endpoint named by DYNAMODB_ENDPOINT.",
    )
    parser.add_argument("table_name", help="name of the table to delete")
    return parser


def main(argv: Sequence[str] | None = None, *, client: Any | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    result = teardown_database(args.table_name, client=client)()
    sys.stdout.write(json.dumps(result, indent=4, default=str) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
