from __future__ import annotations

import json
import logging

from botocore.exceptions import ClientError

from singletable_py import (
    dump,
    get_client,
    partition_key,
    populate_database,
    send,
    setup_database,
    sort_key,
    teardown_database,
)
from singletable_py.testkit import unique_table_name


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    client = get_client()
    table_name = unique_table_name("one_to_many_example")

    setup_database(table_name, [partition_key("PK"), sort_key("SK")], client=client)()
    try:
        populate_database(
            table_name,
            [
                {
                    "PK": {"S": "USER#smilingbig"},
                    "SK": {"S": "USER#smilingbig"},
                    "count": {"N": "2"},
                    "list": {"L": [{"S": "jdoe"}, {"S": "asmith"}]},
                },
            ],
            client=client,
        )()

        update = {
            "TableName": table_name,
            "Key": {"PK": {"S": "USER#smilingbig"}, "SK": {"S": "USER#smilingbig"}},
            "ConditionExpression": "#count < :maxCount",
            "UpdateExpression": "SET #count = #count + :inc, #list = list_append(#list, :listItem)",
            "ExpressionAttributeNames": {"#count": "count", "#list": "list"},
            "ExpressionAttributeValues": {
                ":maxCount": {"N": "3"},
                ":inc": {"N": "1"},
                ":listItem": {"L": [{"S": "mlee"}]},
            },
        }
        for attempt in (1, 2):
            try:
                send("UpdateItem", update, client=client)
                print(f"update {attempt}: applied")
            except ClientError as err:
                print(f"update {attempt}: {err.response['Error']['Message']}")

        print(json.dumps(dump(table_name, client=client)["Items"], indent=4, default=str))
    finally:
        teardown_database(table_name, client=client)()


if __name__ == "__main__":
    main()
