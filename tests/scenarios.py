from __future__ import annotations

from singletable_py import AttributeDescriptor, partition_key, sort_key

COMPOSITE_KEY: list[AttributeDescriptor] = [partition_key("PK"), sort_key("SK")]
AUTHOR_KEY: list[AttributeDescriptor] = [partition_key("AuthorName"), sort_key("BookName")]

MAX_COUNT = 3

USER_LIST_ITEMS = [
    {
        "PK": {"S": "USER#smilingbig"},
        "SK": {"S": "USER#smilingbig"},
        "count": {"N": "2"},
        "list": {"L": [{"S": "jdoe"}, {"S": "asmith"}]},
    },
]


def guarded_list_append(table_name: str, username: str) -> dict:
    return {
        "TableName": table_name,
        "Key": {"PK": {"S": "USER#smilingbig"}, "SK": {"S": "USER#smilingbig"}},
        "ConditionExpression": "#count < :maxCount",
        "UpdateExpression": "SET #count = #count + :inc, #list = list_append(#list, :listItem)",
        "ExpressionAttributeNames": {"#count": "count", "#list": "list"},
        "ExpressionAttributeValues": {
            ":maxCount": {"N": str(MAX_COUNT)},
            ":inc": {"N": "1"},
            ":listItem": {"L": [{"S": username}]},
        },
    }


BOOK_ITEMS = [
    {
        "AuthorName": {"S": "Stephen King"},
        "BookName": {"S": "It"},
        "AuthorBirthdate": {"S": "September 21, 1947"},
        "ReleaseYear": {"S": "1986"},
    },
    {
        "AuthorName": {"S": "Stephen King"},
        "BookName": {"S": "The Shining"},
        "AuthorBirthdate": {"S": "September 21, 1947"},
        "ReleaseYear": {"S": "1977"},
    },
    {
        "AuthorName": {"S": "J.K. Rowling"},
        "BookName": {"S": "Harry Potter and the Philosopher's Stone"},
        "AuthorBirthdate": {"S": "July 31, 1965"},
        "ReleaseYear": {"S": "1997"},
    },
]

ORG_ITEMS = [
    {"PK": {"S": "ORG#MICROSOFT"}, "SK": {"S": "METADATA#MICROSOFT"}, "Name": {"S": "Microsoft"}, "Type": {"S": "Enterprise"}},
    {"PK": {"S": "ORG#MICROSOFT"}, "SK": {"S": "USER#BILLGATES"}, "Name": {"S": "Bill Gates"}, "Type": {"S": "Member"}},
    {"PK": {"S": "ORG#MICROSOFT"}, "SK": {"S": "USER#SATYANADELLA"}, "Name": {"S": "Satya Nadella"}, "Type": {"S": "Admin"}},
    {"PK": {"S": "ORG#AMAZON"}, "SK": {"S": "METADATA#AMAZON"}, "Name": {"S": "Amazon"}, "Type": {"S": "Pro"}},
    {"PK": {"S": "ORG#AMAZON"}, "SK": {"S": "USER#JEFFBEZOS"}, "Name": {"S": "Jeff Bezos"}, "Type": {"S": "Admin"}},
]


def partition_query(table_name: str, pk: str, sk_prefix: str | None = None) -> dict:
    req = {
        "TableName": table_name,
        "KeyConditionExpression": "#pk = :pk",
        "ExpressionAttributeNames": {"#pk": "PK"},
        "ExpressionAttributeValues": {":pk": {"S": pk}},
        "Select": "ALL_ATTRIBUTES",
    }
    if sk_prefix is not None:
        req["KeyConditionExpression"] = "#pk = :pk AND begins_with ( #sk , :prefix )"
        req["ExpressionAttributeNames"]["#sk"] = "SK"
        req["ExpressionAttributeValues"][":prefix"] = {"S": sk_prefix}
    return req


def author_query(table_name: str, author: str) -> dict:
    return {
        "TableName": table_name,
        "KeyConditionExpression": "#authorName = :authorName",
        "ExpressionAttributeNames": {"#authorName": "AuthorName"},
        "ExpressionAttributeValues": {":authorName": {"S": author}},
        "Select": "ALL_ATTRIBUTES",
    }
