from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Literal

type AttributeType = Literal["B", "BOOL", "BS", "L", "M", "N", "NS", "NULL", "S", "SS"]
type KeyRole = Literal["HASH", "RANGE"]
type IndexKind = Literal["GSI", "LSI"]
type ProjectionType = Literal["ALL", "KEYS_ONLY", "INCLUDE"]


@dataclass(frozen=True)
class AttributeDescriptor:
    name: str
    type: AttributeType
    role: KeyRole

    @classmethod
    def from_mapping(cls, raw: Mapping[str, str]) -> AttributeDescriptor:
        """Accept the wire-style ``{"AttributeName", "AttributeType", "KeyType"}`` form."""
        return cls(name=raw["AttributeName"], type=raw["AttributeType"], role=raw["KeyType"])  # type: ignore[arg-type]


def partition_key(name: str, attribute_type: AttributeType = "S") -> AttributeDescriptor:
    return AttributeDescriptor(name=name, type=attribute_type, role="HASH")


def sort_key(name: str, attribute_type: AttributeType = "S") -> AttributeDescriptor:
    return AttributeDescriptor(name=name, type=attribute_type, role="RANGE")


@dataclass(frozen=True)
class TableSchema:
    attribute_definitions: tuple[dict[str, str], ...] = ()
    key_schema: tuple[dict[str, str], ...] = ()

    def as_request(self) -> dict[str, Any]:
        return {
            "AttributeDefinitions": [dict(d) for d in self.attribute_definitions],
            "KeySchema": [dict(k) for k in self.key_schema],
        }


@dataclass(frozen=True)
class SecondaryIndex:
    name: str
    key: tuple[AttributeDescriptor, ...]
    kind: IndexKind = "GSI"
    projection_type: ProjectionType = "ALL"
    non_key_attributes: tuple[str, ...] = field(default_factory=tuple)

    def to_request(self, provisioned_throughput: Mapping[str, int] | None = None) -> dict[str, Any]:
        proj: dict[str, Any] = {"ProjectionType": self.projection_type}
        if self.projection_type == "INCLUDE" and self.non_key_attributes:
            proj["NonKeyAttributes"] = list(self.non_key_attributes)

        req: dict[str, Any] = {
            "IndexName": self.name,
            "KeySchema": [{"AttributeName": k.name, "KeyType": k.role} for k in self.key],
            "Projection": proj,
        }
        if self.kind == "GSI" and provisioned_throughput is not None:
            req["ProvisionedThroughput"] = dict(provisioned_throughput)
        return req


def gsi(
    name: str,
    *,
    partition: AttributeDescriptor,
    sort: AttributeDescriptor | None = None,
    projection_type: ProjectionType = "ALL",
    non_key_attributes: Sequence[str] = (),
) -> SecondaryIndex:
    key: tuple[AttributeDescriptor, ...] = (replace(partition, role="HASH"),)
    if sort is not None:
        key += (replace(sort, role="RANGE"),)
    return SecondaryIndex(
        name=name,
        key=key,
        kind="GSI",
        projection_type=projection_type,
        non_key_attributes=tuple(non_key_attributes),
    )


def lsi(
    name: str,
    *,
    partition: AttributeDescriptor,
    sort: AttributeDescriptor,
    projection_type: ProjectionType = "ALL",
    non_key_attributes: Sequence[str] = (),
) -> SecondaryIndex:
    return SecondaryIndex(
        name=name,
        key=(replace(partition, role="HASH"), replace(sort, role="RANGE")),
        kind="LSI",
        projection_type=projection_type,
        non_key_attributes=tuple(non_key_attributes),
    )


def generate_table_schema(descriptors: Sequence[AttributeDescriptor]) -> TableSchema:
    """Build attribute definitions and key schema, one entry each per descriptor, in order.

    Role uniqueness is not checked; DynamoDB rejects a malformed key schema itself.
    """
    attribute_definitions: list[dict[str, str]] = []
    key_schema: list[dict[str, str]] = []
    for desc in descriptors:
        attribute_definitions.append({"AttributeName": desc.name, "AttributeType": desc.type})
        key_schema.append({"AttributeName": desc.name, "KeyType": desc.role})
    return TableSchema(attribute_definitions=tuple(attribute_definitions), key_schema=tuple(key_schema))


def add_secondary_index_attribute_definitions(
    schema: TableSchema,
    indexes: Sequence[SecondaryIndex] | None = None,
) -> TableSchema:
    """Declare the key attributes of every index that the table schema doesn't declare yet.

    Returns ``schema`` itself when there are no indexes.
    """
    if not indexes:
        return schema

    declared = {d["AttributeName"] for d in schema.attribute_definitions}
    extra: list[dict[str, str]] = []
    for idx in indexes:
        for desc in idx.key:
            if desc.name in declared:
                continue
            declared.add(desc.name)
            extra.append({"AttributeName": desc.name, "AttributeType": desc.type})

    return TableSchema(
        attribute_definitions=schema.attribute_definitions + tuple(extra),
        key_schema=schema.key_schema,
    )


def build_create_table_request(
    table_name: str,
    descriptors: Sequence[AttributeDescriptor],
    indexes: Sequence[SecondaryIndex] | None = None,
    *,
    read_capacity_units: int = 1,
    write_capacity_units: int = 1,
    stream_enabled: bool = False,
) -> dict[str, Any]:
    throughput = {"ReadCapacityUnits": read_capacity_units, "WriteCapacityUnits": write_capacity_units}

    req: dict[str, Any] = {
        "TableName": table_name,
        "StreamSpecification": {"StreamEnabled": stream_enabled},
        "ProvisionedThroughput": dict(throughput),
    }
    if stream_enabled:
        req["StreamSpecification"]["StreamViewType"] = "NEW_AND_OLD_IMAGES"

    gsis = [idx.to_request(throughput) for idx in indexes or () if idx.kind == "GSI"]
    lsis = [idx.to_request() for idx in indexes or () if idx.kind == "LSI"]
    if gsis:
        req["GlobalSecondaryIndexes"] = gsis
    if lsis:
        req["LocalSecondaryIndexes"] = lsis

    req.update(
        add_secondary_index_attribute_definitions(generate_table_schema(descriptors), indexes).as_request()
    )
    return req
