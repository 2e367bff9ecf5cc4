from __future__ import annotations

from botocore.exceptions import ClientError

from .errors import (
    AwsError,
    ConditionFailedError,
    NotFoundError,
    TableInUseError,
    ValidationError,
)


def error_code(err: ClientError) -> str:
    return str(err.response.get("Error", {}).get("Code", ""))


def map_client_error(err: ClientError) -> Exception:
    code = error_code(err)
    message = str(err.response.get("Error", {}).get("Message", ""))

    if code == "ConditionalCheckFailedException":
        return ConditionFailedError(message or "The conditional request failed")
    if code == "ValidationException":
        return ValidationError(message or "validation failed")
    if code == "ResourceNotFoundException":
        return NotFoundError(message or "resource not found")
    if code == "ResourceInUseException":
        return TableInUseError(message or "resource in use")

    return AwsError(code=code or "UnknownError", message=message or str(err))
