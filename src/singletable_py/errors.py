from __future__ import annotations


class SingletablePyError(Exception):
    pass


class ConditionFailedError(SingletablePyError):
    pass


class NotFoundError(SingletablePyError):
    pass


class ValidationError(SingletablePyError):
    pass


class TableInUseError(SingletablePyError):
    pass


class AwsError(SingletablePyError):
    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
