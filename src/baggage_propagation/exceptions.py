"""Exception types for the propagation library."""

from __future__ import annotations


class PropagationError(Exception):
    """Base error for the propagation library."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class PropagationErrorCodes:
    """Error code constants for PropagationError."""

    NO_ACTIVE_OPERATION: str = "NO_ACTIVE_OPERATION"
    OPERATION_FINISHED: str = "OPERATION_FINISHED"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
