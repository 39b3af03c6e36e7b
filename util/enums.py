# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class FailureKind(str, Enum):
    """Classification of a rejected generator response."""

    MALFORMED_OUTPUT = "MalformedOutputError"
    SCHEMA_VIOLATION = "SchemaViolationError"
    STRUCTURE_VIOLATION = "StructureViolationError"
    CITATION_VIOLATION = "CitationViolationError"
    LENGTH_VIOLATION = "LengthViolationError"

    def __str__(self):
        return self.value


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    EMPTY_EVIDENCE = ErrorInfo(
        "Could not build a grounded prompt: no evidence chunks provided",
        status.HTTP_400_BAD_REQUEST,
    )
    EMPTY_CONTENT = ErrorInfo(
        "Could not build a grounded prompt: evidence chunk has no content",
        status.HTTP_400_BAD_REQUEST,
    )
    DUPLICATE_EVIDENCE = ErrorInfo(
        "Could not build a grounded prompt: duplicate evidence id",
        status.HTTP_400_BAD_REQUEST,
    )
