from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"


@dataclass(frozen=True)
class Outcome:
    """Result of a request handler: a value, or a classified failure."""

    value: Any = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.error is None


def ok(value: Any = None) -> Outcome:
    return Outcome(value=value)


def failure(kind: ErrorKind, message: str) -> Outcome:
    return Outcome(error=kind, message=message)
