"""Result types returned by the resolution pipelines.

Every pipeline returns either ``Success`` carrying its value or ``Failure``
carrying an ``ErrorKind`` and a human-readable message.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Classification of a pipeline failure, used to pick a transport status."""

    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


@dataclasses.dataclass(frozen=True)
class Success(Generic[T]):
    """A successful pipeline result."""

    value: T


@dataclasses.dataclass(frozen=True)
class Failure:
    """A terminal pipeline failure."""

    kind: ErrorKind
    message: str

    @classmethod
    def not_found(cls, message: str) -> Failure:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def internal(cls, message: str) -> Failure:
        return cls(ErrorKind.INTERNAL_ERROR, message)


PipelineResult = Union[Success[T], Failure]
