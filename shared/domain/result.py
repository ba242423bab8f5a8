"""
Result Types

Operations at the application boundary return either ``Ok`` carrying the
success value or ``Err`` carrying a typed error kind and its detail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Err:
    kind: Enum
    message: str
    detail: Any = None
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'message': self.message,
            'detail': self.detail,
        }


Result = Union[Ok[T], Err]
