"""
rentshop/schemas/results.py
Outcome of a remote-mediated store operation.

- `Ok(value)`: the remote data service handled the call.
- `Degraded(value, cause)`: the remote failed (or isn't configured) and `value` is a
  local-only substitute. The user-facing action still "succeeds".

Precondition violations are not an outcome: they raise (see core/errors.py).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def degraded(self) -> bool:
        return False


@dataclass(frozen=True)
class Degraded(Generic[T]):
    value: T
    cause: BaseException

    @property
    def degraded(self) -> bool:
        return True


Outcome = Union[Ok[T], Degraded[T]]
