"""Strongly-typed identifiers.

Every aggregate and entity gets its own id type so an OrderId can never be
passed where a ProductId is expected. Dataclass equality compares the class
as well as the value, which keeps the types distinct at runtime too.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TypeVar

from commerce.shared.domain.exceptions import ValidationError

_IdT = TypeVar("_IdT", bound="Identifier")


@dataclass(frozen=True)
class Identifier:

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(
                f"{type(self).__name__} cannot be null or blank"
            )

    @classmethod
    def generate(cls: type[_IdT]) -> _IdT:
        return cls(str(uuid.uuid4()))

    @classmethod
    def of(cls: type[_IdT], value: str) -> _IdT:
        return cls(value)

    def __str__(self) -> str:
        return self.value
