"""Immutable value objects for the Blog bounded context."""
from dataclasses import dataclass

from inkwell.domain.errors import ValidationError

TITLE_MAX_LEN = 255
# Ids and row offsets are BIGINT in the store
MAX_ROW_NUMBER = 2**63 - 1


@dataclass(frozen=True)
class Title:
    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip()
        if not 1 <= len(normalized) <= TITLE_MAX_LEN:
            raise ValidationError("title", f"must be 1..{TITLE_MAX_LEN} chars")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Content:
    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip()
        if not normalized:
            raise ValidationError("content", "must not be empty")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


def require_positive(field: str, value: int) -> int:
    if value <= 0:
        raise ValidationError(field, "must be > 0")
    return value


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ROW_NUMBER

