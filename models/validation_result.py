from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional

from .entity_record import CompanyEntity, UserEntity


ErrorCode = Literal["missing", "wrong_type", "empty", "invalid_value", "unexpected_field"]

# Field name used when the value itself is not an object
ROOT_FIELD = "$"


@dataclass(frozen=True)
class ValidationError:
    """A single rejected field, named as it appears on the wire."""

    field: str
    reason: str
    code: ErrorCode = "invalid_value"

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class InvalidEntityError(ValueError):
    def __init__(self, errors: List[ValidationError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors) or "invalid entity")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one value: either a record or a list of errors, never both."""

    record: Optional[UserEntity | CompanyEntity] = None
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.errors and self.record is not None:
            raise ValueError("a failed validation must not carry a record")
        if not self.errors and self.record is None:
            raise ValueError("a successful validation must carry a record")

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def unwrap(self) -> UserEntity | CompanyEntity:
        if self.record is None:
            raise InvalidEntityError(self.errors)
        return self.record


@dataclass
class RejectedEntity:
    index: int
    value: Any
    errors: List[ValidationError]
