from .entity_record import (
    CompanyEntity,
    EntityKind,
    EntityRecord,
    UserEntity,
    entity_json_schema,
    to_wire,
)
from .validation_result import (
    InvalidEntityError,
    RejectedEntity,
    ValidationError,
    ValidationResult,
)

__all__ = [
    "CompanyEntity",
    "EntityKind",
    "EntityRecord",
    "UserEntity",
    "entity_json_schema",
    "to_wire",
    "InvalidEntityError",
    "RejectedEntity",
    "ValidationError",
    "ValidationResult",
]
