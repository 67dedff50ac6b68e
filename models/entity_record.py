from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError


class EntityKind(str, Enum):
    """Discriminant values accepted on the wire under the `type` key."""

    USER = "user"
    COMPANY = "company"


def _require_discriminant(schema: Dict[str, Any]) -> None:
    # `kind` has a Python-side default, but the wire key `type` is always required
    props = schema.get("properties", {})
    if "type" not in props:
        return
    props["type"].pop("default", None)
    required = schema.setdefault("required", [])
    if "type" not in required:
        required.append("type")


class EntityBase(BaseModel):
    id: int
    alias: str = Field(min_length=1)
    avatar: str | None = None

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        json_schema_extra=_require_discriminant,
    )

    @field_validator("alias")
    @classmethod
    def _alias_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("empty", "alias must not be blank")
        return value

    @property
    def entity_kind(self) -> EntityKind:
        return EntityKind(self.kind)  # type: ignore[attr-defined]


class UserEntity(EntityBase):
    """An individual user; only users carry a personal `name`."""

    kind: Literal["user"] = Field(default="user", alias="type")
    name: str | None = None


class CompanyEntity(EntityBase):
    """A company; only companies carry `companyName`."""

    kind: Literal["company"] = Field(default="company", alias="type")
    company_name: str | None = Field(default=None, alias="companyName")


EntityRecord = Annotated[Union[UserEntity, CompanyEntity], Field(discriminator="kind")]

ENTITY_ADAPTER: TypeAdapter = TypeAdapter(EntityRecord)

# Optional wire fields owned by a single variant
VARIANT_FIELDS: Dict[str, str] = {
    EntityKind.USER.value: "name",
    EntityKind.COMPANY.value: "companyName",
}


def to_wire(record: UserEntity | CompanyEntity) -> Dict[str, Any]:
    """Encode a record to its JSON object shape, omitting absent optional fields."""
    return record.model_dump(by_alias=True, exclude_none=True)


def entity_json_schema() -> Dict[str, Any]:
    return ENTITY_ADAPTER.json_schema(by_alias=True)
