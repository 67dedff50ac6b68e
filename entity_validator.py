from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from config.settings import get_settings
from models.entity_record import (
    CompanyEntity,
    EntityKind,
    UserEntity,
    VARIANT_FIELDS,
    EntityBase,
    to_wire,
)
from models.validation_result import (
    ROOT_FIELD,
    RejectedEntity,
    ValidationError,
    ValidationResult,
)


_VARIANTS = {
    EntityKind.USER.value: UserEntity,
    EntityKind.COMPANY.value: CompanyEntity,
}

_ALLOWED_KINDS = ", ".join(f"'{k}'" for k in _VARIANTS)

# pydantic error type -> (code, reason)
_PYDANTIC_ERRORS: Dict[str, Tuple[str, str]] = {
    "missing": ("missing", "field is required"),
    "int_type": ("wrong_type", "expected an integer"),
    "string_type": ("wrong_type", "expected a string"),
    "string_too_short": ("empty", "must be a non-empty string"),
    "empty": ("empty", "must be a non-empty string"),
    "literal_error": ("invalid_value", f"must be one of {_ALLOWED_KINDS}"),
}


def _from_pydantic(exc: PydanticValidationError) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else ROOT_FIELD
        code, reason = _PYDANTIC_ERRORS.get(err["type"], ("invalid_value", err.get("msg", "invalid value")))
        errors.append(ValidationError(field=field, reason=reason, code=code))  # type: ignore[arg-type]
    return errors


def _check_discriminant(value: Mapping) -> Optional[ValidationError]:
    if "type" not in value or value["type"] is None:
        return ValidationError(field="type", reason="field is required", code="missing")
    kind = value["type"]
    if not isinstance(kind, str) or kind not in _VARIANTS:
        return ValidationError(field="type", reason=f"must be one of {_ALLOWED_KINDS}, got {kind!r}", code="invalid_value")
    return None


def validate(value: Any, *, strict_variants: bool = False) -> ValidationResult:
    """Validate an untrusted value against the entity record shape.

    Returns a ValidationResult instead of raising so callers can keep going
    over a batch. Every offending field is reported. Optional fields owned by
    the other variant are dropped with a warning, or rejected with
    `unexpected_field` when `strict_variants` is set.
    """
    if not isinstance(value, Mapping):
        return ValidationResult(errors=[
            ValidationError(field=ROOT_FIELD, reason=f"expected an object, got {type(value).__name__}", code="wrong_type")
        ])

    errors: List[ValidationError] = []
    warnings: List[str] = []

    kind_error = _check_discriminant(value)
    kind = None if kind_error else value["type"]
    # Unknown kind: still check the shared fields so the caller sees every problem
    model = _VARIANTS[kind] if kind else EntityBase

    record = None
    try:
        record = model.model_validate(dict(value), by_alias=True, by_name=False)
    except PydanticValidationError as exc:
        errors.extend(_from_pydantic(exc))
    if kind_error:
        errors.insert(0, kind_error)

    for owner, field in VARIANT_FIELDS.items():
        if owner == kind:
            continue
        extra = value.get(field)
        if extra is None:
            continue
        if not isinstance(extra, str):
            errors.append(ValidationError(field=field, reason="expected a string", code="wrong_type"))
        elif kind is None:
            continue
        elif strict_variants:
            errors.append(ValidationError(field=field, reason=f"not allowed on a '{kind}' entity", code="unexpected_field"))
        else:
            warnings.append(f"{field} ignored on '{kind}' entity")

    if errors:
        return ValidationResult(errors=errors, warnings=warnings)
    return ValidationResult(record=record, warnings=warnings)


def dedupe_by_id(records: List[UserEntity | CompanyEntity]) -> List[UserEntity | CompanyEntity]:
    seen_ids = set()
    unique: List[UserEntity | CompanyEntity] = []
    for record in records:
        if record.id not in seen_ids:
            seen_ids.add(record.id)
            unique.append(record)
    return unique


class EntityValidator:
    def __init__(self, strict_variants: Optional[bool] = None) -> None:
        if strict_variants is None:
            strict_variants = get_settings().strict_variants
        self.strict_variants = strict_variants
        self.validation_stats = {
            'total_entities': 0,
            'valid_entities': 0,
            'invalid_entities': 0,
            'validation_errors': []
        }

    def validate_entity(self, value: Any) -> ValidationResult:
        """Validate a single value and record the outcome in the stats."""
        result = validate(value, strict_variants=self.strict_variants)

        self.validation_stats['total_entities'] += 1
        if result.is_valid:
            self.validation_stats['valid_entities'] += 1
        else:
            self.validation_stats['invalid_entities'] += 1
            self.validation_stats['validation_errors'].extend(str(e) for e in result.errors)

        return result

    def validate_all(self, values: Iterable[Any]) -> Tuple[List[UserEntity | CompanyEntity], List[RejectedEntity]]:
        """Validate every value; failures are collected, never fatal."""
        values = list(values)
        records: List[UserEntity | CompanyEntity] = []
        rejected: List[RejectedEntity] = []

        logging.info(f"Starting validation of {len(values)} entities")

        for i, value in enumerate(values):
            result = self.validate_entity(value)

            if result.is_valid:
                records.append(result.unwrap())
                if result.warnings:
                    logging.warning(f"Entity {i+1} has warnings: {result.warnings}")
            else:
                rejected.append(RejectedEntity(index=i, value=value, errors=result.errors))
                logging.error(f"Entity {i+1} validation failed: {[str(e) for e in result.errors]}")

        logging.info(f"Validation completed. Valid: {len(records)}, Invalid: {len(rejected)}")

        return records, rejected

    def remove_duplicates(self, records: List[UserEntity | CompanyEntity]) -> List[UserEntity | CompanyEntity]:
        """Keep the first record for each id."""
        unique = dedupe_by_id(records)
        duplicates_removed = len(records) - len(unique)
        if duplicates_removed > 0:
            logging.info(f"Removed {duplicates_removed} entities with duplicate ids")

        return unique

    def format_output_structure(self, records: List[UserEntity | CompanyEntity],
                                rejected: List[RejectedEntity]) -> Dict[str, Any]:
        return {
            'metadata': {
                'generated_at': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                'total_entities': len(records),
                'rejected_count': len(rejected),
            },
            'entities': [to_wire(r) for r in records],
            'rejected': [
                {
                    'index': r.index,
                    'errors': [{'field': e.field, 'code': e.code, 'reason': e.reason} for e in r.errors],
                }
                for r in rejected
            ],
            'validation_stats': self.get_validation_stats(),
        }

    def get_validation_stats(self) -> Dict[str, Any]:
        stats = self.validation_stats.copy()
        stats['validation_errors'] = list(stats['validation_errors'])
        return stats
