from __future__ import annotations

import logging
from typing import Optional

from entity_validator import EntityValidator
from pipelines.runner import RunContext


class ValidateEntities:
    def __init__(self, strict_variants: Optional[bool] = None) -> None:
        self.validator = EntityValidator(strict_variants=strict_variants)

    def run(self, ctx: RunContext) -> RunContext:
        entities = ctx.entities or []
        if not entities:
            ctx.records = []
            ctx.rejected = []
            return ctx

        records, rejected = self.validator.validate_all(entities)
        for r in rejected:
            for err in r.errors:
                logging.debug(
                    f"Rejected entity at index {r.index}: {err.reason}",
                    extra={"step": "validate_entities", "status": "rejected", "field": err.field},
                )

        ctx.records = records
        ctx.rejected = rejected
        # Attach validation stats into meta for reporting
        ctx.meta["validation_stats"] = self.validator.get_validation_stats()
        return ctx
