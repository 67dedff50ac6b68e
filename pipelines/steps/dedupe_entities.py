from __future__ import annotations

import logging
from collections import Counter

from entity_validator import dedupe_by_id
from pipelines.runner import RunContext


class DedupeEntities:
    """Drop later records whose id was already seen; the first one wins."""

    def run(self, ctx: RunContext) -> RunContext:
        records = ctx.records or []
        counts = Counter(r.id for r in records)
        for entity_id, n in counts.items():
            if n > 1:
                logging.warning(
                    f"Entity id {entity_id} appears {n} times; keeping the first",
                    extra={"step": "dedupe_entities", "status": "duplicate", "entity_id": entity_id},
                )

        ctx.records = dedupe_by_id(records)
        ctx.meta["duplicates_removed"] = len(records) - len(ctx.records)
        return ctx
