from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol, List

from utils.logging_setup import init_logging


@dataclass
class RunContext:
    entities: list = field(default_factory=list)
    records: list = field(default_factory=list)
    rejected: list = field(default_factory=list)
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


def _step_name(step: Step) -> str:
    # ValidateEntities -> validate_entities
    name = type(step).__name__
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        timings = ctx.meta.setdefault("step_durations_ms", {})
        for step in self.steps:
            name = _step_name(step)
            started = time.perf_counter()
            try:
                ctx = step.run(ctx)
            except Exception as exc:
                logging.error(
                    f"Step {name} failed",
                    extra={"step": name, "status": "error", "error": type(exc).__name__},
                )
                raise
            duration_ms = int((time.perf_counter() - started) * 1000)
            timings[name] = duration_ms
            logging.info(
                f"Step {name} done: {len(ctx.records)} accepted, {len(ctx.rejected)} rejected",
                extra={"step": name, "status": "ok", "duration_ms": duration_ms},
            )
        return ctx
