import argparse
import json
import logging
import os
import sys
import uuid as _uuid
from pathlib import Path

from config.settings import get_settings
from models import entity_json_schema
from pipelines.runner import Pipeline, RunContext
from pipelines.steps.dedupe_entities import DedupeEntities
from pipelines.steps.validate_entities import ValidateEntities
from services.entity_io import read_entities, write_output
from services.reporting import print_summary
from utils.logging_setup import init_logging


def cmd_validate(args):
    settings = get_settings()
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex
    strict = True if args.strict_variants else None
    dedupe = settings.dedupe_ids and not args.keep_duplicates

    ctx = RunContext()
    ctx.entities = read_entities(args.input)
    steps = [ValidateEntities(strict_variants=strict)]
    if dedupe:
        steps.append(DedupeEntities())
    ctx = Pipeline(steps).run(ctx)

    output_data = steps[0].validator.format_output_structure(ctx.records, ctx.rejected)
    output_data['metadata']['source_file'] = str(args.input)
    output_data['metadata']['run_id'] = os.environ["RUN_ID"]
    if dedupe:
        output_data['metadata']['duplicates_removed'] = int(ctx.meta.get('duplicates_removed') or 0)

    output_path = None
    target = args.output
    if not target and args.save:
        target = Path(settings.processed_output_dir) / f"{Path(args.input).stem}.validated.json"
    if target:
        output_path = write_output(output_data, target)
        logging.info(f"Wrote {len(ctx.records)} entities to {output_path}", extra={"step": "write_output", "status": "ok"})

    print_summary(output_data, output_path)
    if ctx.rejected:
        sys.exit(1)


def cmd_schema(args):
    print(json.dumps(entity_json_schema(), indent=2))


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Entity record validation CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_val = sub.add_parser("validate", help="Validate a JSON file of entity records")
    p_val.add_argument("--input", "-i", required=True, help="Path to JSON file (array or object with 'entities')")
    p_val.add_argument("--output", "-o", help="Write accepted entities and rejections to this JSON file")
    p_val.add_argument("--save", action="store_true",
                       help="Write the output file into the processed output directory (PROCESSED_OUTPUT_DIR)")
    p_val.add_argument("--strict-variants", action="store_true",
                       help="Reject name/companyName on the wrong entity type instead of dropping it")
    p_val.add_argument("--keep-duplicates", action="store_true", help="Do not drop records with a repeated id")
    p_val.set_defaults(func=cmd_validate)

    p_schema = sub.add_parser("schema", help="Print the JSON schema of an entity record")
    p_schema.set_defaults(func=cmd_schema)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
