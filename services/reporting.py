from __future__ import annotations

from pathlib import Path
from typing import Optional


def print_summary(data: dict, output_path: Optional[Path] = None) -> None:
    """Print summary of a validation run."""
    metadata = data.get('metadata', {})
    stats = data.get('validation_stats', {})

    print("\n" + "="*60)
    print("ENTITY RECORD VALIDATION - SUMMARY")
    print("="*60)
    print(f"Generated At: {metadata.get('generated_at', 'N/A')}")
    print(f"Accepted Entities: {metadata.get('total_entities', 0)}")
    print(f"Rejected Entities: {metadata.get('rejected_count', 0)}")
    print()
    print("Validation Statistics:")
    print(f"  Checked: {stats.get('total_entities', 0)}")
    print(f"  Valid: {stats.get('valid_entities', 0)}")
    print(f"  Invalid: {stats.get('invalid_entities', 0)}")
    duplicates = metadata.get('duplicates_removed')
    if duplicates:
        print(f"  Duplicates Removed: {duplicates}")
    rejected = data.get('rejected') or []
    if rejected:
        print()
        print("Rejected:")
        for item in rejected:
            problems = ", ".join(f"{e['field']} ({e['reason']})" for e in item.get('errors', []))
            print(f"  #{item.get('index')}: {problems}")
    if output_path:
        print(f"Output File: {output_path}")
    print("="*60)
