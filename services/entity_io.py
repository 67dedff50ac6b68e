from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


def read_entities(path: str | Path) -> List[Any]:
    """Load raw entity values from a JSON file.

    Accepts either a top-level array or an object with an `entities` array.
    Items are returned untouched; validation happens downstream.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("entities")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array or an object with an 'entities' array")
    return data


def write_output(data: Dict[str, Any], path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out
