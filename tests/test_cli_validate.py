from __future__ import annotations

import json
import sys
from typing import List

import pytest


def _run_cli_with_args(args_list: List[str]) -> int:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh to ensure clean parser each time
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            return int(getattr(e, "code", 0) or 0)
        return 0
    finally:
        sys.argv = argv_backup


@pytest.fixture
def entities_file(tmp_path):
    path = tmp_path / "entities.json"
    path.write_text(json.dumps({"entities": [
        {"id": 1, "alias": "jdoe", "type": "user", "name": "Jane Doe"},
        {"id": 2, "alias": "acme", "type": "company", "companyName": "Acme Corp"},
        {"id": 2, "alias": "acme-dup", "type": "company"},
    ]}), encoding="utf-8")
    return path


def test_cli_validate_writes_output(tmp_path, entities_file, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ID", "test-run-1")
    out_path = tmp_path / "out" / "validated.json"
    code = _run_cli_with_args(["validate", "--input", str(entities_file), "--output", str(out_path)])
    assert code == 0

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert [e["alias"] for e in data["entities"]] == ["jdoe", "acme"]
    assert data["metadata"]["duplicates_removed"] == 1
    assert data["metadata"]["run_id"] == "test-run-1"
    assert data["rejected"] == []
    assert "ENTITY RECORD VALIDATION - SUMMARY" in capsys.readouterr().out


def test_cli_validate_keep_duplicates(tmp_path, entities_file):
    out_path = tmp_path / "validated.json"
    code = _run_cli_with_args([
        "validate", "--input", str(entities_file), "--output", str(out_path), "--keep-duplicates",
    ])
    assert code == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert len(data["entities"]) == 3
    assert "duplicates_removed" not in data["metadata"]


def test_cli_validate_exits_nonzero_on_rejections(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([
        {"id": 3, "alias": "x", "type": "robot"},
        {"id": 4, "alias": "jdoe", "type": "user", "companyName": "Acme"},
    ]), encoding="utf-8")
    code = _run_cli_with_args(["validate", "--input", str(path), "--strict-variants"])
    assert code == 1
    out = capsys.readouterr().out
    assert "#0: type" in out
    assert "#1: companyName" in out


def test_cli_validate_save_uses_processed_dir(tmp_path, entities_file, monkeypatch):
    monkeypatch.setenv("PROCESSED_OUTPUT_DIR", str(tmp_path / "processed"))
    code = _run_cli_with_args(["validate", "--input", str(entities_file), "--save"])
    assert code == 0
    assert (tmp_path / "processed" / "entities.validated.json").exists()


def test_cli_schema_prints_json_schema(capsys):
    code = _run_cli_with_args(["schema"])
    assert code == 0
    schema = json.loads(capsys.readouterr().out)
    assert schema["discriminator"]["propertyName"] == "type"
