"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed compatgate package.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest


class FakeRegistry:
    """In-memory stand-in for the schema registry.

    ``verdicts`` maps subject name -> compatible; unknown subjects are compatible.
    """

    def __init__(self, subjects: List[str], verdicts: Optional[Dict[str, bool]] = None):
        self.subjects = list(subjects)
        self.verdicts = verdicts or {}
        self.list_calls = 0
        self.compatibility_calls: List[tuple] = []
        self.closed = False

    def list_all_subjects(self) -> List[str]:
        self.list_calls += 1
        return list(self.subjects)

    def test_compatibility(self, subject_name: str, schema_json: str) -> bool:
        self.compatibility_calls.append((subject_name, schema_json))
        return self.verdicts.get(subject_name, True)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_registry():
    """Factory for FakeRegistry instances."""
    return FakeRegistry


@pytest.fixture
def write_schema(tmp_path):
    """Write an Avro record schema file and return its path."""
    def _write(
        name: str,
        namespace: Optional[str] = "com.example",
        fields: Optional[list] = None,
        directory: Optional[Path] = None,
        filename: Optional[str] = None,
    ) -> Path:
        target_dir = directory or (tmp_path / "schemas")
        target_dir.mkdir(parents=True, exist_ok=True)
        schema = {"type": "record", "name": name}
        if namespace is not None:
            schema["namespace"] = namespace
        schema["fields"] = fields if fields is not None else [{"name": "id", "type": "string"}]
        path = target_dir / (filename or f"{name}.avsc")
        path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
        return path
    return _write
