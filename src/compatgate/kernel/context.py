"""Per-file state carried through a compatibility check run."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SchemaFile:
    """A local schema file and its raw content."""
    path: Path
    content: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class CompatibilityResult:
    """Outcome of checking one local schema against one registry subject."""
    subject_name: str
    schema: Dict[str, Any]
    compatible: bool


@dataclass
class CheckingContext:
    """State for a single checked schema file.

    Filled in strict order: schema, then matching subjects, then results.
    """
    file: SchemaFile
    full_type_name: str
    schema: Optional[Dict[str, Any]] = None
    matching_subjects: List[str] = field(default_factory=list)
    results: List[CompatibilityResult] = field(default_factory=list)
    _subjects_matched: bool = field(default=False, init=False, repr=False)

    def set_schema(self, schema: Dict[str, Any]) -> None:
        if self.schema is not None:
            raise RuntimeError(f"Schema already resolved for {self.file.path}")
        self.schema = schema

    def add_matching_subjects(self, subject_names: List[str]) -> None:
        if self._subjects_matched:
            raise RuntimeError(f"Matching subjects already set for {self.file.path}")
        self._subjects_matched = True
        self.matching_subjects.extend(subject_names)

    def add_result(self, result: CompatibilityResult) -> None:
        self.results.append(result)

    def compatible_results(self) -> List[CompatibilityResult]:
        return [r for r in self.results if r.compatible]

    def incompatible_results(self) -> List[CompatibilityResult]:
        return [r for r in self.results if not r.compatible]
