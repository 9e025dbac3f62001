"""Public report models for compatgate package."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Incompatibility(BaseModel):
    """A local schema the registry rejected for one subject."""
    schema_type: str  # fully-qualified Avro type name
    subject: str
    file: str

    model_config = ConfigDict(frozen=True)


class SchemaFileSummary(BaseModel):
    """Per-file outcome of a check run."""
    file: str  # file name, not full path
    schema_type: str
    matching_subjects: List[str] = Field(default_factory=list)
    compatible_subjects: int
    incompatible_subjects: int


class CheckIssue(BaseModel):
    """A non-blocking finding reported after a run."""
    code: str  # CheckCode value
    message: str
    file: Optional[str] = None
    subject: Optional[str] = None


class CheckReport(BaseModel):
    """Result of a compatibility check run."""
    ok: bool  # True if no incompatibility was found (warnings don't block)
    files: List[SchemaFileSummary]
    incompatibilities: List[Incompatibility]
    warnings: List[CheckIssue]

    def failure_message(self) -> str:
        """Itemized description of every incompatibility, empty if the run passed."""
        if not self.incompatibilities:
            return ""
        lines = [
            f"schema type '{i.schema_type}' is not compatible with schema registry subject '{i.subject}'"
            for i in self.incompatibilities
        ]
        return (
            f"{len(self.incompatibilities)} local schema(s) found to be incompatible with "
            f"current version in remote schema registry:\n" + "\n".join(lines)
        )
