"""Issue code constants for compatgate check reports.

These constants prevent stringly-typed issue codes and ensure
client code uses the correct report codes.
"""

from enum import Enum


class CheckCode(str, Enum):
    """Check report warning codes (all non-blocking)."""

    NO_SCHEMA_FILES = "NO_SCHEMA_FILES"
    NO_SUBJECTS_MATCHED = "NO_SUBJECTS_MATCHED"
    UNRESOLVED_SUBJECT_NAME = "UNRESOLVED_SUBJECT_NAME"
