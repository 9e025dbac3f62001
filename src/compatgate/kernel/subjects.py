"""Match registry subject names to local schema type names."""

import logging
import re
from typing import Dict, List, Optional, Sequence

from .errors import InvalidSubjectPatternError

logger = logging.getLogger(__name__)

TYPE_NAME_GROUP = "schematypefullname"

# Java-style named group "(?<name>" (not lookbehind "(?<=" / "(?<!")
_JAVA_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")


def compile_subject_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a subject naming pattern.

    Accepts both Python ``(?P<name>...)`` and Java ``(?<name>...)`` named
    groups. The pattern must define the ``schematypefullname`` group.

    Raises:
        InvalidSubjectPatternError: pattern does not compile or lacks the group.
    """
    try:
        compiled = re.compile(_JAVA_NAMED_GROUP.sub("(?P<", pattern))
    except re.error as e:
        raise InvalidSubjectPatternError(f"Invalid subject name pattern {pattern!r}: {e}") from e
    if TYPE_NAME_GROUP not in compiled.groupindex:
        raise InvalidSubjectPatternError(
            f"Subject name pattern {pattern!r} must define a '{TYPE_NAME_GROUP}' named group"
        )
    return compiled


def extract_full_type_name(subject_name: str, pattern: re.Pattern[str]) -> Optional[str]:
    """Return the type name embedded in a subject, or None when it cannot be extracted."""
    match = pattern.search(subject_name)
    if match is None:
        return None
    return match.group(TYPE_NAME_GROUP) or None


class SubjectIndex:
    """Registry subjects grouped by the full type name they carry.

    Subjects the pattern cannot resolve are kept apart in ``unresolved`` and
    never take part in matching.
    """

    def __init__(self, subject_names: Sequence[str], pattern: re.Pattern[str]):
        self._by_type: Dict[str, List[str]] = {}
        self.unresolved: List[str] = []
        for subject_name in subject_names:
            full_type_name = extract_full_type_name(subject_name, pattern)
            if full_type_name is None:
                logger.warning(
                    "Unable to extract full type name from subject [%s], "
                    "skipping verification of this subject.",
                    subject_name,
                )
                self.unresolved.append(subject_name)
                continue
            self._by_type.setdefault(full_type_name, []).append(subject_name)

    def subjects_for(self, full_type_name: str) -> List[str]:
        """Subjects for a type in registry order; empty when none match."""
        return list(self._by_type.get(full_type_name, []))

    def type_names(self) -> List[str]:
        return sorted(self._by_type)


def match_subjects(
    subject_names: Sequence[str],
    pattern: re.Pattern[str],
    full_type_name: str,
) -> List[str]:
    """Subjects representing ``full_type_name``; a pure function of its inputs."""
    return SubjectIndex(subject_names, pattern).subjects_for(full_type_name)
