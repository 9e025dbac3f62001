"""Schema file discovery and loading (internal)."""

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Union

from compatgate.config import FileSet
from compatgate.kernel.context import SchemaFile
from compatgate.kernel.errors import ResolutionError

logger = logging.getLogger(__name__)


def read_schema_file(path: Union[str, Path]) -> SchemaFile:
    """Read a schema file into memory.

    Raises:
        ResolutionError: file is missing or unreadable.
    """
    schema_path = Path(path)
    try:
        content = schema_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResolutionError(str(schema_path), e) from e
    return SchemaFile(path=schema_path, content=content)


def _is_excluded(relative: PurePosixPath, excludes: Iterable[str]) -> bool:
    for pattern in excludes:
        # "**/" prefixes also match files at the fileset root
        if relative.match(pattern) or (pattern.startswith("**/") and relative.match(pattern[3:])):
            return True
    return False


def included_files(file_set: FileSet) -> List[Path]:
    """Files of one fileset, sorted by path relative to its directory.

    A missing directory yields no files.
    """
    directory = Path(file_set.directory)
    if not directory.is_dir():
        logger.debug("Fileset directory %s does not exist", directory)
        return []

    found = {}
    for pattern in file_set.includes:
        for candidate in directory.glob(pattern):
            if not candidate.is_file():
                continue
            relative = PurePosixPath(candidate.relative_to(directory).as_posix())
            if _is_excluded(relative, file_set.excludes):
                continue
            found[relative] = candidate
    return [found[rel] for rel in sorted(found)]


def discover_schema_files(file_sets: Iterable[FileSet]) -> List[Path]:
    """Files of every fileset, in fileset order, without duplicates."""
    seen = set()
    files: List[Path] = []
    for file_set in file_sets:
        for path in included_files(file_set):
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            files.append(path)
    logger.debug("Discovered %d schema file(s)", len(files))
    return files
