"""Canonical JSON serialization for check reports.

Reports written with --output-dir are byte-stable for identical runs, so CI
can diff them between builds.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization for written reports.

    Rules:
    - Sorted keys
    - Stable separators (",", ":")
    - Lists keep their order (files and subjects are already in run order)
    - Non-ASCII kept as UTF-8

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
