"""Public API for compatgate package.

High-level functions that run a complete check and return structured results.
Callers should use these functions instead of importing from _internal.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from compatgate.config import CheckConfig, build_config, load_config
from compatgate.contracts import CheckReport
from compatgate.kernel.evaluator import SchemaRegistry
from compatgate.kernel.run import CompatibilityCheckRun
from compatgate.kernel.subjects import compile_subject_pattern
from compatgate._internal.io.registry import SchemaRegistryClient
from compatgate._internal.io.schema_files import discover_schema_files, read_schema_file


def _normalize_config(config: Union[CheckConfig, Dict, str, os.PathLike, Path]) -> CheckConfig:
    """Accept a config model, a dict of values, or a JSON config path."""
    if isinstance(config, CheckConfig):
        return config
    if isinstance(config, dict):
        return build_config(config)
    return load_config(config)


def check_compatibility(
    config: Union[CheckConfig, Dict, str, os.PathLike, Path],
    registry_factory: Optional[Callable[[], SchemaRegistry]] = None,
) -> CheckReport:
    """Check every configured schema file against the schema registry.

    Args:
        config: CheckConfig, dict of config values, or path to a JSON config
        registry_factory: Builds the registry client on first use; defaults
            to an HTTP client for the configured URLs

    Returns:
        CheckReport; ``ok`` is False when any schema is incompatible

    Raises:
        ResolutionError: a schema or import file cannot be read or parsed
        RemoteError: the schema registry call failed
    """
    cfg = _normalize_config(config)
    if registry_factory is None:
        def registry_factory() -> SchemaRegistry:
            return SchemaRegistryClient(cfg.schema_registry_urls, user_info=cfg.user_info)

    run = CompatibilityCheckRun(
        schema_paths=discover_schema_files(cfg.schema_file_sets),
        subject_pattern=compile_subject_pattern(cfg.subject_name_pattern),
        registry_factory=registry_factory,
        load_schema_file=read_schema_file,
        imports=[Path(p) for p in cfg.imports],
    )
    try:
        return run.execute()
    finally:
        if run.client.resolved:
            close = getattr(run.client.get(), "close", None)
            if close is not None:
                close()
