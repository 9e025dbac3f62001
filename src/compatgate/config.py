"""Check configuration: which files, which registry, how subjects are named."""

import json
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from compatgate.kernel.subjects import compile_subject_pattern

REGISTRY_URLS_ENV = "COMPATGATE_SCHEMA_REGISTRY_URLS"

DEFAULT_INCLUDES = ["**/*.avsc"]


class FileSet(BaseModel):
    """A directory plus glob patterns selecting schema files under it."""
    directory: str
    includes: List[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDES))
    excludes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class CheckConfig(BaseModel):
    """Everything a check run needs."""
    schema_file_sets: List[FileSet]
    imports: List[str] = Field(
        default_factory=list,
        description="Schema files parsed first, in order, so other schemas can reference their types",
    )
    subject_name_pattern: str = Field(
        ...,
        description="Regex with a 'schematypefullname' named group, e.g. ^(?<topicname>.+)-(?<schematypefullname>.+)-value$",
    )
    schema_registry_urls: List[str] = Field(..., min_length=1)
    user_info: Optional[str] = Field(None, description="Basic auth credentials in 'user:password' format")

    model_config = ConfigDict(extra="forbid")

    @field_validator("subject_name_pattern")
    @classmethod
    def validate_subject_name_pattern(cls, v: str) -> str:
        compile_subject_pattern(v)
        return v

    @field_validator("schema_registry_urls")
    @classmethod
    def validate_schema_registry_urls(cls, v: List[str]) -> List[str]:
        urls = [url.strip() for url in v if url.strip()]
        if not urls:
            raise ValueError("at least one schema registry URL is required")
        for url in urls:
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"schema registry URL must be http(s): {url}")
        return urls

    @field_validator("user_info")
    @classmethod
    def validate_user_info(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ":" not in v:
            raise ValueError("user_info must use 'user:password' format")
        return v


def registry_urls_from_env() -> Optional[List[str]]:
    """URLs from the environment override, or None when unset."""
    raw = os.environ.get(REGISTRY_URLS_ENV)
    if not raw:
        return None
    return [url.strip() for url in raw.split(",") if url.strip()]


def load_config_data(path: Union[str, Path]) -> dict:
    """Load raw config values from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def build_config(data: dict) -> CheckConfig:
    """Validate config values, applying the registry URL environment override."""
    env_urls = registry_urls_from_env()
    if env_urls:
        data = {**data, "schema_registry_urls": env_urls}
    return CheckConfig(**data)


def load_config(path: Union[str, Path]) -> CheckConfig:
    """Load and validate a JSON config file."""
    return build_config(load_config_data(path))
