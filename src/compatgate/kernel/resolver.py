"""Resolve local Avro schema files to fully-qualified type names and parsed schemas.

All files of one run share a single ParsingNamespace, so a type defined in an
import file (or in a file processed earlier) can be referenced by name from any
later file. A named type is defined at most once per namespace: resolution
always looks the type up before parsing.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from fastavro.schema import SchemaParseException, UnknownType, parse_schema

from .context import SchemaFile
from .errors import ResolutionError

logger = logging.getLogger(__name__)

_PARSE_ERRORS = (SchemaParseException, UnknownType, ValueError, KeyError, TypeError)


class ParsingNamespace:
    """Named Avro types accumulated over one run."""

    def __init__(self):
        self._named_schemas: Dict[str, Any] = {}

    def __contains__(self, full_name: str) -> bool:
        return full_name in self._named_schemas

    def get(self, full_name: str) -> Optional[Dict[str, Any]]:
        return self._named_schemas.get(full_name)

    def names(self) -> List[str]:
        return sorted(self._named_schemas)

    def parse(self, schema_file: SchemaFile) -> Dict[str, Any]:
        """Parse a file's Avro definition, registering every named type it declares.

        The file is parsed against a copy of the namespace, which replaces it
        only when no existing type was given a different definition.

        Raises:
            ResolutionError: invalid JSON or Avro, or a named type redefined.
        """
        staged = dict(self._named_schemas)
        try:
            raw = json.loads(schema_file.content)
            parsed = parse_schema(raw, named_schemas=staged)
        except _PARSE_ERRORS as e:
            raise ResolutionError(str(schema_file.path), e) from e

        for full_name, definition in self._named_schemas.items():
            if _definition(staged[full_name]) != _definition(definition):
                raise ResolutionError(
                    str(schema_file.path),
                    SchemaParseException(f"redefined named type: {full_name}"),
                )
        self._named_schemas = staged
        return parsed

    def load_import(self, schema_file: SchemaFile) -> None:
        """Parse an import file so its types become referenceable."""
        logger.debug("Parsing import %s", schema_file.path)
        full_type_name = read_full_type_name(schema_file)
        if full_type_name in self:
            logger.debug("Import %s already defined, skipping", full_type_name)
            return
        self.parse(schema_file)

    def to_registry_json(self, schema: Dict[str, Any]) -> str:
        """Render a parsed schema as standalone Avro JSON.

        Named types referenced only by name are inlined at their first
        occurrence, so the registry receives a self-contained definition.
        """
        emitted: Set[str] = set()
        return json.dumps(self._expand(schema, emitted), separators=(",", ":"))

    def _expand(self, node: Any, emitted: Set[str]) -> Any:
        if isinstance(node, str):
            if node in self._named_schemas and node not in emitted:
                emitted.add(node)
                return self._expand(self._named_schemas[node], emitted)
            return node
        if isinstance(node, list):
            return [self._expand(item, emitted) for item in node]
        if not isinstance(node, dict):
            return node

        if node.get("type") in ("record", "error", "enum", "fixed") and "name" in node:
            emitted.add(node["name"])

        expanded: Dict[str, Any] = {}
        for key, value in node.items():
            if key.startswith("__"):
                continue
            if key == "fields":
                expanded[key] = [
                    {**{k: v for k, v in f.items() if not k.startswith("__")},
                     "type": self._expand(f["type"], emitted)}
                    for f in value
                ]
            elif key in ("type", "items", "values"):
                expanded[key] = self._expand(value, emitted)
            else:
                expanded[key] = value
        return expanded


def _definition(node: Any) -> Any:
    """A parsed schema without fastavro's ``__`` bookkeeping keys."""
    if isinstance(node, dict):
        return {k: _definition(v) for k, v in node.items() if not k.startswith("__")}
    if isinstance(node, list):
        return [_definition(item) for item in node]
    return node


def read_full_type_name(schema_file: SchemaFile) -> str:
    """Read namespace + name from a schema file without a full Avro parse.

    Raises:
        ResolutionError: content is not a JSON object or lacks name metadata.
    """
    try:
        raw = json.loads(schema_file.content)
    except ValueError as e:
        raise ResolutionError(str(schema_file.path), e) from e

    if not isinstance(raw, dict):
        raise ResolutionError(
            str(schema_file.path),
            ValueError("top-level schema must be a JSON object"),
        )

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise ResolutionError(str(schema_file.path), ValueError("schema has no 'name'"))
    if "." in name:
        return name

    namespace = raw.get("namespace")
    if not isinstance(namespace, str) or not namespace:
        raise ResolutionError(str(schema_file.path), ValueError("schema has no 'namespace'"))
    return f"{namespace}.{name}"


def resolve_schema(
    schema_file: SchemaFile,
    full_type_name: str,
    namespace: ParsingNamespace,
) -> Dict[str, Any]:
    """Return the parsed schema for a file, reusing an existing definition if present."""
    logger.debug("Loading schema for %s from %s", full_type_name, schema_file.path)
    existing = namespace.get(full_type_name)
    if existing is not None:
        logger.debug("Reusing already defined type %s", full_type_name)
        return existing
    return namespace.parse(schema_file)
