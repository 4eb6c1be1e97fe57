import json
import os
from typing import Any, List, Optional

import yaml

from blueprint.canonical.migration import ExistingSchema, Migration
from blueprint.canonical.suggestion import Suggestion
from blueprint.clients.base import SchemaServices
from blueprint.standards.transformers import get_transformer_names
from blueprint.utils.exceptions import LookupNotFound, UpstreamFailure


YAML_EXTENSIONS = (".yaml", ".yml")


def load_document(path: str) -> Any:
    """
    Load a document from disk.

    .yaml / .yml files are read with PyYAML, everything else as JSON.
    Unparseable files raise ValueError.
    """
    if not os.path.exists(path):
        raise LookupNotFound(f"File not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.lower().endswith(YAML_EXTENSIONS):
                return yaml.safe_load(f)
            return json.load(f)
        except (ValueError, yaml.YAMLError) as e:
            raise ValueError(f"Could not parse {path}: {e}") from e


class LocalSchemaServices(SchemaServices):
    """
    Read-only SchemaServices backed by local suggestion / schema files.
    Used for offline migration builds; cannot submit or ingest.
    """

    def __init__(self, suggestion_file: Optional[str] = None, schema_file: Optional[str] = None):
        self.suggestion_file = suggestion_file
        self.schema_file = schema_file

    def list_types(self) -> List[str]:
        return get_transformer_names()

    def get_suggestion(self, event: str) -> Suggestion:
        if not self.suggestion_file:
            raise LookupNotFound(f"No suggestion for event '{event}'")
        suggestion = Suggestion.from_dict(load_document(self.suggestion_file) or {})
        if suggestion.event_name != event:
            raise LookupNotFound(
                f"No suggestion for event '{event}' in {self.suggestion_file}"
            )
        return suggestion

    def list_suggestions(self) -> List[Suggestion]:
        if not self.suggestion_file:
            return []
        return [Suggestion.from_dict(load_document(self.suggestion_file) or {})]

    def list_schemas(self) -> List[ExistingSchema]:
        if not self.schema_file:
            return []
        return [self._read_schema()]

    def get_schema(self, event: str, version: Optional[int] = None) -> ExistingSchema:
        if not self.schema_file:
            raise LookupNotFound(f"No schema for event '{event}'")
        schema = self._read_schema()
        if schema.event_name != event:
            raise LookupNotFound(f"No schema for event '{event}' in {self.schema_file}")
        if version is not None and schema.version != version:
            raise LookupNotFound(f"No schema for event '{event}' at version {version}")
        return schema

    def _read_schema(self) -> ExistingSchema:
        data = load_document(self.schema_file)
        # The schema service returns a one-element list
        if isinstance(data, list):
            if not data:
                raise LookupNotFound(f"Schema file is empty: {self.schema_file}")
            data = data[0]
        return ExistingSchema.from_dict(data)

    def submit_migration(self, migration: Migration, event: str, version: int) -> None:
        raise UpstreamFailure("Local schema source cannot accept migrations")

    def trigger_ingest(self, table: str) -> None:
        raise UpstreamFailure("Local schema source cannot trigger ingest")
