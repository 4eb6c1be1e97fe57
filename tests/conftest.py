"""Shared test fixtures."""

from typing import Dict, List, Optional

import pytest

from blueprint.canonical.migration import ExistingSchema, Migration, TableOption
from blueprint.canonical.suggestion import SuggestedColumn, Suggestion
from blueprint.clients.base import SchemaServices
from blueprint.utils.exceptions import LookupNotFound, UpstreamFailure


def suggested(inbound, probability, transformer="varchar", options="", outbound=None):
    return SuggestedColumn(
        inbound_name=inbound,
        outbound_name=outbound or inbound,
        transformer=transformer,
        occurrence_probability=probability,
        column_creation_options=options,
    )


class FakeSchemaServices(SchemaServices):
    """In-memory collaborator that records submissions."""

    def __init__(
        self,
        suggestions: Optional[Dict[str, Suggestion]] = None,
        schemas: Optional[Dict[str, ExistingSchema]] = None,
        types: Optional[List[str]] = None,
        types_fail: bool = False,
        submit_fail: bool = False,
        ingest_fail: bool = False,
    ):
        self.suggestions = suggestions or {}
        self.schemas = schemas or {}
        self.types = types if types is not None else ["varchar", "bigint", "int"]
        self.types_fail = types_fail
        self.submit_fail = submit_fail
        self.ingest_fail = ingest_fail
        self.submitted = []
        self.ingested = []

    def list_types(self):
        if self.types_fail:
            raise UpstreamFailure("types unavailable", status_code=500)
        return list(self.types)

    def get_suggestion(self, event):
        if event not in self.suggestions:
            raise LookupNotFound(event)
        return self.suggestions[event]

    def list_suggestions(self):
        return list(self.suggestions.values())

    def list_schemas(self):
        return list(self.schemas.values())

    def get_schema(self, event, version=None):
        if event not in self.schemas:
            raise LookupNotFound(event)
        return self.schemas[event]

    def submit_migration(self, migration: Migration, event, version):
        if self.submit_fail:
            raise UpstreamFailure("Newer version of schema already exists", status_code=406)
        self.submitted.append((migration, event, version))

    def trigger_ingest(self, table):
        if self.ingest_fail:
            raise UpstreamFailure("ingester timed out")
        self.ingested.append(table)


@pytest.fixture
def pageview_suggestion():
    return Suggestion(
        event_name="pageview",
        columns=(
            suggested("url", 0.7, options="(1024)"),
            suggested("time", 1.0, transformer="f@timestamp@unix"),
            suggested("device_id", 0.95, options="(40)"),
            suggested("token", 0.9, options="(64)"),
            suggested("channel", 0.8, options="(10)"),
            suggested("player_count", 0.4, transformer="int"),
        ),
    )


@pytest.fixture
def existing_pageview():
    return ExistingSchema(
        event_name="pageview",
        version=3,
        table_option=TableOption(dist_key=("device_id",), sort_key=("time",)),
    )


@pytest.fixture
def services(pageview_suggestion, existing_pageview):
    return FakeSchemaServices(
        suggestions={"pageview": pageview_suggestion},
        schemas={"pageview": existing_pageview},
    )
