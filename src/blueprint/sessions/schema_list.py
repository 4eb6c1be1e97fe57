from enum import Enum
from typing import Iterable, List

from blueprint.canonical.migration import ExistingSchema
from blueprint.canonical.suggestion import Suggestion
from blueprint.clients.base import SchemaServices
from blueprint.observability.logger import log_event
from blueprint.utils.exceptions import BlueprintError


class IngestStatus(str, Enum):
    DEFAULT = "default"
    FLUSHING = "flushing"
    FLUSHED = "flushed"
    FAILED = "failed"


def pending_suggestions(
    schemas: Iterable[ExistingSchema],
    suggestions: Iterable[Suggestion],
) -> List[Suggestion]:
    """
    Suggestions for events that do not have a schema yet.
    """
    existing = {s.event_name for s in schemas}
    return [s for s in suggestions if s.event_name not in existing]


def trigger_ingest(services: SchemaServices, table: str) -> IngestStatus:
    """
    Ask the ingester to flush a table; returns the terminal status.
    """
    log_event("INGEST_STATUS", {"table": table, "status": IngestStatus.FLUSHING.value})
    try:
        services.trigger_ingest(table)
    except BlueprintError as e:
        log_event("INGEST_FAILED", {"table": table, "error": str(e)})
        return IngestStatus.FAILED

    log_event("INGEST_STATUS", {"table": table, "status": IngestStatus.FLUSHED.value})
    return IngestStatus.FLUSHED
