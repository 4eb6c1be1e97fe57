from dataclasses import dataclass
from typing import List, Optional, Tuple

from blueprint.canonical.migration import Migration
from blueprint.clients.base import SchemaServices
from blueprint.observability.logger import log_event
from blueprint.utils.exceptions import BlueprintError, UpstreamFailure


TYPES_UNAVAILABLE = "Failed to fetch type information"


@dataclass(frozen=True)
class SessionOutcome:
    """
    Result of a session action, reported upward instead of raised.
    """
    ok: bool
    message: str = ""
    migration: Optional[Migration] = None
    error: Optional[BlueprintError] = None

    @classmethod
    def success(cls, message: str, migration: Optional[Migration] = None) -> "SessionOutcome":
        return cls(ok=True, message=message, migration=migration)

    @classmethod
    def failure(cls, error: BlueprintError, migration: Optional[Migration] = None) -> "SessionOutcome":
        return cls(ok=False, message=str(error), migration=migration, error=error)


def load_types(services: SchemaServices) -> Tuple[List[str], Optional[str]]:
    """
    Fetch the type catalog; a failing catalog degrades to an empty list.

    Returns (types, warning).
    """
    try:
        return services.list_types(), None
    except UpstreamFailure as e:
        log_event("TYPE_CATALOG_DEGRADED", {"error": str(e)})
        return [], TYPES_UNAVAILABLE
