from abc import ABC, abstractmethod
from typing import List, Optional

from blueprint.canonical.migration import ExistingSchema, Migration
from blueprint.canonical.suggestion import Suggestion


class SchemaServices(ABC):
    """
    External collaborators consumed by the schema sessions.

    Implementations raise LookupNotFound when the requested item
    does not exist and UpstreamFailure for any other failure.
    """

    @abstractmethod
    def list_types(self) -> List[str]:
        ...

    @abstractmethod
    def get_suggestion(self, event: str) -> Suggestion:
        ...

    @abstractmethod
    def list_suggestions(self) -> List[Suggestion]:
        ...

    @abstractmethod
    def list_schemas(self) -> List[ExistingSchema]:
        ...

    @abstractmethod
    def get_schema(self, event: str, version: Optional[int] = None) -> ExistingSchema:
        ...

    @abstractmethod
    def submit_migration(self, migration: Migration, event: str, version: int) -> None:
        ...

    @abstractmethod
    def trigger_ingest(self, table: str) -> None:
        ...
