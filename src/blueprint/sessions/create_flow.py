from typing import List, Optional

from blueprint.canonical.column import ColumnSpec, EventDraft
from blueprint.clients.base import SchemaServices
from blueprint.observability.logger import log_event
from blueprint.outputs.migration_compiler import CompileResult, MigrationCompiler
from blueprint.pipeline import column_maker
from blueprint.pipeline.suggestion_normalizer import (
    Bootstrap,
    Inferred,
    SuggestionNormalizer,
    SuggestionSource,
)
from blueprint.sessions.outcome import SessionOutcome, load_types
from blueprint.utils.exceptions import (
    BlueprintError,
    LookupNotFound,
    UpstreamFailure,
    ValidationError,
)


NEW_SCHEMA_VERSION = 0


class SchemaCreateSession:
    """
    Holds the editable draft for a new event schema and submits it.
    """

    def __init__(
        self,
        services: SchemaServices,
        normalizer: Optional[SuggestionNormalizer] = None,
        compiler: Optional[MigrationCompiler] = None,
    ):
        self.services = services
        self.normalizer = normalizer or SuggestionNormalizer()
        self.compiler = compiler or MigrationCompiler()

        self.draft = EventDraft()
        self.types: List[str] = []
        self.warnings: List[str] = []
        self.new_column = column_maker.make_default()

    def load(self, event_name: Optional[str] = None) -> EventDraft:
        self.types, warning = load_types(self.services)
        self.warnings = [warning] if warning else []

        source = self._suggestion_source(event_name)
        self.draft = self.normalizer.normalize(source)
        if event_name and not self.draft.event_name:
            self.draft.event_name = event_name

        self.new_column = column_maker.make_default()

        log_event("DRAFT_NORMALIZED", {
            "event": self.draft.event_name,
            "source": type(source).__name__,
            "columns": len(self.draft.columns),
            "dist_key": self.draft.dist_key,
        })
        return self.draft

    def _suggestion_source(self, event_name: Optional[str]) -> SuggestionSource:
        if not event_name:
            return Bootstrap()
        try:
            return Inferred(self.services.get_suggestion(event_name))
        except LookupNotFound:
            return Bootstrap(event_name=event_name)
        except UpstreamFailure as e:
            log_event("SUGGESTION_LOOKUP_FAILED", {"event": event_name, "error": str(e)})
            self.warnings.append("Failed to fetch suggestion; starting from default columns")
            return Bootstrap(event_name=event_name)

    def add_column(self, column: ColumnSpec) -> Optional[ValidationError]:
        reason = column_maker.invalid_reason(column)
        if reason:
            return ValidationError(column.inbound_name, reason)

        self.draft.columns.append(column.copy())
        self.new_column = column_maker.make_default()
        return None

    def drop_column(self, index: int) -> ColumnSpec:
        return self.draft.columns.pop(index)

    def preview(self) -> CompileResult:
        """
        Compile the draft without submitting it.
        """
        return self.compiler.compile_create(self.draft)

    def submit(self) -> SessionOutcome:
        event = self.draft.event_name
        result = self.preview()
        if not result.ok:
            log_event("MIGRATION_REJECTED", {"event": event, "error": str(result.error)})
            return SessionOutcome.failure(result.error)

        migration = result.migration
        try:
            self.services.submit_migration(migration, event, NEW_SCHEMA_VERSION)
        except BlueprintError as e:
            # Draft is left as is so the user can retry
            log_event("MIGRATION_SUBMIT_FAILED", {"event": event, "error": str(e)})
            return SessionOutcome.failure(e, migration=migration)

        log_event("MIGRATION_SUBMITTED", {
            "event": event,
            "version": NEW_SCHEMA_VERSION,
            "table_operation": migration.table_operation,
            "columns": len(migration.column_operations),
        })
        return SessionOutcome.success(f"Successfully created schema: {event}", migration)
