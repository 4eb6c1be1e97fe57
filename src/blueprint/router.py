from typing import Dict

from fastapi import Request

from blueprint.canonical.column import ColumnSpec, EventDraft
from blueprint.canonical.migration import Migration, TableOption
from blueprint.canonical.suggestion import Suggestion
from blueprint.outputs.migration_compiler import CompileResult, MigrationCompiler
from blueprint.pipeline.suggestion_normalizer import (
    Bootstrap,
    Inferred,
    SuggestionNormalizer,
)
from blueprint.standards.transformers import get_transformer_names

from blueprint.observability.logger import log_event, generate_request_id, RequestTimer
from blueprint.observability.audit_logger import AuditLogger
from blueprint.observability.identity import extract_user_identity


def route_types() -> Dict:
    return {"result": get_transformer_names()}


def route_draft(payload: Dict) -> Dict:
    """
    Normalize an optional suggestion into an editable draft.
    """
    suggestion = payload.get("suggestion")
    if suggestion:
        source = Inferred(Suggestion.from_dict(suggestion))
    else:
        source = Bootstrap(event_name=payload.get("event_name") or "")

    draft = SuggestionNormalizer().normalize(source)

    log_event("DRAFT_NORMALIZED", {
        "event": draft.event_name,
        "source": type(source).__name__,
        "columns": len(draft.columns),
        "dist_key": draft.dist_key,
    })
    return draft.to_dict()


def route_create(payload: Dict, request: Request) -> Dict:
    draft = EventDraft.from_dict(payload)
    return _compile(
        action="MIGRATION_CREATE",
        event=draft.event_name,
        payload=payload,
        request=request,
        compile_fn=lambda compiler: compiler.compile_create(draft),
    )


def route_update(payload: Dict, request: Request) -> Dict:
    event = payload.get("EventName") or ""
    additions = [ColumnSpec.from_dict(c) for c in payload.get("Columns") or []]
    table_option = TableOption.from_dict(payload.get("TableOption"))
    return _compile(
        action="MIGRATION_UPDATE",
        event=event,
        payload=payload,
        request=request,
        compile_fn=lambda compiler: compiler.compile_update(event, additions, table_option),
    )


def _compile(action: str, event: str, payload: Dict, request: Request, compile_fn) -> Dict:
    """
    Run a compilation with request logging and auditing.

    Raises the compile error so the app can map it to a status code.
    """
    request_id = generate_request_id()
    audit_logger = AuditLogger()
    user_id = extract_user_identity(request, payload)
    timer = RequestTimer()

    log_event("REQUEST_STARTED", {
        "request_id": request_id,
        "action": action,
        "event": event,
    })

    result: CompileResult = compile_fn(MigrationCompiler())
    migration: Migration = result.migration

    audit_record = audit_logger.build_record(
        request_id=request_id,
        user_id=user_id,
        action=action if result.ok else f"{action}_REJECTED",
        event=event,
        version=payload.get("Version"),
        table_operation=migration.table_operation if migration else None,
        column_count=len(migration.column_operations) if migration else 0,
        error=None if result.ok else str(result.error),
    )
    audit_logger.persist(audit_record)

    if not result.ok:
        log_event("REQUEST_FAILED", {
            "request_id": request_id,
            "event": event,
            "error": str(result.error),
            "duration_seconds": timer.duration(),
        })
        raise result.error

    log_event("REQUEST_COMPLETED", {
        "request_id": request_id,
        "event": event,
        "table_operation": migration.table_operation,
        "columns": len(migration.column_operations),
        "duration_seconds": timer.duration(),
    })
    return migration.to_dict()
