import json
import os
import sys
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

class _C:
    RESET = "\033[0m"
    CYAN = "\033[36m"

def _use_color() -> bool:
    return os.getenv("LOG_COLOR", "0") == "1" and sys.stdout.isatty()

class AuditLogger:
    """
    Responsible for building and persisting audit records.
    """
    def build_record(
        self,
        request_id: str,
        user_id: str,
        action: str,
        event: str,
        version: Optional[int],
        table_operation: Optional[str],
        column_count: int,
        error: Optional[str] = None,
    ) -> Dict:
        return {
            "audit_id": str(uuid.uuid4()),
            "request_id": request_id,
            "user_id": user_id,
            "action": action,
            "event": event,
            "version": version,
            "table_operation": table_operation,
            "column_count": column_count,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def persist(self, record: Dict):
        """
        For now: structured log output on stdout.
        """
        text = json.dumps({"AUDIT_EVENT": record})
        if _use_color():
            print(f"{_C.CYAN}{text}{_C.RESET}")
        else:
            print(text)
