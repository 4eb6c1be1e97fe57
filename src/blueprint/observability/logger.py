import logging
import json
import sys
import time
import uuid
import os

LOGGER_NAME = "blueprint"
LEVEL_ENV = "BLUEPRINT_LOG_LEVEL"


class _C:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    MAGENTA = "\033[35m"


def _use_color() -> bool:
    # Color only if explicitly enabled and terminal supports it.
    return os.getenv("LOG_COLOR", "0") == "1" and sys.stdout.isatty()

def _is_failure(event_type: str) -> bool:
    et = (event_type or "").upper()
    return "FAILED" in et or "REJECTED" in et

def _event_color(event_type: str) -> str:
    et = (event_type or "").upper()
    if _is_failure(et):
        return _C.RED
    if "DEGRADED" in et:
        return _C.YELLOW
    if "STARTED" in et or "COMPLETED" in et or "SUBMITTED" in et:
        return _C.GREEN
    if "AUDIT" in et:
        return _C.CYAN
    return _C.MAGENTA

def event_level(event_type: str) -> int:
    """Failed, rejected and degraded events are warnings; the rest is info."""
    if _is_failure(event_type) or "DEGRADED" in (event_type or "").upper():
        return logging.WARNING
    return logging.INFO

def _configured_level() -> int:
    name = os.getenv(LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO

def get_logger():
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(_configured_level())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.propagate = False
    return logger

logger = get_logger()

# Request ID Generator
def generate_request_id():
    return str(uuid.uuid4())

# Structured Log Event
def log_event(event_type: str, payload: dict) -> dict:
    record = {"event_type": event_type, **payload}
    text = json.dumps(record, default=str)

    if _use_color():
        text = f"{_event_color(event_type)}{text}{_C.RESET}"
    logger.log(event_level(event_type), text)
    return record

# Timer Utility
class RequestTimer:
    """
    Simple execution timer.
    """
    def __init__(self):
        self.start_time = time.time()

    def duration(self):
        return round(time.time() - self.start_time, 4)
