import os
from dataclasses import dataclass


DEFAULT_API_URL = "http://localhost:8080"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration read from the environment.
    """
    api_url: str = DEFAULT_API_URL
    http_timeout: float = 10.0          # seconds, schema service calls
    ingest_timeout: float = 7.0         # seconds, ingest trigger

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=os.getenv("BLUEPRINT_API_URL", DEFAULT_API_URL).rstrip("/"),
            http_timeout=float(os.getenv("BLUEPRINT_HTTP_TIMEOUT", "10")),
            ingest_timeout=float(os.getenv("BLUEPRINT_INGEST_TIMEOUT", "7")),
        )
