from typing import Any, Dict, List, Optional

import httpx

from blueprint.canonical.migration import ExistingSchema, Migration
from blueprint.canonical.suggestion import Suggestion
from blueprint.clients.base import SchemaServices
from blueprint.settings import Settings
from blueprint.utils.exceptions import LookupNotFound, UpstreamFailure


class BlueprintAPIClient(SchemaServices):
    """
    SchemaServices backed by the schema service REST API.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        ingest_timeout: float = 7.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url
        self.ingest_timeout = ingest_timeout
        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BlueprintAPIClient":
        return cls(
            settings.api_url,
            timeout=settings.http_timeout,
            ingest_timeout=settings.ingest_timeout,
        )

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise UpstreamFailure(f"{method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise LookupNotFound(f"{method} {path}: not found")
        if response.is_error:
            raise UpstreamFailure(
                f"{method} {path} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailure(f"{method} {path} returned invalid JSON") from e

    def list_types(self) -> List[str]:
        data = self._json("GET", "/types")
        return list(data.get("result") or [])

    def get_suggestion(self, event: str) -> Suggestion:
        data = self._json("GET", f"/suggestion/{event}.json")
        if not data:
            raise LookupNotFound(f"No suggestion for event '{event}'")
        return Suggestion.from_dict(data)

    def list_suggestions(self) -> List[Suggestion]:
        return [Suggestion.from_dict(s) for s in self._json("GET", "/suggestions") or []]

    def list_schemas(self) -> List[ExistingSchema]:
        return [ExistingSchema.from_dict(s) for s in self._json("GET", "/schemas") or []]

    def get_schema(self, event: str, version: Optional[int] = None) -> ExistingSchema:
        params: Dict[str, Any] = {}
        if version is not None:
            params["version"] = version

        data = self._json("GET", f"/schema/{event}", params=params)
        if not data:
            raise LookupNotFound(f"No schema for event '{event}'")
        return ExistingSchema.from_dict(data[0])

    def submit_migration(self, migration: Migration, event: str, version: int) -> None:
        self._request(
            "POST",
            f"/schema/{event}",
            params={"version": version},
            json=migration.to_dict(),
        )

    def trigger_ingest(self, table: str) -> None:
        self._request("POST", "/ingest", json={"Table": table}, timeout=self.ingest_timeout)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
