"""Tests for the FastAPI service surface."""

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from blueprint.main import app
from blueprint.standards.transformers import get_transformer_names


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "Healthy"


def test_types(client):
    assert client.get("/types").json() == {"result": get_transformer_names()}


class TestDrafts:

    def test_bootstrap_draft(self, client):
        response = client.post("/drafts", json={"event_name": "signup"})
        body = response.json()

        assert response.status_code == 200
        assert body["EventName"] == "signup"
        assert [c["OutboundName"] for c in body["Columns"]] == [
            "time", "ip", "city", "country", "region", "asn_id",
        ]

    def test_suggestion_draft(self, client):
        suggestion = {
            "EventName": "pageview",
            "Columns": [
                {"InboundName": "device_id", "OutboundName": "device_id",
                 "Transformer": "varchar", "OccurrenceProbability": 0.9,
                 "ColumnCreationOptions": "(40)"},
            ],
        }
        body = client.post("/drafts", json={"suggestion": suggestion}).json()

        assert body["distkey"] == "device_id"
        assert body["Columns"][-1]["size"] == 32


class TestMigrations:

    def test_create(self, client):
        draft = client.post("/drafts", json={"event_name": "pageview"}).json()
        response = client.post("/migrations/create", json=draft)
        body = response.json()

        assert response.status_code == 200
        assert body["TableOperation"] == "add"
        assert body["TableOption"] == {"DistKey": [""], "SortKey": ["time"]}
        assert len(body["ColumnOperations"]) == 6

    def test_create_invalid(self, client):
        draft = {
            "EventName": "pageview",
            "Columns": [{"InboundName": "user", "OutboundName": "user",
                         "Transformer": "varchar", "size": 0}],
        }
        response = client.post("/migrations/create", json=draft)

        assert response.status_code == 422
        assert response.json()["detail"]["inbound_name"] == "user"

    def test_update(self, client):
        payload = {
            "EventName": "pageview",
            "Version": 4,
            "TableOption": {"DistKey": ["device_id"], "SortKey": ["time"]},
            "Columns": [{"InboundName": "viewers", "OutboundName": "viewers",
                         "Transformer": "int"}],
        }
        token = jwt.encode({"email": "dev@example.com"}, "secret", algorithm="HS256")
        response = client.post(
            "/migrations/update",
            json=payload,
            headers={"Authorization": f"Bearer {token}"},
        )
        body = response.json()

        assert response.status_code == 200
        assert body["TableOperation"] == "update"
        assert body["TableOption"] == payload["TableOption"]
        assert body["ColumnOperations"][0]["NewColumnDefinition"]["Transformer"] == "bigint"

    def test_update_without_additions(self, client):
        response = client.post("/migrations/update", json={"EventName": "pageview", "Columns": []})
        assert response.status_code == 409

    def test_update_invalid(self, client):
        payload = {
            "EventName": "pageview",
            "Columns": [{"InboundName": "game", "OutboundName": "game", "Transformer": "varchar"}],
        }
        response = client.post("/migrations/update", json=payload)
        assert response.status_code == 422
        assert response.json()["detail"]["inbound_name"] == "game"
