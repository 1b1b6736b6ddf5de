"""End-to-end ingestion scenarios through the webhook endpoint."""

from __future__ import annotations

import json
import sqlite3

from fastapi.testclient import TestClient

from src.config.settings import Settings
from tests.factories import APPLE_RECORD, FAKE_JPEG, make_update_payload, photo_sizes

_WEBHOOK = "/api/webhook/telegram"


def _logs(client: TestClient) -> list[dict]:
    response = client.get("/api/v1/logs")
    assert response.status_code == 200
    return response.json()["logs"]


def _row_count(app_settings: Settings, table: str) -> int:
    with sqlite3.connect(app_settings.database_path) as db:
        return db.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def test_wake_marker_from_authorized_user(client: TestClient, upstream) -> None:
    response = client.post(_WEBHOOK, json=make_update_payload(text="gm"))

    assert response.status_code == 200
    assert response.content == b""
    logs = _logs(client)
    assert len(logs) == 1
    assert logs[0]["message"] == "gm"
    assert [e["type"] for e in logs[0]["events"]] == ["GOOD_MORNING"]

    created = upstream.json_bodies("operand.test", "/CreateObject")
    assert len(created) == 1
    assert created[0]["type"] == "text"
    assert created[0]["metadata"] == {"text": "gm"}
    assert created[0]["properties"] == {"log": logs[0]["id"]}
    assert upstream.calls("nutritionix.test") == []


def test_food_message_enriched(client: TestClient, upstream) -> None:
    response = client.post(_WEBHOOK, json=make_update_payload(text="I ate an apple"))

    assert response.status_code == 200
    logs = _logs(client)
    assert len(logs) == 1
    events = logs[0]["events"]
    assert [e["type"] for e in events] == ["ATE_OR_DRANK"]
    assert json.dumps(events[0]["meta"]) == json.dumps(APPLE_RECORD)

    lookups = upstream.json_bodies("nutritionix.test")
    assert lookups == [{"query": "I ate an apple", "timezone": "US/Eastern"}]


def test_photo_downloads_last_variant(client: TestClient, upstream, app_settings: Settings) -> None:
    response = client.post(_WEBHOOK, json=make_update_payload(photo=photo_sizes("a", "b")))

    assert response.status_code == 200
    get_file_calls = upstream.calls("api.telegram.test", "/getFile")
    assert [c.url.params["file_id"] for c in get_file_calls] == ["b"]

    logs = _logs(client)
    assert len(logs) == 1
    assert logs[0]["type"] == "image"
    assert logs[0]["message"] is None
    assert logs[0]["events"] == []
    assert _row_count(app_settings, "attachments") == 1

    attachment = client.get(logs[0]["attachment_url"])
    assert attachment.status_code == 200
    assert attachment.content == FAKE_JPEG
    assert attachment.headers["content-type"] == "image/jpeg"

    created = upstream.json_bodies("operand.test", "/CreateObject")
    assert created[0]["type"] == "image"
    assert created[0]["metadata"] == {
        "imageUrl": f"https://lifelog.test/api/attachment/{logs[0]['attachment_id']}"
    }


def test_unauthorized_sender_acknowledged_and_dropped(
    client: TestClient, upstream, app_settings: Settings
) -> None:
    response = client.post(_WEBHOOK, json=make_update_payload(text="gm", username="mallory"))

    assert response.status_code == 200
    assert _logs(client) == []
    assert _row_count(app_settings, "events") == 0
    assert upstream.requests == []


def test_attachment_lookup_failure_stores_nothing(
    client: TestClient, upstream, app_settings: Settings
) -> None:
    upstream.get_file_status = 400

    response = client.post(_WEBHOOK, json=make_update_payload(photo=photo_sizes("a", "b")))

    assert response.status_code == 500
    assert response.json()["error"] == "TransportError"
    assert "test-token" not in response.text
    assert _logs(client) == []
    assert _row_count(app_settings, "attachments") == 0
    assert upstream.calls("api.telegram.test", ".jpg") == []


def test_enrichment_failure_acknowledged_and_log_indexed(
    client: TestClient, upstream, app_settings: Settings
) -> None:
    upstream.nutrition_status = 500

    response = client.post(_WEBHOOK, json=make_update_payload(text="drank a smoothie"))

    assert response.status_code == 200
    assert response.content == b""
    logs = _logs(client)
    assert [log["message"] for log in logs] == ["drank a smoothie"]
    assert logs[0]["events"] == []
    assert _row_count(app_settings, "events") == 0
    created = upstream.json_bodies("operand.test", "/CreateObject")
    assert len(created) == 1
    assert created[0]["properties"] == {"log": logs[0]["id"]}


def test_unrecognized_food_does_not_trigger_redelivery(
    client: TestClient, upstream, app_settings: Settings
) -> None:
    # "late" matches the "ate" keyword; the lookup answers 404 "no food".
    upstream.nutrition_status = 404
    payload = make_update_payload(text="running late")

    statuses = [client.post(_WEBHOOK, json=payload).status_code for _ in range(2)]

    assert statuses == [200, 200]
    assert _row_count(app_settings, "events") == 0
    assert len(upstream.calls("operand.test", "/CreateObject")) == 2


def test_index_outage_does_not_fail_webhook(client: TestClient, upstream) -> None:
    upstream.index_status = 503

    response = client.post(_WEBHOOK, json=make_update_payload(text="gn"))

    assert response.status_code == 200
    assert [e["type"] for e in _logs(client)[0]["events"]] == ["GOOD_NIGHT"]
