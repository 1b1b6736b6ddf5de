"""Fixtures for end-to-end tests against a fake Telegram/Nutritionix/Operand.

The real providers run unchanged; only the transport under their shared
``httpx.AsyncClient`` is replaced with ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from src.config.settings import Settings
from src.main import _build_all, create_app
from tests.factories import APPLE_RECORD, FAKE_JPEG, make_settings


class FakeUpstream:
    """Answers every outbound call the app makes and records it."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.foods: list[dict[str, Any]] = [APPLE_RECORD]
        self.nutrition_status = 200
        self.get_file_status = 200
        self.file_bytes = FAKE_JPEG
        self.index_status = 200
        self.search_body: dict[str, Any] = {"contents": [], "objects": {}}
        self._objects_created = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host, path = request.url.host, request.url.path

        if host == "api.telegram.test":
            if path.endswith("/getFile"):
                if self.get_file_status != 200:
                    return httpx.Response(
                        self.get_file_status,
                        json={"ok": False, "description": "Bad Request: wrong file_id"},
                    )
                file_id = request.url.params["file_id"]
                return httpx.Response(
                    200,
                    json={"ok": True, "result": {"file_id": file_id, "file_path": f"photos/{file_id}.jpg"}},
                )
            if path.startswith("/file/bot"):
                return httpx.Response(200, content=self.file_bytes)

        if host == "nutritionix.test":
            if self.nutrition_status != 200:
                return httpx.Response(self.nutrition_status, json={"message": "usage limits exceeded"})
            return httpx.Response(200, json={"foods": self.foods})

        if host == "operand.test":
            if self.index_status != 200:
                return httpx.Response(self.index_status, json={"code": "unavailable"})
            if path.endswith("/CreateObject"):
                self._objects_created += 1
                return httpx.Response(200, json={"object": {"id": f"obj-{self._objects_created}"}})
            if path.endswith("/SearchContents"):
                return httpx.Response(200, json=self.search_body)

        return httpx.Response(404, json={"error": "unexpected request"})

    def calls(self, host: str, path_suffix: str = "") -> list[httpx.Request]:
        return [
            r for r in self.requests if r.url.host == host and r.url.path.endswith(path_suffix)
        ]

    def json_bodies(self, host: str, path_suffix: str = "") -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.calls(host, path_suffix)]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    return make_settings(database_path=str(tmp_path / "lifelog.db"))


@pytest.fixture
def client(app_settings: Settings, upstream: FakeUpstream) -> Iterator[TestClient]:
    """A running app (lifespan included) wired to the fake upstream."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(app_settings, components=_build_all(app_settings, http_client))
    with TestClient(app) as test_client:
        yield test_client
