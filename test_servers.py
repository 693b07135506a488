"""Tests for the HTTP API and the MCP tool functions."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from mcp.server.fastmcp.exceptions import ToolError

import api_server
import mcp_server
from native_reader import NativeReader
from native_writer import NativeWriter
from tool_router import ToolRouter

REPORT = "LIST\tWork\nREMINDER\tShip release\tWork\tfalse\t\t\n"


@pytest.fixture
def router(fake_reader, fake_osascript):
    reader_config, _ = fake_reader(REPORT)
    writer_config, _ = fake_osascript()
    return ToolRouter(NativeReader(reader_config), NativeWriter(writer_config))


@pytest.fixture
def client(router):
    api_server.app.dependency_overrides[api_server.get_router] = lambda: router
    yield TestClient(api_server.app)
    api_server.app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["tools"] == ["create_reminder", "list_reminders", "list_reminder_lists"]


def test_tool_catalog(client):
    names = [tool["name"] for tool in client.get("/tools").json()]
    assert names == ["create_reminder", "list_reminders", "list_reminder_lists"]


def test_call_tool_success(client):
    response = client.post("/tools/list_reminders", json={"list": "Work"})
    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is False
    assert body["payload"][0]["title"] == "Ship release"


def test_call_tool_without_body(client):
    body = client.post("/tools/list_reminder_lists").json()
    assert body["payload"] == [{"name": "Work"}]


def test_call_tool_validation_error_is_an_envelope(client):
    response = client.post("/tools/create_reminder", json={"note": "no title"})
    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is True
    assert body["message"].startswith("ValidationError:")


def test_mcp_tool_returns_payload(router, monkeypatch):
    monkeypatch.setattr(mcp_server, "router", router)
    payload = asyncio.run(mcp_server.list_reminders(list="Work"))
    assert [r["title"] for r in payload] == ["Ship release"]


def test_mcp_tool_drops_unset_arguments(router, monkeypatch):
    monkeypatch.setattr(mcp_server, "router", router)
    payload = asyncio.run(mcp_server.create_reminder(title="Buy milk"))
    assert payload["created"] is True
    assert payload["list"] is None


def test_mcp_tool_raises_tool_error(router, monkeypatch):
    monkeypatch.setattr(mcp_server, "router", router)
    with pytest.raises(ToolError) as excinfo:
        asyncio.run(mcp_server.create_reminder(title="Buy milk", dueDate="not-a-date"))
    assert str(excinfo.value).startswith("DateError:")


@pytest.mark.parametrize("body", [[1], "Work", 7])
def test_call_tool_non_object_body_is_an_envelope(client, body):
    response = client.post("/tools/list_reminders", json=body)
    assert response.status_code == 200
    envelope = response.json()
    assert envelope["isError"] is True
    assert envelope["message"].startswith("ValidationError:")
