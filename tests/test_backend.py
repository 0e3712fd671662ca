import json

import pytest
import requests

from opsrunner.executor import BackendClient, LogLevel

from conftest import FakeResponse


@pytest.fixture
def post_calls(monkeypatch):
    calls = []

    def install(response=None, error=None):
        def fake_post(url, **kw):
            calls.append((url, kw))
            if error is not None:
                raise error
            return response
        monkeypatch.setattr(requests, "post", fake_post)
        return calls

    return install


def test_success_returns_backend_logs(post_calls):
    calls = post_calls(FakeResponse(200, {"logs": [
        {"timestamp": "2024-01-01T00:00:00Z", "level": "INFO", "message": "Found 3 issues"},
        {"level": "SUCCESS", "message": "Closed OPS-101"},
    ]}))
    result = BackendClient("http://backend/api/execute", timeout=0.5).execute("python3 x.py")

    assert result.ok
    assert [e.level for e in result.logs] == [LogLevel.INFO, LogLevel.SUCCESS]
    assert result.logs[1].timestamp == ""
    url, kw = calls[0]
    assert url == "http://backend/api/execute"
    assert kw["json"] == {"command": "python3 x.py"}
    assert kw["timeout"] == 0.5


@pytest.mark.parametrize("error", [
    requests.Timeout("slow"),
    requests.ConnectionError("refused"),
])
def test_network_failures_are_absorbed(post_calls, error):
    post_calls(error=error)
    result = BackendClient().execute("cmd")
    assert not result.ok
    assert result.reason


def test_non_success_status_is_a_failure(post_calls):
    post_calls(FakeResponse(502, {"logs": []}))
    result = BackendClient().execute("cmd")
    assert not result.ok
    assert result.reason == "HTTP 502"


@pytest.mark.parametrize("payload", [
    json.JSONDecodeError("bad", "doc", 0),
    {"output": "no logs key"},
    {"logs": "not a list"},
    {"logs": ["plain string"]},
    {"logs": [{"level": "FATAL", "message": "unknown level"}]},
    {"logs": [{"level": "INFO"}]},
])
def test_malformed_bodies_are_failures(post_calls, payload):
    post_calls(FakeResponse(200, payload))
    result = BackendClient().execute("cmd")
    assert not result.ok
    assert result.reason.startswith("malformed response")
