from __future__ import annotations
from enum import Enum
from typing import Any, List

import requests
from dacite import Config, from_dict, DaciteError

from ..settings import BACKEND_URL, BACKEND_TIMEOUT_SECONDS
from .types import BackendResult, LogEntry

_LOG_CONFIG = Config(cast=[Enum])


def parse_logs(data: Any) -> List[LogEntry]:
    if not isinstance(data, dict) or not isinstance(data.get("logs"), list):
        raise ValueError("Response must be an object with a 'logs' array")
    if not all(isinstance(item, dict) for item in data["logs"]):
        raise ValueError("Every log entry must be an object")
    return [from_dict(LogEntry, item, config=_LOG_CONFIG) for item in data["logs"]]


class BackendClient:
    """
    POST {"command": ...} to the local execution backend.

    Any network error, timeout, non-2xx status or malformed body comes back as
    ``BackendResult(ok=False, reason=...)``; nothing is raised.
    """

    def __init__(self, url: str = BACKEND_URL, timeout: float = BACKEND_TIMEOUT_SECONDS):
        self.url = url
        self.timeout = timeout

    def execute(self, command: str) -> BackendResult:
        try:
            resp = requests.post(
                self.url,
                headers={"Content-Type": "application/json"},
                json={"command": command},
                timeout=self.timeout,
            )
        except requests.Timeout:
            return BackendResult(ok=False, reason=f"timed out after {self.timeout}s")
        except requests.RequestException as e:
            return BackendResult(ok=False, reason=f"request failed: {e}")

        if not resp.ok:
            return BackendResult(ok=False, reason=f"HTTP {resp.status_code}")

        try:
            logs = parse_logs(resp.json())
        except (ValueError, TypeError, DaciteError) as e:
            return BackendResult(ok=False, reason=f"malformed response: {e}")
        return BackendResult(ok=True, logs=logs)
