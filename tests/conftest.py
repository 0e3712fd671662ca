import random
from typing import Any, Dict, List, Optional

import pytest

from opsrunner.catalog import load_catalog
from opsrunner.console import ConsoleSession
from opsrunner.executor import BackendResult, LogEntry, LogLevel, Orchestrator, Simulator

PYTHON = "/opt/ops-scripts/venv/bin/python3"
ROOT = "/opt/ops-scripts/venv/scripts"


class FakeEngine:
    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    def ask_text(self, prompt: str, **kw) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class FakeBackend:
    def __init__(self, result: BackendResult):
        self.result = result
        self.commands: List[str] = []

    def execute(self, command: str) -> BackendResult:
        self.commands.append(command)
        return self.result


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def unavailable_backend() -> FakeBackend:
    return FakeBackend(BackendResult(ok=False, reason="connection refused"))


def make_orchestrator(backend=None, engine=None, failure_rate: float = 0.0) -> Orchestrator:
    simulator = Simulator(lambda: engine or FakeEngine("Done."), failure_rate=failure_rate, rng=random.Random(7))
    return Orchestrator(backend or unavailable_backend(), simulator, python_path=PYTHON, script_root=ROOT)


def make_session(catalog, orchestrator=None, sleeps: Optional[List[float]] = None, sleep=None) -> ConsoleSession:
    record = sleeps if sleeps is not None else []
    return ConsoleSession(
        catalog,
        orchestrator or make_orchestrator(),
        pre_run_delay=0.0,
        rng=random.Random(42),
        sleep=sleep or record.append,
    )


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture
def values_close_bulk() -> Dict[str, Any]:
    return {"jql": "project = OPS", "disable_zabbix": True}


@pytest.fixture
def traceback_text() -> str:
    return "\n".join([
        "[DRY-RUN] Querying Jira...",
        "Traceback (most recent call last):",
        '  File "/opt/ops-scripts/venv/scripts/jira_close_simple.py", line 42, in <module>',
        "    main()",
        "ConnectionError: Jira API unreachable",
    ])
