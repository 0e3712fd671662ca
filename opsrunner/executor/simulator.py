# opsrunner/executor/simulator.py
from __future__ import annotations
import random
import re
from typing import Callable, List, Optional

import requests

from ..catalog import ScriptDefinition
from ..llm_engine import LLMEngine, LLMError, get_engine
from ..settings import SIMULATED_FAILURE_RATE
from .types import LogEntry, LogLevel

SIMULATION_ERROR_MESSAGE = "Simulation Error: Failed to generate output via LLM API."

_EXCEPTION_LINE = re.compile(r"^[A-Za-z0-9_]+Error:")


def classify_line(line: str) -> LogLevel:
    """ERROR for traceback headers, ``File "..."`` frames and ``SomethingError:`` lines."""
    stripped = line.strip()
    if stripped.startswith("Traceback (most recent call last):"):
        return LogLevel.ERROR
    if stripped.startswith('File "'):
        return LogLevel.ERROR
    if _EXCEPTION_LINE.match(line):
        return LogLevel.ERROR
    return LogLevel.INFO


def parse_output(text: str) -> List[LogEntry]:
    return [LogEntry(level=classify_line(line), message=line) for line in text.split("\n")]


def build_prompt(command: str, script: ScriptDefinition, dry_run: bool, simulate_failure: bool) -> str:
    mode = "DRY_RUN" if dry_run else "LIVE_EXECUTION"
    return (
        "You are a Python script execution engine acting as the STDOUT/STDERR pipe.\n\n"
        f"COMMAND EXECUTED:\n{command}\n\n"
        "CONTEXT:\n"
        f"Script Description: {script.description}\n"
        f"Mode: {mode}\n"
        f"Simulate Failure: {'true' if simulate_failure else 'false'}\n\n"
        "INSTRUCTIONS:\n"
        "1. Generate realistic terminal output for this specific command.\n"
        "2. If the command includes --jql, invent 3-5 Jira tickets (e.g., OPS-101, OPS-205).\n"
        "3. If the command includes --issue-key, handle that specific key.\n"
        '4. IF script name includes "triggers", explicitly mention Zabbix Trigger IDs in the logs.\n'
        '5. IF script name DOES NOT include "triggers", do not mention Zabbix.\n'
        "6. IF --dry-run is present:\n"
        "   - Prefix actions with [DRY-RUN] or [CHECK].\n"
        '   - DO NOT simulate "Doing" the action, only "Would do".\n'
        "7. Failure Simulation:\n"
        "   - If Simulate Failure is true, output a Python Traceback compatible with the script logic.\n\n"
        "GENERATE RAW TEXT OUTPUT NOW."
    )


class Simulator:
    """
    Fabricates script output through the LLM when the real backend is unavailable.

    ``simulate`` never raises: any failure (missing key, HTTP/network error,
    malformed completion) becomes a single ERROR entry.
    """

    def __init__(
        self,
        engine_factory: Callable[[], LLMEngine] = get_engine,
        *,
        failure_rate: float = SIMULATED_FAILURE_RATE,
        rng: Optional[random.Random] = None,
    ):
        self.engine_factory = engine_factory
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()

    def should_fail(self) -> bool:
        return self.rng.random() < self.failure_rate

    def simulate(self, command: str, script: ScriptDefinition, dry_run: bool) -> List[LogEntry]:
        prompt = build_prompt(command, script, dry_run, self.should_fail())
        try:
            return parse_output(self.engine_factory().ask_text(prompt))
        except (LLMError, requests.RequestException, ValueError) as e:
            print(f"[Simulator] ❌ Generation failed: {e}")
            return [LogEntry(level=LogLevel.ERROR, message=SIMULATION_ERROR_MESSAGE)]
