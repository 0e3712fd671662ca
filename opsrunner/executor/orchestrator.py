from __future__ import annotations
from typing import Any, Mapping, Optional

from ..catalog import ScriptDefinition
from ..command import build_command
from ..settings import PYTHON_PATH, SCRIPT_ROOT
from .backend import BackendClient
from .simulator import Simulator
from .types import ExecutionOutcome, LogEntry, LogLevel, now_iso


class Orchestrator:
    """
    Two-stage attempt policy:
    1. local backend under a short deadline
    2. on any backend failure, the LLM simulation (one level, no retries)

    Both branches are prefixed with the ``[System] Executing: ...`` entry.
    """

    def __init__(
        self,
        backend: Optional[BackendClient] = None,
        simulator: Optional[Simulator] = None,
        *,
        python_path: str = PYTHON_PATH,
        script_root: str = SCRIPT_ROOT,
    ):
        self.backend = backend or BackendClient()
        self.simulator = simulator or Simulator()
        self.python_path = python_path
        self.script_root = script_root

    def command_for(self, script: ScriptDefinition, values: Mapping[str, Any], dry_run: bool) -> str:
        return build_command(
            script, values, dry_run,
            python_path=self.python_path, script_root=self.script_root,
        )

    def execute(self, script: ScriptDefinition, values: Mapping[str, Any], dry_run: bool) -> ExecutionOutcome:
        command = self.command_for(script, values, dry_run)
        initial = LogEntry(level=LogLevel.INFO, message=f"[System] Executing: {command}", timestamp=now_iso())

        result = self.backend.execute(command)
        if result.ok:
            return ExecutionOutcome(command=command, entries=[initial, *result.logs], source="backend", dry_run=dry_run)

        print(f"[Orchestrator] ⚠️ Backend unavailable ({result.reason}), using AI simulation.")
        simulated = self.simulator.simulate(command, script, dry_run)
        return ExecutionOutcome(command=command, entries=[initial, *simulated], source="simulation", dry_run=dry_run)
