from __future__ import annotations
import random
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from .catalog import Catalog, ScriptDefinition
from .executor import ExecutionOutcome, ExecutionStatus, LogEntry, Orchestrator
from .form import FormError, FormState
from .presenter import placeholder, present, present_entry
from .settings import PRE_RUN_DELAY_SECONDS, REVEAL_DELAY_MAX, REVEAL_DELAY_MIN


class ConsoleError(Exception):
    status_code = 400


class UnknownScript(ConsoleError):
    status_code = 404


class RunRejected(ConsoleError):
    status_code = 409


@dataclass(frozen=True)
class RunHandle:
    run_id: int
    dry_run: bool
    script: ScriptDefinition
    values: Mapping[str, Any]


class ConsoleSession:
    """
    Single owner of the console state: selected script, form values, log
    sequence and execution status.

    A run is started with ``start_run`` and driven by consuming ``stream``,
    which reveals the produced entries one by one. Selecting a script or
    starting a newer run supersedes an in-flight reveal: it stops appending at
    its next entry and leaves the state to its successor.
    """

    def __init__(
        self,
        catalog: Catalog,
        orchestrator: Optional[Orchestrator] = None,
        *,
        pre_run_delay: float = PRE_RUN_DELAY_SECONDS,
        reveal_delay_min: float = REVEAL_DELAY_MIN,
        reveal_delay_max: float = REVEAL_DELAY_MAX,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.catalog = catalog
        self.orchestrator = orchestrator or Orchestrator()
        self.pre_run_delay = pre_run_delay
        self.reveal_delay_min = reveal_delay_min
        self.reveal_delay_max = reveal_delay_max
        self.rng = rng or random.Random()
        self.sleep = sleep

        self._lock = threading.Lock()
        self.form = FormState(catalog.first())
        self.logs: List[LogEntry] = []
        self.status = ExecutionStatus.IDLE
        self.loading = False
        self.run_id = 0
        self.last_source: Optional[str] = None

    @property
    def script(self) -> ScriptDefinition:
        return self.form.script

    # -------- 表单 --------
    def select_script(self, script_id: str) -> ScriptDefinition:
        script = self.catalog.get(script_id)
        if script is None:
            raise UnknownScript(f"Unknown script '{script_id}'")
        with self._lock:
            self.form.select(script)
            self.logs = []
            self.status = ExecutionStatus.IDLE
            self.loading = False
            self.last_source = None
            self.run_id += 1
        return script

    def set_value(self, key: str, value: Any) -> bool:
        with self._lock:
            if self.loading:
                raise RunRejected("Form is locked while a run is in flight")
            try:
                self.form.set_value(key, value)
            except FormError as e:
                raise ConsoleError(str(e)) from e
            return self.form.is_valid

    # -------- 执行 --------
    def start_run(self, dry_run: bool) -> RunHandle:
        with self._lock:
            if self.loading:
                raise RunRejected("A run is already in flight")
            missing = self.form.missing_required()
            if missing:
                raise RunRejected(f"Required fields are empty: {', '.join(missing)}")
            self.run_id += 1
            self.logs = []
            self.loading = True
            self.last_source = None
            self.status = ExecutionStatus.running_for(dry_run)
            return RunHandle(
                run_id=self.run_id,
                dry_run=dry_run,
                script=self.form.script,
                values=dict(self.form.values),
            )

    def _is_current(self, handle: RunHandle) -> bool:
        return self.run_id == handle.run_id

    def _reveal_delay(self) -> float:
        return self.rng.uniform(self.reveal_delay_min, self.reveal_delay_max)

    def _append(self, handle: RunHandle, entry: LogEntry) -> bool:
        with self._lock:
            if not self._is_current(handle):
                return False
            self.logs.append(entry)
            return True

    def _finish(self, handle: RunHandle, outcome: ExecutionOutcome) -> Optional[ExecutionStatus]:
        with self._lock:
            if not self._is_current(handle):
                return None
            self.loading = False
            self.last_source = outcome.source
            self.status = outcome.status
            return self.status

    def stream(self, handle: RunHandle) -> Iterator[Dict[str, Any]]:
        """
        Drive a started run. Yields ``{"type": "log", ...}`` per revealed entry
        and a final ``{"type": "status", ...}``, or ``{"type": "superseded"}``
        if another run or a script switch took over.
        """
        outcome: Optional[ExecutionOutcome] = None
        revealed = 0
        try:
            self.sleep(self.pre_run_delay)
            with self._lock:
                current = self._is_current(handle)
            if not current:
                yield {"type": "superseded", "run_id": handle.run_id}
                return
            outcome = self.orchestrator.execute(handle.script, handle.values, handle.dry_run)

            for entry in outcome.entries:
                self.sleep(self._reveal_delay())
                if not self._append(handle, entry):
                    yield {"type": "superseded", "run_id": handle.run_id}
                    return
                revealed += 1
                yield {"type": "log", **present_entry(entry)}

            status = self._finish(handle, outcome)
            if status is None:
                yield {"type": "superseded", "run_id": handle.run_id}
                return
            yield {
                "type": "status",
                "status": status.value,
                "source": outcome.source,
                "command": outcome.command,
            }
        finally:
            self._settle_abandoned(handle, outcome, revealed)

    def _settle_abandoned(self, handle: RunHandle, outcome: Optional[ExecutionOutcome], revealed: int) -> None:
        # 客户端中途断开：把剩余条目按原顺序补齐并落定状态
        with self._lock:
            if not self._is_current(handle) or not self.loading:
                return
        if outcome is None:
            with self._lock:
                self.loading = False
                self.status = ExecutionStatus.IDLE
            print(f"[Console] ⚠️ Run #{handle.run_id} abandoned before any output was produced.")
            return
        for entry in outcome.entries[revealed:]:
            if not self._append(handle, entry):
                return
        self._finish(handle, outcome)
        print(f"[Console] ⚠️ Run #{handle.run_id} finished without a viewer ({outcome.status.value}).")

    def run(self, dry_run: bool) -> List[Dict[str, Any]]:
        """Start a run and consume its stream (used by tests and the CLI)."""
        return list(self.stream(self.start_run(dry_run)))

    # -------- 视图 --------
    @property
    def risk_warning(self) -> bool:
        return self.script.is_risky and self.status in (ExecutionStatus.IDLE, ExecutionStatus.DRY_FAILED)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            script = self.form.script
            logs = list(self.logs)
            return {
                "script": script.summary(),
                "high_risk": script.is_high_risk,
                "risk_warning": self.risk_warning,
                "controls": self.form.controls(),
                "values": dict(self.form.values),
                "valid": self.form.is_valid,
                "missing": self.form.missing_required(),
                "status": self.status.value,
                "loading": self.loading,
                "run_id": self.run_id,
                "source": self.last_source,
                "logs": present(logs),
                "placeholder": placeholder(logs, self.loading),
            }
