from __future__ import annotations
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LogLevel(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class LogEntry:
    level: LogLevel
    message: str
    timestamp: str = ""   # 模拟输出没有时间戳

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["level"] = self.level.value
        return data


class ExecutionStatus(str, Enum):
    IDLE = "IDLE"
    RUNNING_DRY = "RUNNING_DRY"
    DRY_SUCCESS = "DRY_SUCCESS"
    DRY_FAILED = "DRY_FAILED"
    RUNNING_EXEC = "RUNNING_EXEC"
    EXEC_SUCCESS = "EXEC_SUCCESS"
    EXEC_FAILED = "EXEC_FAILED"

    @property
    def is_running(self) -> bool:
        return self in (ExecutionStatus.RUNNING_DRY, ExecutionStatus.RUNNING_EXEC)

    @classmethod
    def running_for(cls, dry_run: bool) -> "ExecutionStatus":
        return cls.RUNNING_DRY if dry_run else cls.RUNNING_EXEC

    @classmethod
    def finished(cls, dry_run: bool, failed: bool) -> "ExecutionStatus":
        if dry_run:
            return cls.DRY_FAILED if failed else cls.DRY_SUCCESS
        return cls.EXEC_FAILED if failed else cls.EXEC_SUCCESS


def has_error(entries: List[LogEntry]) -> bool:
    return any(e.level is LogLevel.ERROR for e in entries)


def final_status(entries: List[LogEntry], dry_run: bool) -> ExecutionStatus:
    return ExecutionStatus.finished(dry_run, has_error(entries))


@dataclass
class BackendResult:
    """Outcome of the backend attempt: either logs, or the reason it was unusable."""
    ok: bool
    logs: List[LogEntry] = field(default_factory=list)
    reason: Optional[str] = None


@dataclass
class ExecutionOutcome:
    command: str
    entries: List[LogEntry]
    source: Literal["backend", "simulation"]
    dry_run: bool

    @property
    def status(self) -> ExecutionStatus:
        return final_status(self.entries, self.dry_run)
