from .types import (
    BackendResult, ExecutionOutcome, ExecutionStatus, LogEntry, LogLevel,
    final_status, has_error, now_iso,
)
from .backend import BackendClient, parse_logs
from .simulator import Simulator, SIMULATION_ERROR_MESSAGE, build_prompt, classify_line, parse_output
from .orchestrator import Orchestrator

__all__ = [
    "BackendResult", "ExecutionOutcome", "ExecutionStatus", "LogEntry", "LogLevel",
    "final_status", "has_error", "now_iso",
    "BackendClient", "parse_logs",
    "Simulator", "SIMULATION_ERROR_MESSAGE", "build_prompt", "classify_line", "parse_output",
    "Orchestrator",
]
