from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from .executor import LogEntry, LogLevel

PLACEHOLDER_TEXT = "Ready to execute. Waiting for input..."

# CSS hooks used by web/static/console.css
STYLE_PLAIN = "plain"
STYLE_TRACEBACK = "traceback"
STYLE_EXCEPTION = "exception"
STYLE_SUCCESS = "success"
STYLE_WARN = "warn"


def is_success_message(message: str) -> bool:
    return (
        "success" in message.lower()
        or "Done" in message
        or message.startswith("Closed")
        or message.startswith("Set flag")
    )


def style_for(entry: LogEntry) -> str:
    message = entry.message
    is_traceback = message.startswith("Traceback")
    is_file_ref = message.strip().startswith('File "')

    style = STYLE_PLAIN
    if entry.level is LogLevel.WARN:
        style = STYLE_WARN
    elif entry.level is LogLevel.SUCCESS:
        style = STYLE_SUCCESS
    if is_traceback or is_file_ref:
        style = STYLE_TRACEBACK
    if entry.level is LogLevel.ERROR and not (is_traceback or is_file_ref):
        style = STYLE_EXCEPTION
    if entry.level is not LogLevel.ERROR and is_success_message(message):
        style = STYLE_SUCCESS
    return style


def present_entry(entry: LogEntry) -> Dict[str, Any]:
    data = entry.to_dict()
    data["style"] = style_for(entry)
    return data


def present(entries: Iterable[LogEntry]) -> List[Dict[str, Any]]:
    return [present_entry(e) for e in entries]


def placeholder(entries: List[LogEntry], loading: bool) -> Optional[str]:
    if not entries and not loading:
        return PLACEHOLDER_TEXT
    return None
