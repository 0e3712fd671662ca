from __future__ import annotations
from typing import Any, Dict, TypedDict


class ChatMessage(TypedDict):
    role: str
    content: str


class ChatResult(TypedDict):
    content: str
    raw: Dict[str, Any]
