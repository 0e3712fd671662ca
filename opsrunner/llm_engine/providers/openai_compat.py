from __future__ import annotations
import time
from typing import List, Dict, Any, Optional
import requests

from ..types import ChatMessage, ChatResult
from ..errors import LLMHTTPError, LLMResponseError
from ..settings import (
    LLM_TIMEOUT_SECONDS, LLM_MAX_RETRIES, LLM_BACKOFF_BASE,
)

class OpenAICompatProvider:
    """
    兼容 /v1/chat/completions 的提供方（Gemini OpenAI 兼容网关 / 其他 OpenAI 兼容服务）
    """
    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        timeout: float = LLM_TIMEOUT_SECONDS,
        max_retries: int = LLM_MAX_RETRIES,
        backoff_base: float = LLM_BACKOFF_BASE,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.backoff_base = backoff_base

    def chat(
        self,
        messages: List[ChatMessage],
        model: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        extra: Optional[Dict[str, Any]] = None,
    ) -> ChatResult:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": False,
        }
        if extra:
            payload.update(extra)

        backoff = self.backoff_base
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = requests.post(
                    self.api_url,
                    headers=headers,
                    json=payload,
                    timeout=self.timeout,
                )
                if resp.status_code >= 400:
                    raise LLMHTTPError(resp.status_code, resp.text)
                data = resp.json()
                try:
                    content = data["choices"][0]["message"]["content"]
                except (KeyError, IndexError, TypeError) as e:
                    raise LLMResponseError(f"Unexpected completion payload: {e!r}") from e
                if content is not None and not isinstance(content, str):
                    raise LLMResponseError(f"Completion content is not text: {type(content).__name__}")
                return {"content": content or "", "raw": data}
            except (requests.RequestException, ValueError, LLMHTTPError):
                if attempt >= self.max_retries:
                    raise
                time.sleep(backoff)
                backoff *= 2.0  # 简单指数回退
        raise LLMResponseError("No attempts were made")
