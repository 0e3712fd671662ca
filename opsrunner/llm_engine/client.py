from __future__ import annotations
from typing import List, Optional

from .types import ChatMessage, ChatResult
from .errors import LLMConfigError
from .settings import (
    LLM_API_URL, LLM_API_KEY, LLM_DEFAULT_MODEL,
)
from .providers import OpenAICompatProvider

class LLMEngine:
    """
    项目统一的 LLM 客户端封装：
    - chat(messages) 低层
    - ask_text(prompt) 简单问答（模拟脚本输出用）
    """
    def __init__(self, api_url: str = LLM_API_URL, api_key: Optional[str] = LLM_API_KEY, default_model: str = LLM_DEFAULT_MODEL, **provider_kw):
        if not api_key:
            raise LLMConfigError("Missing API_KEY / GEMINI_API_KEY")
        self.default_model = default_model
        self.provider = OpenAICompatProvider(api_url=api_url, api_key=api_key, **provider_kw)

    # -------- 基础接口 --------
    def chat(self, messages: List[ChatMessage], *, model: Optional[str] = None, **kw) -> ChatResult:
        return self.provider.chat(messages=messages, model=model or self.default_model, **kw)

    # -------- 便捷封装 --------
    def ask_text(self, prompt: str, **kw) -> str:
        res = self.chat([{"role": "user", "content": prompt}], **kw)
        return res["content"]


# -------- 全局单例（简单好用） --------
_engine_singleton: Optional[LLMEngine] = None

def get_engine() -> LLMEngine:
    global _engine_singleton
    if _engine_singleton is None:
        _engine_singleton = LLMEngine()
    return _engine_singleton
