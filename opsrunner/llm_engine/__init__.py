from .client import LLMEngine, get_engine
from .errors import LLMError, LLMConfigError, LLMHTTPError, LLMResponseError

__all__ = [
    "LLMEngine", "get_engine",
    "LLMError", "LLMConfigError", "LLMHTTPError", "LLMResponseError",
]
