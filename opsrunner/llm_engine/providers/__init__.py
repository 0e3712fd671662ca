from .openai_compat import OpenAICompatProvider

__all__ = ["OpenAICompatProvider"]
