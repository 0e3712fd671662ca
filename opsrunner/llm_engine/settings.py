from dotenv import load_dotenv
import os

# 自动加载当前目录下的 .env 文件
load_dotenv()



# 环境变量（可在 .env 中配置）
LLM_API_URL = os.getenv(
    "LLM_API_URL",
    "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions",
)
LLM_API_KEY = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or os.getenv("LLM_API_KEY")
LLM_DEFAULT_MODEL = os.getenv("LLM_DEFAULT_MODEL", "gemini-2.5-flash")

# 请求超时/重试（默认不重试：失败直接交给调用方处理）
LLM_TIMEOUT_SECONDS = int(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "1"))
LLM_BACKOFF_BASE = float(os.getenv("LLM_BACKOFF_BASE", "0.6"))
