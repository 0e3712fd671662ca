from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

# ========== 环境加载 ==========
load_dotenv()

# ========== 脚本执行环境 ==========
PYTHON_PATH = os.getenv("OPSRUNNER_PYTHON", "/opt/ops-scripts/venv/bin/python3")
SCRIPT_ROOT = os.getenv("OPSRUNNER_SCRIPT_ROOT", "/opt/ops-scripts/venv/scripts")
DRY_RUN_FLAG = "--dry-run"

# ========== 本地执行后端 ==========
BACKEND_URL = os.getenv("OPSRUNNER_BACKEND_URL", "http://localhost:8000/api/execute")
BACKEND_TIMEOUT_SECONDS = float(os.getenv("OPSRUNNER_BACKEND_TIMEOUT", "1.0"))

# ========== 模拟输出 ==========
SIMULATED_FAILURE_RATE = float(os.getenv("OPSRUNNER_FAILURE_RATE", "0.2"))
PRE_RUN_DELAY_SECONDS = float(os.getenv("OPSRUNNER_PRE_RUN_DELAY", "0.6"))
REVEAL_DELAY_MIN = float(os.getenv("OPSRUNNER_REVEAL_DELAY_MIN", "0.005"))
REVEAL_DELAY_MAX = float(os.getenv("OPSRUNNER_REVEAL_DELAY_MAX", "0.045"))

# ========== 偏好设置 / Web ==========
PREFS_PATH = Path(os.getenv("OPSRUNNER_PREFS_PATH", str(Path.home() / ".opsrunner" / "preferences.json")))
HOST = os.getenv("OPSRUNNER_HOST", "127.0.0.1")
PORT = int(os.getenv("OPSRUNNER_PORT", "5050"))
