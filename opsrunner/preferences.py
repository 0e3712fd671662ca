from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict

from .settings import PREFS_PATH

THEME_KEY = "theme"
LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


class ThemeStore:
    """Light/dark preference persisted under a fixed key in a small JSON file."""

    def __init__(self, path: Path = PREFS_PATH):
        self.path = Path(path)

    # ========== JSON 操作 ==========
    def _load_config(self) -> Dict[str, Any]:
        """读取本地 preferences.json"""
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                print(f"[ThemeStore] ⚠️ Ignoring non-object preferences in {self.path}")
            except (OSError, ValueError) as e:
                print(f"[ThemeStore] ⚠️ Failed to read preferences: {e}")
        return {}

    def _save_config(self, cfg: Dict[str, Any]) -> None:
        """保存配置文件"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(cfg, indent=2, ensure_ascii=False), encoding="utf-8")

    # ========== 核心函数 ==========
    def load(self, prefers_dark: bool = False) -> str:
        """
        返回已保存的主题；
        没有保存（或值非法）时，按客户端/系统偏好回退。
        """
        saved = self._load_config().get(THEME_KEY)
        if saved in THEMES:
            return saved
        return DARK if prefers_dark else LIGHT

    def save(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}', expected one of {', '.join(THEMES)}")
        cfg = self._load_config()
        cfg[THEME_KEY] = theme
        self._save_config(cfg)
        return theme

    def toggle(self, prefers_dark: bool = False) -> str:
        current = self.load(prefers_dark)
        return self.save(LIGHT if current == DARK else DARK)
