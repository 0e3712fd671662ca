from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dacite import Config, from_dict, DaciteError

from .schema import FieldType, ScriptDefinition

HERE = Path(__file__).resolve().parent
DEFAULT_CATALOG_PATH = HERE / "scripts.yaml"

_DACITE_CONFIG = Config(cast=[Enum, tuple], strict=True)


class CatalogError(ValueError):
    """Raised when the catalog file is missing or describes an inconsistent script."""


class Catalog:
    """Read-only registry of script definitions, in declaration order."""

    def __init__(self, scripts: List[ScriptDefinition]):
        if not scripts:
            raise CatalogError("Catalog must define at least one script")
        self._scripts = tuple(scripts)
        self._by_id: Dict[str, ScriptDefinition] = {}
        for script in self._scripts:
            _check_script(script)
            if script.id in self._by_id:
                raise CatalogError(f"Script '{script.id}' already registered")
            self._by_id[script.id] = script

    def __len__(self) -> int:
        return len(self._scripts)

    def __iter__(self):
        return iter(self._scripts)

    def get(self, script_id: str) -> Optional[ScriptDefinition]:
        return self._by_id.get(script_id)

    def first(self) -> ScriptDefinition:
        return self._scripts[0]

    def all(self) -> List[ScriptDefinition]:
        return list(self._scripts)

    def ids(self) -> List[str]:
        return [s.id for s in self._scripts]

    def search(self, query: str) -> List[ScriptDefinition]:
        q = (query or "").strip().lower()
        if not q:
            return self.all()
        return [s for s in self._scripts if q in s.name.lower() or q in s.description.lower()]


def _check_script(script: ScriptDefinition) -> None:
    keys = [f.key for f in script.fields]
    dupes = sorted({k for k in keys if keys.count(k) > 1})
    if dupes:
        raise CatalogError(f"{script.id}: duplicate field keys {', '.join(dupes)}")
    for f in script.fields:
        if f.type is FieldType.SELECT and not f.options:
            raise CatalogError(f"{script.id}.{f.key}: select field needs options")
    if script.path_rule.flag not in keys:
        raise CatalogError(f"{script.id}: path_rule flag '{script.path_rule.flag}' is not a declared field")


def parse_catalog(raw: Any) -> Catalog:
    if not isinstance(raw, list):
        raise CatalogError("Top-level catalog YAML must be a list of scripts")
    scripts: List[ScriptDefinition] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise CatalogError(f"catalog[{i}] must be a mapping")
        try:
            scripts.append(from_dict(ScriptDefinition, item, config=_DACITE_CONFIG))
        except (DaciteError, ValueError) as e:
            raise CatalogError(f"catalog[{i}] ({item.get('id', '?')}): {e}") from e
    return Catalog(scripts)


def load_catalog(path: Optional[Path] = None) -> Catalog:
    path = Path(path or DEFAULT_CATALOG_PATH)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid catalog YAML: {e}") from e
    return parse_catalog(raw)


# -------- 全局单例：进程启动时加载一次 --------
_catalog_singleton: Optional[Catalog] = None

def get_catalog() -> Catalog:
    global _catalog_singleton
    if _catalog_singleton is None:
        _catalog_singleton = load_catalog()
    return _catalog_singleton
