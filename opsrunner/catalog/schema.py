from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..settings import SCRIPT_ROOT


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    BOOLEAN = "boolean"
    TEXTAREA = "textarea"


class DangerLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Category(str, Enum):
    JIRA = "Jira"
    DATABASE = "Database"
    INFRASTRUCTURE = "Infrastructure"
    USER_MANAGEMENT = "User Management"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    type: FieldType
    default: Optional[Union[bool, str]] = None
    arg_flag: Optional[str] = None   # 为空 = 仅用于界面/逻辑，不会拼进命令
    required: bool = False
    helper_text: Optional[str] = None
    placeholder: Optional[str] = None
    options: Optional[Tuple[str, ...]] = None

    @property
    def is_boolean(self) -> bool:
        return self.type is FieldType.BOOLEAN


@dataclass(frozen=True)
class PathRule:
    """
    Picks the script variant from one boolean form value.

    Total over any FormValues: a missing or falsy ``flag`` selects ``when_false``.
    """
    flag: str
    when_true: str
    when_false: str

    def resolve(self, values: Mapping[str, Any], script_root: str = SCRIPT_ROOT) -> str:
        name = self.when_true if values.get(self.flag) else self.when_false
        return f"{script_root.rstrip('/')}/{name}"


@dataclass(frozen=True)
class ScriptDefinition:
    id: str
    name: str
    description: str
    category: Category
    icon: str
    danger_level: DangerLevel
    fields: Tuple[FieldSpec, ...]
    path_rule: PathRule

    def resolve_script_path(self, values: Mapping[str, Any], script_root: str = SCRIPT_ROOT) -> str:
        return self.path_rule.resolve(values, script_root)

    def defaults(self) -> Dict[str, Union[bool, str]]:
        return {f.key: f.default for f in self.fields if f.default is not None}

    def field(self, key: str) -> Optional[FieldSpec]:
        return next((f for f in self.fields if f.key == key), None)

    @property
    def is_risky(self) -> bool:
        return self.danger_level in (DangerLevel.MEDIUM, DangerLevel.HIGH)

    @property
    def is_high_risk(self) -> bool:
        return self.danger_level is DangerLevel.HIGH

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "icon": self.icon,
            "danger_level": self.danger_level.value,
        }
