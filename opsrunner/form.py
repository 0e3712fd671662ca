from __future__ import annotations
from typing import Any, Dict, List, Mapping, Union

from .catalog import FieldSpec, ScriptDefinition

FormValue = Union[str, bool]


class FormError(ValueError):
    pass


def is_empty(value: Any) -> bool:
    """Booleans are never empty; everything else is empty once trimmed to ''."""
    if isinstance(value, bool):
        return False
    if value is None:
        return True
    return len(str(value).strip()) == 0


def missing_required(script: ScriptDefinition, values: Mapping[str, Any]) -> List[str]:
    return [f.key for f in script.fields if f.required and is_empty(values.get(f.key))]


def is_valid(script: ScriptDefinition, values: Mapping[str, Any]) -> bool:
    return not missing_required(script, values)


def coerce_value(field: FieldSpec, value: Any) -> FormValue:
    if field.is_boolean:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    if value is None:
        return ""
    return str(value)


class FormState:
    """
    Form values for the currently selected script.

    Keys are always a subset of the script's field keys; selecting another
    script replaces the values with that script's declared defaults.
    """

    def __init__(self, script: ScriptDefinition):
        self.script = script
        self.values: Dict[str, FormValue] = script.defaults()

    def select(self, script: ScriptDefinition) -> None:
        self.script = script
        self.values = script.defaults()

    def set_value(self, key: str, value: Any) -> FormValue:
        field = self.script.field(key)
        if field is None:
            raise FormError(f"'{key}' is not a field of {self.script.id}")
        coerced = coerce_value(field, value)
        self.values[key] = coerced
        return coerced

    @property
    def is_valid(self) -> bool:
        return is_valid(self.script, self.values)

    def missing_required(self) -> List[str]:
        return missing_required(self.script, self.values)

    def controls(self) -> List[Dict[str, Any]]:
        """One control description per field, in declaration order."""
        out: List[Dict[str, Any]] = []
        for f in self.script.fields:
            value = self.values.get(f.key)
            if value is None:
                value = False if f.is_boolean else ""
            out.append({
                "key": f.key,
                "label": f.label,
                "type": f.type.value,
                "value": value,
                "required": f.required,
                "helper_text": f.helper_text,
                "placeholder": f.placeholder,
                "options": list(f.options or ()),
            })
        return out
