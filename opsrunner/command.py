from __future__ import annotations
from typing import Any, List, Mapping

from .catalog import ScriptDefinition
from .settings import DRY_RUN_FLAG, PYTHON_PATH, SCRIPT_ROOT


def _quote(value: Any) -> str:
    text = str(value)
    return f'"{text}"' if " " in text else text


def build_command(
    script: ScriptDefinition,
    values: Mapping[str, Any],
    dry_run: bool,
    *,
    python_path: str = PYTHON_PATH,
    script_root: str = SCRIPT_ROOT,
) -> str:
    """
    interpreter + resolved script path, then ``flag value`` for every field
    that has an arg_flag and a truthy value (declaration order), then
    ``--dry-run`` last when requested. Never raises for any form values.
    """
    parts: List[str] = [python_path, script.resolve_script_path(values, script_root)]

    for field in script.fields:
        if field.arg_flag and values.get(field.key):
            parts.append(f"{field.arg_flag} {_quote(values[field.key])}")

    if dry_run:
        parts.append(DRY_RUN_FLAG)

    return " ".join(parts)
