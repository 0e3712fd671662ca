#!/usr/bin/env python3
from __future__ import annotations

from opsrunner.catalog import get_catalog
from opsrunner.executor import Orchestrator
from opsrunner.presenter import style_for


def main() -> None:
    """
    手动冒烟测试：后端不可用时走 LLM 模拟输出。
    运行方式（需要 .env 中配置 API_KEY）：
        python -m opsrunner.executor.try_simulation
    """
    script = get_catalog().get("jira-close-bulk")
    values = {"jql": "project = OPS AND status = \"Ready to Close\"", "disable_zabbix": True}

    print(f"[Test] 🧪 Dry-running {script.id} ...")
    outcome = Orchestrator().execute(script, values, dry_run=True)

    print(f"\n=== {outcome.source.upper()} | {outcome.status.value} ===")
    for entry in outcome.entries:
        print(f"[{entry.level.value:7s}|{style_for(entry):9s}] {entry.message}")


if __name__ == "__main__":
    main()
