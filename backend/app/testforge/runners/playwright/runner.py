"""TestForge - Playwright Script Runner

职责：
- 把生成的 Playwright 脚本写入唯一命名的临时文件
- 调用 Playwright CLI（JSON reporter）执行
- 汇总通过状态与日志
- 无论成功失败都删除临时文件
"""

from __future__ import annotations

import json
import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from uuid import uuid4

from testforge.core.config import Settings
from testforge.execution.sandbox import SandboxConfig, run_in_sandbox

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    passed: bool
    logs: list[str] = field(default_factory=list)


def _collect_spec_lines(suites: list[dict[str, Any]], lines: list[str]) -> None:
    """递归收集每个 spec 的结果行"""
    for suite in suites or []:
        for spec in suite.get("specs", []):
            mark = "✅" if spec.get("ok") else "❌"
            lines.append(f"{mark} {spec.get('title', '')}")
            for test in spec.get("tests", []):
                for result in test.get("results", []):
                    error = result.get("error") or {}
                    if error.get("message"):
                        lines.append(f"   {error['message']}")
        _collect_spec_lines(suite.get("suites", []), lines)


def summarize_report(report: dict[str, Any]) -> tuple[bool, list[str]]:
    """解析 Playwright JSON 报告 -> (是否全部通过, 日志行)"""
    stats = report.get("stats") or {}
    unexpected = int(stats.get("unexpected", 0))
    lines: list[str] = [
        f"Tests: expected={stats.get('expected', 0)} unexpected={unexpected} "
        f"flaky={stats.get('flaky', 0)} skipped={stats.get('skipped', 0)}"
    ]
    _collect_spec_lines(report.get("suites", []), lines)
    for error in report.get("errors", []):
        lines.append(error.get("message", str(error)))
    lines.append(f"Raw report: {json.dumps(report, indent=2)}")
    return unexpected == 0, lines


class ScriptRunner:
    """Playwright 脚本执行器"""

    def __init__(self, temp_dir: str, command: str, timeout_s: int = 300, cwd: str | None = None):
        self.temp_dir = Path(temp_dir)
        self.command = shlex.split(command)
        self.timeout_s = timeout_s
        self.cwd = cwd

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScriptRunner":
        return cls(
            temp_dir=settings.TEMP_TEST_DIR,
            command=settings.PLAYWRIGHT_CMD,
            timeout_s=settings.PLAYWRIGHT_TIMEOUT_S,
            cwd=settings.PLAYWRIGHT_CWD,
        )

    def new_script_path(self) -> Path:
        """每次执行使用独立的文件名"""
        return self.temp_dir / f"temp-test-{uuid4().hex}.spec.js"

    async def run(self, script_content: str) -> RunResult:
        script_path = self.new_script_path()
        try:
            self.temp_dir.mkdir(parents=True, exist_ok=True)
            script_path.write_text(script_content, encoding="utf-8")

            cmd = [*self.command, str(script_path), "--reporter=json"]
            result = await run_in_sandbox(
                cmd,
                config=SandboxConfig(timeout_s=self.timeout_s),
                cwd=self.cwd,
            )

            try:
                report = json.loads(result.stdout)
            except json.JSONDecodeError:
                logger.warning(f"Playwright 未输出 JSON 报告 (exit={result.exit_code})")
                message = f"Exec error: exit code {result.exit_code}\nStderr: {result.stderr}"
                return RunResult(passed=False, logs=[message])

            passed, logs = summarize_report(report)
            return RunResult(passed=passed and result.exit_code == 0, logs=logs)
        except OSError as e:
            logger.exception("脚本执行失败")
            return RunResult(passed=False, logs=[str(e)])
        finally:
            script_path.unlink(missing_ok=True)
