"""TestForge - Sandbox Execution

为脚本执行提供进程级隔离：

Features:
- 硬超时（asyncio.wait_for）
- 环境变量清洗
- 空命令拦截

Usage:
    config = SandboxConfig(timeout_s=60)
    result = await run_in_sandbox(["npx", "playwright", "test", path], config=config)
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
import time
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SandboxConfig(BaseModel):
    """沙箱配置"""

    timeout_s: int = Field(default=300, ge=1, description="硬超时（秒）")
    env_whitelist: list[str] = Field(
        default_factory=lambda: [
            # Core system (Unix/Mac)
            "PATH", "HOME", "USER", "SHELL", "TERM", "TMPDIR", "TMP", "TEMP",
            # Windows system
            "SYSTEMROOT", "WINDIR", "COMSPEC", "PATHEXT", "USERPROFILE",
            "APPDATA", "LOCALAPPDATA", "PROGRAMFILES",
            # Locale
            "LANG", "LC_*", "LANGUAGE",
            # CI/CD environments
            "CI",
            # Node / Playwright / Browser
            "NODE_*", "NPM_*", "PLAYWRIGHT_*", "DISPLAY", "XDG_*", "DBUS_*",
        ],
        description="环境变量白名单（支持 glob）",
    )


class SandboxResult(BaseModel):
    """沙箱执行结果"""

    exit_code: int = Field(description="进程退出码")
    stdout: str = Field(default="", description="标准输出")
    stderr: str = Field(default="", description="标准错误")
    elapsed_ms: int = Field(default=0, description="执行耗时（毫秒）")
    killed_by_timeout: bool = Field(default=False, description="是否因超时被杀死")
    sandbox_blocked: bool = Field(default=False, description="是否被沙箱阻止")
    block_reason: str | None = Field(default=None, description="阻止原因")


def _match_glob_pattern(value: str, patterns: list[str]) -> bool:
    """检查值是否匹配任一 glob 模式"""
    for pattern in patterns:
        if fnmatch.fnmatch(value, pattern):
            return True
    return False


def _sanitize_env(whitelist: list[str]) -> dict[str, str]:
    """清洗环境变量，只保留白名单中的变量"""
    return {key: value for key, value in os.environ.items() if _match_glob_pattern(key, whitelist)}


def _validate_command(cmd: list[str]) -> tuple[bool, str | None]:
    """验证命令是否可执行（命令来自 PLAYWRIGHT_CMD 配置，为空时拒绝）

    Returns:
        (is_allowed, block_reason)
    """
    if not cmd:
        return False, "Empty command"
    return True, None


async def run_in_sandbox(
    cmd: list[str],
    *,
    config: SandboxConfig | None = None,
    cwd: Path | str | None = None,
) -> SandboxResult:
    """在受限环境中执行命令

    Args:
        cmd: 命令参数列表
        config: 沙箱配置（默认使用 SandboxConfig()）
        cwd: 工作目录

    Returns:
        SandboxResult: 执行结果（命令不存在 / 被阻止时 exit_code 为 -1）
    """
    if config is None:
        config = SandboxConfig()

    start_time = time.monotonic()

    allowed, block_reason = _validate_command(cmd)
    if not allowed:
        logger.warning(f"Sandbox blocked command: {cmd}, reason: {block_reason}")
        return SandboxResult(
            exit_code=-1,
            sandbox_blocked=True,
            block_reason=block_reason,
            stderr=block_reason or "Command blocked",
        )

    sanitized_env = _sanitize_env(config.env_whitelist)

    logger.info(f"Sandbox executing: {' '.join(cmd[:5])}{'...' if len(cmd) > 5 else ''}")

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=sanitized_env,
        )
    except FileNotFoundError:
        return SandboxResult(
            exit_code=-1,
            stderr=f"Command not found: {cmd[0]}",
            elapsed_ms=int((time.monotonic() - start_time) * 1000),
        )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(),
            timeout=config.timeout_s,
        )
        killed_by_timeout = False
    except asyncio.TimeoutError:
        logger.warning(f"Sandbox timeout after {config.timeout_s}s, killing process")
        process.kill()
        await process.wait()
        killed_by_timeout = True
        stdout_bytes = b""
        stderr_bytes = f"Process killed by sandbox timeout ({config.timeout_s}s)".encode()

    if killed_by_timeout:
        exit_code = -1
    else:
        exit_code = process.returncode or 0

    return SandboxResult(
        exit_code=exit_code,
        stdout=stdout_bytes.decode("utf-8", errors="replace"),
        stderr=stderr_bytes.decode("utf-8", errors="replace"),
        elapsed_ms=int((time.monotonic() - start_time) * 1000),
        killed_by_timeout=killed_by_timeout,
    )
