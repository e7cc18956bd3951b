"""TestForge - Output Cleanup

对模型返回的纯文本用例做规范化：
- 去掉 ** 强调标记
- 去掉行首的列表 / 标题符号（* • + #）
- 行首 "-" 统一为 "- "
- 连续空行折叠为一个空行
- 去掉首尾空白

normalize_output(normalize_output(x)) == normalize_output(x)
"""
from __future__ import annotations

import re

_EMPHASIS_RE = re.compile(r"\*\*")
_LEADING_MARKER_RE = re.compile(r"^[^\S\n]*(?:(?:[*•+]|#+)[^\S\n]*)+")
_DASH_BULLET_RE = re.compile(r"^[^\S\n]*-[^\S\n]?")


def _clean_line(line: str) -> str:
    line = _LEADING_MARKER_RE.sub("", line)
    line = _DASH_BULLET_RE.sub("- ", line)
    return line.rstrip()


def normalize_output(text: str) -> str:
    """规范化生成的用例文本（脚本格式不应调用）"""
    text = _EMPHASIS_RE.sub("", text)

    lines: list[str] = []
    previous_blank = False
    for raw_line in text.splitlines():
        line = _clean_line(raw_line)
        blank = line == ""
        if blank and previous_blank:
            continue
        lines.append(line)
        previous_blank = blank

    return "\n".join(lines).strip()
