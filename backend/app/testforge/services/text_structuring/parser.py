"""TestForge - Test Case Parser

把模型返回的自由文本拆成结构化用例记录。

文本格式（宽松）：
    Test Case 1: 标题
    Preconditions:
    - ...
    Steps:
    - ...
    Expected Result:
    - ...

用例之间以空行分隔。找不到 "Test Case N" 标记时返回空列表，由调用方决定如何处理。
"""
from __future__ import annotations

import re
from dataclasses import dataclass

# 用例标题标记："Test Case <数字>"，可带冒号，大小写不敏感
CASE_TITLE_RE = re.compile(r"Test Case\s+\d+[:]?", re.IGNORECASE)
_TITLE_PREFIX_RE = re.compile(r"Test Case\s+\d+:?\s*", re.IGNORECASE)
_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")

SECTION_PRECONDITIONS = "preconditions"
SECTION_STEPS = "steps"
SECTION_EXPECTED = "expected"

_SECTION_PREFIXES = (
    ("preconditions:", SECTION_PRECONDITIONS),
    ("steps:", SECTION_STEPS),
    ("expected result:", SECTION_EXPECTED),
)


@dataclass
class TestCaseRecord:
    """结构化用例（只能由文本解析得到）"""
    title: str
    steps: str = ""
    expected_result: str = ""
    # 前置条件只用于切换状态，内容不进入记录
    preconditions: str = ""

    __test__ = False  # 避免被 pytest 当作测试类收集


def find_first_case(text: str) -> int:
    """返回第一个用例标记的位置，没有则返回 -1"""
    match = CASE_TITLE_RE.search(text)
    return match.start() if match else -1


def split_intro(text: str) -> tuple[str, str]:
    """拆分为 (标记之前的简介, 从第一个标记开始的正文)；无标记时正文为空"""
    index = find_first_case(text)
    if index == -1:
        return text, ""
    return text[:index], text[index:]


def _parse_block(block: str) -> TestCaseRecord:
    lines = block.split("\n")
    title = _TITLE_PREFIX_RE.sub("", lines[0], count=1).strip()
    record = TestCaseRecord(title=title)

    section = ""
    for raw_line in lines[1:]:
        line = raw_line.strip()
        lowered = line.lower()
        for prefix, name in _SECTION_PREFIXES:
            if lowered.startswith(prefix):
                section = name
                break
        else:
            if line.startswith("-"):
                if section == SECTION_STEPS:
                    record.steps += line + "\n"
                elif section == SECTION_EXPECTED:
                    record.expected_result += line + "\n"
    return record


def parse_test_cases(text: str) -> list[TestCaseRecord]:
    """解析自由文本，按出现顺序返回用例记录"""
    _, body = split_intro(text)
    if not body:
        return []

    records: list[TestCaseRecord] = []
    for block in _BLOCK_SEPARATOR_RE.split(body.strip()):
        if not block.lower().startswith("test case"):
            continue
        records.append(_parse_block(block))
    return records
