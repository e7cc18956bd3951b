"""TestForge - Text Structuring

生成文本 <-> 结构化用例 / 展示片段
"""
from testforge.services.text_structuring.cleanup import normalize_output
from testforge.services.text_structuring.parser import (
    CASE_TITLE_RE,
    TestCaseRecord,
    find_first_case,
    parse_test_cases,
    split_intro,
)
from testforge.services.text_structuring.renderer import (
    SCRIPT_FORMAT,
    fragments_to_html,
    render_case_lines,
    render_output,
)

__all__ = [
    "CASE_TITLE_RE",
    "SCRIPT_FORMAT",
    "TestCaseRecord",
    "find_first_case",
    "fragments_to_html",
    "normalize_output",
    "parse_test_cases",
    "render_case_lines",
    "render_output",
    "split_intro",
]
