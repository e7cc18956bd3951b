"""TestForge - 文本结构化测试

覆盖：规范化（幂等）、解析（前置条件丢弃）、渲染片段与 HTML 输出
"""
import pytest

from testforge.models.render_schemas import EntryKind, FragmentKind
from testforge.services.text_structuring import (
    find_first_case,
    fragments_to_html,
    normalize_output,
    parse_test_cases,
    render_output,
    split_intro,
)

LOGIN_CASE = (
    "Test Case 1: Login\n"
    "Preconditions:\n"
    "- User exists\n"
    "Steps:\n"
    "- Enter username\n"
    "- Enter password\n"
    "Expected Result:\n"
    "- Dashboard shown"
)

THREE_CASES = """Here are your test cases.

Test Case 1: Login
Steps:
- Open the login page
Expected Result:
- Form is visible

Test Case 2: Logout
Steps:
- Click logout
Expected Result:
- Session ends

test case 3 Reset password
Steps:
- Request reset
Expected Result:
- Email sent"""


class TestNormalizeOutput:
    """规范化测试"""

    def test_strips_markers_and_collapses_blank_lines(self):
        raw = "**Test Case 1:** Login\n* Preconditions:\n-User exists\n\n\n\n# Steps:\n  - Enter   \n"
        assert normalize_output(raw) == (
            "Test Case 1: Login\nPreconditions:\n- User exists\n\nSteps:\n- Enter"
        )

    def test_trims_surrounding_whitespace(self):
        assert normalize_output("\n\n  Test Case 1: A  \n\n") == "Test Case 1: A"

    def test_bullet_variants(self):
        raw = "• first\n+ second\n## Heading\n*** third"
        assert normalize_output(raw) == "first\nsecond\nHeading\nthird"

    def test_unicode_leading_whitespace(self):
        """行首的不换行空格 / 全角空格后的标记同样去掉"""
        raw = "\xa0* Test Case 1: Login\n\u3000## Steps:\n\xa0-Click login"
        assert normalize_output(raw) == "Test Case 1: Login\nSteps:\n- Click login"

    @pytest.mark.parametrize(
        "raw",
        [
            THREE_CASES,
            "**bold**\n\n\n- item\n-item\n--- rule ---\n",
            "# Title\n* * nested\n\n\n\n\nend   ",
            "",
            "\xa0* Test Case 1: Login",
            "\u3000# Steps:\n\u3000-\xa0Click login\n\xa0\n\xa0\n- Done",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_output(raw)
        assert normalize_output(once) == once


class TestParseTestCases:
    """解析测试"""

    def test_login_example(self):
        records = parse_test_cases(LOGIN_CASE)
        assert len(records) == 1
        record = records[0]
        assert record.title == "Login"
        assert record.steps == "- Enter username\n- Enter password\n"
        assert record.expected_result == "- Dashboard shown\n"

    def test_preconditions_are_not_accumulated(self):
        """前置条件只切换状态，内容不进入记录"""
        record = parse_test_cases(LOGIN_CASE)[0]
        assert record.preconditions == ""
        assert "User exists" not in record.steps
        assert "User exists" not in record.expected_result

    def test_three_blocks_in_order(self):
        records = parse_test_cases(THREE_CASES)
        assert [r.title for r in records] == ["Login", "Logout", "Reset password"]
        assert records[1].steps == "- Click logout\n"
        assert records[2].expected_result == "- Email sent\n"

    def test_no_marker_returns_empty(self):
        assert parse_test_cases("Sorry, I cannot help with that.") == []

    def test_blocks_without_marker_are_skipped(self):
        text = (
            "Test Case 1: A\nSteps:\n- step a\n\n"
            "Notes:\n- stray line\n\n"
            "Test Case 2: B\nSteps:\n- step b"
        )
        records = parse_test_cases(text)
        assert [r.title for r in records] == ["A", "B"]
        assert "stray" not in records[0].steps

    def test_non_dash_lines_ignored(self):
        text = "Test Case 1: Numbered\nSteps:\n1. Click\n- Type\nExpected Result:\nshown"
        record = parse_test_cases(text)[0]
        assert record.steps == "- Type\n"
        assert record.expected_result == ""

    def test_section_keywords_case_insensitive(self):
        text = "TEST CASE 7: Upper\nSTEPS:\n- go\nEXPECTED RESULT:\n- ok"
        record = parse_test_cases(text)[0]
        assert record.title == "Upper"
        assert record.steps == "- go\n"
        assert record.expected_result == "- ok\n"

    def test_split_intro(self):
        intro, body = split_intro(THREE_CASES)
        assert intro == "Here are your test cases.\n\n"
        assert body.startswith("Test Case 1: Login")
        assert find_first_case("nothing here") == -1
        assert split_intro("nothing here") == ("nothing here", "")


class TestRenderOutput:
    """渲染测试"""

    def test_script_is_single_block(self):
        script = "import { test } from '@playwright/test';\n\ntest('Test Case 1', async () => {});"
        fragments = render_output(script, "playwright")
        assert len(fragments) == 1
        assert fragments[0].kind == FragmentKind.SCRIPT
        assert fragments[0].text == script
        assert fragments[0].index == 0
        assert fragments[0].feedback_enabled is True

    def test_no_marker_is_plain_without_feedback(self):
        fragments = render_output("Just some prose.\nMore prose.")
        assert len(fragments) == 1
        assert fragments[0].kind == FragmentKind.PLAIN
        assert fragments[0].text == "Just some prose.\nMore prose."
        assert fragments[0].feedback_enabled is False

    def test_intro_and_cases(self):
        raw = (
            "Here are **your** cases\n\n"
            "Test Case 1: A\nPreconditions:\n- p\nSteps: - click\n\n"
            "Test Case 2: B\nExpected Result:\n* shown"
        )
        fragments = render_output(raw)

        assert [f.kind for f in fragments] == [FragmentKind.INTRO, FragmentKind.CASE, FragmentKind.CASE]
        assert fragments[0].entries[0].text == "Here are your cases"
        assert fragments[0].feedback_enabled is False

        first = fragments[1]
        assert first.index == 0
        assert first.feedback_enabled is True
        assert [e.kind for e in first.entries] == [
            EntryKind.HEADING,
            EntryKind.SECTION,
            EntryKind.TEXT,
            EntryKind.SECTION,
        ]
        assert first.entries[0].text == "Test Case 1: A"
        assert first.entries[1].label == "Preconditions:"
        assert first.entries[2].text == "p"
        assert first.entries[3].label == "Steps:"
        assert first.entries[3].text == "click"

        second = fragments[2]
        assert second.index == 1
        assert second.entries[-1].text == "shown"

    def test_no_intro_fragment_when_text_starts_with_marker(self):
        fragments = render_output(LOGIN_CASE)
        assert [f.kind for f in fragments] == [FragmentKind.CASE]

    def test_html_escapes_content(self):
        html = fragments_to_html(render_output("Test Case 1: <script>alert(1)</script>\n- <b>x</b>"))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert 'id="test-case-0"' in html

    def test_html_script_block(self):
        html = fragments_to_html(render_output("const a = 1 < 2;", "playwright"))
        assert '<code class="language-js">const a = 1 &lt; 2;</code>' in html
