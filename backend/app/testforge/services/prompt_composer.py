"""TestForge - Prompt Composer

根据用户选项拼装生成提示词（纯函数，无随机性）。

拼装顺序：
    任务说明 -> 知识库 -> 点赞示例 -> 应用上下文 -> 场景类型
    -> 数据变体 -> 复杂度 -> 输出格式
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from testforge.services.text_structuring import SCRIPT_FORMAT


class TestType(str, Enum):
    """测试类型（未知值回落到 DEFAULT）"""
    FUNCTIONAL = "Functional"
    REGRESSION = "Regression"
    INTEGRATION = "Integration"
    SMOKE = "Smoke"
    DEFAULT = "Default"

    __test__ = False

    @classmethod
    def from_value(cls, value: str) -> "TestType":
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


SCENARIO_INSTRUCTIONS: dict[TestType, str] = {
    TestType.FUNCTIONAL: (
        "Generate a comprehensive mix of both positive (happy path) and negative "
        "(error, invalid input, edge case) test cases."
    ),
    TestType.REGRESSION: (
        "Focus on a mix of core positive paths and potential areas of failure to "
        "ensure existing functionality hasn't broken."
    ),
    TestType.INTEGRATION: (
        "Focus on how modules interact, including positive cases where data flows "
        "correctly and negative cases where one module sends bad data."
    ),
    TestType.SMOKE: (
        "This is a Smoke Test. Generate ONLY the most critical, high-level positive "
        "'happy path' test cases to ensure basic functionality is working."
    ),
    TestType.DEFAULT: "Generate a standard set of positive test cases.",
}

# 档位 -> 用例数量区间 / 单个用例复杂度描述（3 及以上均取最后一档）
TEST_COUNT_RANGES: dict[int, str] = {1: "1–5", 2: "5–20", 3: "20+"}
COMPLEXITY_DESCRIPTIONS: dict[int, str] = {
    1: "short and simple (1–5 steps)",
    2: "moderate in length (5–20 steps)",
    3: "detailed and complex (20+ steps)",
}

PLAYWRIGHT_FORMAT_INSTRUCTION = """
You are an expert Playwright automation engineer. Your task is to generate a complete, production-quality Playwright test script. Follow these rules STRICTLY:
1.  **Output Format:** - Respond with ONLY the raw Playwright script code in JavaScript. - DO NOT wrap the code in markdown blocks like ```javascript.
2.  **Test Structure:** - Use the official Playwright test runner format. - Start with `import { test, expect } from '@playwright/test';` - Use `test.describe()` and `test.beforeEach()`.
3.  **Locators (CRITICAL):** - You MUST use modern, user-facing locators in this priority: `page.getByRole()`, `page.getByLabel()`, `page.getByPlaceholder()`, `page.getByText()`. - AVOID CSS selectors.
4.  **Assertions:** - You MUST use web-first assertions like `await expect(page).toHaveURL(...)`."""

TEXT_FORMAT_INSTRUCTION = """
You are an expert QA engineer. Follow these rules STRICTLY for formatting your response:

1.  **Do NOT use a "Common Preconditions" section.** Every test case must list all of its own preconditions, even if they are repetitive.
2.  **Minimums:** Each individual test case MUST have a minimum of two specific preconditions and a minimum of two distinct expected result verification points.
3.  **Strict Format:** Adhere to this format exactly. Do not add any introductory sentences or extra headers like "*Test Cases:*".

Test Case 1: [A concise title]
Preconditions:
- [Precondition 1]
- [Precondition 2]
Steps:
- [Step 1]
- [Step 2]
Expected Result:
- [Verification point 1]
- [Verification point 2]"""

REFINE_PROMPT_TEMPLATE = """You are a test case refiner. Your task is to modify an existing test case based on a user's instruction.
Respond with ONLY the complete, raw, updated test case text. Do not add any extra explanations or markdown formatting.

--- ORIGINAL TEST CASE ---
{original}

--- USER'S INSTRUCTION ---
{instruction}

--- REFINED TEST CASE ---
"""


@dataclass(frozen=True)
class PromptConfig:
    """一次生成所需的全部输入"""
    input_text: str
    test_type: str = TestType.FUNCTIONAL.value
    complexity: int = 2
    test_count: int = 2
    output_format: str = "text"
    data_categories: tuple[str, ...] = ()
    app_code: str | None = None
    app_docs: str | None = None
    knowledge_base: str = ""
    liked_examples: tuple[str, ...] = field(default=())


def count_range(level: int) -> str:
    return TEST_COUNT_RANGES.get(level, TEST_COUNT_RANGES[3])


def complexity_description(level: int) -> str:
    return COMPLEXITY_DESCRIPTIONS.get(level, COMPLEXITY_DESCRIPTIONS[3])


def _knowledge_base_block(content: str) -> str:
    if not content:
        return ""
    return (
        "Use the following permanent knowledge base as the primary source of truth for context, "
        "standards, and requirements:\n\n"
        f"--- KNOWLEDGE BASE ---\n{content}\n\n--- END KNOWLEDGE BASE ---\n\n"
    )


def _liked_examples_block(examples: tuple[str, ...]) -> str:
    if not examples:
        return ""
    block = "Based on these user-liked examples, generate test cases in a similar style and quality:\n\n"
    for number, example in enumerate(examples, 1):
        block += f"--- LIKED EXAMPLE {number} ---\n{example}\n\n"
    return block


def _context_block(app_docs: str | None, app_code: str | None) -> str:
    if not (app_code or app_docs):
        return ""
    return (
        "Use the following application context.\n\n"
        f"--- APP DOCS ---\n{app_docs or ''}\n\n--- APP CODE ---\n{app_code or ''}\n\n"
    )


def _data_variation_block(categories: tuple[str, ...]) -> str:
    if not categories:
        return ""
    return (
        "Additionally, ensure the generated test cases specifically cover the following "
        f"data scenarios: {', '.join(categories)}.\n\n"
    )


def format_instruction(output_format: str) -> str:
    if output_format == SCRIPT_FORMAT:
        return PLAYWRIGHT_FORMAT_INSTRUCTION
    return TEXT_FORMAT_INSTRUCTION


def compose_prompt(config: PromptConfig) -> str:
    """拼装生成提示词"""
    scenario = SCENARIO_INSTRUCTIONS[TestType.from_value(config.test_type)]
    return (
        f"You are an expert QA engineer. Generate {count_range(config.test_count)} "
        f"{config.test_type} test cases for:\n{config.input_text}\n\n"
        f"{_knowledge_base_block(config.knowledge_base)}"
        f"{_liked_examples_block(config.liked_examples)}"
        f"{_context_block(config.app_docs, config.app_code)}"
        f"{scenario}\n\n"
        f"{_data_variation_block(config.data_categories)}"
        f"Each test case should be {complexity_description(config.complexity)}.\n\n"
        f"{format_instruction(config.output_format)}"
    )


def compose_refine_prompt(original: str, instruction: str) -> str:
    """拼装用例优化提示词"""
    return REFINE_PROMPT_TEMPLATE.format(original=original, instruction=instruction)
