"""TestForge - Prompt Composer 测试"""
from testforge.services.prompt_composer import (
    PLAYWRIGHT_FORMAT_INSTRUCTION,
    SCENARIO_INSTRUCTIONS,
    TEXT_FORMAT_INSTRUCTION,
    PromptConfig,
    TestType,
    complexity_description,
    compose_prompt,
    compose_refine_prompt,
    count_range,
)


def _full_config(**overrides) -> PromptConfig:
    values = dict(
        input_text="As a user I can log in",
        test_type="Regression",
        complexity=1,
        test_count=3,
        output_format="text",
        data_categories=("boundary", "invalid"),
        app_code="def login(): ...",
        app_docs="Login docs",
        knowledge_base="Company QA standards",
        liked_examples=("Test Case 1: Liked",),
    )
    values.update(overrides)
    return PromptConfig(**values)


class TestLookupTables:

    def test_count_ranges(self):
        assert count_range(1) == "1–5"
        assert count_range(2) == "5–20"
        assert count_range(3) == "20+"

    def test_complexity_descriptions(self):
        assert complexity_description(1) == "short and simple (1–5 steps)"
        assert complexity_description(3) == "detailed and complex (20+ steps)"

    def test_out_of_range_uses_last_tier(self):
        assert count_range(9) == "20+"
        assert complexity_description(0) == "detailed and complex (20+ steps)"

    def test_unknown_test_type_falls_back(self):
        assert TestType.from_value("Exploratory") is TestType.DEFAULT
        assert TestType.from_value("Smoke") is TestType.SMOKE
        assert set(SCENARIO_INSTRUCTIONS) == set(TestType)


class TestComposePrompt:

    def test_deterministic(self):
        assert compose_prompt(_full_config()) == compose_prompt(_full_config())

    def test_block_order(self):
        prompt = compose_prompt(_full_config())
        markers = [
            "Generate 20+ Regression test cases for:\nAs a user I can log in",
            "--- KNOWLEDGE BASE ---\nCompany QA standards",
            "--- LIKED EXAMPLE 1 ---\nTest Case 1: Liked",
            "--- APP DOCS ---\nLogin docs",
            "--- APP CODE ---\ndef login(): ...",
            SCENARIO_INSTRUCTIONS[TestType.REGRESSION],
            "data scenarios: boundary, invalid.",
            "Each test case should be short and simple (1–5 steps).",
            TEXT_FORMAT_INSTRUCTION,
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)
        assert prompt.endswith(TEXT_FORMAT_INSTRUCTION)

    def test_optional_blocks_omitted(self):
        prompt = compose_prompt(PromptConfig(input_text="Checkout"))
        assert "KNOWLEDGE BASE" not in prompt
        assert "LIKED EXAMPLE" not in prompt
        assert "APP DOCS" not in prompt
        assert "data scenarios" not in prompt
        assert SCENARIO_INSTRUCTIONS[TestType.FUNCTIONAL] in prompt
        assert "Generate 5–20 Functional test cases" in prompt

    def test_liked_examples_numbered(self):
        prompt = compose_prompt(_full_config(liked_examples=("first", "second")))
        assert prompt.index("--- LIKED EXAMPLE 1 ---\nfirst") < prompt.index("--- LIKED EXAMPLE 2 ---\nsecond")

    def test_unknown_type_uses_default_scenario(self):
        prompt = compose_prompt(_full_config(test_type="Exploratory"))
        assert "Generate 20+ Exploratory test cases" in prompt
        assert SCENARIO_INSTRUCTIONS[TestType.DEFAULT] in prompt

    def test_script_format_instruction(self):
        prompt = compose_prompt(_full_config(output_format="playwright"))
        assert prompt.endswith(PLAYWRIGHT_FORMAT_INSTRUCTION)
        assert TEXT_FORMAT_INSTRUCTION not in prompt

    def test_context_with_docs_only(self):
        prompt = compose_prompt(_full_config(app_code=None))
        assert "--- APP DOCS ---\nLogin docs\n\n--- APP CODE ---\n\n" in prompt


def test_refine_prompt():
    prompt = compose_refine_prompt("Test Case 1: Login", "Add a negative case")
    assert "--- ORIGINAL TEST CASE ---\nTest Case 1: Login" in prompt
    assert "--- USER'S INSTRUCTION ---\nAdd a negative case" in prompt
    assert prompt.endswith("--- REFINED TEST CASE ---\n")
