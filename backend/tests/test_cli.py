"""TestForge - CLI 测试"""
import json

from typer.testing import CliRunner

from testforge.cli import app

runner = CliRunner()

SAMPLE = "Intro\n\nTest Case 1: Login\nPreconditions:\n- User exists\nSteps:\n- Enter username\nExpected Result:\n- Dashboard shown\n"


def test_parse_json(tmp_path):
    source = tmp_path / "out.txt"
    source.write_text(SAMPLE, encoding="utf-8")

    result = runner.invoke(app, ["parse", str(source), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"title": "Login", "steps": "- Enter username\n", "expectedResult": "- Dashboard shown\n"}
    ]


def test_parse_without_cases(tmp_path):
    source = tmp_path / "out.txt"
    source.write_text("nothing to see", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(source)])

    assert result.exit_code == 1


def test_normalize(tmp_path):
    source = tmp_path / "out.txt"
    source.write_text("**Test Case 1:** A\n\n\n\n* Steps:\n", encoding="utf-8")

    result = runner.invoke(app, ["normalize", str(source)])

    assert result.exit_code == 0
    assert result.stdout == "Test Case 1: A\n\nSteps:\n"


def test_render_script(tmp_path):
    source = tmp_path / "script.js"
    source.write_text("test('a', () => {});", encoding="utf-8")

    result = runner.invoke(app, ["render", str(source), "--format", "playwright"])

    assert result.exit_code == 0
    fragments = json.loads(result.stdout)
    assert fragments[0]["kind"] == "script"


def test_missing_file(tmp_path):
    result = runner.invoke(app, ["normalize", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
