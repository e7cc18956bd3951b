from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich import print
from rich.table import Table

from testforge.core.config import load_settings
from testforge.services.text_structuring import (
    fragments_to_html,
    normalize_output,
    parse_test_cases,
    render_output,
)

app = typer.Typer(add_completion=False, help="TestForge CLI")


# ============================================================
# 小工具：日志
# ============================================================
def _info(msg: str) -> None:
    print(f"[cyan][TF][/cyan] {msg}")


def _ok(msg: str) -> None:
    print(f"[green][TF][OK][/green] {msg}")


def _fail(msg: str, code: int = 1) -> NoReturn:
    print(f"[red][TF][FAIL][/red] {msg}")
    raise typer.Exit(code)


def _read_file(path: Path) -> str:
    if not path.is_file():
        _fail(f"文件不存在: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        _fail(f"仅支持 UTF-8 文本: {path}")


# ============================================================
# 命令
# ============================================================
@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="监听地址"),
    port: Optional[int] = typer.Option(None, help="端口（默认读取 PORT）"),
    reload: bool = typer.Option(False, help="开发模式热重载"),
) -> None:
    """启动 API 服务"""
    import uvicorn

    settings = load_settings()
    port = port or settings.PORT
    _info(f"启动服务: http://{host}:{port}")
    uvicorn.run("testforge.main:create_app", factory=True, host=host, port=port, reload=reload)


@app.command("init-db")
def init_db() -> None:
    """创建数据库表"""
    from testforge.database.config import configure_database

    settings = load_settings()
    configure_database(settings)
    _ok(f"数据库已初始化: {settings.DATABASE_URL}")


@app.command()
def parse(
    file: Path = typer.Argument(..., help="生成结果文本文件"),
    as_json: bool = typer.Option(False, "--json", help="输出 JSON"),
) -> None:
    """把用例文本解析为结构化记录"""
    records = parse_test_cases(_read_file(file))
    if not records:
        _fail("未解析到任何用例")

    if as_json:
        typer.echo(json.dumps(
            [
                {"title": r.title, "steps": r.steps, "expectedResult": r.expected_result}
                for r in records
            ],
            ensure_ascii=False,
            indent=2,
        ))
        return

    table = Table(title=f"{len(records)} test case(s)")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Steps")
    table.add_column("Expected Result")
    for number, record in enumerate(records, 1):
        table.add_row(str(number), record.title, record.steps.strip(), record.expected_result.strip())
    print(table)


@app.command()
def normalize(file: Path = typer.Argument(..., help="生成结果文本文件")) -> None:
    """规范化用例文本并输出"""
    typer.echo(normalize_output(_read_file(file)))


@app.command()
def render(
    file: Path = typer.Argument(..., help="生成结果文本文件"),
    output_format: str = typer.Option("text", "--format", help="text / playwright"),
    html: bool = typer.Option(False, "--html", help="输出 HTML 而不是 JSON"),
) -> None:
    """把生成结果渲染为展示片段"""
    fragments = render_output(_read_file(file), output_format)
    if html:
        typer.echo(fragments_to_html(fragments))
        return
    typer.echo(json.dumps([f.model_dump(mode="json") for f in fragments], ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
