"""TestForge - Output Renderer

把原始生成结果转换为展示片段（DisplayFragment）。

- playwright 脚本：整体作为一个代码块
- 找不到用例标记：整体作为一个纯文本块，不附带反馈按钮
- 其余情况：标记前的文字作为简介，之后按标记切分为逐个用例
"""
from __future__ import annotations

import html
import re

from testforge.models.render_schemas import (
    DisplayEntry,
    DisplayFragment,
    EntryKind,
    FragmentKind,
)
from testforge.services.text_structuring.parser import CASE_TITLE_RE, split_intro

SCRIPT_FORMAT = "playwright"

_CASE_SPLIT_RE = re.compile(r"(?=Test Case\s+\d+[:]?)", re.IGNORECASE)
_SECTION_TITLE_RE = re.compile(r"^(Preconditions|Steps|Expected Result):", re.IGNORECASE)
_LIST_MARKER_RE = re.compile(r"^[-•*+]\s*")


def render_case_lines(block: str) -> list[DisplayEntry]:
    """逐行渲染一个用例块"""
    entries: list[DisplayEntry] = []
    for line in block.strip().split("\n"):
        if not line.strip():
            continue
        section = _SECTION_TITLE_RE.match(line)
        if CASE_TITLE_RE.search(line):
            entries.append(DisplayEntry(kind=EntryKind.HEADING, text=line.replace("**", "")))
        elif section:
            label = section.group(0)
            content = _LIST_MARKER_RE.sub("", line[len(label):].strip())
            entries.append(DisplayEntry(kind=EntryKind.SECTION, label=label, text=content))
        else:
            cleaned = _LIST_MARKER_RE.sub("", line).replace("**", "")
            entries.append(DisplayEntry(kind=EntryKind.TEXT, text=cleaned))
    return entries


def render_output(raw_text: str, output_format: str = "text") -> list[DisplayFragment]:
    """渲染生成结果"""
    if output_format == SCRIPT_FORMAT:
        return [
            DisplayFragment(kind=FragmentKind.SCRIPT, index=0, text=raw_text, feedback_enabled=True)
        ]

    intro, body = split_intro(raw_text)
    if not body:
        return [DisplayFragment(kind=FragmentKind.PLAIN, text=raw_text)]

    fragments: list[DisplayFragment] = []

    intro = intro.strip()
    if intro:
        fragments.append(
            DisplayFragment(
                kind=FragmentKind.INTRO,
                entries=[
                    DisplayEntry(kind=EntryKind.TEXT, text=line)
                    for line in intro.replace("*", "").split("\n")
                ],
            )
        )

    blocks = [block for block in _CASE_SPLIT_RE.split(body.strip()) if block.strip()]
    for index, block in enumerate(blocks):
        fragments.append(
            DisplayFragment(
                kind=FragmentKind.CASE,
                index=index,
                entries=render_case_lines(block),
                feedback_enabled=True,
            )
        )
    return fragments


def _entry_html(entry: DisplayEntry) -> str:
    if entry.kind == EntryKind.HEADING:
        return f"<h3>{html.escape(entry.text)}</h3>"
    if entry.kind == EntryKind.SECTION:
        out = f'<p class="section-title">{html.escape(entry.label or "")}</p>'
        if entry.text:
            out += f"<p>{html.escape(entry.text)}</p>"
        return out
    return f"<p>{html.escape(entry.text)}</p>"


def fragments_to_html(fragments: list[DisplayFragment]) -> str:
    """把展示片段序列化为 HTML（内容均已转义）"""
    parts: list[str] = []
    for fragment in fragments:
        if fragment.kind == FragmentKind.SCRIPT:
            parts.append(
                f'<div class="test-case" id="test-case-{fragment.index}">'
                f'<div class="test-case-content"><pre><code class="language-js">'
                f"{html.escape(fragment.text or '')}</code></pre></div></div>"
            )
        elif fragment.kind == FragmentKind.PLAIN:
            parts.append(f'<p class="intro-text">{html.escape(fragment.text or "")}</p>')
        elif fragment.kind == FragmentKind.INTRO:
            lines = "<br>".join(html.escape(e.text) for e in fragment.entries)
            parts.append(f'<p class="intro-text">{lines}</p>')
        else:
            body = "".join(_entry_html(e) for e in fragment.entries)
            parts.append(
                f'<div class="test-case" id="test-case-{fragment.index}">'
                f'<div class="test-case-content">{body}</div></div>'
            )
    return "\n".join(parts)
