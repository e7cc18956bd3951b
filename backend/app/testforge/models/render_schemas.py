"""TestForge - Render Schemas

展示片段（渲染方向的输出）
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FragmentKind(str, Enum):
    """片段类型"""
    INTRO = "intro"
    CASE = "case"
    PLAIN = "plain"
    SCRIPT = "script"


class EntryKind(str, Enum):
    """片段内条目类型"""
    HEADING = "heading"
    SECTION = "section"
    TEXT = "text"


class DisplayEntry(BaseModel):
    """单行渲染结果"""
    kind: EntryKind
    text: str = ""
    label: Optional[str] = None  # section 条目的标签，如 "Steps:"


class DisplayFragment(BaseModel):
    """一个展示块（简介 / 单个用例 / 纯文本 / 脚本）"""
    kind: FragmentKind
    index: Optional[int] = None
    entries: list[DisplayEntry] = Field(default_factory=list)
    text: Optional[str] = None
    feedback_enabled: bool = False


class RenderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raw: str = ""
    output_format: str = Field("text", alias="outputFormat")


class RenderResponse(BaseModel):
    fragments: list[DisplayFragment]
