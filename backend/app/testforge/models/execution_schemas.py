"""TestForge - Execution Schemas

脚本执行相关的 Pydantic 数据模型
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RunTestRequest(BaseModel):
    """执行脚本请求"""
    model_config = ConfigDict(populate_by_name=True)

    test_case_text: Optional[str] = Field(None, alias="testCaseText")


class RunTestResponse(BaseModel):
    """执行结果"""
    passed: bool
    logs: list[str] = Field(default_factory=list)
