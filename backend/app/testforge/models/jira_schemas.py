"""TestForge - Jira / Zephyr Schemas"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class JiraImportRequest(BaseModel):
    """从 Jira 导入需求"""
    model_config = ConfigDict(populate_by_name=True)

    issue_key: Optional[str] = Field(None, alias="issueKey")


class JiraImportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    requirement_text: str = Field(..., alias="requirementText")


class ZephyrCreateRequest(BaseModel):
    """批量创建 Zephyr 测试"""
    model_config = ConfigDict(populate_by_name=True)

    test_case_text: Optional[str] = Field(None, alias="testCaseText")


class IssueCreationError(BaseModel):
    """单条创建失败信息"""
    title: str
    error: Any


class ZephyrCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    issue_keys: list[str] = Field(default_factory=list, alias="issueKeys")
    errors: list[IssueCreationError] = Field(default_factory=list)
