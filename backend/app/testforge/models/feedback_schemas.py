"""TestForge - Feedback Schemas"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FeedbackCreate(BaseModel):
    """提交反馈请求（字段校验在路由中完成，缺失返回 400）"""
    model_config = ConfigDict(populate_by_name=True)

    test_case_content: Optional[str] = Field(None, alias="testCaseContent")
    feedback_type: Optional[str] = Field(None, alias="feedbackType")
    original_prompt: Optional[str] = Field(None, alias="originalPrompt")
