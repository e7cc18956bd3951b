"""TestForge - Common Schemas

通用的 Pydantic 数据模型
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """通用消息响应"""
    message: str = Field(..., description="提示信息")
