"""TestForge - Knowledge Base Schemas"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class KnowledgeBaseFileResponse(BaseModel):
    """知识库文件列表项"""
    id: int
    document_name: str

    model_config = ConfigDict(from_attributes=True)
