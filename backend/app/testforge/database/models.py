"""TestForge - Database Models

SQLAlchemy 数据模型定义
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.dialects.postgresql import UUID

from testforge.database.config import Base


# ============================================================
# 枚举类型
# ============================================================

class FeedbackType(str, PyEnum):
    """反馈类型"""
    POSITIVE = "positive"
    NEGATIVE = "negative"


# ============================================================
# 数据模型
# ============================================================

class GeneratedTestCase(Base):
    """生成结果缓存（精确匹配）"""
    __tablename__ = "test_cases"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    request_hash = Column(String(64), nullable=False, index=True)  # 请求元组的 sha256
    input_text = Column(Text, nullable=False)
    test_type = Column(String(100), nullable=False)
    complexity = Column(Integer, nullable=False)
    test_count = Column(Integer, nullable=False)
    output_format = Column(String(50), nullable=False)
    data_categories = Column(JSON, nullable=False, default=list)  # 已排序（JSON 数组）
    data_categories_key = Column(Text, nullable=False, default="[]")  # 规范化字符串，用于等值匹配
    generated_output = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class FeedbackLog(Base):
    """用户反馈（只追加）"""
    __tablename__ = "feedback_log"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    test_case_content = Column(Text, nullable=False)
    feedback_type = Column(Enum(FeedbackType), nullable=False)
    original_prompt = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)


class KnowledgeBaseDocument(Base):
    """知识库文档"""
    __tablename__ = "knowledge_base"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
