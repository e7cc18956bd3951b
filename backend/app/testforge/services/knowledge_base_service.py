"""TestForge - Knowledge Base Service

知识库文档管理；启用后全部文档内容原样注入生成提示词
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from testforge.database.models import KnowledgeBaseDocument

DOCUMENT_SEPARATOR = "\n\n---\n\n"


class KnowledgeBaseService:
    """知识库服务"""

    def __init__(self, db: Session):
        self.db = db

    def list_documents(self) -> list[KnowledgeBaseDocument]:
        return self.db.query(KnowledgeBaseDocument).order_by(KnowledgeBaseDocument.id).all()

    def add_document(self, document_name: str, content: str) -> KnowledgeBaseDocument:
        document = KnowledgeBaseDocument(document_name=document_name, content=content)
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    def get_document(self, document_id: int) -> Optional[KnowledgeBaseDocument]:
        return self.db.query(KnowledgeBaseDocument).filter(KnowledgeBaseDocument.id == document_id).first()

    def delete_document(self, document_id: int) -> bool:
        """删除文档，不存在返回 False"""
        document = self.get_document(document_id)
        if document is None:
            return False
        self.db.delete(document)
        self.db.commit()
        return True

    def combined_content(self) -> str:
        """所有文档内容拼接（用于提示词）"""
        return DOCUMENT_SEPARATOR.join(doc.content for doc in self.list_documents())
