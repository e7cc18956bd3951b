"""TestForge - Feedback Service

用户反馈记录（只追加），最近的点赞用例作为生成风格示例
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from testforge.database.models import FeedbackLog, FeedbackType


class FeedbackService:
    """反馈服务"""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        test_case_content: str,
        feedback_type: FeedbackType,
        original_prompt: str,
    ) -> FeedbackLog:
        entry = FeedbackLog(
            test_case_content=test_case_content,
            feedback_type=feedback_type,
            original_prompt=original_prompt,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def liked_examples(self, limit: int = 2) -> list[str]:
        """最近的 limit 条点赞用例内容（新的在前）"""
        if limit <= 0:
            return []
        rows = (
            self.db.query(FeedbackLog.test_case_content)
            .filter(FeedbackLog.feedback_type == FeedbackType.POSITIVE)
            .order_by(FeedbackLog.created_at.desc())
            .limit(limit)
            .all()
        )
        return [row.test_case_content for row in rows]
