"""TestForge - Feedback API Routes"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testforge.database.config import get_db
from testforge.database.models import FeedbackType
from testforge.models.common_schemas import MessageResponse
from testforge.models.feedback_schemas import FeedbackCreate
from testforge.services.feedback_service import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.post("", response_model=MessageResponse)
def submit_feedback(req: FeedbackCreate, db: Session = Depends(get_db)):
    """提交点赞 / 点踩反馈"""
    if not req.test_case_content or not req.feedback_type or not req.original_prompt:
        raise HTTPException(status_code=400, detail="Missing required feedback data.")
    try:
        feedback_type = FeedbackType(req.feedback_type)
    except ValueError:
        raise HTTPException(status_code=400, detail="feedbackType must be 'positive' or 'negative'.")

    try:
        FeedbackService(db).record(
            test_case_content=req.test_case_content,
            feedback_type=feedback_type,
            original_prompt=req.original_prompt,
        )
    except SQLAlchemyError:
        logger.exception("反馈保存失败")
        raise HTTPException(status_code=500, detail="Failed to save feedback.")

    logger.info(f"反馈已保存: {feedback_type.value}")
    return MessageResponse(message="Feedback saved successfully.")
