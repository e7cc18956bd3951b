"""TestForge - Knowledge Base API Routes

知识库文档管理 API 路由
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testforge.api.deps import get_upload_service
from testforge.database.config import get_db
from testforge.models.common_schemas import MessageResponse
from testforge.models.knowledge_base_schemas import KnowledgeBaseFileResponse
from testforge.services.file_upload import FileUploadService
from testforge.services.knowledge_base_service import KnowledgeBaseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/knowledge-base", tags=["knowledge-base"])


@router.get("", response_model=list[KnowledgeBaseFileResponse])
def list_knowledge_base(db: Session = Depends(get_db)):
    """知识库文件列表"""
    try:
        return KnowledgeBaseService(db).list_documents()
    except SQLAlchemyError:
        logger.exception("读取知识库失败")
        raise HTTPException(status_code=500, detail="Failed to fetch knowledge base files.")


@router.post("/upload", response_model=MessageResponse, status_code=201)
async def upload_knowledge_base_file(
    kbfile: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    upload_service: FileUploadService = Depends(get_upload_service),
):
    """
    上传知识库文档

    文件先落盘为临时文件，读取内容后立即删除
    """
    if kbfile is None or not kbfile.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    file_path = None
    try:
        file_path, original_filename = await upload_service.save_file(kbfile)
        content = upload_service.read_text(file_path)
        KnowledgeBaseService(db).add_document(original_filename, content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SQLAlchemyError, OSError):
        logger.exception("知识库上传失败")
        raise HTTPException(status_code=500, detail="Failed to upload file.")
    finally:
        if file_path:
            upload_service.delete_file(file_path)

    logger.info(f"知识库文档已上传: {original_filename}")
    return MessageResponse(message="File uploaded successfully.")


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_knowledge_base_file(document_id: int, db: Session = Depends(get_db)):
    """删除知识库文档"""
    try:
        deleted = KnowledgeBaseService(db).delete_document(document_id)
    except SQLAlchemyError:
        logger.exception("删除知识库文档失败")
        raise HTTPException(status_code=500, detail="Failed to delete file.")
    if not deleted:
        raise HTTPException(status_code=404, detail="Knowledge base file not found.")
    return MessageResponse(message="File deleted successfully.")
