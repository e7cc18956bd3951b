"""TestForge - File Upload Service

知识库文件上传：先落盘为临时文件，读取文本后删除
"""
from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

logger = logging.getLogger(__name__)


class FileUploadService:
    """文件上传服务"""

    def __init__(self, upload_dir: str = "uploads"):
        self.upload_dir = Path(upload_dir)
        self.max_file_size = 10 * 1024 * 1024  # 10MB

    async def save_file(self, file: UploadFile) -> tuple[str, str]:
        """
        保存上传的文件

        Returns:
            (file_path, original_filename)
        """
        self.upload_dir.mkdir(parents=True, exist_ok=True)

        # 生成唯一文件名
        file_ext = Path(file.filename or "").suffix.lower()
        file_path = self.upload_dir / f"{uuid4()}{file_ext}"

        content = await file.read()

        # 检查文件大小
        if len(content) > self.max_file_size:
            raise ValueError(f"文件过大: {len(content)} bytes。最大允许: {self.max_file_size} bytes")

        with open(file_path, "wb") as f:
            f.write(content)

        return str(file_path), file.filename or file_path.name

    def read_text(self, file_path: str) -> str:
        """按 UTF-8 读取文本内容"""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ValueError("仅支持 UTF-8 文本文档") from e

    def delete_file(self, file_path: str) -> bool:
        """删除文件"""
        try:
            Path(file_path).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"删除临时文件失败 {file_path}: {e}")
            return False
