"""TestForge - API Dependencies

从 app.state.settings 派生外部协作方（测试中通过 dependency_overrides 替换）
"""
from fastapi import Depends, Request

from testforge.core.config import Settings
from testforge.runners.playwright.runner import ScriptRunner
from testforge.services.ai_service import GenerationClient
from testforge.services.file_upload import FileUploadService
from testforge.services.jira_service import JiraClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_generation_client(settings: Settings = Depends(get_settings)) -> GenerationClient:
    return GenerationClient.from_settings(settings)


def get_jira_client(settings: Settings = Depends(get_settings)) -> JiraClient:
    return JiraClient.from_settings(settings)


def get_script_runner(settings: Settings = Depends(get_settings)) -> ScriptRunner:
    return ScriptRunner.from_settings(settings)


def get_upload_service(settings: Settings = Depends(get_settings)) -> FileUploadService:
    return FileUploadService(upload_dir=settings.UPLOAD_DIR)
