from fastapi import APIRouter

from testforge.api.routes_execution import router as execution_router
from testforge.api.routes_feedback import router as feedback_router
from testforge.api.routes_generation import router as generation_router
from testforge.api.routes_jira import router as jira_router
from testforge.api.routes_knowledge_base import router as knowledge_base_router

# 路径沿用前端约定：/api/* 与顶层 /generate-testcase 等并存
router = APIRouter()

router.include_router(knowledge_base_router)
router.include_router(feedback_router)
router.include_router(generation_router)
router.include_router(execution_router)
router.include_router(jira_router)
