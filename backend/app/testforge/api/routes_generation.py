"""TestForge - Generation API Routes

用例生成 / 优化 / 渲染 API 路由
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testforge.api.deps import get_generation_client, get_settings
from testforge.core.config import Settings
from testforge.database.config import get_db
from testforge.models.generation_schemas import (
    GenerationRequest,
    GenerationResponse,
    RawTestCase,
    RefineRequest,
    RefineResponse,
)
from testforge.models.render_schemas import RenderRequest, RenderResponse
from testforge.services.ai_service import GenerationClient, GenerationServiceError
from testforge.services.generation_service import GenerationService
from testforge.services.text_structuring import render_output

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])


@router.post("/generate-testcase", response_model=GenerationResponse, response_model_exclude_none=True)
async def generate_testcase(
    req: GenerationRequest,
    db: Session = Depends(get_db),
    client: GenerationClient = Depends(get_generation_client),
    settings: Settings = Depends(get_settings),
):
    """
    生成测试用例

    先查精确匹配缓存，未命中再调用生成 API
    """
    if not req.input_text or not req.input_text.strip():
        raise HTTPException(status_code=400, detail="inputText is required.")

    logger.info(
        f"收到生成请求: testType={req.test_type}, outputFormat={req.output_format}, "
        f"dataCategories={req.data_categories}, useKnowledgeBase={req.use_knowledge_base}"
    )

    service = GenerationService(db, client, liked_examples_limit=settings.LIKED_EXAMPLES_LIMIT)
    try:
        outcome = await service.generate(req)
    except GenerationServiceError:
        logger.exception("生成失败")
        raise HTTPException(status_code=500, detail="Failed to generate test case.")
    except SQLAlchemyError:
        logger.exception("生成结果读写失败")
        raise HTTPException(status_code=500, detail="Failed to generate test case.")

    if outcome.from_cache:
        return GenerationResponse(
            from_cache=outcome.from_cache,
            output_format=outcome.key.output_format,
            test_case=RawTestCase(raw=outcome.raw),
        )
    return GenerationResponse(
        from_cache=False,
        output_format=outcome.key.output_format,
        test_case=RawTestCase(raw=outcome.raw),
        test_type=outcome.key.test_type,
        complexity=outcome.key.complexity,
        test_count=outcome.key.test_count,
        data_categories=list(outcome.key.data_categories),
    )


@router.post("/api/refine-testcase", response_model=RefineResponse)
async def refine_testcase(
    req: RefineRequest,
    db: Session = Depends(get_db),
    client: GenerationClient = Depends(get_generation_client),
):
    """按用户指令改写单个用例"""
    if not req.original_test_case or not req.refinement_instruction:
        raise HTTPException(status_code=400, detail="Missing original test case or instruction.")

    try:
        refined = await GenerationService(db, client).refine(
            req.original_test_case, req.refinement_instruction
        )
    except GenerationServiceError:
        logger.exception("用例优化失败")
        raise HTTPException(status_code=500, detail="Failed to refine the test case.")
    return RefineResponse(refined_test_case=refined)


@router.post("/api/render", response_model=RenderResponse)
def render_testcase(req: RenderRequest):
    """把原始生成结果转换为展示片段"""
    return RenderResponse(fragments=render_output(req.raw, req.output_format))
