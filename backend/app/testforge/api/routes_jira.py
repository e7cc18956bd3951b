"""TestForge - Jira / Zephyr API Routes"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from testforge.api.deps import get_jira_client
from testforge.models.jira_schemas import (
    JiraImportRequest,
    JiraImportResponse,
    ZephyrCreateRequest,
    ZephyrCreateResponse,
)
from testforge.services.jira_service import (
    JiraClient,
    JiraServiceError,
    create_test_issues,
    import_requirement,
)
from testforge.services.text_structuring import parse_test_cases

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jira"])


@router.post("/import-from-jira", response_model=JiraImportResponse)
async def import_from_jira(req: JiraImportRequest, client: JiraClient = Depends(get_jira_client)):
    """从 Jira issue 导入需求文本"""
    if not req.issue_key:
        raise HTTPException(status_code=400, detail="Jira issue key is required.")

    logger.info(f"导入 Jira issue: {req.issue_key}")
    try:
        requirement_text = await import_requirement(client, req.issue_key)
    except JiraServiceError as e:
        raise HTTPException(status_code=e.status_code or 500, detail=str(e))
    return JiraImportResponse(success=True, requirement_text=requirement_text)


@router.post("/create-zephyr-tests", response_model=ZephyrCreateResponse)
async def create_zephyr_tests(req: ZephyrCreateRequest, client: JiraClient = Depends(get_jira_client)):
    """
    解析用例文本并逐条创建 Zephyr 测试

    部分失败时仍返回成功条目；全部失败返回 500
    """
    if not req.test_case_text:
        raise HTTPException(status_code=400, detail="No test case text provided.")

    records = parse_test_cases(req.test_case_text)
    if not records:
        raise HTTPException(status_code=400, detail="Could not parse any test cases.")

    try:
        result = await create_test_issues(client, records)
    except JiraServiceError as e:
        logger.error(f"Zephyr 创建失败: {e}")
        raise HTTPException(status_code=500, detail="Failed to create any test cases in Jira.")

    if not result.issue_keys:
        body = ZephyrCreateResponse(
            success=False,
            message="Failed to create any test cases in Jira.",
            errors=result.errors,
        )
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))

    return ZephyrCreateResponse(
        success=True,
        message=f"Successfully created {len(result.issue_keys)} test(s).",
        issue_keys=result.issue_keys,
        errors=result.errors,
    )
