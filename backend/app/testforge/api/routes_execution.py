"""TestForge - Execution API Routes"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from testforge.api.deps import get_script_runner
from testforge.models.execution_schemas import RunTestRequest, RunTestResponse
from testforge.runners.playwright.runner import ScriptRunner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["execution"])


@router.post("/run-test", response_model=RunTestResponse)
async def run_test(req: RunTestRequest, runner: ScriptRunner = Depends(get_script_runner)):
    """执行生成的 Playwright 脚本"""
    if not req.test_case_text:
        raise HTTPException(status_code=400, detail="No test case text provided.")

    result = await runner.run(req.test_case_text)
    logger.info(f"脚本执行完成: passed={result.passed}")
    return RunTestResponse(passed=result.passed, logs=result.logs)
