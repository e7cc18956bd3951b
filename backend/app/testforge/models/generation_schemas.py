"""TestForge - Generation Schemas

用例生成 / 优化相关的 Pydantic 数据模型
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Request Schemas
# ============================================================

class GenerationRequest(BaseModel):
    """生成测试用例请求"""
    model_config = ConfigDict(populate_by_name=True)

    input_text: Optional[str] = Field(None, alias="inputText", description="需求描述")
    test_type: str = Field("Functional", alias="testType")
    complexity: int = Field(2, description="步骤复杂度 1-3")
    test_count: int = Field(2, alias="testCount", description="数量档位 1-3")
    output_format: str = Field("text", alias="outputFormat", description="text / playwright")
    app_code: Optional[str] = Field(None, alias="appCode")
    app_docs: Optional[str] = Field(None, alias="appDocs")
    data_categories: list[str] = Field(default_factory=list, alias="dataCategories")
    use_knowledge_base: bool = Field(False, alias="useKnowledgeBase")


class RefineRequest(BaseModel):
    """用例优化请求"""
    model_config = ConfigDict(populate_by_name=True)

    original_test_case: Optional[str] = Field(None, alias="originalTestCase")
    refinement_instruction: Optional[str] = Field(None, alias="refinementInstruction")


# ============================================================
# Response Schemas
# ============================================================

class RawTestCase(BaseModel):
    """生成结果原文"""
    raw: str


class GenerationResponse(BaseModel):
    """生成测试用例响应"""
    model_config = ConfigDict(populate_by_name=True)

    from_cache: Union[Literal["exact"], Literal[False]] = Field(..., alias="fromCache")
    output_format: str = Field(..., alias="outputFormat")
    test_case: RawTestCase = Field(..., alias="testCase")
    test_type: Optional[str] = Field(None, alias="testType")
    complexity: Optional[int] = None
    test_count: Optional[int] = Field(None, alias="testCount")
    data_categories: Optional[list[str]] = Field(None, alias="dataCategories")


class RefineResponse(BaseModel):
    """用例优化响应"""
    model_config = ConfigDict(populate_by_name=True)

    refined_test_case: str = Field(..., alias="refinedTestCase")
