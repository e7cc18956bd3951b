"""TestForge - Generation Service

用例生成流程：
1. 精确匹配缓存（命中直接返回，不调用模型、不重复保存）
2. 收集点赞示例 / 知识库
3. 拼装提示词并调用生成 API
4. 非脚本格式做文本规范化
5. 写入缓存
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from sqlalchemy.orm import Session

from testforge.models.generation_schemas import GenerationRequest
from testforge.services.ai_service import REFINE_TEMPERATURE, GenerationClient
from testforge.services.cache_service import CacheKey, GenerationCache
from testforge.services.feedback_service import FeedbackService
from testforge.services.knowledge_base_service import KnowledgeBaseService
from testforge.services.prompt_composer import (
    PromptConfig,
    compose_prompt,
    compose_refine_prompt,
)
from testforge.services.text_structuring import SCRIPT_FORMAT, normalize_output

logger = logging.getLogger(__name__)


@dataclass
class GenerationOutcome:
    """一次生成的结果"""
    raw: str
    key: CacheKey
    from_cache: Union[Literal["exact"], Literal[False]] = False


class GenerationService:
    """用例生成服务"""

    def __init__(self, db: Session, client: GenerationClient, liked_examples_limit: int = 2):
        self.db = db
        self.client = client
        self.liked_examples_limit = liked_examples_limit
        self.cache = GenerationCache(db)

    def build_prompt(self, req: GenerationRequest, key: Optional[CacheKey] = None) -> str:
        key = key or self._cache_key(req)
        knowledge_base = ""
        if req.use_knowledge_base:
            knowledge_base = KnowledgeBaseService(self.db).combined_content()
        liked = FeedbackService(self.db).liked_examples(self.liked_examples_limit)

        return compose_prompt(
            PromptConfig(
                input_text=key.input_text,
                test_type=key.test_type,
                complexity=key.complexity,
                test_count=key.test_count,
                output_format=key.output_format,
                data_categories=key.data_categories,
                app_code=req.app_code,
                app_docs=req.app_docs,
                knowledge_base=knowledge_base,
                liked_examples=tuple(liked),
            )
        )

    async def generate(self, req: GenerationRequest) -> GenerationOutcome:
        key = self._cache_key(req)

        cached = self.cache.find_exact_match(key)
        if cached is not None:
            logger.info("命中精确匹配缓存")
            return GenerationOutcome(raw=cached, key=key, from_cache="exact")

        prompt = self.build_prompt(req, key)
        raw = await self.client.complete(prompt)
        if key.output_format != SCRIPT_FORMAT:
            raw = normalize_output(raw)
        raw = raw.strip()

        self.cache.save(key, raw)
        return GenerationOutcome(raw=raw, key=key)

    async def refine(self, original_test_case: str, instruction: str) -> str:
        prompt = compose_refine_prompt(original_test_case, instruction)
        refined = await self.client.complete(prompt, temperature=REFINE_TEMPERATURE)
        return refined.strip()

    @staticmethod
    def _cache_key(req: GenerationRequest) -> CacheKey:
        return CacheKey.build(
            input_text=req.input_text or "",
            test_type=req.test_type,
            complexity=req.complexity,
            test_count=req.test_count,
            output_format=req.output_format,
            data_categories=req.data_categories,
        )
