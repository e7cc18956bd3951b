"""TestForge - AI Service

生成 API 客户端（OpenAI 兼容 chat/completions），单次调用，不重试
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from testforge.core.config import Settings

logger = logging.getLogger(__name__)

GENERATION_TEMPERATURE = 0.7
REFINE_TEMPERATURE = 0.5


class GenerationServiceError(Exception):
    """AI 服务错误"""
    pass


class GenerationClient:
    """生成 API 客户端"""

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        model: str,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationClient":
        return cls(
            api_key=settings.GROQ_API_KEY,
            url=settings.GROQ_API_URL,
            model=settings.GROQ_MODEL,
            timeout=settings.GENERATION_TIMEOUT_S,
        )

    async def complete(self, prompt: str, temperature: float = GENERATION_TEMPERATURE) -> str:
        """
        发送单轮对话并返回模型输出

        Raises:
            GenerationServiceError: 网络错误、非 2xx 响应或响应结构异常
        """
        if not self.api_key:
            raise GenerationServiceError("未配置 GROQ_API_KEY")

        start_time = time.time()
        messages: List[Dict[str, Any]] = [{"role": "user", "content": prompt}]
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=self.timeout,
                )
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"AI API 错误: {e.response.status_code} {e.response.text}")
            raise GenerationServiceError(f"AI API 返回 {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"AI API 请求失败: {e}")
            raise GenerationServiceError(f"AI API 请求失败: {e}") from e

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationServiceError("AI 响应结构异常") from e

        duration = int((time.time() - start_time) * 1000)
        logger.info(f"AI 调用完成: model={self.model}, {duration}ms")
        return content or ""
