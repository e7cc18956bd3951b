"""TestForge - Generation Cache

生成结果精确匹配缓存：以完整请求元组为键，不做模糊匹配，不过期
"""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from testforge.database.models import GeneratedTestCase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheKey:
    """缓存键（data_categories 已排序）"""
    input_text: str
    test_type: str
    complexity: int
    test_count: int
    output_format: str
    data_categories: tuple[str, ...]

    @classmethod
    def build(
        cls,
        input_text: str,
        test_type: str,
        complexity: int,
        test_count: int,
        output_format: str,
        data_categories: Sequence[str],
    ) -> "CacheKey":
        return cls(
            input_text=input_text,
            test_type=test_type,
            complexity=complexity,
            test_count=test_count,
            output_format=output_format,
            data_categories=tuple(sorted(data_categories)),
        )

    @property
    def categories_key(self) -> str:
        return json.dumps(list(self.data_categories), ensure_ascii=False)

    def compute_hash(self) -> str:
        payload = json.dumps(
            {
                "input_text": self.input_text,
                "test_type": self.test_type,
                "complexity": self.complexity,
                "test_count": self.test_count,
                "output_format": self.output_format,
                "data_categories": list(self.data_categories),
            },
            sort_keys=True,
            ensure_ascii=False,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class GenerationCache:
    """精确匹配缓存"""

    def __init__(self, db: Session):
        self.db = db

    def find_exact_match(self, key: CacheKey) -> Optional[str]:
        """返回缓存的原始生成文本，未命中返回 None"""
        cached = self.db.query(GeneratedTestCase).filter(
            GeneratedTestCase.request_hash == key.compute_hash(),
            GeneratedTestCase.input_text == key.input_text,
            GeneratedTestCase.test_type == key.test_type,
            GeneratedTestCase.complexity == key.complexity,
            GeneratedTestCase.test_count == key.test_count,
            GeneratedTestCase.output_format == key.output_format,
            GeneratedTestCase.data_categories_key == key.categories_key,
        ).first()
        if cached is None:
            return None
        return cached.generated_output

    def save(self, key: CacheKey, generated_output: str) -> GeneratedTestCase:
        record = GeneratedTestCase(
            request_hash=key.compute_hash(),
            input_text=key.input_text,
            test_type=key.test_type,
            complexity=key.complexity,
            test_count=key.test_count,
            output_format=key.output_format,
            data_categories=list(key.data_categories),
            data_categories_key=key.categories_key,
            generated_output=generated_output,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("生成结果已写入缓存")
        return record
