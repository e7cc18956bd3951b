"""
TestForge 测试配置

每个测试使用独立的临时目录：SQLite 文件数据库、日志、上传、前端目录。
外部协作方（生成 API、Jira、Playwright）通过 dependency_overrides 替换。
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from testforge.api.deps import get_generation_client
from testforge.core.config import Settings
from testforge.database.config import Base, SessionLocal
from testforge.main import create_app


class FakeGenerationClient:
    """记录提示词并按顺序返回预设输出"""

    def __init__(self, outputs=None, error: Exception | None = None):
        self.outputs = list(outputs or ["Test Case 1: Default\nSteps:\n- Do it\nExpected Result:\n- Done"])
        self.error = error
        self.calls: list[tuple[str, float]] = []

    async def complete(self, prompt: str, temperature: float = 0.7) -> str:
        self.calls.append((prompt, temperature))
        if self.error is not None:
            raise self.error
        if len(self.outputs) > 1:
            return self.outputs.pop(0)
        return self.outputs[0]


@pytest.fixture
def settings(tmp_path):
    """测试配置（不读取 .env）"""
    frontend_dir = tmp_path / "frontend"
    frontend_dir.mkdir()
    (frontend_dir / "index.html").write_text("<html><body>TestForge</body></html>", encoding="utf-8")
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        GROQ_API_KEY="test-key",
        FRONTEND_DIR=str(frontend_dir),
        UPLOAD_DIR=str(tmp_path / "uploads"),
        TEMP_TEST_DIR=str(tmp_path / "temp"),
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
    Base.metadata.drop_all(bind=application.state.engine)
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    """提供测试客户端"""
    return TestClient(app)


@pytest.fixture
def db(app):
    """提供数据库会话（与应用共用同一引擎）"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_llm(app):
    """替换生成 API 客户端"""
    fake = FakeGenerationClient()
    app.dependency_overrides[get_generation_client] = lambda: fake
    return fake
