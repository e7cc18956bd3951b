"""TestForge - Settings

进程级配置（环境变量 / .env）
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = Field(default="dev")
    PORT: int = Field(default=5000)

    # 生成 API（OpenAI 兼容的 chat/completions 接口）
    GROQ_API_KEY: str | None = Field(default=None)
    GROQ_API_URL: str = Field(default="https://api.groq.com/openai/v1/chat/completions")
    GROQ_MODEL: str = Field(default="llama3-70b-8192")
    GENERATION_TIMEOUT_S: float = Field(default=120.0)

    DATABASE_URL: str = Field(default="sqlite:///./testforge.db")

    # Jira / Zephyr
    JIRA_EMAIL: str | None = Field(default=None)
    JIRA_TOKEN: str | None = Field(default=None)
    JIRA_DOMAIN: str | None = Field(default=None)
    JIRA_PROJECT_KEY: str | None = Field(default=None)
    ZEPHYR_TEST_ISSUE_TYPE_ID: str | None = Field(default=None)

    # 脚本执行
    PLAYWRIGHT_CMD: str = Field(default="npx playwright test")
    PLAYWRIGHT_TIMEOUT_S: int = Field(default=300, ge=1)
    TEMP_TEST_DIR: str = Field(default="./tests/temp")
    # Playwright 的工作目录（决定 playwright.config 与 node_modules 的解析位置）
    PLAYWRIGHT_CWD: str | None = Field(default=None)

    FRONTEND_DIR: str = Field(default="./frontend")
    UPLOAD_DIR: str = Field(default="./uploads")
    LIKED_EXAMPLES_LIMIT: int = Field(default=2, ge=0)

    LOG_DIR: str = Field(default="logs")
    LOG_LEVEL: str = Field(default="INFO")


def load_settings() -> Settings:
    """读取环境变量构建配置（只在进程启动时调用一次）"""
    return Settings()
