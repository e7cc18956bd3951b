"""TestForge - Jira / Zephyr Service

- 从 Jira issue 导入需求文本（ADF 描述 -> 纯文本）
- 把解析后的用例逐条创建为 Zephyr 测试 issue（部分失败不影响其余条目）
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from testforge.core.config import Settings
from testforge.services.text_structuring import TestCaseRecord

logger = logging.getLogger(__name__)


class JiraServiceError(Exception):
    """Jira 调用错误（status_code 为上游状态码，网络错误时为 None）"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class JiraClient:
    """Jira Cloud REST v3 客户端"""

    API_VERSION = "3"

    def __init__(
        self,
        domain: Optional[str],
        email: Optional[str],
        api_token: Optional[str],
        project_key: Optional[str] = None,
        test_issue_type_id: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.domain = domain
        self.email = email
        self.api_token = api_token
        self.project_key = project_key
        self.test_issue_type_id = test_issue_type_id
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "JiraClient":
        return cls(
            domain=settings.JIRA_DOMAIN,
            email=settings.JIRA_EMAIL,
            api_token=settings.JIRA_TOKEN,
            project_key=settings.JIRA_PROJECT_KEY,
            test_issue_type_id=settings.ZEPHYR_TEST_ISSUE_TYPE_ID,
        )

    @property
    def api_base(self) -> str:
        return f"https://{self.domain}/rest/api/{self.API_VERSION}"

    @property
    def headers(self) -> Dict[str, str]:
        # Jira Cloud 使用 email:api_token 的 Basic Auth
        credentials = base64.b64encode(f"{self.email}:{self.api_token}".encode()).decode()
        return {
            "Authorization": f"Basic {credentials}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _ensure_configured(self) -> None:
        if not (self.domain and self.email and self.api_token):
            raise JiraServiceError("Jira 未配置（JIRA_DOMAIN / JIRA_EMAIL / JIRA_TOKEN）")

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        self._ensure_configured()
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.get(f"{self.api_base}/issue/{issue_key}", headers=self.headers)
            response.raise_for_status()
            return response.json()

    async def create_issue(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._ensure_configured()
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.post(f"{self.api_base}/issue", json=payload, headers=self.headers)
            response.raise_for_status()
            return response.json()


# ============================================================
# ADF / payload helpers
# ============================================================

def extract_text_from_adf(adf: Optional[Dict[str, Any]]) -> str:
    """只取顶层 paragraph 中的 text 节点，其余节点类型忽略"""
    if not adf or not adf.get("content"):
        return ""
    text = ""
    for node in adf["content"]:
        if node.get("type") == "paragraph" and node.get("content"):
            for child in node["content"]:
                if child.get("type") == "text":
                    text += child.get("text", "") + " "
            text += "\n"
    return text.strip()


def requirement_text_from_issue(issue: Dict[str, Any]) -> str:
    fields = issue.get("fields") or {}
    description = extract_text_from_adf(fields.get("description"))
    return f"User Story: {fields.get('summary', '')}\n\nDescription:\n{description}"


def build_test_issue_payload(
    record: TestCaseRecord,
    project_key: Optional[str],
    issue_type_id: Optional[str],
) -> Dict[str, Any]:
    """用例记录 -> Jira issue 创建请求体（描述只包含步骤与预期结果）"""
    return {
        "fields": {
            "project": {"key": project_key},
            "summary": record.title,
            "issuetype": {"id": issue_type_id},
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {
                                "type": "text",
                                "text": f"Steps:\n{record.steps}\n\nExpected Result:\n{record.expected_result}",
                            }
                        ],
                    }
                ],
            },
        }
    }


# ============================================================
# 业务流程
# ============================================================

@dataclass
class IssueBatchResult:
    """批量创建结果"""
    issue_keys: list[str] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)


async def import_requirement(client: JiraClient, issue_key: str) -> str:
    """读取 issue 并转换为需求文本"""
    try:
        issue = await client.get_issue(issue_key)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"Jira 导入失败 {issue_key}: {status} {e.response.text}")
        message = f"Issue '{issue_key}' not found." if status == 404 else "Failed to import from Jira."
        raise JiraServiceError(message, status_code=status) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Jira 导入失败 {issue_key}: {e}")
        raise JiraServiceError("Failed to import from Jira.") from e
    if not isinstance(issue, dict):
        logger.error(f"Jira 导入失败 {issue_key}: 响应不是 JSON 对象")
        raise JiraServiceError("Failed to import from Jira.")
    return requirement_text_from_issue(issue)


def _error_detail(exc: Exception) -> Any:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            return exc.response.text or str(exc)
        if isinstance(body, dict) and body.get("errors"):
            return body["errors"]
        return body
    if isinstance(exc, (KeyError, TypeError)):
        return "Jira response did not include an issue key."
    if isinstance(exc, ValueError):
        return "Jira response was not valid JSON."
    return str(exc)


async def create_test_issues(client: JiraClient, records: list[TestCaseRecord]) -> IssueBatchResult:
    """逐条创建 Zephyr 测试 issue，失败条目记录在 errors 中"""
    result = IssueBatchResult()
    for record in records:
        payload = build_test_issue_payload(record, client.project_key, client.test_issue_type_id)
        try:
            created = await client.create_issue(payload)
            issue_key = created["key"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            detail = _error_detail(e)
            logger.error(f"Jira 创建失败 '{record.title}': {detail}")
            result.errors.append({"title": record.title, "error": detail})
            continue
        result.issue_keys.append(issue_key)
    return result
