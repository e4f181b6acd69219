"""chat-therapist 调用方客户端。

前端在调用 Relay 之前做的事情：从存储里读出的消息记录中取最近 10 条，
只保留 role/content，再连同新消息一起 POST 过去。这里提供同样的能力，
方便 Python 调用方（脚本、测试、其它服务）使用。
"""

from typing import Any, Iterable, List, Mapping, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from relay_core.api.schemas import HistoryMessage, RelayBody
from relay_core.domain.exceptions import ApiError, NetworkError, ValidationError
from relay_core.relay import MAX_HISTORY_MESSAGES


def prepare_history(records: Iterable[Any], limit: int = MAX_HISTORY_MESSAGES) -> List[HistoryMessage]:
    """把存储层的消息记录转换为 Relay 需要的历史窗口。

    records 可以是映射（数据库行）或带 role/content 属性的对象，
    其余字段（id、created_at 等）忽略。
    """

    rows = list(records)[-limit:] if limit > 0 else []
    history: List[HistoryMessage] = []
    for row in rows:
        if isinstance(row, Mapping):
            role, content = row.get("role"), row.get("content")
        else:
            role, content = getattr(row, "role", None), getattr(row, "content", None)
        try:
            history.append(HistoryMessage(role=role, content=content))
        except PydanticValidationError as e:
            raise ValidationError(
                code="INVALID_HISTORY",
                message=f"history row needs string role and content: {e.error_count()} error(s)",
            )
    return history


class RelayClient:
    """Relay HTTP 客户端。

    - base_url: 部署地址，例如 https://<project>.example.co/functions/v1
    - anon_key: 平台颁发的公开凭证，作为 Bearer 发送
    """

    def __init__(self, base_url: str, anon_key: Optional[str] = None, timeout: float = 30.0, path: str = "/chat-therapist"):
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._path = path

    def send(self, message: str, history: Iterable[Any] = ()) -> str:
        """发送一条消息并返回 reply 文本。"""

        if not isinstance(message, str) or not message.strip():
            raise ValidationError(code="EMPTY_MESSAGE", message="message must not be empty")
        body = RelayBody(message=message.strip(), conversationHistory=prepare_history(history))
        headers = {"Content-Type": "application/json"}
        if self._anon_key:
            headers["Authorization"] = f"Bearer {self._anon_key}"
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(f"{self._base_url}{self._path}", json=body.model_dump(), headers=headers)
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message="Failed to get response from AI", http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            raise ApiError(code="INVALID_RESPONSE", message="relay response is not JSON", http_status=502)
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ApiError(code="INVALID_RESPONSE", message="relay response has no reply", http_status=502)
        return reply
