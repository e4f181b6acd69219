"""Message Relay 核心模块。

接收用户消息与调用方提供的历史窗口，组装提示词，调用 Provider，
并把所有结果（包括各种失败）规整为可以直接展示给用户的回复。

Relay 不读写任何存储，也不在调用之间保留状态。
"""

import json
import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
from uuid import uuid4

from relay_core.domain.exceptions import UPSTREAM_ERRORS, BusinessError, ValidationError
from relay_core.domain.models import (
    ChatMessage,
    CompletionRequest,
    CompletionResult,
    RelayRequest,
    RelayResponse,
)
from relay_core.infrastructure.logging.logger import logger
from relay_core.prompts import (
    APOLOGY_REPLY,
    LISTENING_REPLY,
    SERVICE_UNAVAILABLE_REPLY,
    TECHNICAL_DIFFICULTY_REPLY,
    load_system_prompt,
)
from relay_core.providers.base import ProviderClient
from relay_core.providers import create_provider
from relay_core.providers.registry import THERAPIST_MODEL


MAX_HISTORY_MESSAGES = 10

MESSAGE_REQUIRED_ERROR = "Message is required"
NOT_CONFIGURED_ERROR = "AI service not configured"
UPSTREAM_FAILED_ERROR = "Failed to get AI response"
INTERNAL_ERROR = "Internal server error"


def bound_history(history: Optional[Sequence[Any]], limit: int = MAX_HISTORY_MESSAGES) -> List[Any]:
    """保留最近 limit 条历史，顺序不变，更早的静默丢弃。"""

    if history is None:
        return []
    if isinstance(history, (str, bytes)) or not isinstance(history, Sequence):
        raise ValidationError(code="INVALID_HISTORY", message="conversationHistory must be an array")
    if limit <= 0:
        return []
    return list(history[-limit:])


def build_messages(history: Iterable[ChatMessage], message: str) -> List[ChatMessage]:
    """[系统提示词] + [历史] + [新的用户消息]。"""

    messages = [ChatMessage(role="system", content=load_system_prompt())]
    messages.extend(history)
    messages.append(ChatMessage(role="user", content=message))
    return messages


def parse_request(payload: Any) -> Optional[RelayRequest]:
    """把解码后的 JSON 转为 RelayRequest。

    message 缺失、非字符串或为空时返回 None（调用方违约）；
    历史条目格式错误时抛 ValidationError。
    """

    if not isinstance(payload, Mapping):
        return None
    message = payload.get("message")
    if not isinstance(message, str) or not message:
        return None
    window = bound_history(payload.get("conversationHistory"))
    history = tuple(ChatMessage.from_payload(item) for item in window)
    return RelayRequest(message=message, conversation_history=history)


class MessageRelay:
    """无状态的消息中继。

    每次 handle 调用都是一次独立的事务：校验 -> 组装 -> 调用 Provider 一次 -> 回复。
    """

    def __init__(self, provider_client: Optional[ProviderClient] = None, model: str = THERAPIST_MODEL):
        self._provider_client = provider_client
        self._model = model

    @property
    def provider(self) -> ProviderClient:
        if self._provider_client is None:
            self._provider_client = create_provider()
        return self._provider_client

    def handle(self, body: Union[bytes, str, Mapping[str, Any], None]) -> RelayResponse:
        """处理一次请求体，返回 RelayResponse。

        除 message 校验失败返回 400 外，其余情况一律 200 且带 reply。
        """

        start_time = time.time()
        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}"}
        try:
            payload = self._decode(body)
            request = parse_request(payload)
            if request is None:
                self._log(logging.INFO, "Rejected request without message", log_ctx)
                return RelayResponse(status_code=400, error=MESSAGE_REQUIRED_ERROR)
            response = self._relay(request, log_ctx)
        except Exception:
            logger.exception("Error in chat relay", extra={"extra": log_ctx})
            return RelayResponse(status_code=200, error=INTERNAL_ERROR, reply=APOLOGY_REPLY)

        self._log(
            logging.INFO,
            "Completed relay",
            log_ctx,
            elapsed_seconds=round(time.time() - start_time, 2),
            fallback=response.error is not None,
        )
        return response

    def relay(self, request: RelayRequest) -> RelayResponse:
        """已解析请求的入口，供 Python 调用方直接使用。"""

        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}"}
        if not isinstance(request.message, str) or not request.message:
            return RelayResponse(status_code=400, error=MESSAGE_REQUIRED_ERROR)
        try:
            return self._relay(request, log_ctx)
        except Exception:
            logger.exception("Error in chat relay", extra={"extra": log_ctx})
            return RelayResponse(status_code=200, error=INTERNAL_ERROR, reply=APOLOGY_REPLY)

    def _relay(self, request: RelayRequest, log_ctx: Dict[str, Any]) -> RelayResponse:
        history = bound_history(request.conversation_history)
        messages = build_messages(history, request.message)
        req = CompletionRequest(
            provider=self.provider.name,
            model=self._model,
            messages=messages,
        )
        self._log(
            logging.INFO,
            "Calling provider",
            log_ctx,
            provider=req.provider,
            model=req.model,
            message_count=len(messages),
        )

        try:
            result: CompletionResult = self.provider.chat(req)
        except ValidationError as e:
            if e.code != "MISSING_API_KEY":
                raise
            self._log(logging.WARNING, "Provider credential not configured", log_ctx, provider=req.provider)
            return RelayResponse(status_code=200, error=NOT_CONFIGURED_ERROR, reply=SERVICE_UNAVAILABLE_REPLY)
        except UPSTREAM_ERRORS as e:
            self._log_upstream_failure(e, log_ctx)
            return RelayResponse(status_code=200, error=UPSTREAM_FAILED_ERROR, reply=TECHNICAL_DIFFICULTY_REPLY)

        if result.usage:
            self._log(
                logging.INFO,
                "Token usage",
                log_ctx,
                prompt_tokens=result.usage.prompt_tokens,
                completion_tokens=result.usage.completion_tokens,
                total_tokens=result.usage.total_tokens,
            )

        reply = result.text
        if not reply.strip():
            self._log(logging.WARNING, "Empty completion", log_ctx, choices=len(result.choices))
            reply = LISTENING_REPLY
        return RelayResponse(status_code=200, reply=reply)

    @staticmethod
    def _decode(body: Union[bytes, str, Mapping[str, Any], None]) -> Any:
        if isinstance(body, Mapping):
            return body
        if body is None:
            raise ValidationError(code="EMPTY_BODY", message="request body is empty")
        return json.loads(body)

    def _log_upstream_failure(self, error: BusinessError, log_ctx: Dict[str, Any]) -> None:
        self._log(
            logging.ERROR,
            "Completion provider error",
            log_ctx,
            code=error.code,
            http_status=error.http_status,
            detail=error.message,
            **error.extra,
        )

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})


_default_relay: Optional[MessageRelay] = None


def get_default_relay() -> MessageRelay:
    """获取默认的 MessageRelay 实例（单例，Relay 本身无状态）。"""

    global _default_relay
    if _default_relay is None:
        _default_relay = MessageRelay()
    return _default_relay


