"""OpenAI Provider 适配器。

本模块负责：

1. 接收统一的 CompletionRequest。
2. 将其转换为 OpenAI chat/completions 的 HTTP 请求格式。
3. 调用 HTTP 接口并把网络/API 异常包装为业务异常。
4. 将响应 JSON 解析为统一的 CompletionResult。

错误到降级回复的映射不在这里处理，由 MessageRelay 负责。
"""

from typing import Any, Dict

import httpx

from relay_core.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from relay_core.domain.models import (
    ChatMessage,
    CompletionChoice,
    CompletionRequest,
    CompletionResult,
    CompletionUsage,
)
from relay_core.infrastructure.logging.logger import logger
from relay_core.providers.registry import ModelConfig, get_provider_config


class OpenAIClient:
    """OpenAI 提供方客户端实现。"""

    name = "openai"

    def __init__(self, settings):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings

    def chat(self, req: CompletionRequest) -> CompletionResult:
        """执行一次非流式补全调用。

        步骤：
        1. 读取模型配置（logical model -> provider model）。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并捕获网络错误/限流/服务端错误。
        4. 使用统一的解析函数构造 CompletionResult。
        """

        api_key = getattr(self._settings, "openai_api_key", None)
        if not api_key:
            raise ValidationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        provider_cfg = get_provider_config(self.name)
        model_cfg = provider_cfg.models[req.model]
        payload = self._build_payload(req, model_cfg)
        base = getattr(self._settings, "openai_base_url", None) or provider_cfg.base_url
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        if resp.status_code == 429:
            raise RateLimitError(
                code="RATE_LIMIT", message=resp.text or "OpenAI rate limit", http_status=429, provider=self.name
            )
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code, provider=self.name)
        try:
            data = resp.json()
        except ValueError:
            logger.warning("Unparseable completion body", extra={"extra": {
                "provider": self.name,
                "status_code": resp.status_code,
            }})
            return CompletionResult(provider=self.name, model=req.model, choices=[], raw=None)
        if not isinstance(data, dict):
            return CompletionResult(provider=self.name, model=req.model, choices=[], raw=None)
        return self._parse_response(data, req)

    def _build_payload(self, req: CompletionRequest, model_cfg: ModelConfig) -> Dict[str, Any]:
        """将 CompletionRequest 转成 OpenAI 所需的请求 JSON。"""

        return {
            "model": model_cfg.provider_model,
            "messages": [m.to_payload() for m in req.messages],
            "temperature": req.temperature if req.temperature is not None else model_cfg.default_temperature,
            "max_tokens": req.max_tokens or model_cfg.max_tokens,
        }

    def _parse_response(self, data: dict, req: CompletionRequest) -> CompletionResult:
        """将原始响应 JSON 解析为统一的 CompletionResult。

        结构不符合预期的 choice 直接跳过。
        """

        choices: list[CompletionChoice] = []
        for i, ch in enumerate(data.get("choices") or []):
            if not isinstance(ch, dict):
                continue
            msg = ch.get("message") or {}
            content = msg.get("content") if isinstance(msg, dict) else None
            if not isinstance(content, str):
                content = ""
            choices.append(
                CompletionChoice(
                    index=ch.get("index", i),
                    message=ChatMessage(role="assistant", content=content),
                    finish_reason=ch.get("finish_reason"),
                )
            )
        usage_raw = data.get("usage") or {}
        usage = None
        if isinstance(usage_raw, dict) and usage_raw:
            usage = CompletionUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return CompletionResult(provider=self.name, model=req.model, choices=choices, usage=usage, raw=data)
