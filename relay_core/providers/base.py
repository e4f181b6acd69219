"""Provider 抽象接口。

Relay 不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个厂商实现一个 ProviderClient（如 OpenAIClient）。
- 负责：将 CompletionRequest 转成具体 API 请求，并把响应 JSON 解析为 CompletionResult。
"""

from typing import Protocol
from relay_core.domain.models import CompletionRequest, CompletionResult


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - chat(req): 执行一次非流式补全调用，返回统一的 CompletionResult。
    """

    name: str

    def chat(self, req: CompletionRequest) -> CompletionResult:
        ...
