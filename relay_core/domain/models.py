"""统一的对话与结果数据模型。

本模块定义了 Relay 内部共享的标准数据结构：

- ChatMessage: 一条对话消息（system/user/assistant），创建后不可变。
- CompletionRequest: 发给底层 LLM Provider 的完整请求。
- CompletionResult: 从 Provider 解析后的统一响应结果。
- RelayRequest / RelayResponse: Relay 对外的请求与响应。

Provider 适配器（如 OpenAIClient）只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, get_args

from relay_core.domain.exceptions import ValidationError


# 与 OpenAI chat/completions 的 role 字段对应
Role = Literal["system", "user", "assistant"]
ROLES = frozenset(get_args(Role))


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息，既可用于请求，也可用于响应。"""

    role: Role
    content: str

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatMessage":
        """从调用方传入的 {role, content} 映射构造消息。

        只接受三种角色和字符串内容，其余字段忽略。
        """

        if not isinstance(payload, Mapping):
            raise ValidationError(code="INVALID_HISTORY", message="history entry must be an object")
        role = payload.get("role")
        content = payload.get("content")
        if role not in ROLES:
            raise ValidationError(code="INVALID_HISTORY", message=f"unsupported role: {role!r}")
        if not isinstance(content, str):
            raise ValidationError(code="INVALID_HISTORY", message="history content must be a string")
        return cls(role=role, content=content)

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class CompletionRequest:
    """一次完整的补全请求。

    Relay 组装好消息列表后生成 CompletionRequest，再交给具体 ProviderClient。
    """

    provider: str  # 逻辑 Provider 名，如 "openai"
    model: str  # 逻辑模型名，如 "therapist-chat"（再由 registry 映射为真实模型名）
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class CompletionUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class CompletionChoice:
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class CompletionResult:
    """一次补全调用的最终结果。

    - choices 可能为空（上游返回了无法解析的内容）。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    provider: str
    model: str
    choices: List[CompletionChoice]
    usage: Optional[CompletionUsage] = None
    raw: Optional[dict] = None

    @property
    def text(self) -> str:
        """第一个候选回答的文本，不存在时为空字符串。"""

        if not self.choices:
            return ""
        return self.choices[0].message.content or ""


@dataclass(frozen=True)
class RelayRequest:
    message: str
    conversation_history: Tuple[ChatMessage, ...] = ()


@dataclass
class RelayResponse:
    """Relay 的输出：HTTP 状态码 + JSON 体。

    除 400 校验失败外，reply 总是存在。
    """

    status_code: int
    reply: Optional[str] = None
    error: Optional[str] = None

    def body(self) -> Dict[str, str]:
        payload: Dict[str, str] = {}
        if self.error is not None:
            payload["error"] = self.error
        if self.reply is not None:
            payload["reply"] = self.reply
        return payload
