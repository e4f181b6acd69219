"""Message Relay：把用户消息转发给补全 Provider，并把所有结果规整为安全回复。"""

from .engine import (
    MAX_HISTORY_MESSAGES,
    MessageRelay,
    bound_history,
    build_messages,
    get_default_relay,
    parse_request,
)

__all__ = [
    "MAX_HISTORY_MESSAGES",
    "MessageRelay",
    "bound_history",
    "build_messages",
    "get_default_relay",
    "parse_request",
]
