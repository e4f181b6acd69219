"""对外 API 服务模块。

提供简化的函数接口供上层应用直接调用，不经过 HTTP。
"""

from typing import Any, Dict, Optional, Sequence

from relay_core.relay import get_default_relay


def run_chat(
    message: str,
    conversation_history: Optional[Sequence[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """运行一次 Relay 对话。

    Args:
        message: 用户输入内容
        conversation_history: [{role, content}, ...]，按时间正序，只使用最后 10 条

    Returns:
        包含 status_code 与 body 的字典；body 与 HTTP 接口返回的 JSON 相同。
        历史格式错误与 HTTP 接口一样得到 200 + 致歉回复，不会抛给调用方。
    """

    result = get_default_relay().handle({"message": message, "conversationHistory": conversation_history})
    return {"status_code": result.status_code, "body": result.body()}
