"""Relay Core 顶层包。

该包提供心理支持聊天应用的消息中继服务，
包括配置加载、领域模型、Provider 适配、Relay 核心、
HTTP 接口以及危机求助等静态资源。
"""

__version__ = "0.1.0"

from relay_core.relay import MessageRelay, get_default_relay

__all__ = ["MessageRelay", "get_default_relay", "__version__"]
