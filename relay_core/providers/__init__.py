"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供各厂商的具体实现 (openai_client)。
"""

from typing import Optional

from relay_core.config.settings import settings
from relay_core.providers.base import ProviderClient
from relay_core.providers.openai_client import OpenAIClient
from relay_core.providers.registry import get_provider_config


PROVIDER_CLIENTS = {
    "openai": OpenAIClient,
}


def create_provider(name: Optional[str] = None, cfg=None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。

    名称先经 registry 解析（不区分大小写），未注册的 Provider 抛 KeyError。
    """

    cfg = cfg or settings
    provider_cfg = get_provider_config(name or getattr(cfg, "default_provider", "openai"))
    return PROVIDER_CLIENTS[provider_cfg.name](cfg)
