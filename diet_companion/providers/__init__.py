"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供豆包聊天与图片生成的具体实现 (doubao_client、doubao_image_client)。
"""

from typing import Optional

from diet_companion.config.settings import settings
from diet_companion.providers.base import CompletionClient, ImageClient
from diet_companion.providers.doubao_client import DoubaoClient
from diet_companion.providers.doubao_image_client import DoubaoImageClient


def create_completion_client(cfg: Optional[object] = None) -> CompletionClient:
    """按配置创建聊天补全客户端，默认取全局 settings。"""

    return DoubaoClient(cfg or settings)


def create_image_client(cfg: Optional[object] = None) -> ImageClient:
    """按配置创建图片生成客户端，默认取全局 settings。"""

    return DoubaoImageClient(cfg or settings)
