"""Provider 抽象接口。

编排器不直接依赖具体厂商的 HTTP 实现，而是依赖此处的协议：

- CompletionClient: 将 ChatRequest 转成聊天补全请求，并解析为 CompletionResult。
- ImageClient: 调用图片生成接口，返回图片 URL 列表。

测试中可以用任意满足协议的假对象替换真实客户端。
"""

from typing import Iterable, List, Protocol

from diet_companion.domain.models import ChatRequest, CompletionResult, ProviderStatus


class CompletionClient(Protocol):
    """聊天补全客户端协议。"""

    name: str

    def complete(self, req: ChatRequest) -> CompletionResult:
        ...

    def complete_stream(self, req: ChatRequest) -> Iterable[str]:
        """执行一次流式调用，逐步产出文本增量。"""

        ...

    def get_status(self) -> ProviderStatus:
        ...


class ImageClient(Protocol):
    """图片生成客户端协议。"""

    name: str

    def generate_images(self, prompt: str) -> List[str]:
        ...

    def get_status(self) -> ProviderStatus:
        ...
