"""High-level entry point for one chat turn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from diet_companion.config.settings import settings
from diet_companion.domain.models import ChatTurnResult, ProviderStatus
from diet_companion.flows.graph import build_graph
from diet_companion.flows.state import ChatTurnState
from diet_companion.providers.base import CompletionClient, ImageClient


@dataclass
class ChatOptions:
    """聊天调用参数（温度、最大输出长度、深度思考开关）。"""

    temperature: float = 0.8
    max_tokens: int = 1500
    thinking: bool = True

    @classmethod
    def from_settings(cls, cfg=settings) -> "ChatOptions":
        return cls(
            temperature=cfg.chat_temperature,
            max_tokens=cfg.chat_max_tokens,
            thinking=cfg.chat_thinking,
        )


class ChatOrchestrator:
    """Sequence a chat turn over injected completion and image clients."""

    def __init__(
        self,
        completion_client: CompletionClient,
        image_client: ImageClient,
        chat_options: Optional[ChatOptions] = None,
        image_generation_enabled: Optional[bool] = None,
    ) -> None:
        self.completion_client = completion_client
        self.image_client = image_client
        self.chat_options = chat_options or ChatOptions.from_settings()
        if image_generation_enabled is None:
            image_generation_enabled = settings.image_generation_enabled
        self.image_generation_enabled = image_generation_enabled
        self._graph = build_graph(self)

    def run(
        self,
        user_message: Any,
        history: Any = (),
        role_mode: Optional[Any] = None,
    ) -> ChatTurnResult:
        """Execute one turn and return the reply plus any generated image URLs.

        Raises:
            InvalidInput: message or history is malformed.
        """

        state: ChatTurnState = {
            "raw_message": user_message,
            "raw_history": history,
            "raw_role": role_mode,
            "images": [],
            "degraded": False,
        }
        result = self._graph.invoke(state)
        return ChatTurnResult(
            reply_text=result.get("reply_text") or "",
            images=list(result.get("images") or []),
            degraded=bool(result.get("degraded")),
        )

    def status(self) -> ProviderStatus:
        return self.completion_client.get_status()
