"""State definition for the chat turn graph."""

from __future__ import annotations

from typing import Any, List, Optional, TypedDict

from diet_companion.domain.models import ChatMessage, ChatTurnRequest
from diet_companion.food.classifier import FoodIntent


class ChatTurnState(TypedDict, total=False):
    """State shared across LangGraph nodes for one chat turn."""

    raw_message: Any
    raw_history: Any
    raw_role: Any
    request: Optional[ChatTurnRequest]
    messages: List[ChatMessage]
    reply_text: str
    chat_ok: bool
    degraded: bool
    food_intent: Optional[FoodIntent]
    images: List[str]
