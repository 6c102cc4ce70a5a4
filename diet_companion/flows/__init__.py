"""LangGraph-based orchestration of a chat turn."""

from diet_companion.flows.graph import CHAT_FAILURE_REPLY, NO_REPLY_MESSAGE
from diet_companion.flows.runner import ChatOptions, ChatOrchestrator

__all__ = ["CHAT_FAILURE_REPLY", "NO_REPLY_MESSAGE", "ChatOptions", "ChatOrchestrator"]
