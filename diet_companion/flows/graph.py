"""LangGraph construction and node implementations for a chat turn.

validate -> assemble -> invoke_chat -> {END | classify -> {END | invoke_images -> END}}

Upstream failures never leave the graph: a failed chat call degrades to
CHAT_FAILURE_REPLY, a failed image call degrades to an empty image list.
Only InvalidInput raised by ``validate`` propagates to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from diet_companion.agents.assembler import assemble, resolve_role_mode
from diet_companion.domain.exceptions import InvalidInput, UpstreamError
from diet_companion.domain.models import ChatMessage, ChatRequest, ChatTurnRequest
from diet_companion.flows.state import ChatTurnState
from diet_companion.food.classifier import classify
from diet_companion.food.prompt_builder import build_image_prompt
from diet_companion.infrastructure.logging.logger import logger

if TYPE_CHECKING:
    from diet_companion.flows.runner import ChatOrchestrator

CHAT_FAILURE_REPLY = "抱歉，遇到了一些技术问题。请稍后再试，或者联系开发者获得帮助。"
NO_REPLY_MESSAGE = "抱歉，我现在无法回应。请稍后再试。"


def _parse_history(raw) -> List[ChatMessage]:
    if not isinstance(raw, (list, tuple)):
        raise InvalidInput(code="INVALID_HISTORY", message="Invalid conversationHistory parameter")
    return [
        item if isinstance(item, ChatMessage) else ChatMessage.from_payload(item, index=i)
        for i, item in enumerate(raw)
    ]


def validate_node(state: ChatTurnState) -> ChatTurnState:
    message = state.get("raw_message")
    if not isinstance(message, str) or not message:
        raise InvalidInput(code="INVALID_MESSAGE", message="Invalid message parameter")
    state["request"] = ChatTurnRequest(
        user_message=message,
        history=_parse_history(state.get("raw_history")),
        role_mode=resolve_role_mode(state.get("raw_role")),
    )
    return state


def assemble_node(state: ChatTurnState) -> ChatTurnState:
    req = state["request"]
    state["messages"] = assemble(req.role_mode, req.history, req.user_message)
    return state


def invoke_chat_node(state: ChatTurnState, orchestrator: "ChatOrchestrator") -> ChatTurnState:
    req = state["request"]
    opts = orchestrator.chat_options
    chat_req = ChatRequest(
        messages=state["messages"],
        temperature=opts.temperature,
        max_tokens=opts.max_tokens,
        thinking=opts.thinking,
    )
    log_ctx = {"role_mode": req.role_mode, "history": len(req.history)}
    logger.info("invoke_chat.start", extra={"extra": log_ctx})
    try:
        result = orchestrator.completion_client.complete(chat_req)
    except UpstreamError as exc:
        logger.error(
            "invoke_chat.upstream_error",
            extra={"extra": {**log_ctx, "code": exc.code, "error": exc.message, "user_message": req.user_message}},
        )
        state["reply_text"] = CHAT_FAILURE_REPLY
        state["chat_ok"] = False
        state["degraded"] = True
        return state

    if result.text is None:
        logger.warning("invoke_chat.empty_choices", extra={"extra": log_ctx})
        state["reply_text"] = NO_REPLY_MESSAGE
        state["chat_ok"] = False
        state["degraded"] = True
        return state

    state["reply_text"] = result.text
    state["chat_ok"] = True
    logger.info("invoke_chat.end", extra={"extra": {**log_ctx, "finish_reason": result.finish_reason}})
    return state


def classify_node(state: ChatTurnState) -> ChatTurnState:
    # 只看用户原始消息，不看助手回复
    intent = classify(state["request"].user_message)
    state["food_intent"] = intent
    if intent.detected:
        logger.info("classify.food_detected", extra={"extra": {"rule": intent.rule, "description": intent.description}})
    return state


def invoke_images_node(state: ChatTurnState, orchestrator: "ChatOrchestrator") -> ChatTurnState:
    description = state["food_intent"].description
    try:
        urls = orchestrator.image_client.generate_images(build_image_prompt(description))
    except Exception as exc:
        logger.error(
            "invoke_images.failed",
            extra={"extra": {"error": str(exc), "code": getattr(exc, "code", None), "description": description}},
        )
        urls = []
    state["images"] = list(urls)
    logger.info("invoke_images.end", extra={"extra": {"count": len(state["images"])}})
    return state


def chat_router(state: ChatTurnState, orchestrator: "ChatOrchestrator") -> str:
    if state.get("chat_ok") and orchestrator.image_generation_enabled:
        return "classify"
    return "done"


def food_router(state: ChatTurnState) -> str:
    intent = state.get("food_intent")
    if intent and intent.detected and intent.description.strip():
        return "images"
    return "done"


def build_graph(orchestrator: "ChatOrchestrator") -> CompiledStateGraph:
    graph = StateGraph(ChatTurnState)
    graph.add_node("validate", validate_node)
    graph.add_node("assemble", assemble_node)
    graph.add_node("invoke_chat", lambda s: invoke_chat_node(s, orchestrator))
    graph.add_node("classify", classify_node)
    graph.add_node("invoke_images", lambda s: invoke_images_node(s, orchestrator))
    graph.set_entry_point("validate")
    graph.add_edge("validate", "assemble")
    graph.add_edge("assemble", "invoke_chat")
    graph.add_conditional_edges(
        "invoke_chat",
        lambda s: chat_router(s, orchestrator),
        {"classify": "classify", "done": END},
    )
    graph.add_conditional_edges("classify", food_router, {"images": "invoke_images", "done": END})
    graph.add_edge("invoke_images", END)
    return graph.compile()
