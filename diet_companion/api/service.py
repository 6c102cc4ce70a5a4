"""对外 API 服务模块。

提供简化的函数接口供 HTTP 层调用。
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from diet_companion.config.settings import settings
from diet_companion.flows.runner import ChatOrchestrator
from diet_companion.infrastructure.logging.logger import logger
from diet_companion.prompts import ROLE_PROFILES
from diet_companion.providers import create_completion_client, create_image_client


SERVICE_NAME = "weight-loss-assistant-chat-api"
API_NAME = "doubao"

_orchestrator: Optional[ChatOrchestrator] = None


def get_default_orchestrator() -> ChatOrchestrator:
    """获取默认的编排器实例（单例，使用全局 settings 构造的豆包客户端）。"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ChatOrchestrator(
            completion_client=create_completion_client(settings),
            image_client=create_image_client(settings),
        )
    return _orchestrator


def utc_timestamp() -> str:
    """与 JS toISOString 一致的 UTC 时间戳，如 2024-01-01T00:00:00.000Z。"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def run_chat(
    orchestrator: ChatOrchestrator,
    message: Any,
    conversation_history: Any = (),
    role: Optional[Any] = None,
) -> Dict[str, Any]:
    """运行一轮聊天并整理为 HTTP 响应体。

    Args:
        orchestrator: 编排器实例
        message: 用户消息
        conversation_history: 对话历史（{role, content} 列表）
        role: 角色模式（可选，未知值回退为 supportive_friend）

    Returns:
        {success, response, images?, timestamp}；images 仅在非空时出现

    Raises:
        InvalidInput: 请求参数不合法
    """
    result = orchestrator.run(message, conversation_history, role)
    if result.degraded:
        logger.warning("chat.degraded", extra={"extra": {"role": role}})
    body: Dict[str, Any] = {
        "success": True,
        "response": result.reply_text,
    }
    if result.images:
        body["images"] = result.images
    body["timestamp"] = utc_timestamp()
    return body


def health_status(orchestrator: ChatOrchestrator) -> Dict[str, Any]:
    """健康检查响应体。"""
    status = orchestrator.status()
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "api": API_NAME,
        "apiConfigured": status.configured,
        "apiModel": status.model,
        "timestamp": utc_timestamp(),
    }


def list_roles() -> List[Dict[str, str]]:
    """列出可选角色及其欢迎语。"""
    return [
        {"id": p.id, "label": p.label, "welcomeMessage": p.welcome_message}
        for p in ROLE_PROFILES.values()
    ]
