"""统一的对话与结果数据模型。

本模块定义了单次请求内流转的标准数据结构：

- ChatMessage: 一条对话消息（system/user/assistant）。
- ChatRequest: 发给豆包聊天接口的完整请求。
- CompletionResult: 从聊天接口解析后的统一结果。
- ImageGenerationRequest / ImageGenerationOutcome: 图片生成的请求与结果。
- ChatTurnRequest / ChatTurnResult: 编排器一轮对话的输入与输出。

所有实体都只在一次请求内存在，不做持久化。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from diet_companion.domain.exceptions import InvalidInput


# LLM 消息角色类型（与豆包 / OpenAI 的 role 字段对应）
Role = Literal["system", "user", "assistant"]
VALID_ROLES = ("system", "user", "assistant")

# 角色模式：决定发给聊天接口的 system prompt
RoleMode = Literal["supportive_friend", "nutritionist", "fitness_trainer"]
ROLE_MODES = ("supportive_friend", "nutritionist", "fitness_trainer")
DEFAULT_ROLE_MODE: RoleMode = "supportive_friend"

# 纯文本，或多模态内容片段列表，如 [{"type": "text", "text": "..."}]
MessageContent = Union[str, List[Dict[str, Any]]]


@dataclass
class ChatMessage:
    """一条对话消息，既可用于请求历史，也可用于新消息。"""

    role: Role
    content: MessageContent

    def to_payload(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_payload(cls, raw: Any, index: int = 0) -> "ChatMessage":
        """从请求 JSON 构造消息，结构不合法时抛出 InvalidInput。"""

        if not isinstance(raw, dict):
            raise InvalidInput(
                code="INVALID_HISTORY",
                message="Invalid conversationHistory parameter",
                index=index,
            )
        role = raw.get("role")
        content = raw.get("content")
        if role not in VALID_ROLES:
            raise InvalidInput(
                code="INVALID_HISTORY",
                message="Invalid conversationHistory parameter",
                index=index,
                reason="unknown role",
            )
        if isinstance(content, list):
            if not all(isinstance(part, dict) for part in content):
                raise InvalidInput(
                    code="INVALID_HISTORY",
                    message="Invalid conversationHistory parameter",
                    index=index,
                    reason="content parts must be objects",
                )
        elif not isinstance(content, str):
            raise InvalidInput(
                code="INVALID_HISTORY",
                message="Invalid conversationHistory parameter",
                index=index,
                reason="content must be text or a list of parts",
            )
        return cls(role=role, content=content)


@dataclass
class ChatRequest:
    """一次聊天补全请求。

    model 为空时由 Provider 使用配置中的默认模型；
    thinking 对应豆包的深度思考开关（{"type": "enabled"|"disabled"}）。
    """

    messages: List[ChatMessage]
    model: Optional[str] = None
    temperature: Optional[float] = 0.7
    max_tokens: Optional[int] = 2000
    thinking: bool = False
    stream: bool = False


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息。"""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class CompletionResult:
    """一次聊天补全的结果。

    - text: 第一个候选的文本内容；上游返回空 choices 时为 None。
    - raw: 原始响应 JSON，用于调试或日志记录。
    """

    text: Optional[str]
    raw: Dict[str, Any]
    model: Optional[str] = None
    finish_reason: Optional[str] = None
    usage: Optional[ChatUsage] = None


@dataclass
class ImageGenerationRequest:
    """一次图片生成请求（字段与豆包 /images/generations 对应）。"""

    prompt: str
    model: Optional[str] = None
    response_format: Literal["url", "b64_json"] = "url"
    size: str = "2K"
    watermark: bool = True
    sequential_image_generation: Literal["auto", "manual"] = "auto"
    max_images: int = 1


@dataclass
class ImageGenerationOutcome:
    """图片生成结果，仅保留 URL，顺序与上游响应一致。"""

    urls: List[str] = field(default_factory=list)


@dataclass
class ChatTurnRequest:
    """编排器的一轮输入。"""

    user_message: str
    history: List[ChatMessage] = field(default_factory=list)
    role_mode: RoleMode = DEFAULT_ROLE_MODE


@dataclass
class ChatTurnResult:
    """编排器的一轮输出。

    degraded 为 True 表示 reply_text 是替代文案（上游失败），
    仅用于日志与测试，不出现在 HTTP 响应中。
    """

    reply_text: str
    images: List[str] = field(default_factory=list)
    degraded: bool = False


@dataclass
class ProviderStatus:
    """Provider 配置状态，供健康检查使用。"""

    configured: bool
    base_url: str
    model: str
    has_key: bool
