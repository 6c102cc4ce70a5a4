"""聊天请求组装。

把角色模式、对话历史和新用户消息组装成发给聊天接口的消息列表：
[system] + history + [user]。
"""

from typing import Any, List, Optional, Sequence

from diet_companion.domain.models import DEFAULT_ROLE_MODE, ROLE_MODES, ChatMessage, RoleMode
from diet_companion.prompts import load_system_prompt


def resolve_role_mode(value: Optional[Any]) -> RoleMode:
    """未知或缺省的角色模式回退为 supportive_friend，从不报错。"""

    if isinstance(value, str) and value in ROLE_MODES:
        return value  # type: ignore[return-value]
    return DEFAULT_ROLE_MODE


def assemble(
    role_mode: Optional[Any],
    history: Sequence[ChatMessage],
    user_message: str,
) -> List[ChatMessage]:
    """返回新的消息列表，不修改传入的 history。"""

    system_prompt = load_system_prompt(resolve_role_mode(role_mode))
    messages = [ChatMessage(role="system", content=system_prompt)]
    messages.extend(history)
    messages.append(ChatMessage(role="user", content=user_message))
    return messages
