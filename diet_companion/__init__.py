"""Diet Companion 顶层包。

减肥助手聊天后端：把用户消息按角色模式转发给豆包聊天接口，
并在用户提到食物时调用豆包图片生成接口配图。
"""

from diet_companion.flows import ChatOptions, ChatOrchestrator

__all__ = ["ChatOptions", "ChatOrchestrator"]
