"""对话请求组装。"""

from diet_companion.agents.assembler import assemble, resolve_role_mode

__all__ = ["assemble", "resolve_role_mode"]
