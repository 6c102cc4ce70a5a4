"""配置加载（pydantic-settings + 可选 config.yaml）。"""

from diet_companion.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
