"""角色系统提示词加载工具。

按角色模式(role_mode) 从 prompts/<locale> 目录读取对应的 system prompt 文本，
用于构造 ChatMessage(role="system")。未知角色回退到 supportive_friend。
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict

from diet_companion.domain.models import DEFAULT_ROLE_MODE, ROLE_MODES


PROMPTS_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class RoleProfile:
    """角色在界面上的展示信息。"""

    id: str
    label: str
    welcome_message: str


ROLE_PROFILES: Dict[str, RoleProfile] = {
    "supportive_friend": RoleProfile(
        id="supportive_friend",
        label="Supportive Friend",
        welcome_message=(
            "Hi! I'm here to support you on your weight loss journey. "
            "How are you feeling today? Remember, every small step counts! 💪"
        ),
    ),
    "nutritionist": RoleProfile(
        id="nutritionist",
        label="Nutritionist",
        welcome_message=(
            "Hello! I'm your nutritionist, ready to help you create a healthy eating plan. "
            "What would you like to know about nutrition today? 🥗"
        ),
    ),
    "fitness_trainer": RoleProfile(
        id="fitness_trainer",
        label="Fitness Trainer",
        welcome_message=(
            "Hey there! I'm your fitness trainer, here to help you reach your fitness goals safely. "
            "What's your workout plan today? 💪"
        ),
    ),
}


@lru_cache(maxsize=None)
def load_system_prompt(role_mode: str, locale: str = "zh") -> str:
    """根据角色模式和语言加载系统提示词文本。"""

    if role_mode not in ROLE_MODES:
        role_mode = DEFAULT_ROLE_MODE
    fname = PROMPTS_DIR / locale / f"{role_mode}.md"
    return fname.read_text(encoding="utf-8").strip()
