"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("DIET_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
        Path(__file__).resolve().parents[1] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """应用配置。"""

    # ---- 豆包 / 火山方舟 ----
    doubao_api_key: Optional[str] = Field(default=None, description="豆包 API 密钥")
    doubao_base_url: str = Field(
        default="https://ark.cn-beijing.volces.com/api/v3",
        description="豆包 API 基础URL",
    )
    doubao_model: str = Field(
        default="doubao-seed-1-6-flash-250615",
        description="默认聊天模型",
    )
    doubao_image_model: str = Field(
        default="doubao-seedream-4-0-250828",
        description="默认图片生成模型",
    )
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")

    # ---- 聊天参数 ----
    chat_temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    chat_max_tokens: int = Field(default=1500, ge=1)
    chat_thinking: bool = Field(default=True, description="是否启用深度思考")

    # ---- 图片生成 ----
    image_generation_enabled: bool = Field(default=True, description="是否为食物话题生成图片")
    image_size: str = Field(default="2K")
    image_watermark: bool = Field(default=True)
    image_max_images: int = Field(default=1, ge=1, le=15)

    # ---- 运行环境与日志 ----
    app_env: str = Field(default="production", description="development 时 500 响应附带错误详情")
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="允许跨域访问的前端地址",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("doubao_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"development", "dev"}


settings = Settings()
