"""Provider 与模型配置。

本模块将"逻辑模型名"与"具体厂商模型名"解耦：

- 逻辑名（logical_name）：在代码里使用的统一名称，例如 "weight-loss-chat"。
- provider_model：厂商实际提供的模型 ID，例如 "doubao-seed-1-6-flash-250615"。

配置中的 doubao_model / doubao_image_model 会覆盖这里的默认值。"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    max_tokens: Optional[int] = None
    default_temperature: Optional[float] = None


@dataclass
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    models: Dict[str, ModelConfig]


CHAT_MODEL = "weight-loss-chat"
IMAGE_MODEL = "food-image"

# 豆包 / 火山方舟配置
DOUBAO_CONFIG = ProviderConfig(
    name="doubao",
    base_url="https://ark.cn-beijing.volces.com/api/v3",
    models={
        CHAT_MODEL: ModelConfig(
            logical_name=CHAT_MODEL,
            provider_model="doubao-seed-1-6-flash-250615",
            max_tokens=2000,
            default_temperature=0.7,
        ),
        IMAGE_MODEL: ModelConfig(
            logical_name=IMAGE_MODEL,
            provider_model="doubao-seedream-4-0-250828",
        ),
    },
)

