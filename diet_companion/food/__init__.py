"""食物意图识别与图片提示词构造。"""

from diet_companion.food.classifier import (
    EXTRACTION_RULES,
    FOOD_KEYWORDS,
    FoodIntent,
    classify,
    detect_food_keywords,
    extract_food_description,
)
from diet_companion.food.prompt_builder import build_image_prompt

__all__ = [
    "EXTRACTION_RULES",
    "FOOD_KEYWORDS",
    "FoodIntent",
    "classify",
    "detect_food_keywords",
    "extract_food_description",
    "build_image_prompt",
]
