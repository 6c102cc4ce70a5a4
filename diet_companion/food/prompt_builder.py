"""食物图片生成提示词。"""

from diet_companion.domain.exceptions import InvalidInput


FOOD_PHOTO_TEMPLATE = """Generate a high-quality, appetizing food photograph of: {description}

Requirements:
- Make the food look delicious and professionally photographed
- Use warm, appetizing lighting
- Style: Food photography, restaurant menu quality
- Background: Clean, simple, food-related background
- Colors: Natural, realistic food colors
- Composition: Centered, well-lit, appetizing presentation
- No text, watermarks (except the default API watermark), or signatures
- Focus on making the food look tasty and appealing

The image should be suitable for a food blog or restaurant menu and make viewers want to eat this food."""


def build_image_prompt(food_description: str) -> str:
    """把食物描述套进固定的摄影模板，调用方需保证描述非空。"""

    if not food_description or not food_description.strip():
        raise InvalidInput(code="EMPTY_FOOD_DESCRIPTION", message="food description must not be empty")
    return FOOD_PHOTO_TEMPLATE.format(description=food_description)
