"""食物意图识别。

两个入口：

- detect_food_keywords(text): 文本（casefold 后）是否包含任一食物关键词。
  这是子串匹配而非分词，"ricecooker" 也会命中 "rice"，属于已知局限。
- extract_food_description(text): 按 EXTRACTION_RULES 的顺序逐条匹配，
  第一条命中的规则胜出，返回其捕获组（去除首尾空白）；没有规则命中但
  检测到关键词时返回整段原文；未检测到关键词时返回空串。
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple


FOOD_KEYWORDS: Tuple[str, ...] = (
    # 主食
    "米饭", "rice", "面条", "noodles", "饺子", "dumplings", "包子", "steamed buns", "馒头", "bread",
    "面包", "汉堡", "burger", "披萨", "pizza", "意面", "pasta", "炒饭", "fried rice", "粥", "congee",
    # 肉类
    "鸡", "chicken", "牛肉", "beef", "猪肉", "pork", "羊肉", "lamb", "鱼", "fish", "虾", "shrimp",
    "蟹", "crab", "海鲜", "seafood", "肉", "meat", "烤肉", "barbecue", "炸鸡", "fried chicken", "火锅", "hotpot",
    # 蔬菜
    "蔬菜", "vegetables", "沙拉", "salad", "菜", "dish", "青菜", "greens", "白菜", "cabbage",
    "菠菜", "spinach", "西红柿", "tomato", "黄瓜", "cucumber", "土豆", "potato", "萝卜", "radish",
    # 水果
    "水果", "fruit", "苹果", "apple", "香蕉", "banana", "橙子", "orange", "葡萄", "grape",
    "草莓", "strawberry", "西瓜", "watermelon", "柠檬", "lemon", "芒果", "mango",
    # 零食甜点
    "蛋糕", "cake", "饼干", "cookies", "巧克力", "chocolate", "冰淇淋", "ice cream", "奶茶", "milk tea",
    "咖啡", "coffee", "甜点", "dessert", "零食", "snacks", "薯片", "chips", "糖果", "candy",
    # 饮料
    "果汁", "juice", "饮料", "drink", "汽水", "soda", "茶", "tea", "牛奶", "milk", "豆浆", "soy milk",
    # 烹饪方式与口味
    "炒", "stir-fry", "煮", "boil", "蒸", "steam", "烤", "bake", "炸", "fry", "煎", "pan-fry",
    "红烧", "braise", "麻辣", "spicy", "酸甜", "sweet and sour", "咸", "salty", "香辣", "fragrant and spicy",
    # 通用词
    "吃", "eat", "想吃", "want to eat", "食物", "food", "美食", "delicious food", "料理", "cuisine",
    "餐", "meal", "早餐", "breakfast", "午餐", "lunch", "晚餐", "dinner", "宵夜", "midnight snack",
    "小吃", "snack",
)

_FOLDED_KEYWORDS = tuple(k.casefold() for k in FOOD_KEYWORDS)

# 中文规则截止到全角标点；英文规则额外截止到半角标点
_ZH_END = r"(?:[，。！？]|$)"
_EN_END = r"(?:[,.!?，。！？]|$)"


@dataclass(frozen=True)
class ExtractionRule:
    """一条抽取规则：命中后取 pattern 的第 group 个捕获组。"""

    name: str
    pattern: Pattern[str]
    group: int = 1


EXTRACTION_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("zh_want_to_eat", re.compile(r"想吃(.+?)" + _ZH_END)),
    ExtractionRule("zh_ate", re.compile(r"吃了(.+?)" + _ZH_END)),
    ExtractionRule("zh_eat", re.compile(r"吃(.+?)" + _ZH_END)),
    ExtractionRule("zh_tasty", re.compile(r"(.+?)好吃")),
    ExtractionRule("zh_craving", re.compile(r"(.+?)想吃")),
    ExtractionRule("en_want_to_eat", re.compile(r"\bwants? to eat\s+(.+?)" + _EN_END, re.IGNORECASE)),
    ExtractionRule("en_ate", re.compile(r"\bate\s+(.+?)" + _EN_END, re.IGNORECASE)),
    ExtractionRule("en_eat", re.compile(r"\beat\s+(.+?)" + _EN_END, re.IGNORECASE)),
    ExtractionRule(
        "en_tasty",
        re.compile(r"(.+?)\s+(?:is|are|was|were|looks?)\s+(?:so\s+)?(?:tasty|delicious|yummy)", re.IGNORECASE),
    ),
)


@dataclass(frozen=True)
class FoodIntent:
    detected: bool
    description: str = ""
    rule: Optional[str] = None


def detect_food_keywords(text: str) -> bool:
    folded = text.casefold()
    return any(keyword in folded for keyword in _FOLDED_KEYWORDS)


def match_rule(text: str) -> Optional[Tuple[ExtractionRule, str]]:
    """返回第一条命中的规则及其捕获内容（已去空白），都不命中返回 None。"""

    for rule in EXTRACTION_RULES:
        match = rule.pattern.search(text)
        if match and match.group(rule.group):
            return rule, match.group(rule.group).strip()
    return None


def classify(text: str) -> FoodIntent:
    if not detect_food_keywords(text):
        return FoodIntent(detected=False)
    hit = match_rule(text)
    if hit is None:
        return FoodIntent(detected=True, description=text)
    rule, captured = hit
    return FoodIntent(detected=True, description=captured, rule=rule.name)


def extract_food_description(text: str) -> str:
    return classify(text).description
