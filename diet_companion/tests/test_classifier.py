"""测试食物意图识别。"""

import pytest

from diet_companion.food.classifier import (
    EXTRACTION_RULES,
    classify,
    detect_food_keywords,
    extract_food_description,
    match_rule,
)


@pytest.mark.parametrize("text", ["我今天心情不好", "I feel stressed today", "", "Let's go for a walk"])
def test_no_keyword_means_no_detection_and_empty_extraction(text):
    assert detect_food_keywords(text) is False
    assert extract_food_description(text) == ""


def test_english_want_to_eat_with_chinese_food():
    text = "I want to eat 披萨"
    assert detect_food_keywords(text) is True
    assert extract_food_description(text) == "披萨"
    assert classify(text).rule == "en_want_to_eat"


def test_detection_is_case_insensitive():
    assert detect_food_keywords("PIZZA night")
    assert detect_food_keywords("Ice Cream")


def test_substring_match_false_positive_is_kept():
    # 已知局限：子串匹配
    assert detect_food_keywords("ricecooker")


def test_zh_want_to_eat_stops_at_punctuation():
    assert extract_food_description("我想吃火锅，但是怕胖") == "火锅"


def test_zh_ate_wins_over_generic_eat():
    intent = classify("我吃了饺子。")
    assert intent.description == "饺子"
    assert intent.rule == "zh_ate"


def test_zh_tasty_rule():
    intent = classify("这个蛋糕好吃")
    assert intent.description == "这个蛋糕"
    assert intent.rule == "zh_tasty"


def test_english_ate_rule():
    intent = classify("I ate fried rice.")
    assert intent.description == "fried rice"
    assert intent.rule == "en_ate"


def test_english_tasty_rule():
    intent = classify("This pizza is so delicious")
    assert intent.description == "This pizza"
    assert intent.rule == "en_tasty"


def test_fallback_returns_whole_text():
    text = "Breakfast ideas please"
    assert match_rule(text) is None
    assert extract_food_description(text) == text
    assert classify(text).rule is None


def test_rule_order_is_fixed():
    names = [r.name for r in EXTRACTION_RULES]
    assert names[:5] == ["zh_want_to_eat", "zh_ate", "zh_eat", "zh_tasty", "zh_craving"]
    assert names.index("en_want_to_eat") < names.index("en_eat")


def test_each_rule_can_match_on_its_own():
    samples = {
        "zh_want_to_eat": "想吃面条",
        "zh_ate": "吃了包子",
        "zh_eat": "吃米饭",
        "zh_tasty": "西瓜好吃",
        "zh_craving": "我想吃",
        "en_want_to_eat": "wants to eat salad",
        "en_ate": "ate cake",
        "en_eat": "eat noodles",
        "en_tasty": "Mango looks yummy",
    }
    for rule in EXTRACTION_RULES:
        assert rule.pattern.search(samples[rule.name]), rule.name
