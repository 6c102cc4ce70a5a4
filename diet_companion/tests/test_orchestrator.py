"""测试一轮聊天的编排与降级策略。"""

import pytest

from diet_companion.domain.exceptions import ApiError, InvalidInput, NetworkError
from diet_companion.domain.models import ChatMessage
from diet_companion.flows import CHAT_FAILURE_REPLY, NO_REPLY_MESSAGE, ChatOptions, ChatOrchestrator
from diet_companion.tests.fakes import FakeCompletion, FakeImages


def _orchestrator(completion=None, images=None, **kw):
    return ChatOrchestrator(
        completion_client=completion or FakeCompletion(),
        image_client=images or FakeImages(),
        chat_options=ChatOptions(temperature=0.8, max_tokens=1500, thinking=True),
        image_generation_enabled=kw.get("image_generation_enabled", True),
    )


def test_plain_reply_without_food_never_calls_images():
    images = FakeImages()
    result = _orchestrator(images=images).run("I feel stressed today")
    assert result.reply_text == "多喝水，少吃糖"
    assert result.images == []
    assert images.prompts == []


def test_food_message_generates_images_from_user_message():
    completion = FakeCompletion(text="披萨热量很高哦")
    images = FakeImages()
    result = _orchestrator(completion, images).run("I want to eat 披萨", [], "nutritionist")
    assert result.reply_text == "披萨热量很高哦"
    assert result.images == ["https://img/1.png"]
    assert len(images.prompts) == 1
    assert "food photograph of: 披萨" in images.prompts[0]


def test_chat_request_carries_options_and_history():
    completion = FakeCompletion()
    history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
    _orchestrator(completion).run("今天好累", history, "fitness_trainer")
    req = completion.requests[0]
    assert req.temperature == 0.8
    assert req.max_tokens == 1500
    assert req.thinking is True
    assert len(req.messages) == len(history) + 2
    assert req.messages[0].role == "system"
    assert req.messages[1] == ChatMessage(role="user", content="hi")
    assert req.messages[-1] == ChatMessage(role="user", content="今天好累")


@pytest.mark.parametrize("error", [ApiError(code="API_ERROR", message="500"), NetworkError(code="NETWORK_ERROR", message="timeout")])
def test_chat_failure_degrades_to_apology(error):
    images = FakeImages()
    result = _orchestrator(FakeCompletion(error=error), images).run("我想吃火锅")
    assert result.reply_text == CHAT_FAILURE_REPLY
    assert result.images == []
    assert result.degraded is True
    assert images.prompts == []


def test_empty_choices_use_no_reply_message():
    images = FakeImages()
    result = _orchestrator(FakeCompletion(text=None), images).run("我想吃火锅")
    assert result.reply_text == NO_REPLY_MESSAGE
    assert result.images == []
    assert images.prompts == []


def test_image_failure_keeps_reply():
    images = FakeImages(error=ApiError(code="API_ERROR", message="boom"))
    result = _orchestrator(FakeCompletion(text="火锅可以选清汤"), images).run("我想吃火锅")
    assert result.reply_text == "火锅可以选清汤"
    assert result.images == []
    assert result.degraded is False


def test_image_generation_can_be_disabled():
    images = FakeImages()
    result = _orchestrator(images=images, image_generation_enabled=False).run("我想吃火锅")
    assert result.images == []
    assert images.prompts == []


@pytest.mark.parametrize(
    "message,history",
    [
        (None, []),
        (123, []),
        ("", []),
        ("hi", "not-a-list"),
        ("hi", None),
        ("hi", [{"role": "robot", "content": "x"}]),
        ("hi", [{"role": "user"}]),
        ("hi", ["plain string"]),
    ],
)
def test_invalid_input_is_rejected_before_upstream(message, history):
    completion = FakeCompletion()
    with pytest.raises(InvalidInput):
        _orchestrator(completion).run(message, history)
    assert completion.requests == []


def test_multipart_history_content_is_accepted():
    completion = FakeCompletion()
    history = [{"role": "user", "content": [{"type": "text", "text": "看看这个"}]}]
    _orchestrator(completion).run("怎么样", history)
    assert completion.requests[0].messages[1].content == [{"type": "text", "text": "看看这个"}]
