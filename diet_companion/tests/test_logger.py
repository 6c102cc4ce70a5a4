import json
import logging

from diet_companion.domain.exceptions import ApiError
from diet_companion.flows import ChatOptions, ChatOrchestrator
from diet_companion.infrastructure.logging import logger as logger_module
from diet_companion.infrastructure.logging.logger import JsonFormatter
from diet_companion.tests.fakes import FakeCompletion, FakeImages


class CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.lines = []
        self.setFormatter(JsonFormatter())

    def emit(self, record):
        self.lines.append(self.format(record))


def _run_failing_turn(message):
    handler = CaptureHandler()
    logger_module.logger.addHandler(handler)
    try:
        orchestrator = ChatOrchestrator(
            completion_client=FakeCompletion(error=ApiError(code="API_ERROR", message="down")),
            image_client=FakeImages(),
            chat_options=ChatOptions(),
            image_generation_enabled=True,
        )
        orchestrator.run(message)
    finally:
        logger_module.logger.removeHandler(handler)
    return handler.lines


def test_redaction_truncates_user_content_in_extra(monkeypatch):
    monkeypatch.setattr(logger_module.settings, "log_redact_content", True)
    message = "我今天的饮食记录：" + "早餐燕麦牛奶，午餐鸡胸肉沙拉，" * 12
    lines = _run_failing_turn(message)
    error_lines = [json.loads(line) for line in lines if "invoke_chat.upstream_error" in line]
    assert error_lines
    assert all(message not in line for line in lines)
    logged = error_lines[0]["user_message"]
    assert logged.endswith("...")
    assert len(logged) == logger_module.REDACT_LIMIT + 3


def test_without_redaction_content_is_logged_in_full(monkeypatch):
    monkeypatch.setattr(logger_module.settings, "log_redact_content", False)
    message = "午餐吃了沙拉" * 20
    lines = _run_failing_turn(message)
    error_line = next(json.loads(line) for line in lines if "invoke_chat.upstream_error" in line)
    assert error_line["user_message"] == message


def test_short_values_are_untouched(monkeypatch):
    monkeypatch.setattr(logger_module.settings, "log_redact_content", True)
    record = logging.LogRecord("diet_companion", logging.INFO, __file__, 1, "invoke_chat.end", None, None)
    record.extra = {"count": 2, "code": "API_ERROR"}
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "invoke_chat.end"
    assert payload["count"] == 2
    assert payload["code"] == "API_ERROR"
