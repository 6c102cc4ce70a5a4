"""豆包聊天补全 Provider 适配器。

本模块负责：

1. 接收统一的 ChatRequest。
2. 将其转换为豆包（火山方舟）/chat/completions 的请求格式。
3. 调用 HTTP 接口并把网络/状态码/响应结构问题统一包装为 UpstreamError。
4. 将响应 JSON 解析为 CompletionResult（纯文本 + 原始响应）。
"""

import json
from typing import Any, Dict, Iterable

import httpx

from diet_companion.config.settings import settings
from diet_companion.domain.exceptions import (
    ApiError,
    MalformedResponseError,
    NetworkError,
    UpstreamError,
)
from diet_companion.domain.models import ChatRequest, ChatUsage, CompletionResult, ProviderStatus
from diet_companion.infrastructure.logging.logger import logger
from diet_companion.providers.registry import CHAT_MODEL, DOUBAO_CONFIG


class DoubaoClient:
    """豆包聊天客户端。

    - name: Provider 名称（供日志使用）。
    - complete: 非流式调用，返回 CompletionResult。
    - complete_stream: 流式调用，逐步 yield 文本增量。
    """

    name = "doubao"

    def __init__(self, cfg=settings):
        # cfg 里包含 base_url、api_key、超时等配置
        self._settings = cfg

    # ---- 非流式 ----

    def complete(self, req: ChatRequest) -> CompletionResult:
        self._ensure_api_key()
        payload = self._build_payload(req, stream=False)
        logger.info(
            "doubao.chat.request",
            extra={"extra": {"model": payload["model"], "messages": len(payload["messages"])}},
        )
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{self._base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.RequestError as e:
            # DNS 失败、连接超时、读超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        if not 200 <= resp.status_code < 300:
            logger.error(
                "doubao.chat.api_error",
                extra={"extra": {"status": resp.status_code, "body": resp.text}},
            )
            raise ApiError(
                code="API_ERROR",
                message=f"Doubao API error: {resp.status_code} - {resp.text}",
                provider=self.name,
                upstream_status=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Doubao response is not JSON: {e}",
                provider=self.name,
            )
        return self._parse_response(data, payload["model"])

    # ---- 流式 ----

    def complete_stream(self, req: ChatRequest) -> Iterable[str]:
        self._ensure_api_key()
        payload = self._build_payload(req, stream=True)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                with client.stream(
                    "POST",
                    f"{self._base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                ) as resp:
                    if not 200 <= resp.status_code < 300:
                        resp.read()
                        raise ApiError(
                            code="API_ERROR",
                            message=f"Doubao API error: {resp.status_code} - {resp.text}",
                            provider=self.name,
                            upstream_status=resp.status_code,
                        )
                    for line in resp.iter_lines():
                        if not line or not line.startswith("data:"):
                            continue
                        data_str = line[5:].strip()
                        if data_str == "[DONE]":
                            return
                        try:
                            chunk = json.loads(data_str)
                        except json.JSONDecodeError:
                            continue
                        delta = self._delta_content(chunk)
                        if delta:
                            yield delta
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)

    def get_status(self) -> ProviderStatus:
        key = getattr(self._settings, "doubao_api_key", None) or ""
        return ProviderStatus(
            configured=bool(key),
            base_url=self._base_url,
            model=self._default_model,
            has_key=len(key) > 0,
        )

    # ---- 辅助方法 ----

    @property
    def _base_url(self) -> str:
        base = getattr(self._settings, "doubao_base_url", None) or DOUBAO_CONFIG.base_url
        return base.rstrip("/")

    @property
    def _default_model(self) -> str:
        return (
            getattr(self._settings, "doubao_model", None)
            or DOUBAO_CONFIG.models[CHAT_MODEL].provider_model
        )

    def _ensure_api_key(self) -> None:
        if not getattr(self._settings, "doubao_api_key", None):
            raise UpstreamError(
                code="MISSING_API_KEY",
                message="DOUBAO_API_KEY not set",
                provider=self.name,
            )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.doubao_api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, req: ChatRequest, stream: bool) -> Dict[str, Any]:
        model_cfg = DOUBAO_CONFIG.models[CHAT_MODEL]
        return {
            "model": req.model or self._default_model,
            "messages": [m.to_payload() for m in req.messages],
            "temperature": req.temperature if req.temperature is not None else model_cfg.default_temperature,
            "max_tokens": req.max_tokens if req.max_tokens is not None else model_cfg.max_tokens,
            "stream": stream,
            "thinking": {"type": "enabled" if req.thinking else "disabled"},
        }

    def _parse_response(self, data: Any, model: str) -> CompletionResult:
        if not isinstance(data, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Doubao response is not a JSON object",
                provider=self.name,
            )
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Doubao response has no choices list",
                provider=self.name,
            )
        usage = self._parse_usage(data.get("usage"))
        if not choices:
            return CompletionResult(text=None, raw=data, model=data.get("model") or model, usage=usage)

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Doubao response choice has no message",
                provider=self.name,
            )
        content = message.get("content")
        if content is None:
            text = ""
        elif isinstance(content, str):
            text = content
        else:
            # 多模态/结构化内容不报错，序列化为文本
            text = json.dumps(content, ensure_ascii=False)
        return CompletionResult(
            text=text,
            raw=data,
            model=data.get("model") or model,
            finish_reason=first.get("finish_reason"),
            usage=usage,
        )

    @staticmethod
    def _parse_usage(raw: Any) -> ChatUsage:
        usage_raw = raw if isinstance(raw, dict) else {}
        return ChatUsage(
            prompt_tokens=usage_raw.get("prompt_tokens", 0),
            completion_tokens=usage_raw.get("completion_tokens", 0),
            total_tokens=usage_raw.get("total_tokens", 0),
        )

    @staticmethod
    def _delta_content(chunk: Any) -> str:
        if not isinstance(chunk, dict):
            return ""
        choices = chunk.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return ""
        delta = choices[0].get("delta") or {}
        content = delta.get("content") if isinstance(delta, dict) else None
        return content if isinstance(content, str) else ""
