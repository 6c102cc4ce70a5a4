"""豆包图片生成 Provider 适配器。

- URL: {base_url}/images/generations
- 认证: Authorization: Bearer <api_key>

只取响应 data[*].url，结构不合法时抛出 MalformedResponseError，
不会静默返回空列表。
"""

from typing import Any, Dict, List

import httpx

from diet_companion.config.settings import settings
from diet_companion.domain.exceptions import (
    ApiError,
    MalformedResponseError,
    NetworkError,
    UpstreamError,
)
from diet_companion.domain.models import ImageGenerationOutcome, ImageGenerationRequest, ProviderStatus
from diet_companion.food.prompt_builder import build_image_prompt
from diet_companion.infrastructure.logging.logger import logger
from diet_companion.providers.registry import DOUBAO_CONFIG, IMAGE_MODEL


class DoubaoImageClient:
    """豆包图片生成客户端。"""

    name = "doubao-image"

    def __init__(self, cfg=settings):
        self._settings = cfg

    def generate_images(self, prompt: str) -> List[str]:
        req = ImageGenerationRequest(
            prompt=prompt,
            size=getattr(self._settings, "image_size", "2K"),
            watermark=getattr(self._settings, "image_watermark", True),
            max_images=getattr(self._settings, "image_max_images", 1),
        )
        return self.generate(req).urls

    def generate_food_images(self, food_description: str) -> List[str]:
        return self.generate_images(build_image_prompt(food_description))

    def generate(self, req: ImageGenerationRequest) -> ImageGenerationOutcome:
        if not getattr(self._settings, "doubao_api_key", None):
            raise UpstreamError(
                code="MISSING_API_KEY",
                message="DOUBAO_API_KEY not set",
                provider=self.name,
            )
        payload = self._build_payload(req)
        logger.info("doubao.image.request", extra={"extra": {"model": payload["model"], "prompt": req.prompt}})
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{self._base_url}/images/generations",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._settings.doubao_api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        if not 200 <= resp.status_code < 300:
            logger.error(
                "doubao.image.api_error",
                extra={"extra": {"status": resp.status_code, "body": resp.text}},
            )
            raise ApiError(
                code="API_ERROR",
                message=f"Doubao image API error: {resp.status_code} - {resp.text}",
                provider=self.name,
                upstream_status=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Doubao image response is not JSON: {e}",
                provider=self.name,
            )
        urls = self._parse_urls(data)
        logger.info("doubao.image.response", extra={"extra": {"count": len(urls)}})
        return ImageGenerationOutcome(urls=urls)

    def get_status(self) -> ProviderStatus:
        key = getattr(self._settings, "doubao_api_key", None) or ""
        return ProviderStatus(
            configured=bool(key),
            base_url=self._base_url,
            model=self._default_model,
            has_key=len(key) > 0,
        )

    @property
    def _base_url(self) -> str:
        base = getattr(self._settings, "doubao_base_url", None) or DOUBAO_CONFIG.base_url
        return base.rstrip("/")

    @property
    def _default_model(self) -> str:
        return (
            getattr(self._settings, "doubao_image_model", None)
            or DOUBAO_CONFIG.models[IMAGE_MODEL].provider_model
        )

    def _build_payload(self, req: ImageGenerationRequest) -> Dict[str, Any]:
        return {
            "model": req.model or self._default_model,
            "prompt": req.prompt,
            "response_format": req.response_format,
            "size": req.size,
            "stream": False,
            "watermark": req.watermark,
            "sequential_image_generation": req.sequential_image_generation,
            "sequential_image_generation_options": {"max_images": req.max_images},
        }

    def _parse_urls(self, data: Any) -> List[str]:
        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message="Doubao image response has no data list",
                provider=self.name,
            )
        urls: List[str] = []
        for item in items:
            if not isinstance(item, dict):
                raise MalformedResponseError(
                    code="MALFORMED_RESPONSE",
                    message="Doubao image response item is not an object",
                    provider=self.name,
                )
            url = item.get("url")
            if isinstance(url, str) and url:
                urls.append(url)
        return urls
