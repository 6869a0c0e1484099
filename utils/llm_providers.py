"""
Thin adapter over the Anthropic Messages HTTP API.

The translation proxy relays the upstream JSON unchanged, so this talks
to the REST endpoint with httpx rather than through an SDK object model.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from config.settings import config
from utils.errors import UpstreamError

logger = logging.getLogger(__name__)


class AnthropicProvider:
    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else config.anthropic_api_key
        self.api_url = api_url or config.anthropic_api_url
        self.model = model or config.anthropic_model
        self.api_version = api_version or config.anthropic_version
        self.timeout = timeout or config.translate_timeout_seconds
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(
        self,
        messages: List[Dict[str, Any]],
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """POST ``messages`` upstream and return the decoded JSON response."""
        if not self.configured:
            raise UpstreamError("Translation service is not configured", configured=False)

        body = {
            "model": self.model,
            "max_tokens": max_tokens or config.translate_default_max_tokens,
            "messages": messages,
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.api_url, json=body, headers=headers)
        except httpx.TimeoutException as exc:
            logger.error("Anthropic API timed out after %.1fs", self.timeout)
            raise UpstreamError("Translation service timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Anthropic API request failed: %s", exc)
            raise UpstreamError("Translation service unavailable") from exc

        if resp.is_error:
            logger.error("Anthropic API error %s: %s", resp.status_code, resp.text[:500])
            raise UpstreamError(f"Translation service returned {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Anthropic API returned non-JSON body: %s", resp.text[:200])
            raise UpstreamError("Translation service returned an invalid response") from exc
