from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import ConfigurationError, UpstreamError
from .settings import Settings


logger = logging.getLogger(__name__)

ChatMessage = Dict[str, str]


class ChatCompletionClient:
	"""Minimal async client for an OpenAI-compatible chat completion endpoint."""

	def __init__(
		self,
		api_key: Optional[str],
		*,
		model: str,
		base_url: str,
		timeout: float = 60.0,
		http_client: Optional[httpx.AsyncClient] = None,
	) -> None:
		if not api_key:
			raise ConfigurationError("OpenAI API key not configured")
		self.api_key = api_key
		self.model = model
		self.base_url = base_url
		self._headers = {
			"Authorization": f"Bearer {api_key}",
			"Content-Type": "application/json",
		}
		self._client = http_client or httpx.AsyncClient(timeout=timeout)

	@classmethod
	def from_settings(cls, settings: Settings, **kwargs: Any) -> "ChatCompletionClient":
		return cls(
			settings.openai_api_key,
			model=settings.openai_model,
			base_url=settings.openai_base_url,
			timeout=settings.openai_timeout_seconds,
			**kwargs,
		)

	async def complete(self, messages: List[ChatMessage], *, temperature: float, max_tokens: int) -> str:
		payload: Dict[str, Any] = {
			"model": self.model,
			"messages": messages,
			"temperature": temperature,
			"max_tokens": max_tokens,
		}
		try:
			r = await self._client.post(self.base_url, headers=self._headers, json=payload)
		except httpx.RequestError as net_err:
			logger.error("Chat completion request failed: %s", net_err)
			raise UpstreamError(f"OpenAI API error: {net_err}") from net_err
		if r.status_code >= 400:
			raise UpstreamError(f"OpenAI API error: {r.text}")
		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise UpstreamError(f"Unexpected OpenAI response: {r.text}") from err
		# Refusals and tool calls come back with a null or empty content
		if not isinstance(content, str) or not content.strip():
			raise UpstreamError(f"Unexpected OpenAI response: {r.text}")
		return content

	async def aclose(self) -> None:
		await self._client.aclose()
