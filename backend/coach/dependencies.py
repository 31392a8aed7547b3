from __future__ import annotations
from typing import AsyncIterator

from fastapi import Depends, Request

from .llm_client import ChatCompletionClient
from .settings import Settings


def get_settings(request: Request) -> Settings:
	return request.app.state.settings


async def get_llm_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[ChatCompletionClient]:
	# Raises ConfigurationError before any request work when the key is missing
	client = ChatCompletionClient.from_settings(settings)
	try:
		yield client
	finally:
		await client.aclose()
