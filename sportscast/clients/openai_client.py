from __future__ import annotations

import json
import logging
from typing import Optional

import httpx
from openai import APIError, APITimeoutError, AsyncOpenAI

from sportscast.core.config import Settings
from sportscast.core.errors import ProviderError
from sportscast.models.forecast import RawCompletion, RawStructured, RawText

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Thin async wrapper over OpenAI chat completions.

    One prompt in, one RawCompletion out. Every failure on the way (network,
    auth, quota, timeout, empty reply) becomes a ProviderError; nothing is
    retried here.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        temperature: float = 0.0,
        timeout_seconds: float = 30.0,
        base_url: Optional[str] = None,
        json_mode: bool = False,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.timeout = timeout_seconds
        self.json_mode = json_mode
        self.client = client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            timeout=timeout_seconds,
            http_client=httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds)),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            api_key=settings.require_api_key(),
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=settings.openai_base_url,
            json_mode=settings.openai_json_mode,
        )

    async def complete(self, prompt: str) -> RawCompletion:
        kwargs = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug("Calling %s (temperature=%s)", self.model, self.temperature)
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                **kwargs,
            )
        except APITimeoutError as e:
            raise ProviderError(
                f"{self.model} did not answer within {self.timeout}s", timeout=True, original=e
            ) from e
        except APIError as e:
            raise ProviderError(f"{self.model} call failed: {type(e).__name__}: {e}", original=e) from e

        if not resp.choices:
            raise ProviderError(f"{self.model} returned no choices")
        content = resp.choices[0].message.content
        if content is None:
            raise ProviderError(f"{self.model} returned an empty message")

        if self.json_mode:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                return RawText(content)
            if isinstance(data, dict):
                return RawStructured(data)
        return RawText(content)

    async def aclose(self) -> None:
        await self.client.close()
