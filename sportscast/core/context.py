from __future__ import annotations

from dataclasses import dataclass

from sportscast.clients.openai_client import CompletionClient
from sportscast.core.config import Settings
from sportscast.services.output_parser import CompletionClientLike, ForecastOutputParser
from sportscast.services.prompt_service import PromptBuilder


@dataclass(frozen=True)
class AppContext:
    """Everything built once at startup and shared read-only by all requests."""

    settings: Settings
    client: CompletionClientLike
    parser: ForecastOutputParser
    prompts: PromptBuilder

    @classmethod
    def from_settings(cls, settings: Settings, client: CompletionClientLike | None = None) -> "AppContext":
        parser = ForecastOutputParser()
        return cls(
            settings=settings,
            client=client or CompletionClient.from_settings(settings),
            parser=parser,
            prompts=PromptBuilder(parser.format_instructions),
        )

    async def aclose(self) -> None:
        close = getattr(self.client, "aclose", None)
        if close is not None:
            await close()
