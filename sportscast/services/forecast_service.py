from __future__ import annotations

import logging

from sportscast.models.forecast import ForecastResponse
from sportscast.services.output_parser import CompletionClientLike, ForecastOutputParser, OutputFixer
from sportscast.services.prompt_service import PromptBuilder

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(self, prompts: PromptBuilder, client: CompletionClientLike, parser: ForecastOutputParser):
        self.prompts = prompts
        self.client = client
        self.fixer = OutputFixer(parser, client)

    async def generate(self, location: str) -> ForecastResponse:
        # 1) Prompt
        prompt = self.prompts.build(location)

        # 2) Model call (ProviderError propagates)
        raw = await self.client.complete(prompt)

        # 3) Parse, with one repair pass (SchemaValidationError propagates)
        result = await self.fixer.validate_or_repair(raw)

        logger.info("Forecast ready for %r", location)
        return ForecastResponse(result=result)
