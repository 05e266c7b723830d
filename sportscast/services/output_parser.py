"""
Structured output handling for model replies.

ForecastOutputParser knows the shape the model must answer in: it renders
the formatting instructions that go into the prompt and checks a reply
against ForecastSchema. OutputFixer wraps it with a single repair pass:
when the first reply does not parse, the model is shown its own answer
plus the error and asked once to fix it.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Protocol

from pydantic import ValidationError

from sportscast.core.errors import SchemaValidationError
from sportscast.models.forecast import ForecastSchema, RawCompletion, RawStructured, RawText

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)

FORMAT_INSTRUCTIONS_TEMPLATE = """Answer with JSON only: one object, no prose around it, no comments inside it.
It must have every key listed under "required" below, and each value must have the type given for that key:
```json
{schema}
```"""

FIX_PROMPT_TEMPLATE = """Your previous answer could not be used.

What you answered:
{completion}

Why it was rejected:
{error}

Write the answer again so that it follows these rules exactly:
{instructions}"""


class OutputParserError(ValueError):
    """A reply could not be read as a ForecastSchema."""

    def __init__(self, message: str, completion: str):
        self.completion = completion
        super().__init__(message)


class CompletionClientLike(Protocol):
    async def complete(self, prompt: str) -> RawCompletion: ...


def _completion_text(raw: RawCompletion) -> str:
    if isinstance(raw, RawStructured):
        return json.dumps(raw.data, ensure_ascii=False)
    return raw.text


def _extract_json(text: str) -> Any:
    body = (text or "").strip()
    m = _FENCE_RE.search(body)
    if m:
        body = m.group(1).strip()

    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        # chatty replies: try the outermost {...}
        start, end = body.find("{"), body.rfind("}")
        if start != -1 and end > start:
            try:
                return json.loads(body[start:end + 1])
            except (ValueError, RecursionError):
                pass
        raise OutputParserError(f"Reply is not valid JSON: {e}", completion=text) from e


class ForecastOutputParser:
    def __init__(self, schema: type[ForecastSchema] = ForecastSchema):
        self.schema = schema
        self.format_instructions = FORMAT_INSTRUCTIONS_TEMPLATE.format(
            schema=json.dumps(schema.model_json_schema())
        )

    def validate(self, candidate: Any) -> ForecastSchema:
        if not isinstance(candidate, Mapping):
            raise OutputParserError(
                f"Expected a JSON object, got {type(candidate).__name__}",
                completion=json.dumps(candidate, default=str),
            )
        try:
            return self.schema.model_validate(dict(candidate))
        except ValidationError as e:
            raise OutputParserError(str(e), completion=json.dumps(candidate, default=str)) from e

    def parse(self, raw: RawCompletion) -> ForecastSchema:
        if isinstance(raw, RawStructured):
            return self.validate(raw.data)
        if isinstance(raw, RawText):
            return self.validate(_extract_json(raw.text))
        raise TypeError(f"Unsupported completion type: {type(raw).__name__}")


class OutputFixer:
    def __init__(self, parser: ForecastOutputParser, client: CompletionClientLike):
        self.parser = parser
        self.client = client

    def fix_prompt(self, completion: str, error: str) -> str:
        return FIX_PROMPT_TEMPLATE.format(
            instructions=self.parser.format_instructions,
            completion=completion,
            error=error,
        )

    async def validate_or_repair(self, raw: RawCompletion) -> ForecastSchema:
        try:
            return self.parser.parse(raw)
        except OutputParserError as first:
            logger.warning("Model reply failed validation, asking for a repair: %s", first)
            prompt = self.fix_prompt(_completion_text(raw), str(first))

        repaired = await self.client.complete(prompt)
        try:
            return self.parser.parse(repaired)
        except OutputParserError as second:
            raise SchemaValidationError(
                f"Model reply still invalid after repair: {second}",
                completion=_completion_text(repaired),
            ) from second
