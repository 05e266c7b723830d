"""
Pytest fixtures for sportscast tests.

The LLM is never called for real: FakeCompletionClient replays queued
replies (or raises queued errors) and records every prompt it receives.
"""
import json

import pytest
from fastapi.testclient import TestClient

from sportscast.core.config import Settings
from sportscast.core.context import AppContext
from sportscast.main import create_app
from sportscast.models.forecast import RawText

FORECAST = {
    "day1": "And it's a scorcher to open the series, 28 degrees and climbing!",
    "day2": "Clouds roll in from the left flank, what a defensive play!",
    "day3": "Rain on the field! The crowd is soaked but still cheering!",
    "day4": "A breezy comeback, winds gusting to 30, unbelievable!",
    "day5": "Sunshine takes the championship in overtime!",
}


class FakeCompletionClient:
    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError("unexpected completion call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def calls(self):
        return len(self.prompts)


@pytest.fixture
def forecast_text():
    return RawText(json.dumps(FORECAST))


@pytest.fixture
def settings():
    return Settings(_env_file=None, openai_api_key="test-key")


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def context(settings, fake_client):
    return AppContext.from_settings(settings, client=fake_client)


@pytest.fixture
def client(context):
    return TestClient(create_app(context=context))
