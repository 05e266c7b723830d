from sportscast.services.prompt_service import ANNOUNCER_TEMPLATE, PromptBuilder


def test_location_substituted():
    prompt = PromptBuilder("").build("Buenos Aires")
    assert "weather forecast for Buenos Aires." in prompt
    assert "{location}" not in prompt
    assert prompt.startswith("You are a sports announcer.")


def test_asks_for_full_key_list():
    prompt = PromptBuilder("").build("Paris")
    assert '"date-day1", "day-of-the-week-day1", "day1"' in prompt
    assert '"day5"' in prompt
    assert "The first day should be today." in prompt


def test_format_instructions_appended():
    prompt = PromptBuilder("ANSWER IN JSON").build("Paris")
    assert prompt.endswith("\n\nANSWER IN JSON")


def test_braces_in_location_are_literal():
    prompt = PromptBuilder("{not a slot}").build("{weird} town")
    assert "forecast for {weird} town." in prompt
    assert prompt.endswith("{not a slot}")


def test_pure():
    builder = PromptBuilder("x")
    assert builder.build("Rome") == builder.build("Rome")
    assert builder.template == ANNOUNCER_TEMPLATE
