from __future__ import annotations

ANNOUNCER_TEMPLATE = (
    "You are a sports announcer. Provide an exciting and energetic play-by-play of the weather "
    "forecast for {location}. Make it sound like a thrilling sports commentary! "
    "Return the forecast as a JSON object with each day forecast as a property. "
    'The keys should be "date-day1", "day-of-the-week-day1", "day1", '
    '"date-day2", "day-of-the-week-day2", "day2", '
    '"date-day3", "day-of-the-week-day3", "day3", '
    '"date-day4", "day-of-the-week-day4", "day4", '
    '"date-day5", "day-of-the-week-day5", "day5". '
    "The JSON should be properly formatted. The first day should be today."
)


class PromptBuilder:
    """Fills the announcer template for one location and appends the format instructions."""

    def __init__(self, format_instructions: str, template: str = ANNOUNCER_TEMPLATE):
        self.template = template
        self.format_instructions = format_instructions

    def build(self, location: str) -> str:
        prompt = self.template.format(location=location)
        if self.format_instructions:
            prompt = f"{prompt}\n\n{self.format_instructions}"
        return prompt
