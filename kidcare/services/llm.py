"""LLM service for narrative health insights.

Uses OpenAI gpt-4o-mini. Insight text is a nice-to-have: every failure path
returns a fixed advisory string instead of raising, so the endpoint always
has something to show.
"""
import json
import logging
from collections.abc import Iterable

from openai import AsyncOpenAI

from kidcare.core.config import settings
from kidcare.llm.system_prompts import (
    INSIGHT_SYSTEM_PROMPT,
    INSIGHT_USER_TEMPLATE,
    MISSING_KEY_MESSAGE,
    NO_SICK_DAYS_MESSAGE,
    UNAVAILABLE_MESSAGE,
)
from kidcare.models.logs import DailyLog
from kidcare.services.episodes import is_sick

logger = logging.getLogger(__name__)

_MODEL = "gpt-4o-mini"


def _client() -> AsyncOpenAI:
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


def build_insight_prompt(profile_name: str, sick_logs: list[DailyLog]) -> str:
    data = json.dumps([log.model_dump(mode="json") for log in sick_logs], indent=2)
    return INSIGHT_USER_TEMPLATE.format(name=profile_name, data=data)


async def generate_health_insights(profile_name: str, logs: Iterable[DailyLog]) -> str:
    """Generate a short narrative summary of a child's sickness history.

    Only sick days (symptoms or temperature readings) are sent, oldest first.

    Args:
        profile_name: The child's display name, used in the prompt.
        logs: The profile's daily logs in any order.

    Returns:
        The generated text, or a fixed fallback message when no API key is
        configured, there are no sick days, or the API call fails.
    """
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not configured; skipping insight generation")
        return MISSING_KEY_MESSAGE

    sick_logs = sorted((log for log in logs if is_sick(log)), key=lambda log: log.date)
    if not sick_logs:
        return NO_SICK_DAYS_MESSAGE

    logger.info("Calling OpenAI for health insights: sick_days=%d", len(sick_logs))

    try:
        response = await _client().chat.completions.create(
            model=_MODEL,
            messages=[
                {"role": "system", "content": INSIGHT_SYSTEM_PROMPT},
                {"role": "user", "content": build_insight_prompt(profile_name, sick_logs)},
            ],
            max_tokens=600,
            temperature=0.4,
        )
    except Exception as exc:
        logger.error("OpenAI insight generation failed: %s", exc, exc_info=True)
        return UNAVAILABLE_MESSAGE

    insight = (response.choices[0].message.content or "").strip()
    if not insight:
        logger.warning("OpenAI returned an empty insight")
        return UNAVAILABLE_MESSAGE

    logger.info("OpenAI insight generated: %d characters", len(insight))
    return insight
