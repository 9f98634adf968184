from __future__ import annotations

import logging
import random
from typing import Any, Optional

from ..gemini_client import GeminiClient
from .adapter import Ok, generate_story_content
from .generator import generate_classic
from .schema import GameMode, Question, Subject


logger = logging.getLogger(__name__)


async def get_question(
    subject: Subject,
    mode: GameMode,
    *,
    client: Optional[GeminiClient] = None,
    rng: Optional[random.Random] = None,
) -> Question:
    """Return the next question for a round.

    Story mode asks Gemini first and quietly drops back to Classic content on
    any failure, so callers always get a valid Question.
    """
    if mode == GameMode.STORY:
        result = await generate_story_content(subject, client)
        if isinstance(result, Ok):
            return result.question
        logger.info("Story content for %s unavailable (%s); using classic content", subject.value, type(result).__name__)
    return generate_classic(subject, rng)


def is_correct_answer(submitted: Any, answer: Any) -> bool:
    return str(submitted).lower() == str(answer).lower()


def speech_text(question: Question) -> str:
    # Read the story first so the question lands last
    story = (question.narrative or "").rstrip()
    if story:
        if story[-1] not in ".!?":
            story += "."
        return f"{story} {question.prompt}"
    return question.prompt
