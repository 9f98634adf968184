from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import ValidationError

from ..gemini_client import GeminiClient, GeminiResponseError
from ..settings import settings
from .schema import Question, StoryDraft, Subject, story_response_schema


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    question: Question


@dataclass(frozen=True)
class Unavailable:
    reason: str


@dataclass(frozen=True)
class Malformed:
    reason: str


@dataclass(frozen=True)
class TransportError:
    reason: str


AdapterResult = Union[Ok, Unavailable, Malformed, TransportError]


SUBJECT_INSTRUCTIONS: Dict[Subject, str] = {
    Subject.MATH: (
        "Create a fun, very short (1 sentence) math story problem for a 5-year-old "
        "using simple addition or subtraction (results under 15)."
    ),
    Subject.ENGLISH: (
        "Create a simple English question for a 5-year-old (spelling, rhyming, or vocabulary). "
        "Keep it fun and short."
    ),
    Subject.SCIENCE: (
        "Create a simple Science question for a 5-year-old (animals, plants, weather, or nature). "
        "Keep it fun and short."
    ),
}


def build_story_prompt(subject: Subject) -> str:
    return (
        f"{SUBJECT_INSTRUCTIONS[subject]}\n"
        "Give exactly 3 different options; exactly one of them is the answer.\n"
        "Put a one-sentence story in narrative and the question itself in prompt.\n"
        "Return strictly valid JSON."
    )


def parse_story_payload(raw: str, subject: Subject) -> Question:
    """Turn the service's JSON text into a stamped Question.

    Raises ValueError (pydantic's ValidationError included) on anything that
    is not a complete, invariant-respecting question.
    """
    data: Any = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("payload is not a JSON object")
    draft = StoryDraft.model_validate(data)
    return draft.to_question(subject)


async def generate_story_content(
    subject: Subject,
    client: Optional[GeminiClient] = None,
    *,
    timeout: Optional[float] = None,
) -> AdapterResult:
    """Fetch one Story question; every failure comes back as a result variant."""
    owns_client = client is None
    if owns_client:
        if not settings.gemini_api_key:
            logger.info("Gemini API key not configured; story content unavailable")
            return Unavailable("GEMINI_API_KEY is not configured")
    limit = timeout if timeout is not None else settings.gemini_timeout_seconds
    try:
        try:
            if owns_client:
                client = GeminiClient()
            raw = await asyncio.wait_for(
                client.generate_structured(build_story_prompt(subject), story_response_schema(subject)),
                timeout=limit,
            )
        except asyncio.TimeoutError:
            logger.warning("Gemini story request for %s timed out after %.1fs", subject.value, limit)
            return TransportError(f"timed out after {limit}s")
        except httpx.HTTPStatusError as e:
            logger.warning("Gemini story request for %s failed: HTTP %s", subject.value, e.response.status_code)
            return TransportError(f"HTTP {e.response.status_code}")
        except (httpx.HTTPError, OSError) as e:
            logger.warning("Gemini story request for %s failed: %s", subject.value, e)
            return TransportError(str(e) or type(e).__name__)
        except GeminiResponseError as e:
            logger.warning("Gemini story response for %s unusable: %s", subject.value, e)
            return Malformed(str(e))
        except Exception as e:
            logger.exception("Gemini story request for %s failed unexpectedly", subject.value)
            return TransportError(f"{type(e).__name__}: {e}")
    finally:
        if owns_client and client is not None:
            await client.aclose()

    try:
        question = parse_story_payload(raw, subject)
    except (ValueError, ValidationError) as e:
        logger.warning("Discarding malformed story content for %s: %s", subject.value, e)
        return Malformed(str(e))
    return Ok(question)
