from __future__ import annotations

import random

import pytest

from little_learners.content import adapter, service
from little_learners.content.banks import ENGLISH_BANK
from little_learners.content.schema import GameMode, Question, Subject, new_question_id
from little_learners.content.service import get_question, is_correct_answer, speech_text

from conftest import FakeGeminiClient


@pytest.mark.asyncio
async def test_story_mode_uses_generated_content(story_payload) -> None:
    client = FakeGeminiClient(payload=story_payload)
    q = await get_question(Subject.MATH, GameMode.STORY, client=client)
    assert q.narrative == story_payload["narrative"]
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_story_mode_falls_back_on_malformed(story_payload, rng) -> None:
    del story_payload["answer"]
    q = await get_question(Subject.MATH, GameMode.STORY, client=FakeGeminiClient(payload=story_payload), rng=rng)
    assert q.narrative is None
    assert q.arithmetic is not None
    assert q.prompt.startswith("What is ")


@pytest.mark.asyncio
async def test_story_mode_falls_back_without_key(monkeypatch, rng) -> None:
    monkeypatch.setattr(adapter.settings, "gemini_api_key", None)
    q = await get_question(Subject.SCIENCE, GameMode.STORY, rng=rng)
    assert q.subject == Subject.SCIENCE
    assert q.narrative is None


@pytest.mark.asyncio
async def test_story_mode_falls_back_on_network_error(rng) -> None:
    q = await get_question(Subject.ENGLISH, GameMode.STORY, client=FakeGeminiClient(error=OSError("down")), rng=rng)
    assert q.subject == Subject.ENGLISH


@pytest.mark.asyncio
async def test_classic_mode_never_calls_service(rng) -> None:
    client = FakeGeminiClient(payload={})
    q = await get_question(Subject.MATH, GameMode.CLASSIC, client=client, rng=rng)
    assert client.calls == []
    assert q.subject == Subject.MATH


@pytest.mark.asyncio
async def test_classic_english_is_verbatim_bank_entry(rng) -> None:
    q = await get_question(Subject.ENGLISH, GameMode.CLASSIC, rng=rng)
    matches = [
        e for e in ENGLISH_BANK
        if (e.prompt, e.answer, list(e.options), e.visual_hint) == (q.prompt, q.answer, q.options, q.visual_hint)
    ]
    assert len(matches) == 1
    assert q.id
    assert q.narrative is None


@pytest.mark.asyncio
async def test_classic_ids_are_fresh(rng) -> None:
    first = await get_question(Subject.ENGLISH, GameMode.CLASSIC, rng=rng)
    second = await get_question(Subject.ENGLISH, GameMode.CLASSIC, rng=rng)
    assert first.id != second.id
    assert second.id > first.id


@pytest.mark.parametrize(
    "submitted, answer, expected",
    [
        ("5", "5", True),
        (5, "5", True),
        ("Dog", "dog", True),
        ("DOG", "Dog", True),
        ("cat", "dog", False),
        ("6", "5", False),
        (" 5", "5", False),
    ],
)
def test_is_correct_answer(submitted, answer, expected) -> None:
    assert is_correct_answer(submitted, answer) is expected


def _q(narrative=None) -> Question:
    return Question(
        id=new_question_id(),
        subject=Subject.MATH,
        prompt="How many apples?",
        narrative=narrative,
        answer="3",
        options=["2", "3", "4"],
    )


def test_speech_text_reads_story_first() -> None:
    assert speech_text(_q("Sam picks 3 apples")) == "Sam picks 3 apples. How many apples?"
    assert speech_text(_q("Sam picks 3 apples!")) == "Sam picks 3 apples! How many apples?"
    assert speech_text(_q()) == "How many apples?"
    assert speech_text(_q("   ")) == "How many apples?"


@pytest.mark.asyncio
async def test_story_mode_falls_back_on_unexpected_error(rng) -> None:
    q = await get_question(Subject.MATH, GameMode.STORY, client=FakeGeminiClient(error=RuntimeError("boom")), rng=rng)
    assert q.subject == Subject.MATH
    assert q.arithmetic is not None
