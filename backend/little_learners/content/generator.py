"""Offline Classic content: arithmetic facts for Math, curated banks for the rest.

Everything here is pure computation over a ``random.Random`` so callers (and
tests) can pass a seeded generator; the module-level one is used otherwise.
"""
from __future__ import annotations

import random
from typing import Iterator, List, Optional

from .banks import BANKS
from .schema import OPTION_COUNT, ArithmeticFact, Question, Subject, new_question_id


ADDITION_PROBABILITY = 0.7
NUM1_RANGE = (1, 6)
NUM2_RANGE = (1, 5)
DISTRACTOR_OFFSET = 2
DISTRACTOR_MIN = 0
DISTRACTOR_MAX = 20
MAX_DISTRACTOR_DRAWS = 100

MATH_VISUALS: List[str] = ["apple", "fish", "star", "cookie", "rocket"]

_rng = random.Random()


def _nearby_values(answer: int) -> Iterator[int]:
    for step in range(1, DISTRACTOR_MAX - DISTRACTOR_MIN + 1):
        yield answer + step
        yield answer - step


def math_options(answer: int, rng: Optional[random.Random] = None) -> List[str]:
    """Return the answer plus two nearby distractors in random order."""
    rng = rng or _rng
    chosen = [answer]
    draws = 0
    while len(chosen) < OPTION_COUNT and draws < MAX_DISTRACTOR_DRAWS:
        draws += 1
        candidate = answer + rng.randint(-DISTRACTOR_OFFSET, DISTRACTOR_OFFSET)
        if DISTRACTOR_MIN <= candidate <= DISTRACTOR_MAX and candidate not in chosen:
            chosen.append(candidate)
    if len(chosen) < OPTION_COUNT:
        # Sampler did not converge; take the closest free values instead
        for candidate in _nearby_values(answer):
            if len(chosen) == OPTION_COUNT:
                break
            if DISTRACTOR_MIN <= candidate <= DISTRACTOR_MAX and candidate not in chosen:
                chosen.append(candidate)
    options = [str(value) for value in chosen]
    rng.shuffle(options)
    return options


def build_math_question(
    is_addition: bool,
    num1: int,
    num2: int,
    rng: Optional[random.Random] = None,
) -> Question:
    rng = rng or _rng
    if is_addition:
        fact = ArithmeticFact(num1=num1, num2=num2, operator="+")
    else:
        fact = ArithmeticFact(num1=max(num1, num2), num2=min(num1, num2), operator="-")
    answer = fact.result()
    return Question(
        id=new_question_id(),
        subject=Subject.MATH,
        prompt=f"What is {fact.num1} {fact.operator} {fact.num2}?",
        answer=str(answer),
        options=math_options(answer, rng),
        visual_hint=rng.choice(MATH_VISUALS),
        arithmetic=fact,
    )


def generate_math_question(rng: Optional[random.Random] = None) -> Question:
    rng = rng or _rng
    is_addition = rng.random() < ADDITION_PROBABILITY
    num1 = rng.randint(*NUM1_RANGE)
    num2 = rng.randint(*NUM2_RANGE)
    return build_math_question(is_addition, num1, num2, rng)


def draw_from_bank(subject: Subject, rng: Optional[random.Random] = None) -> Question:
    rng = rng or _rng
    bank = BANKS.get(subject)
    if not bank:
        raise ValueError(f"No question bank for subject {subject}")
    entry = rng.choice(bank)
    return Question(
        id=new_question_id(),
        subject=subject,
        prompt=entry.prompt,
        answer=entry.answer,
        options=list(entry.options),
        visual_hint=entry.visual_hint,
    )


def generate_classic(subject: Subject, rng: Optional[random.Random] = None) -> Question:
    if subject == Subject.MATH:
        return generate_math_question(rng)
    return draw_from_bank(subject, rng)
