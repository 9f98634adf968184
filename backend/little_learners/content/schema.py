from __future__ import annotations

import threading
import time
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


OPTION_COUNT = 3


class Subject(str, Enum):
    MATH = "MATH"
    ENGLISH = "ENGLISH"
    SCIENCE = "SCIENCE"


class GameMode(str, Enum):
    CLASSIC = "CLASSIC"
    STORY = "STORY"


_id_lock = threading.Lock()
_last_stamp = 0


def new_question_id() -> str:
    """Return a fresh question id.

    Ids are nanosecond creation stamps, bumped when two are issued within the
    same tick, so they never repeat within a process and later ids sort after
    earlier ones (fixed-width hex).
    """
    global _last_stamp
    with _id_lock:
        stamp = max(time.time_ns(), _last_stamp + 1)
        _last_stamp = stamp
    return f"{stamp:016x}"


class ArithmeticFact(BaseModel):
    model_config = ConfigDict(frozen=True)

    num1: int = Field(ge=0)
    num2: int = Field(ge=0)
    operator: Literal["+", "-"]

    @model_validator(mode="after")
    def _no_negative_results(self) -> "ArithmeticFact":
        if self.operator == "-" and self.num1 < self.num2:
            raise ValueError("subtraction must put the larger operand first")
        return self

    def result(self) -> int:
        if self.operator == "+":
            return self.num1 + self.num2
        return self.num1 - self.num2


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    subject: Subject
    prompt: str = Field(min_length=1)
    narrative: Optional[str] = None
    answer: str = Field(min_length=1)
    options: List[str]
    visual_hint: Optional[str] = None
    arithmetic: Optional[ArithmeticFact] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Question":
        problems = option_problems(self.answer, self.options)
        if self.arithmetic is not None and self.subject != Subject.MATH:
            problems.append("arithmetic is only allowed on MATH questions")
        if problems:
            raise ValueError("; ".join(problems))
        return self


def option_problems(answer: str, options: List[str]) -> List[str]:
    """List the ways ``options`` break the three-choice, single-answer rules."""
    problems: List[str] = []
    if len(options) != OPTION_COUNT:
        problems.append(f"expected {OPTION_COUNT} options, got {len(options)}")
    folded = [str(o).lower() for o in options]
    if len(set(folded)) != len(folded):
        problems.append("options contain duplicates")
    matches = folded.count(str(answer).lower())
    if matches != 1:
        problems.append(f"answer must match exactly one option, matched {matches}")
    return problems


class StoryDraft(BaseModel):
    """Question payload as returned by the generative service, before stamping."""

    model_config = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)

    prompt: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    options: List[str]
    visual_hint: str = Field(validation_alias="visualHint")
    narrative: Optional[str] = None
    arithmetic: Optional[ArithmeticFact] = None

    @field_validator("prompt", "answer")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("narrative")
    @classmethod
    def _blank_narrative_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    def to_question(self, subject: Subject) -> Question:
        return Question(
            id=new_question_id(),
            subject=subject,
            prompt=self.prompt,
            narrative=self.narrative,
            answer=self.answer,
            options=list(self.options),
            visual_hint=self.visual_hint,
            arithmetic=self.arithmetic,
        )


def story_response_schema(subject: Subject) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "prompt": {"type": "STRING", "description": "The question to ask."},
        "narrative": {"type": "STRING", "description": "A short context or story (optional)."},
        "answer": {"type": "STRING", "description": "The correct answer."},
        "options": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "minItems": OPTION_COUNT,
            "maxItems": OPTION_COUNT,
            "description": "Array of 3 different options including the answer.",
        },
        "visualHint": {
            "type": "STRING",
            "description": "A visual keyword (e.g., apple, cat, sun, star, fish).",
        },
    }
    if subject == Subject.MATH:
        properties["arithmetic"] = {
            "type": "OBJECT",
            "description": "The numbers in the problem, larger number first for subtraction.",
            "properties": {
                "num1": {"type": "INTEGER"},
                "num2": {"type": "INTEGER"},
                "operator": {"type": "STRING", "enum": ["+", "-"]},
            },
            "required": ["num1", "num2", "operator"],
            "nullable": True,
        }
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": ["prompt", "answer", "options", "visualHint"],
    }
