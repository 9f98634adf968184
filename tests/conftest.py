from __future__ import annotations

import json
import random
from typing import Any

import pytest

from little_learners import session as session_module


class FakeGeminiClient:
    """Stands in for GeminiClient.generate_structured; records every call."""

    def __init__(self, *, payload: Any = None, raw: str | None = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.raw = raw
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    async def generate_structured(self, prompt: str, response_schema: dict[str, Any]) -> str:
        self.calls.append({"prompt": prompt, "schema": response_schema})
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return self.raw
        return json.dumps(self.payload)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def story_payload() -> dict[str, Any]:
    return {
        "narrative": "Mia has 2 red balloons and finds 3 more.",
        "prompt": "How many balloons does Mia have now?",
        "answer": "5",
        "options": ["4", "5", "6"],
        "visualHint": "balloon",
        "arithmetic": {"num1": 2, "num2": 3, "operator": "+"},
    }


@pytest.fixture(autouse=True)
def _clear_sessions():
    session_module._sessions.clear()
    yield
    session_module._sessions.clear()
