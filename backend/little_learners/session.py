from __future__ import annotations
import logging
import random
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from .content.schema import GameMode, Question, Subject
from .content.service import get_question, is_correct_answer
from .gemini_client import GeminiClient
from .models import KeyValueEntry
from .settings import settings


logger = logging.getLogger(__name__)

PRAISE: List[str] = ["Great Job!", "Awesome!", "You did it!", "Super star!"]
TRY_AGAIN = "Try again!"


class ScoreStore(Protocol):
	def load(self) -> int: ...

	def save(self, total: int) -> None: ...


def parse_score(raw: Optional[str]) -> int:
	# Missing or corrupt values count as zero
	if raw is None:
		return 0
	try:
		value = int(str(raw).strip(), 10)
	except ValueError:
		return 0
	return max(value, 0)


class MemoryScoreStore:
	def __init__(self, initial: Optional[str] = None) -> None:
		self.raw: Optional[str] = initial

	def load(self) -> int:
		return parse_score(self.raw)

	def save(self, total: int) -> None:
		self.raw = str(int(total))


class SqlScoreStore:
	"""Total score kept as a decimal string under one fixed key."""

	def __init__(self, session_factory: Callable[[], Session], key: str) -> None:
		self._session_factory = session_factory
		self.key = key

	def load(self) -> int:
		db = self._session_factory()
		try:
			row = db.get(KeyValueEntry, self.key)
			return parse_score(row.value if row else None)
		finally:
			db.close()

	def save(self, total: int) -> None:
		db = self._session_factory()
		try:
			row = db.get(KeyValueEntry, self.key)
			if row is None:
				row = KeyValueEntry(key=self.key)
			row.value = str(int(total))
			db.add(row)
			db.commit()
		finally:
			db.close()


@dataclass(frozen=True)
class AnswerOutcome:
	correct: bool
	score: int
	streak: int
	total_score: int
	feedback: str


class GameSession:
	def __init__(self, subject: Subject, mode: GameMode, score_store: ScoreStore, *, rng: Optional[random.Random] = None) -> None:
		self.session_id: str = uuid.uuid4().hex
		self.subject = subject
		self.mode = mode
		self.score_store = score_store
		self.score: int = 0
		self.streak: int = 0
		self.total_score: int = score_store.load()
		self.question: Optional[Question] = None
		self._rng = rng or random.Random()
		self._issued: int = 0
		self.last_active: float = time.monotonic()

	def touch(self) -> None:
		self.last_active = time.monotonic()

	def begin_load(self) -> int:
		self._issued += 1
		return self._issued

	def accept(self, ticket: int, question: Question) -> bool:
		"""Install ``question`` unless a newer load was started after ``ticket``."""
		if ticket != self._issued:
			logger.info("Discarding stale question %s for session %s (ticket %d, latest %d)", question.id, self.session_id, ticket, self._issued)
			return False
		self.question = question
		return True

	def submit(self, answer: str) -> AnswerOutcome:
		if self.question is None:
			raise ValueError("no question in play")
		if is_correct_answer(answer, self.question.answer):
			self.score += 1
			self.streak += 1
			# Other sessions may have saved since this one started
			self.total_score = self.score_store.load() + 1
			self.score_store.save(self.total_score)
			# Next round gets a freshly generated question
			self.question = None
			feedback = self._rng.choice(PRAISE)
			return AnswerOutcome(True, self.score, self.streak, self.total_score, feedback)
		self.streak = 0
		return AnswerOutcome(False, self.score, self.streak, self.total_score, TRY_AGAIN)


async def load_next(session: GameSession, *, client: Optional[GeminiClient] = None, rng: Optional[random.Random] = None) -> Optional[Question]:
	"""Load a question for ``session``; None when a newer load superseded this one."""
	ticket = session.begin_load()
	question = await get_question(session.subject, session.mode, client=client, rng=rng)
	if not session.accept(ticket, question):
		return None
	return question


_sessions: Dict[str, GameSession] = {}


def prune_sessions(now: Optional[float] = None) -> int:
	"""Drop sessions idle past the limit, then the least recently used beyond the cap."""
	now = time.monotonic() if now is None else now
	idle = [sid for sid, s in _sessions.items() if now - s.last_active > settings.session_idle_seconds]
	for sid in idle:
		del _sessions[sid]
	removed = len(idle)
	overflow = len(_sessions) - settings.max_sessions
	if overflow > 0:
		oldest = sorted(_sessions.values(), key=lambda s: s.last_active)[:overflow]
		for s in oldest:
			del _sessions[s.session_id]
		removed += len(oldest)
	if removed:
		logger.info("Expired %d game session(s)", removed)
	return removed


def register(session: GameSession) -> GameSession:
	_sessions[session.session_id] = session
	prune_sessions()
	return session


def lookup(session_id: str) -> Optional[GameSession]:
	prune_sessions()
	state = _sessions.get(session_id)
	if state is not None:
		state.touch()
	return state


def discard(session_id: str) -> bool:
	return _sessions.pop(session_id, None) is not None
