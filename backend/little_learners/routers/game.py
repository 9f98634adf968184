from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..content.schema import ArithmeticFact, GameMode, Question, Subject
from ..content.service import speech_text
from ..content.visuals import resolve_icon
from ..db import SessionLocal
from ..session import GameSession, ScoreStore, SqlScoreStore, discard, load_next, lookup, register
from ..settings import settings


router = APIRouter(tags=["game"])


def get_score_store() -> ScoreStore:
    return SqlScoreStore(SessionLocal, settings.score_key)


class QuestionView(BaseModel):
    id: str
    subject: Subject
    prompt: str
    narrative: Optional[str] = None
    options: List[str]
    visual_hint: Optional[str] = None
    icon: str
    arithmetic: Optional[ArithmeticFact] = None
    speech_text: str


def _view(question: Question) -> QuestionView:
    # The answer stays server-side; clients submit and get a verdict back
    return QuestionView(
        id=question.id,
        subject=question.subject,
        prompt=question.prompt,
        narrative=question.narrative,
        options=list(question.options),
        visual_hint=question.visual_hint,
        icon=resolve_icon(question.visual_hint),
        arithmetic=question.arithmetic,
        speech_text=speech_text(question),
    )


class StartRequest(BaseModel):
    subject: Subject
    mode: GameMode = GameMode.CLASSIC


class StartResponse(BaseModel):
    session_id: str
    question: QuestionView
    score: int
    streak: int
    total_score: int


class NextQuestionRequest(BaseModel):
    session_id: str


class NextQuestionResponse(BaseModel):
    question: QuestionView


class AnswerRequest(BaseModel):
    session_id: str
    question_id: str
    answer: str


class AnswerResponse(BaseModel):
    correct: bool
    score: int
    streak: int
    total_score: int
    feedback: str


class ScoreResponse(BaseModel):
    total_score: int


def _get_session(session_id: str) -> GameSession:
    state = lookup(session_id)
    if not state:
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return state


@router.post("/game/start", response_model=StartResponse)
async def start(req: StartRequest, store: ScoreStore = Depends(get_score_store)):
    state = register(GameSession(req.subject, req.mode, store))
    q = await load_next(state)
    if q is None:
        raise HTTPException(status_code=409, detail="Question load was superseded")
    return StartResponse(
        session_id=state.session_id,
        question=_view(q),
        score=state.score,
        streak=state.streak,
        total_score=state.total_score,
    )


@router.post("/game/next", response_model=NextQuestionResponse)
async def next_question(req: NextQuestionRequest):
    state = _get_session(req.session_id)
    q = await load_next(state)
    if q is None:
        raise HTTPException(status_code=409, detail="Question load was superseded")
    return NextQuestionResponse(question=_view(q))


@router.post("/game/answer", response_model=AnswerResponse)
async def answer(req: AnswerRequest):
    state = _get_session(req.session_id)
    if state.question is None:
        raise HTTPException(status_code=400, detail="No question in play; request the next question")
    if state.question.id != req.question_id:
        raise HTTPException(status_code=400, detail="Unknown question_id for this session")
    outcome = state.submit(req.answer)
    return AnswerResponse(
        correct=outcome.correct,
        score=outcome.score,
        streak=outcome.streak,
        total_score=outcome.total_score,
        feedback=outcome.feedback,
    )


@router.delete("/game/{session_id}")
async def end(session_id: str):
    if not discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found or expired")
    return {"status": "ended"}


@router.get("/score", response_model=ScoreResponse)
def total_score(store: ScoreStore = Depends(get_score_store)):
    return ScoreResponse(total_score=store.load())
