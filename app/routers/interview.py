"""Interview router - runs the timed Q&A session for a candidate."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import AnswerRequest, AnswerResponse, InterviewProgress
from app.routers.deps import get_interview_ai, load_candidate, save_loaded_candidate
from app.services.ai_service import InterviewAI
from app.services.interview import (
    InterviewStateError,
    pause_interview,
    progress,
    resume_interview,
    start_interview,
    submit_answer,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/candidates/{candidate_id}/interview", tags=["interview"])


@router.get("", response_model=InterviewProgress)
async def get_progress(candidate_id: str) -> InterviewProgress:
    _, candidate = await load_candidate(candidate_id)
    return progress(candidate)


@router.post("/start", response_model=InterviewProgress)
async def start(
    candidate_id: str,
    ai: InterviewAI = Depends(get_interview_ai),
) -> InterviewProgress:
    """Generate questions and start the clock on the first one."""
    oid, candidate = await load_candidate(candidate_id)
    try:
        await start_interview(candidate, ai)
    except InterviewStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    await save_loaded_candidate(oid, candidate)
    logger.info("Started interview for candidate %s", candidate_id)
    return progress(candidate)


@router.post("/answer", response_model=AnswerResponse)
async def answer(
    candidate_id: str,
    body: AnswerRequest,
    ai: InterviewAI = Depends(get_interview_ai),
) -> AnswerResponse:
    """Submit the answer to the current question (or report a time-out)."""
    oid, candidate = await load_candidate(candidate_id)
    try:
        recorded = await submit_answer(candidate, ai, body.answer, timed_out=body.timed_out)
    except InterviewStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    await save_loaded_candidate(oid, candidate)
    logger.info(
        "Recorded answer %d/%d for candidate %s (score=%s)",
        candidate.current_question_index,
        len(candidate.questions),
        candidate_id,
        recorded.score,
    )
    return AnswerResponse(
        answer=recorded,
        progress=progress(candidate),
        final_score=candidate.final_score,
        summary=candidate.summary,
    )


@router.post("/pause", response_model=InterviewProgress)
async def pause(candidate_id: str) -> InterviewProgress:
    oid, candidate = await load_candidate(candidate_id)
    try:
        pause_interview(candidate)
    except InterviewStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    await save_loaded_candidate(oid, candidate)
    return progress(candidate)


@router.post("/resume", response_model=InterviewProgress)
async def resume(candidate_id: str) -> InterviewProgress:
    oid, candidate = await load_candidate(candidate_id)
    try:
        resume_interview(candidate)
    except InterviewStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    await save_loaded_candidate(oid, candidate)
    return progress(candidate)
