"""Shared request dependencies for the API routers."""

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, Request

from app.models.schemas import CandidateDocument
from app.services import candidate_store
from app.services.ai_service import InterviewAI


def parse_object_id(candidate_id: str) -> ObjectId:
    """Parse a string into a BSON ObjectId, raising HTTP 400 on invalid format."""
    try:
        return ObjectId(candidate_id)
    except InvalidId:
        raise HTTPException(status_code=400, detail="Invalid candidate ID format")


async def load_candidate(candidate_id: str) -> tuple[ObjectId, CandidateDocument]:
    """Fetch a candidate by ID, raising HTTP 404 when it does not exist."""
    oid = parse_object_id(candidate_id)
    candidate = await candidate_store.find_candidate(oid)
    if candidate is None:
        raise HTTPException(status_code=404, detail="Candidate not found")
    return oid, candidate


async def save_loaded_candidate(oid: ObjectId, candidate: CandidateDocument) -> None:
    """Save a candidate from :func:`load_candidate`, raising HTTP 409 if it went stale."""
    if not await candidate_store.save_candidate(oid, candidate):
        raise HTTPException(
            status_code=409,
            detail="Candidate was updated by another request. Reload and try again.",
        )


def get_interview_ai(request: Request) -> InterviewAI:
    """Return the InterviewAI built at startup."""
    return request.app.state.interview_ai
