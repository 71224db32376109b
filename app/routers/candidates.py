"""Candidate router - resume intake, listing, deletion and the field-collection chat."""

import logging

from fastapi import APIRouter, HTTPException, UploadFile

from app.models.schemas import (
    CandidateDocument,
    CandidateListItem,
    CandidateResponse,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    InterviewStatus,
)
from app.routers.deps import load_candidate, parse_object_id, save_loaded_candidate
from app.routers.resumes import document_error_status
from app.services import candidate_store
from app.services.field_collection import (
    FIELD_ATTRIBUTES,
    collect_field,
    completion_message,
    missing_fields,
    prompt_for,
)
from app.services.parser import DocumentError, parse_and_extract

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/candidates", tags=["candidates"])


def _response(candidate_id, candidate: CandidateDocument) -> CandidateResponse:
    return CandidateResponse(id=str(candidate_id), **candidate.model_dump())


@router.post("", response_model=CandidateResponse, status_code=201)
async def create_candidate(file: UploadFile) -> CandidateResponse:
    """Upload a resume and open a candidate record.

    Contact details found in the resume are stored straight away; any
    that are missing are queued for the chat, whose first prompt is
    included in the candidate's chat history.
    """
    filename = file.filename or "unknown"
    content = await file.read()

    try:
        info = await parse_and_extract(content, filename, file.content_type)
    except DocumentError as exc:
        logger.warning("Rejected resume '%s': %s", filename, exc)
        raise HTTPException(status_code=document_error_status(exc), detail=str(exc))

    missing = missing_fields(info)
    candidate = CandidateDocument(
        name=info.name,
        email=info.email,
        phone=info.phone,
        resume_text=info.text,
        file_name=filename,
        missing_fields=missing,
        interview_status="collecting_info" if missing else "not_started",
    )
    if missing:
        candidate.chat_history.append(ChatMessage(role="ai", content=prompt_for(missing[0], first=True)))

    candidate_id = await candidate_store.insert_candidate(candidate)
    logger.info(
        "Created candidate %s from '%s' (missing: %s)",
        candidate_id,
        filename,
        ", ".join(missing) or "none",
    )
    return _response(candidate_id, candidate)


@router.get("", response_model=list[CandidateListItem])
async def list_candidates(
    status: InterviewStatus | None = None,
    search: str | None = None,
) -> list[CandidateListItem]:
    """List candidates ranked by final score, optionally filtered."""
    return await candidate_store.list_candidates(status=status, search=search)


@router.get("/{candidate_id}", response_model=CandidateResponse)
async def get_candidate(candidate_id: str) -> CandidateResponse:
    oid, candidate = await load_candidate(candidate_id)
    return _response(oid, candidate)


@router.delete("/{candidate_id}")
async def delete_candidate(candidate_id: str) -> dict:
    oid = parse_object_id(candidate_id)
    if not await candidate_store.delete_candidate(oid):
        raise HTTPException(status_code=404, detail="Candidate not found")
    return {"deleted": True}


@router.post("/{candidate_id}/chat", response_model=ChatResponse)
async def chat(candidate_id: str, request: ChatRequest) -> ChatResponse:
    """Answer the current field-collection prompt.

    Valid answers fill the field and move on to the next prompt (or the
    completion message); invalid ones get a hint and the same field is
    asked again.
    """
    oid, candidate = await load_candidate(candidate_id)
    if not candidate.missing_fields:
        raise HTTPException(status_code=409, detail="All contact details are already collected")

    field = candidate.missing_fields[0]
    reply = collect_field(field, request.message)

    new_messages = [
        ChatMessage(role="user", content=request.message),
        ChatMessage(role="ai", content=reply.message),
    ]

    if reply.valid:
        setattr(candidate, FIELD_ATTRIBUTES[field], reply.value)
        candidate.missing_fields = candidate.missing_fields[1:]
        if candidate.missing_fields:
            new_messages.append(ChatMessage(role="ai", content=prompt_for(candidate.missing_fields[0])))
        else:
            new_messages.append(ChatMessage(role="ai", content=completion_message()))
            candidate.interview_status = "not_started"

    candidate.chat_history.extend(new_messages)
    await save_loaded_candidate(oid, candidate)

    logger.info(
        "Chat for candidate %s: field=%s valid=%s remaining=%d",
        candidate_id,
        field,
        reply.valid,
        len(candidate.missing_fields),
    )
    return ChatResponse(
        field=field,
        valid=reply.valid,
        messages=new_messages,
        missing_fields=candidate.missing_fields,
        interview_status=candidate.interview_status,
    )
