from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]
InterviewStatus = Literal[
    "collecting_info", "not_started", "in_progress", "paused", "completed"
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExtractedInfo(BaseModel):
    """Contact details extracted from resume text.

    Fields that were not found (or failed validation) are None, never "".
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    text: str


class ExtractTextRequest(BaseModel):
    """Request body for the POST /api/resumes/extract-text endpoint."""

    text: str


class ChatMessage(BaseModel):
    role: Literal["user", "ai", "system"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)


class Question(BaseModel):
    id: str
    text: str
    difficulty: Difficulty
    time_limit: int  # seconds
    category: str = "General"


class Answer(BaseModel):
    question_id: str
    question: str
    answer: str
    difficulty: Difficulty
    time_spent: int
    score: int | None = None
    feedback: str | None = None


class ScoreResult(BaseModel):
    score: int
    feedback: str


class CandidateDocument(BaseModel):
    """Candidate stored in the MongoDB candidates collection."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    resume_text: str = ""
    file_name: str | None = None
    interview_status: InterviewStatus = "collecting_info"
    missing_fields: list[str] = Field(default_factory=list)
    chat_history: list[ChatMessage] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)
    current_question_index: int = 0
    question_started_at: datetime | None = None
    paused_time_remaining: int | None = None
    answers: list[Answer] = Field(default_factory=list)
    final_score: int | None = None
    summary: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    revision: int = 0


class CandidateResponse(CandidateDocument):
    """API representation of a candidate, including its ID."""

    id: str


class CandidateListItem(BaseModel):
    """Item schema for GET /api/candidates list endpoint."""

    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    interview_status: InterviewStatus
    final_score: int | None = None
    created_at: datetime
    updated_at: datetime


class ChatRequest(BaseModel):
    """Request body for the POST /api/candidates/{id}/chat endpoint."""

    message: str

    @field_validator("message")
    @classmethod
    def message_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be empty")
        return v


class ChatResponse(BaseModel):
    """Reply from the field-collection chat."""

    field: str
    valid: bool
    messages: list[ChatMessage]
    missing_fields: list[str]
    interview_status: InterviewStatus


class InterviewProgress(BaseModel):
    """Snapshot of a running interview."""

    interview_status: InterviewStatus
    question: Question | None = None
    question_index: int
    total_questions: int
    time_remaining: int


class AnswerRequest(BaseModel):
    """Request body for the POST /api/candidates/{id}/interview/answer endpoint."""

    answer: str = ""
    timed_out: bool = False


class AnswerResponse(BaseModel):
    answer: Answer
    progress: InterviewProgress
    final_score: int | None = None
    summary: str | None = None
