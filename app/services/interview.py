"""Timed interview session rules applied to a candidate record.

A candidate moves through ``not_started -> in_progress <-> paused ->
completed``. Each question carries its own time limit; the clock is kept as
the moment the current question started, shifted on resume so paused time
is not counted.
"""

import logging
from datetime import datetime, timedelta, timezone

from app.models.schemas import Answer, CandidateDocument, InterviewProgress, Question
from app.services.ai_service import InterviewAI

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer provided"


class InterviewStateError(Exception):
    """The requested interview action is not allowed in the current state."""


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # MongoDB hands datetimes back naive (in UTC).
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def current_question(candidate: CandidateDocument) -> Question | None:
    if candidate.interview_status not in ("in_progress", "paused"):
        return None
    if candidate.current_question_index >= len(candidate.questions):
        return None
    return candidate.questions[candidate.current_question_index]


def _elapsed(candidate: CandidateDocument, now: datetime) -> int:
    if candidate.question_started_at is None:
        return 0
    delta = now - _as_aware(candidate.question_started_at)
    return max(0, int(delta.total_seconds()))


def time_remaining(candidate: CandidateDocument, now: datetime | None = None) -> int:
    """Seconds left on the current question (0 when none is active)."""
    question = current_question(candidate)
    if question is None:
        return 0
    if candidate.interview_status == "paused":
        return candidate.paused_time_remaining or 0
    return max(0, question.time_limit - _elapsed(candidate, _now(now)))


def progress(candidate: CandidateDocument, now: datetime | None = None) -> InterviewProgress:
    return InterviewProgress(
        interview_status=candidate.interview_status,
        question=current_question(candidate),
        question_index=candidate.current_question_index,
        total_questions=len(candidate.questions),
        time_remaining=time_remaining(candidate, now),
    )


async def start_interview(
    candidate: CandidateDocument,
    ai: InterviewAI,
    now: datetime | None = None,
) -> Question:
    """Generate the question set and start the clock on the first question.

    Raises:
        InterviewStateError: If contact details are still missing or the
            interview has already started.
    """
    if candidate.interview_status == "collecting_info":
        raise InterviewStateError(
            "Contact details are still missing: " + ", ".join(candidate.missing_fields)
        )
    if candidate.interview_status != "not_started":
        raise InterviewStateError(f"Interview is already {candidate.interview_status}")

    candidate.questions = await ai.generate_questions(candidate)
    candidate.current_question_index = 0
    candidate.answers = []
    candidate.question_started_at = _now(now)
    candidate.paused_time_remaining = None
    candidate.interview_status = "in_progress"

    logger.info("Interview started with %d questions", len(candidate.questions))
    return candidate.questions[0]


def pause_interview(candidate: CandidateDocument, now: datetime | None = None) -> None:
    if candidate.interview_status != "in_progress":
        raise InterviewStateError(f"Cannot pause an interview that is {candidate.interview_status}")
    candidate.paused_time_remaining = time_remaining(candidate, now)
    candidate.interview_status = "paused"


def resume_interview(candidate: CandidateDocument, now: datetime | None = None) -> None:
    if candidate.interview_status != "paused":
        raise InterviewStateError(f"Cannot resume an interview that is {candidate.interview_status}")
    question = current_question(candidate)
    remaining = candidate.paused_time_remaining or 0
    used = question.time_limit - remaining if question else 0
    candidate.question_started_at = _now(now) - timedelta(seconds=used)
    candidate.paused_time_remaining = None
    candidate.interview_status = "in_progress"


async def submit_answer(
    candidate: CandidateDocument,
    ai: InterviewAI,
    answer: str,
    timed_out: bool = False,
    now: datetime | None = None,
) -> Answer:
    """Score the answer to the current question and advance the interview.

    A blank answer is only accepted once the question's time is up, in
    which case it is recorded as "No answer provided". After the last
    question the interview is finished and summarised.

    Raises:
        InterviewStateError: If no question is awaiting an answer.
        ValueError: If the answer is blank while time remains.
    """
    if candidate.interview_status != "in_progress":
        raise InterviewStateError(f"No question is awaiting an answer (interview is {candidate.interview_status})")
    question = current_question(candidate)
    if question is None:
        raise InterviewStateError("No question is awaiting an answer")

    now = _now(now)
    remaining = time_remaining(candidate, now)
    text = answer.strip()
    if not text:
        if not timed_out and remaining > 0:
            raise ValueError("Answer must not be empty")
        text = NO_ANSWER

    result = await ai.score_answer(question.text, text, question.difficulty)
    recorded = Answer(
        question_id=question.id,
        question=question.text,
        answer=text,
        difficulty=question.difficulty,
        time_spent=question.time_limit - remaining,
        score=result.score,
        feedback=result.feedback,
    )
    candidate.answers.append(recorded)
    candidate.current_question_index += 1

    if candidate.current_question_index >= len(candidate.questions):
        await finish_interview(candidate, ai)
    else:
        candidate.question_started_at = now

    return recorded


async def finish_interview(candidate: CandidateDocument, ai: InterviewAI) -> None:
    score, summary = await ai.generate_summary(candidate, candidate.answers)
    candidate.final_score = score
    candidate.summary = summary
    candidate.interview_status = "completed"
    candidate.question_started_at = None
    candidate.paused_time_remaining = None
    logger.info("Interview completed with final score %d", score)
