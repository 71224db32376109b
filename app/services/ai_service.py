"""Interview AI service - question generation, answer scoring and summaries.

Wraps a LangChain chat model (Claude via ``ChatAnthropic`` in production).
Every operation degrades to a deterministic fallback when the model is not
configured, fails, or returns a malformed payload, so the interview never
stalls on the AI backend.

The service is built once at startup and handed to request handlers as an
explicit dependency; tests construct it with a fake chat model.
"""

import asyncio
import json
import logging
import math
import re

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from app.config import settings
from app.models.schemas import Answer, CandidateDocument, Question, ScoreResult

logger = logging.getLogger(__name__)

QUESTION_TIME_LIMITS: dict[str, int] = {"easy": 20, "medium": 60, "hard": 120}
QUESTIONS_PER_INTERVIEW = 6
RESUME_PROMPT_CHARS = 1200

SYSTEM_PROMPT = "You are an expert technical interviewer for full-stack roles."

_FALLBACK_QUESTIONS = (
    ("q1", "Explain the difference between let, const, and var in JavaScript.", "easy", "JavaScript"),
    ("q2", "What is the Virtual DOM in React?", "easy", "React"),
    ("q3", "How do you create a custom React hook?", "medium", "React"),
    ("q4", "Explain Express.js middleware.", "medium", "Node.js"),
    ("q5", "Design a scalable chat application.", "hard", "System Design"),
    ("q6", "How would you optimize React performance?", "hard", "Performance"),
)

_SCORING_KEYWORDS = ("javascript", "react", "node", "api", "component", "state")

_CODE_FENCE_RE = re.compile(r"```(?:json)?")


def build_llm() -> BaseChatModel | None:
    """Return a ChatAnthropic model, or None when no API key is configured."""
    if not settings.anthropic_api_key:
        logger.warning("ANTHROPIC_API_KEY not set; interview AI will use fallbacks")
        return None

    return ChatAnthropic(
        model=settings.anthropic_model,
        anthropic_api_key=settings.anthropic_api_key,
        max_tokens=1024,
        timeout=settings.ai_timeout_seconds,
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_score(answers: list[Answer]) -> int:
    """Rounded mean of the answer scores; unscored answers count as 0."""
    if not answers:
        return 0
    total = sum(answer.score or 0 for answer in answers)
    return round_half_up(total / len(answers))


def _extract_text(content) -> str:
    """Extract text from a chat model reply.

    Handles both string content and Anthropic's list-of-blocks format.
    """
    if isinstance(content, str):
        return content

    if not isinstance(content, list):
        return ""

    parts: list[str] = []
    for block in content:
        if isinstance(block, dict):
            text = block.get("text", "")
        elif isinstance(block, str):
            text = block
        else:
            continue
        if text:
            parts.append(text)
    return "".join(parts)


def _parse_json(text: str):
    """Parse a JSON payload that the model may have wrapped in code fences."""
    return json.loads(_CODE_FENCE_RE.sub("", text).strip())


def fallback_questions() -> list[Question]:
    return [
        Question(
            id=qid,
            text=text,
            difficulty=difficulty,
            time_limit=QUESTION_TIME_LIMITS[difficulty],
            category=category,
        )
        for qid, text, difficulty, category in _FALLBACK_QUESTIONS
    ]


def fallback_score(answer: str, difficulty: str | None = None) -> ScoreResult:
    """Heuristic score from answer length and technical keywords."""
    if not answer or len(answer.strip()) < 10:
        return ScoreResult(score=0, feedback="Answer too short")

    base = min(60.0, len(answer) / 4)
    lowered = answer.lower()
    base += 8 * sum(1 for keyword in _SCORING_KEYWORDS if keyword in lowered)
    if difficulty == "easy":
        base += 10
    elif difficulty == "hard":
        base -= 5

    score = max(0, min(100, round_half_up(base)))
    if score >= 75:
        feedback = "Strong answer!"
    elif score >= 55:
        feedback = "Decent answer, add more depth."
    else:
        feedback = "Needs more technical detail."
    return ScoreResult(score=score, feedback=feedback)


def fallback_summary(candidate: CandidateDocument, score: int) -> str:
    name = candidate.name or "The candidate"
    return (
        f"{name} completed the interview with an overall score of {score}%. "
        "This summary is generated using fallback logic (AI service unavailable)."
    )


def _questions_from_payload(payload) -> list[Question]:
    """Build questions from model output, rejecting anything malformed."""
    if not isinstance(payload, list) or len(payload) != QUESTIONS_PER_INTERVIEW:
        raise ValueError("expected a JSON array of 6 questions")

    questions: list[Question] = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"question {index} is not an object")
        difficulty = str(item.get("difficulty", "")).lower()
        if difficulty not in QUESTION_TIME_LIMITS:
            raise ValueError(f"question {index} has invalid difficulty {difficulty!r}")
        text = str(item.get("text", "")).strip()
        if not text:
            raise ValueError(f"question {index} has no text")
        questions.append(
            Question(
                id=str(item.get("id") or f"q{index}"),
                text=text,
                difficulty=difficulty,
                time_limit=QUESTION_TIME_LIMITS[difficulty],
                category=str(item.get("category") or "General"),
            )
        )
    return questions


class InterviewAI:
    """Interview operations backed by a chat model, with fallbacks.

    Args:
        llm: Any LangChain chat model. None runs every operation on its
            fallback path.
        timeout: Seconds to wait for a single model call.
    """

    def __init__(self, llm: BaseChatModel | None = None, timeout: float | None = None):
        self._llm = llm
        self._timeout = settings.ai_timeout_seconds if timeout is None else timeout

    @property
    def enabled(self) -> bool:
        return self._llm is not None

    async def _complete(self, prompt: str) -> str:
        if self._llm is None:
            raise RuntimeError("no chat model configured")

        response = await asyncio.wait_for(
            self._llm.ainvoke([SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)]),
            timeout=self._timeout,
        )
        return _extract_text(response.content)

    async def generate_questions(self, candidate: CandidateDocument) -> list[Question]:
        """Generate six interview questions tailored to the resume.

        Returns two easy (20s), two medium (60s) and two hard (120s)
        questions, or the static question set if generation fails.
        """
        prompt = (
            "Based on the resume below, generate 6 JSON objects: 2 easy (20s), "
            "2 medium (60s), 2 hard (120s). Fields: id, text, difficulty, "
            "timeLimit, category. Return ONLY a JSON array.\n"
            f"Resume:\n{candidate.resume_text[:RESUME_PROMPT_CHARS]}"
        )
        try:
            questions = _questions_from_payload(_parse_json(await self._complete(prompt)))
        except Exception as exc:
            logger.warning("Falling back to static questions: %s", exc)
            return fallback_questions()

        logger.info("Generated %d interview questions", len(questions))
        return questions

    async def score_answer(
        self,
        question: str,
        answer: str,
        difficulty: str | None = None,
    ) -> ScoreResult:
        """Score an answer from 0 to 100 with short feedback."""
        prompt = (
            'Evaluate the candidate\'s answer. Provide JSON: {"score": <0-100>, "feedback": "text"}.\n'
            f"Difficulty: {difficulty or 'medium'}\n"
            f"Question: {question}\n"
            f"Answer: {answer}"
        )
        try:
            payload = _parse_json(await self._complete(prompt))
            score = payload.get("score")
            feedback = payload.get("feedback")
            if isinstance(score, bool) or not isinstance(score, (int, float)) or not feedback:
                raise ValueError(f"invalid scoring payload: {payload!r}")
        except Exception as exc:
            logger.warning("Falling back to heuristic scoring: %s", exc)
            return fallback_score(answer, difficulty)

        return ScoreResult(score=max(0, min(100, round_half_up(score))), feedback=str(feedback))

    async def generate_summary(
        self,
        candidate: CandidateDocument,
        answers: list[Answer],
    ) -> tuple[int, str]:
        """Return the final score and a written evaluation of the interview.

        The score is always the rounded mean of the answer scores; only the
        prose comes from the model.
        """
        score = average_score(answers)
        answer_block = "\n\n".join(
            f"Q{i} ({a.difficulty}): {a.question}\nA: {a.answer}\nScore: {a.score or 0}%"
            for i, a in enumerate(answers, start=1)
        )
        prompt = (
            "Create a professional interview evaluation (3-4 paragraphs) for "
            f"candidate {candidate.name or 'Unknown'}. Cover: technical competence, "
            "communication, strengths, improvement areas, recommendation. "
            f"Data:\n{answer_block}"
        )
        try:
            summary = (await self._complete(prompt)).strip()
            if not summary:
                raise ValueError("empty summary")
        except Exception as exc:
            logger.warning("Falling back to basic summary: %s", exc)
            return score, fallback_summary(candidate, score)

        return score, summary
