"""
Shared fixtures: an in-memory candidate store and an API client.
"""

import io

import pytest
from bson import ObjectId
from docx import Document
from fastapi.testclient import TestClient

from app.main import app
from app.models.schemas import CandidateDocument, CandidateListItem
from app.routers.deps import get_interview_ai
from app.services import candidate_store
from app.services.ai_service import InterviewAI


class FakeCandidateStore:
    """Dict-backed stand-in for the MongoDB candidate store."""

    def __init__(self):
        self.docs: dict[ObjectId, CandidateDocument] = {}

    async def insert_candidate(self, candidate):
        oid = ObjectId()
        self.docs[oid] = candidate.model_copy(deep=True)
        return oid

    async def find_candidate(self, candidate_id):
        doc = self.docs.get(candidate_id)
        return doc.model_copy(deep=True) if doc else None

    async def save_candidate(self, candidate_id, candidate):
        stored = self.docs.get(candidate_id)
        if stored is None or stored.revision != candidate.revision:
            return False
        candidate.revision += 1
        self.docs[candidate_id] = candidate.model_copy(deep=True)
        return True

    async def delete_candidate(self, candidate_id):
        return self.docs.pop(candidate_id, None) is not None

    async def list_candidates(self, status=None, search=None):
        items = [
            CandidateListItem(id=str(oid), **doc.model_dump())
            for oid, doc in self.docs.items()
            if (status is None or doc.interview_status == status)
            and (
                search is None
                or search.lower() in (doc.name or "").lower()
                or search.lower() in (doc.email or "").lower()
            )
        ]
        return sorted(items, key=lambda item: item.final_score or -1, reverse=True)


@pytest.fixture
def store(monkeypatch) -> FakeCandidateStore:
    fake = FakeCandidateStore()
    for name in (
        "insert_candidate",
        "find_candidate",
        "save_candidate",
        "delete_candidate",
        "list_candidates",
    ):
        monkeypatch.setattr(candidate_store, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store):
    app.dependency_overrides[get_interview_ai] = lambda: InterviewAI(None)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def docx_bytes():
    """Build a .docx file from the given paragraphs."""

    def build(*paragraphs: str) -> bytes:
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    return build
