"""
Tests for candidate persistence against a mocked MongoDB collection.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.database import CANDIDATES_COLLECTION
from app.models.schemas import CandidateDocument
from app.services import candidate_store


@pytest.fixture
def collection(monkeypatch) -> MagicMock:
    mock = MagicMock()
    mock.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    monkeypatch.setattr(candidate_store, "get_db", lambda: {CANDIDATES_COLLECTION: mock})
    return mock


class TestSaveCandidate:
    @pytest.mark.asyncio
    async def test_write_is_guarded_by_loaded_revision(self, collection):
        oid = ObjectId()
        candidate = CandidateDocument(name="Jane Roe", revision=3)

        assert await candidate_store.save_candidate(oid, candidate) is True

        query, update = collection.update_one.call_args.args
        assert query == {"_id": oid, "revision": 3}
        assert update["$set"]["revision"] == 4
        assert candidate.revision == 4

    @pytest.mark.asyncio
    async def test_stale_revision_is_not_written(self, collection):
        collection.update_one.return_value = MagicMock(matched_count=0)
        candidate = CandidateDocument(name="Jane Roe", revision=3)

        assert await candidate_store.save_candidate(ObjectId(), candidate) is False
        assert candidate.revision == 3
