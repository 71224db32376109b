"""Candidate store - persists candidate records in MongoDB."""

import logging
import re
from datetime import datetime, timezone

from bson import ObjectId

from app.database import CANDIDATES_COLLECTION, get_db
from app.models.schemas import CandidateDocument, CandidateListItem

logger = logging.getLogger(__name__)


async def insert_candidate(candidate: CandidateDocument) -> ObjectId:
    """Insert a new candidate and return its ObjectId."""
    db = get_db()
    result = await db[CANDIDATES_COLLECTION].insert_one(candidate.model_dump())
    logger.info("Inserted candidate %s", result.inserted_id)
    return result.inserted_id


async def find_candidate(candidate_id: ObjectId) -> CandidateDocument | None:
    db = get_db()
    doc = await db[CANDIDATES_COLLECTION].find_one({"_id": candidate_id})
    if doc is None:
        return None
    doc.pop("_id", None)
    return CandidateDocument.model_validate(doc)


async def save_candidate(candidate_id: ObjectId, candidate: CandidateDocument) -> bool:
    """Write back a candidate loaded earlier, bumping revision and updated_at.

    The write only applies while the stored revision is still the one
    *candidate* was loaded with.

    Returns:
        False if another request saved the candidate first; nothing is
        written and *candidate* keeps its loaded revision.
    """
    loaded_revision = candidate.revision
    candidate.revision = loaded_revision + 1
    candidate.updated_at = datetime.now(timezone.utc)

    db = get_db()
    result = await db[CANDIDATES_COLLECTION].update_one(
        {"_id": candidate_id, "revision": loaded_revision},
        {"$set": candidate.model_dump()},
    )
    if result.matched_count == 0:
        candidate.revision = loaded_revision
        logger.warning(
            "Candidate %s changed since revision %d; write skipped",
            candidate_id,
            loaded_revision,
        )
        return False

    logger.debug("Saved candidate %s (%s)", candidate_id, candidate.interview_status)
    return True


async def delete_candidate(candidate_id: ObjectId) -> bool:
    db = get_db()
    result = await db[CANDIDATES_COLLECTION].delete_one({"_id": candidate_id})
    logger.info("Deleted %d candidate(s) for id %s", result.deleted_count, candidate_id)
    return result.deleted_count > 0


async def list_candidates(
    status: str | None = None,
    search: str | None = None,
) -> list[CandidateListItem]:
    """List candidates ranked by final score, then most recently updated.

    Args:
        status: Optional interview status to filter by.
        search: Optional case-insensitive substring matched against name
            and email.

    Returns:
        Candidate summaries, highest score first.
    """
    query: dict = {}
    if status:
        query["interview_status"] = status
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query["$or"] = [{"name": pattern}, {"email": pattern}]

    db = get_db()
    cursor = db[CANDIDATES_COLLECTION].find(
        query,
        {
            "_id": 1,
            "name": 1,
            "email": 1,
            "phone": 1,
            "interview_status": 1,
            "final_score": 1,
            "created_at": 1,
            "updated_at": 1,
        },
    ).sort([("final_score", -1), ("updated_at", -1)])

    items: list[CandidateListItem] = []
    async for doc in cursor:
        items.append(
            CandidateListItem(
                id=str(doc["_id"]),
                name=doc.get("name"),
                email=doc.get("email"),
                phone=doc.get("phone"),
                interview_status=doc["interview_status"],
                final_score=doc.get("final_score"),
                created_at=doc["created_at"],
                updated_at=doc["updated_at"],
            )
        )

    logger.info("Listed %d candidates (status=%s, search=%s)", len(items), status, search)
    return items
