from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.challenges.models import ChallengeDayBody
from qudrat.core.crud import delete_by_id, find_by_id, insert_document, object_id_filter, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo

router = APIRouter(tags=["Challenge Days"])


@router.get("/challengeDays")
async def list_challenge_days(
    challenge_id: Optional[str] = Query(None, alias="challengeId"),
    day: Optional[int] = None,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if challenge_id:
        query["challengeId"] = object_id_filter(challenge_id, "challengeId")
    if day:
        query["day"] = day

    try:
        cursor = db.challengedays.find(query).sort([("challengeId", 1), ("day", 1)])
        days = await cursor.to_list(length=None)
        await populate(db, days, "challengeId", "challenges")
        return {"success": True, "data": serialize_many(days)}
    except Exception as e:
        raise internal_error(e, "listing challenge days")


@router.post("/challengeDays", status_code=201)
async def create_challenge_day(payload: ChallengeDayBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Create a day; (challengeId, day) is unique so a second day N fails in the store"""
    require_fields(payload, "challengeId, day, and content are required", "challenge_id", "day", "content")

    challenge_day = {
        "challengeId": payload.challenge_id,
        "day": payload.day,
        "content": payload.content,
        "photos": payload.photos or [],
        "media": payload.media or [],
        "questions": payload.question_documents(),
    }

    try:
        await insert_document(db.challengedays, challenge_day)
        return {"success": True, "data": serialize_mongo(challenge_day)}
    except Exception as e:
        raise internal_error(e, "creating challenge day")


@router.get("/challengeDays/{day_id}")
async def get_challenge_day(day_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        challenge_day = await find_by_id(db.challengedays, day_id)
        if not challenge_day:
            raise HTTPException(status_code=404, detail="Challenge day not found")
        await populate(db, challenge_day, "challengeId", "challenges")
        return {"success": True, "data": serialize_mongo(challenge_day)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching challenge day")


@router.put("/challengeDays/{day_id}")
async def update_challenge_day(
    day_id: str,
    payload: ChallengeDayBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    # content is always written; a missing or null value clears it
    updates = {"content": payload.content if payload.content is not None else ""}
    if payload.day is not None:
        updates["day"] = payload.day
    if payload.photos is not None:
        updates["photos"] = payload.photos
    if payload.media is not None:
        updates["media"] = payload.media
    if payload.questions is not None:
        updates["questions"] = payload.question_documents()

    try:
        challenge_day = await update_by_id(db.challengedays, day_id, updates)
        if not challenge_day:
            raise HTTPException(status_code=404, detail="Challenge day not found")
        await populate(db, challenge_day, "challengeId", "challenges")
        return {"success": True, "data": serialize_mongo(challenge_day)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating challenge day")


@router.delete("/challengeDays/{day_id}")
async def delete_challenge_day(day_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.challengedays, day_id):
            raise HTTPException(status_code=404, detail="Challenge day not found")
        return {"success": True, "message": "Challenge day deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting challenge day")
