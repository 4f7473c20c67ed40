from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.challenges.models import ChallengeBody, ChallengeLevel
from qudrat.core.crud import delete_by_id, find_by_id, insert_document, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.serialization import serialize_many, serialize_mongo

router = APIRouter(tags=["Challenges"])


@router.get("/challenges")
async def list_challenges(
    is_active: Optional[str] = Query(None, alias="isActive"),
    level: Optional[ChallengeLevel] = None,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if is_active is not None:
        query["isActive"] = is_active == "true"
    if level:
        query["level"] = level.value

    try:
        challenges = await db.challenges.find(query).sort("createdAt", -1).to_list(length=None)
        return {"success": True, "data": serialize_many(challenges)}
    except Exception as e:
        raise internal_error(e, "listing challenges")


@router.post("/challenges", status_code=201)
async def create_challenge(payload: ChallengeBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(
        payload,
        "Title, description, duration, and level are required",
        "title", "description", "duration", "level",
    )

    challenge = {
        "title": payload.title,
        "description": payload.description,
        "duration": payload.duration,
        "level": payload.level,
        "isActive": payload.is_active if payload.is_active is not None else True,
    }

    try:
        await insert_document(db.challenges, challenge)
        return {"success": True, "data": serialize_mongo(challenge)}
    except Exception as e:
        raise internal_error(e, "creating challenge")


@router.get("/challenges/{challenge_id}")
async def get_challenge(challenge_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        challenge = await find_by_id(db.challenges, challenge_id)
        if not challenge:
            raise HTTPException(status_code=404, detail="Challenge not found")
        return {"success": True, "data": serialize_mongo(challenge)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching challenge")


@router.put("/challenges/{challenge_id}")
async def update_challenge(
    challenge_id: str,
    payload: ChallengeBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = {k: v for k, v in payload.to_document().items() if v is not None}

    try:
        challenge = await update_by_id(db.challenges, challenge_id, updates)
        if not challenge:
            raise HTTPException(status_code=404, detail="Challenge not found")
        return {"success": True, "data": serialize_mongo(challenge)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating challenge")


@router.delete("/challenges/{challenge_id}")
async def delete_challenge(challenge_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.challenges, challenge_id):
            raise HTTPException(status_code=404, detail="Challenge not found")
        return {"success": True, "message": "Challenge deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting challenge")
