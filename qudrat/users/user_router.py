from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import find_by_id, insert_document, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.users.models import UserBody

router = APIRouter(tags=["Users"])


@router.get("/users")
async def list_users(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        users = await db.users.find().sort("createdAt", -1).to_list(length=None)
        await populate(db, users, "completedLessons", "lessons")
        await populate(db, users, "certificates", "certificates")
        return {"success": True, "data": serialize_many(users)}
    except Exception as e:
        raise internal_error(e, "listing users")


@router.post("/users", status_code=201)
async def create_user(payload: UserBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(payload, "Name is required", "name")

    user = {
        "name": payload.name,
        "streak": payload.streak or 0,
        "completedLessons": payload.completed_lessons or [],
        "joinedChallenges": payload.joined_challenge_documents(),
        "masteryProgress": payload.mastery_progress_document(),
        "certificates": payload.certificates or [],
    }
    if payload.email:
        user["email"] = payload.email

    try:
        await insert_document(db.users, user)
        return {"success": True, "data": serialize_mongo(user)}
    except Exception as e:
        raise internal_error(e, "creating user")


@router.get("/users/{user_id}")
async def get_user(user_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    """User details with lesson, challenge and certificate progress resolved"""
    try:
        user = await find_by_id(db.users, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        await populate(db, user, "completedLessons", "lessons")
        await populate(db, user, "joinedChallenges.challengeId", "challenges")
        await populate(db, user, "certificates", "certificates")
        return {"success": True, "data": serialize_mongo(user)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching user")


@router.put("/users/{user_id}")
async def update_user(user_id: str, payload: UserBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    updates = payload.to_document()
    if "joinedChallenges" in updates:
        updates["joinedChallenges"] = payload.joined_challenge_documents()
    if "masteryProgress" in updates:
        updates["masteryProgress"] = payload.mastery_progress_document()
    if "name" in updates and not updates["name"]:
        updates.pop("name")

    try:
        user = await update_by_id(db.users, user_id, updates)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return {"success": True, "data": serialize_mongo(user)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating user")
