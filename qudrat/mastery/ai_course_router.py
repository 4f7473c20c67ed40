"""
AI Mastery Courses
A mastery course is a leveled tree: each level has a topic, AI lessons and
optional linked prompts, and the course may point at a completion certificate.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import delete_by_id, find_by_id, insert_document, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.pagination import Pagination, pagination_params
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.mastery.models import AICourseBody, AICourseType

router = APIRouter(tags=["AI Mastery Courses"])

# Optional text fields where "" means "not set"
OPTIONAL_TEXT_FIELDS = ("subHeading", "category", "coverImage")


async def populate_ai_courses(db: AsyncIOMotorDatabase, docs):
    await populate(db, docs, "tree.lessons", "ailessons")
    await populate(db, docs, "tree.promptIds", "prompts")
    await populate(db, docs, "certificateId", "certificates")
    return docs


@router.get("/aiCourses")
async def list_ai_courses(
    is_active: Optional[str] = Query(None, alias="isActive"),
    ai_tool: Optional[str] = Query(None, alias="aiTool"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    paging: Pagination = Depends(pagination_params(20)),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if is_active is not None:
        query["isActive"] = is_active == "true"
    if ai_tool:
        query["aiTool"] = ai_tool
    if category:
        query["category"] = category
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"heading": {"$regex": pattern, "$options": "i"}},
            {"subHeading": {"$regex": pattern, "$options": "i"}},
        ]

    try:
        total = await db.aicourses.count_documents(query)
        cursor = db.aicourses.find(query).sort("createdAt", -1).skip(paging.skip).limit(paging.limit)
        courses = await cursor.to_list(length=paging.limit)
        await populate_ai_courses(db, courses)
        return {
            "success": True,
            "data": serialize_many(courses),
            "pagination": paging.build(total),
        }
    except Exception as e:
        raise internal_error(e, "listing AI courses")


@router.post("/aiCourses", status_code=201)
async def create_ai_course(payload: AICourseBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(payload, "Title, heading, AI tool, and tree are required", "title", "heading", "ai_tool")
    if payload.tree is None:
        raise HTTPException(status_code=400, detail="Title, heading, AI tool, and tree are required")

    course = {
        "title": payload.title,
        "heading": payload.heading,
        "type": payload.type or AICourseType.MASTERY.value,
        "aiTool": payload.ai_tool,
        "tree": payload.tree_documents(),
        "isActive": payload.is_active if payload.is_active is not None else True,
    }
    for field, value in (
        ("subHeading", payload.sub_heading),
        ("category", payload.category),
        ("coverImage", payload.cover_image),
    ):
        if value and value.strip():
            course[field] = value
    if payload.certificate_id:
        course["certificateId"] = payload.certificate_id

    try:
        await insert_document(db.aicourses, course)
        return {"success": True, "data": serialize_mongo(course)}
    except Exception as e:
        raise internal_error(e, "creating AI course")


@router.get("/aiCourses/{course_id}")
async def get_ai_course(course_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        course = await find_by_id(db.aicourses, course_id)
        if not course:
            raise HTTPException(status_code=404, detail="AI Course not found")
        await populate_ai_courses(db, course)
        return {"success": True, "data": serialize_mongo(course)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching AI course")


@router.put("/aiCourses/{course_id}")
async def update_ai_course(
    course_id: str,
    payload: AICourseBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    if "tree" in updates:
        updates["tree"] = payload.tree_documents() or []
    for field in OPTIONAL_TEXT_FIELDS:
        if updates.get(field) == "":
            updates[field] = None
    for field in ("title", "heading", "aiTool", "type", "isActive"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    try:
        course = await update_by_id(db.aicourses, course_id, updates)
        if not course:
            raise HTTPException(status_code=404, detail="AI Course not found")
        return {"success": True, "data": serialize_mongo(course)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating AI course")


@router.delete("/aiCourses/{course_id}")
async def delete_ai_course(course_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.aicourses, course_id):
            raise HTTPException(status_code=404, detail="AI Course not found")
        return {"success": True, "message": "AI Course deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting AI course")
