import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import delete_by_id, find_by_id, insert_document, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.media import is_base64_image
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.courses.models import CourseCreate, CourseType, CourseUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Courses"])

# ==================== COURSE CRUD ====================

@router.get("/courses")
async def list_courses(
    type: Optional[CourseType] = None,
    is_active: Optional[str] = Query(None, alias="isActive"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    """List courses with their lessons"""
    query = {}
    if type:
        query["type"] = type.value
    if is_active is not None:
        query["isActive"] = is_active == "true"

    try:
        courses = await db.courses.find(query).sort("createdAt", -1).to_list(length=None)
        await populate(db, courses, "lessons", "lessons")
        return {"success": True, "data": serialize_many(courses)}
    except Exception as e:
        raise internal_error(e, "listing courses")


@router.post("/courses", status_code=201)
async def create_course(
    payload: CourseCreate,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    require_fields(payload, "Title, heading, and type are required", "title", "heading", "type")

    course = {
        "title": payload.title,
        "heading": payload.heading,
        "subHeading": payload.sub_heading,
        "type": payload.type,
        "lessons": payload.lessons or [],
        "category": payload.category or "General",
        "isActive": payload.is_active if payload.is_active is not None else True,
    }
    if payload.photo:
        course["photo"] = payload.photo
    if course["subHeading"] is None:
        course.pop("subHeading")

    try:
        await insert_document(db.courses, course)
        return {"success": True, "data": serialize_mongo(course)}
    except Exception as e:
        raise internal_error(e, "creating course")


@router.get("/courses/{course_id}")
async def get_course(course_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        course = await find_by_id(db.courses, course_id)
        if not course:
            logger.info("Course not found: %s", course_id)
            raise HTTPException(status_code=404, detail="Course not found")
        await populate(db, course, "lessons", "lessons")
        return {"success": True, "data": serialize_mongo(course)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching course")


@router.put("/courses/{course_id}")
async def update_course(
    course_id: str,
    payload: CourseUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()

    # Required fields cannot be cleared
    for key in ("title", "heading", "type"):
        if key in updates and updates[key] is None:
            updates.pop(key)
    for key in ("title", "heading"):
        if isinstance(updates.get(key), str):
            updates[key] = updates[key].strip()
    if "subHeading" in updates:
        updates["subHeading"] = updates["subHeading"].strip() if updates["subHeading"] else None

    if "photo" in updates:
        if not updates["photo"]:
            updates["photo"] = None
        elif not is_base64_image(updates["photo"]):
            raise HTTPException(status_code=400, detail="Invalid photo format. Must be a base64 encoded image.")

    if "category" in updates:
        updates["category"] = updates["category"].strip() if updates["category"] else "General"
    if "lessons" in updates and updates["lessons"] is None:
        updates["lessons"] = []

    try:
        course = await update_by_id(db.courses, course_id, updates)
        if not course:
            raise HTTPException(status_code=404, detail="Course not found")
        return {"success": True, "data": serialize_mongo(course)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating course")


@router.delete("/courses/{course_id}")
async def delete_course(course_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Delete a course; its lessons stay in the lessons collection"""
    try:
        if not await delete_by_id(db.courses, course_id):
            raise HTTPException(status_code=404, detail="Course not found")
        return {"success": True, "message": "Course deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting course")
