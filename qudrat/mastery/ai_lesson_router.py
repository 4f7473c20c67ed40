from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import delete_by_id, find_by_id, insert_document, object_id_filter, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.pagination import Pagination, pagination_params
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.mastery.models import AILessonBody

router = APIRouter(tags=["AI Lessons"])


@router.get("/aiLessons")
async def list_ai_lessons(
    ai_course_id: Optional[str] = Query(None, alias="aiCourseId"),
    paging: Pagination = Depends(pagination_params(10)),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if ai_course_id:
        query["aiCourseId"] = object_id_filter(ai_course_id, "aiCourseId")

    try:
        cursor = db.ailessons.find(query).sort("order", 1).skip(paging.skip).limit(paging.limit)
        lessons = await cursor.to_list(length=paging.limit)
        await populate(db, lessons, "aiCourseId", "aicourses")
        total = await db.ailessons.count_documents(query)
        return {
            "success": True,
            "data": serialize_many(lessons),
            "pagination": paging.build(total),
        }
    except Exception as e:
        raise internal_error(e, "listing AI lessons")


@router.post("/aiLessons", status_code=201)
async def create_ai_lesson(payload: AILessonBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(payload, "aiCourseId, title, and content are required", "ai_course_id", "title", "content")

    lesson = {
        "aiCourseId": payload.ai_course_id,
        "title": payload.title,
        "content": payload.content,
        "media": payload.media or [],
        "photos": payload.photos or [],
        "order": payload.order or 0,
        "isInteractive": payload.is_interactive or False,
        "questions": payload.question_documents() or [],
        "canRead": payload.can_read if payload.can_read is not None else True,
        "canListen": payload.can_listen if payload.can_listen is not None else False,
    }

    try:
        await insert_document(db.ailessons, lesson)
        return {"success": True, "data": serialize_mongo(lesson)}
    except Exception as e:
        raise internal_error(e, "creating AI lesson")


@router.get("/aiLessons/{lesson_id}")
async def get_ai_lesson(lesson_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        lesson = await find_by_id(db.ailessons, lesson_id)
        if not lesson:
            raise HTTPException(status_code=404, detail="AI Lesson not found")
        await populate(db, lesson, "aiCourseId", "aicourses")
        return {"success": True, "data": serialize_mongo(lesson)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching AI lesson")


@router.put("/aiLessons/{lesson_id}")
async def update_ai_lesson(
    lesson_id: str,
    payload: AILessonBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    if "questions" in updates:
        updates["questions"] = payload.question_documents() or []
    for field in ("aiCourseId", "title", "content"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    try:
        lesson = await update_by_id(db.ailessons, lesson_id, updates)
        if not lesson:
            raise HTTPException(status_code=404, detail="AI Lesson not found")
        return {"success": True, "data": serialize_mongo(lesson)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating AI lesson")


@router.delete("/aiLessons/{lesson_id}")
async def delete_ai_lesson(lesson_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.ailessons, lesson_id):
            raise HTTPException(status_code=404, detail="AI Lesson not found")
        return {"success": True, "message": "AI Lesson deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting AI lesson")
