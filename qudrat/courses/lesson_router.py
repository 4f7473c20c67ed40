from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import (
    CREATED_ONLY, delete_by_id, find_by_id, insert_document, object_id_filter, update_by_id
)
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error
from qudrat.core.media import clean_media, clean_photos, clean_questions
from qudrat.core.pagination import Pagination, pagination_params
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.courses.models import LessonCreate, LessonUpdate

router = APIRouter(tags=["Lessons"])


@router.get("/lessons")
async def list_lessons(
    course_id: Optional[str] = Query(None, alias="courseId"),
    ai_course_id: Optional[str] = Query(None, alias="aiCourseId"),
    paging: Pagination = Depends(pagination_params(10)),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    """Lessons of a course, ordered, one page at a time"""
    query = {}
    if course_id:
        query["courseId"] = object_id_filter(course_id, "courseId")
    if ai_course_id:
        query["aiCourseId"] = object_id_filter(ai_course_id, "aiCourseId")

    try:
        cursor = db.lessons.find(query).sort("order", 1).skip(paging.skip).limit(paging.limit)
        lessons = await cursor.to_list(length=paging.limit)
        total = await db.lessons.count_documents(query)
        return {
            "success": True,
            "data": serialize_many(lessons),
            "pagination": paging.build(total),
        }
    except Exception as e:
        raise internal_error(e, "listing lessons")


@router.post("/lessons", status_code=201)
async def create_lesson(payload: LessonCreate, db: AsyncIOMotorDatabase = Depends(get_db)):
    if (not payload.course_id and not payload.ai_course_id) or not payload.title or not payload.content:
        raise HTTPException(
            status_code=400,
            detail="Either courseId or aiCourseId, title, and content are required",
        )

    photos = clean_photos(payload.photos)
    media = clean_media(payload.media)
    questions = clean_questions(payload.questions) if payload.is_interactive else []

    lesson = {
        "title": payload.title.strip(),
        "content": payload.content.strip(),
        "media": media,
        "photos": photos,
        "order": payload.order or 0,
        "isInteractive": payload.is_interactive or False,
        "questions": questions,
        "canRead": payload.can_read if payload.can_read is not None else True,
        "canListen": payload.can_listen if payload.can_listen is not None else False,
    }
    if payload.course_id:
        lesson["courseId"] = payload.course_id
    if payload.ai_course_id:
        lesson["aiCourseId"] = payload.ai_course_id

    try:
        await insert_document(db.lessons, lesson, timestamps=CREATED_ONLY)
        return {
            "success": True,
            "data": serialize_mongo(lesson),
            "message": f"Lesson created successfully with {len(photos)} image(s) and {len(media)} media file(s)",
        }
    except Exception as e:
        raise internal_error(e, "creating lesson")


@router.get("/lessons/{lesson_id}")
async def get_lesson(lesson_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        lesson = await find_by_id(db.lessons, lesson_id)
        if not lesson:
            raise HTTPException(status_code=404, detail="Lesson not found")
        return {"success": True, "data": serialize_mongo(lesson)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching lesson")


@router.put("/lessons/{lesson_id}")
async def update_lesson(
    lesson_id: str,
    payload: LessonUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    for field in ("title", "content", "order", "isInteractive", "canRead", "canListen"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    try:
        lesson = await update_by_id(db.lessons, lesson_id, updates, touch=False)
        if not lesson:
            raise HTTPException(status_code=404, detail="Lesson not found")
        return {"success": True, "data": serialize_mongo(lesson)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating lesson")


@router.delete("/lessons/{lesson_id}")
async def delete_lesson(lesson_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.lessons, lesson_id):
            raise HTTPException(status_code=404, detail="Lesson not found")
        return {"success": True, "message": "Lesson deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting lesson")
