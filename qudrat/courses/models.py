from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import field_validator

from qudrat.core.serialization import CamelModel, ObjectIdField, ObjectIdList

# ==================== ENUMS ====================

class CourseType(str, Enum):
    SIMPLE = "simple"
    CHALLENGE = "challenge"

# ==================== COURSE MODELS ====================

class CourseCreate(CamelModel):
    title: Optional[str] = None
    heading: Optional[str] = None
    sub_heading: Optional[str] = None
    type: Optional[CourseType] = None
    category: Optional[str] = None
    lessons: Optional[ObjectIdList] = None
    photo: Optional[str] = None  # base64 data URI
    is_active: Optional[bool] = None


class CourseUpdate(CamelModel):
    title: Optional[str] = None
    heading: Optional[str] = None
    sub_heading: Optional[str] = None
    type: Optional[CourseType] = None
    category: Optional[str] = None
    lessons: Optional[ObjectIdList] = None
    photo: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("lessons", mode="before")
    @classmethod
    def lessons_must_be_list(cls, v):
        if v is None:
            return v
        return v if isinstance(v, list) else []

# ==================== LESSON MODELS ====================

class LessonCreate(CamelModel):
    course_id: ObjectIdField = None
    ai_course_id: ObjectIdField = None
    title: Optional[str] = None
    content: Optional[str] = None
    media: Optional[List[Any]] = None
    photos: Optional[List[Any]] = None
    order: Optional[int] = None
    is_interactive: Optional[bool] = None
    questions: Optional[List[Any]] = None
    can_read: Optional[bool] = None
    can_listen: Optional[bool] = None


class LessonUpdate(CamelModel):
    course_id: ObjectIdField = None
    ai_course_id: ObjectIdField = None
    title: Optional[str] = None
    content: Optional[str] = None
    media: Optional[List[str]] = None
    photos: Optional[List[str]] = None
    order: Optional[int] = None
    is_interactive: Optional[bool] = None
    questions: Optional[List[Dict[str, Any]]] = None
    can_read: Optional[bool] = None
    can_listen: Optional[bool] = None
