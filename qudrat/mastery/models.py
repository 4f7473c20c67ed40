from enum import Enum
from typing import List, Optional

from qudrat.core.serialization import CamelModel, ObjectIdField, ObjectIdList


class AICourseType(str, Enum):
    MASTERY = "mastery"

# ==================== AI COURSE MODELS ====================

class TreeLevel(CamelModel):
    """One level of a mastery path: a topic, its lessons and linked prompts"""
    level: int
    topic: str
    lessons: ObjectIdList = []
    can_read: bool = True
    can_listen: bool = True
    prompt_ids: ObjectIdList = []


class AICourseBody(CamelModel):
    title: Optional[str] = None
    heading: Optional[str] = None
    sub_heading: Optional[str] = None
    type: Optional[AICourseType] = None
    ai_tool: Optional[str] = None  # ChatGPT, MidJourney, DALL-E, Jasper AI ...
    category: Optional[str] = None
    cover_image: Optional[str] = None  # base64 data URI
    tree: Optional[List[TreeLevel]] = None
    certificate_id: ObjectIdField = None
    is_active: Optional[bool] = None

    def tree_documents(self) -> Optional[List[dict]]:
        if self.tree is None:
            return None
        return [level.model_dump(by_alias=True) for level in self.tree]

# ==================== AI LESSON MODELS ====================

class LessonQuestion(CamelModel):
    question: Optional[str] = None
    options: List[str] = []
    correct_answer: Optional[int] = None
    explanation: Optional[str] = None


class AILessonBody(CamelModel):
    ai_course_id: ObjectIdField = None
    title: Optional[str] = None
    content: Optional[str] = None
    media: Optional[List[str]] = None  # external URLs
    photos: Optional[List[str]] = None  # base64 images
    order: Optional[int] = None
    is_interactive: Optional[bool] = None
    questions: Optional[List[LessonQuestion]] = None
    can_read: Optional[bool] = None
    can_listen: Optional[bool] = None

    def question_documents(self) -> Optional[List[dict]]:
        if self.questions is None:
            return None
        return [q.model_dump(by_alias=True, exclude_none=True) for q in self.questions]
