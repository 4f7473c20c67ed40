from enum import Enum
from typing import List, Optional

from pydantic import field_validator

from qudrat.core.serialization import CamelModel, ObjectIdField


class PromptBody(CamelModel):
    category: Optional[str] = None
    application: Optional[str] = None
    prompt: Optional[str] = None
    tool: Optional[str] = None
    title: Optional[str] = None
    sub_heading: Optional[str] = None
    tags: Optional[List[str]] = None
    related_course_id: ObjectIdField = None

    @field_validator("category")
    @classmethod
    def strip_category(cls, v):
        return v.strip() if isinstance(v, str) else v


# ==================== GENERATION ====================

class PromptLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class GenerateRequest(CamelModel):
    description: Optional[str] = None
    tone: Optional[str] = None
    length: Optional[PromptLength] = None
    category_hint: Optional[str] = None
    tool_hint: Optional[str] = None
