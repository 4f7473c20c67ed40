from enum import Enum
from typing import List, Optional

from qudrat.core.serialization import CamelModel, ObjectIdField


class ChallengeLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ChallengeBody(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None  # days
    level: Optional[ChallengeLevel] = None
    is_active: Optional[bool] = None

# ==================== CHALLENGE DAY MODELS ====================

class InteractiveQuestion(CamelModel):
    question: str
    options: List[str] = []
    correct_answer: int
    explanation: Optional[str] = None


class ChallengeDayBody(CamelModel):
    challenge_id: ObjectIdField = None
    day: Optional[int] = None  # form values arrive as strings and are coerced
    content: Optional[str] = None
    photos: Optional[List[str]] = None  # base64 images
    media: Optional[List[str]] = None  # external URLs
    questions: Optional[List[InteractiveQuestion]] = None

    def question_documents(self) -> List[dict]:
        return [q.model_dump(by_alias=True, exclude_none=True) for q in self.questions or []]
