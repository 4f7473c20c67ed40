from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from qudrat.core.crud import utcnow
from qudrat.core.serialization import CamelModel, ObjectIdField, ObjectIdList


class JoinedChallenge(CamelModel):
    challenge_id: ObjectIdField = None
    current_day: int = 1
    completed_days: List[int] = []
    joined_at: datetime = Field(default_factory=utcnow)


class MasteryProgress(CamelModel):
    """Progress through one AI mastery course, keyed by course id on the user"""

    completed_lessons: ObjectIdList = []
    current_level: int = 1


class UserBody(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    streak: Optional[int] = None
    completed_lessons: Optional[ObjectIdList] = None
    joined_challenges: Optional[List[JoinedChallenge]] = None
    mastery_progress: Optional[Dict[str, MasteryProgress]] = None
    certificates: Optional[ObjectIdList] = None

    def joined_challenge_documents(self) -> List[dict]:
        return [c.model_dump(by_alias=True) for c in self.joined_challenges or []]

    def mastery_progress_document(self) -> Dict[str, dict]:
        return {key: p.model_dump(by_alias=True) for key, p in (self.mastery_progress or {}).items()}
