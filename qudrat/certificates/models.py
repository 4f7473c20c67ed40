from enum import Enum
from typing import Optional

from qudrat.core.serialization import CamelModel, ObjectIdField


class CertificateBody(CamelModel):
    user_id: ObjectIdField = None
    course_id: ObjectIdField = None
    icon: Optional[str] = None  # AI tool icon filename
    title: Optional[str] = None


# ==================== TEMPLATES ====================

class BorderStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


class TemplateDesign(CamelModel):
    background_color: str = "#1a1a1a"
    text_color: str = "#ffffff"
    border_color: str = "#ffffff"
    border_style: BorderStyle = BorderStyle.SOLID


class TemplateBody(CamelModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    design: Optional[TemplateDesign] = None
    is_active: Optional[bool] = None

    def design_document(self) -> dict:
        return (self.design or TemplateDesign()).model_dump(by_alias=True, mode="json")
