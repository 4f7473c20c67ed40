from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.certificates.models import CertificateBody
from qudrat.core.crud import CREATED_ONLY, insert_document, object_id_filter, utcnow
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo

router = APIRouter(tags=["Certificates"])


@router.get("/certificates")
async def list_certificates(
    user_id: Optional[str] = Query(None, alias="userId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if user_id:
        query["userId"] = object_id_filter(user_id, "userId")
    if course_id:
        query["courseId"] = object_id_filter(course_id, "courseId")

    try:
        certificates = await db.certificates.find(query).sort("dateIssued", -1).to_list(length=None)
        await populate(db, certificates, "userId", "users")
        await populate(db, certificates, "courseId", "courses")
        return {"success": True, "data": serialize_many(certificates)}
    except Exception as e:
        raise internal_error(e, "listing certificates")


@router.post("/certificates", status_code=201)
async def issue_certificate(payload: CertificateBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(
        payload,
        "UserId, courseId, icon, and title are required",
        "user_id", "course_id", "icon", "title",
    )

    certificate = {
        "userId": payload.user_id,
        "courseId": payload.course_id,
        "icon": payload.icon,
        "title": payload.title,
        "dateIssued": utcnow(),
    }

    try:
        await insert_document(db.certificates, certificate, timestamps=CREATED_ONLY)
        return {"success": True, "data": serialize_mongo(certificate)}
    except Exception as e:
        raise internal_error(e, "issuing certificate")
