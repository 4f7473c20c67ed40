"""
Certificate Templates
Reusable certificate designs, plus a seed endpoint that (re)creates the
four Qudrat Academy presets.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.certificates.models import TemplateBody
from qudrat.core.crud import delete_by_id, find_by_id, insert_document, update_by_id, utcnow
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.serialization import serialize_many, serialize_mongo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Certificate Templates"])

PRESET_NAME_PATTERN = "Qudrat Academy"

QUDRAT_PRESETS = [
    {
        "name": "Qudrat Academy - Gold Excellence",
        "icon": "🏆",
        "title": "Certificate of Excellence",
        "description": "Awarded for outstanding achievement and mastery in AI courses",
        "design": {
            "backgroundColor": "#0a0a0a",
            "textColor": "#FFD700",
            "borderColor": "#FFD700",
            "borderStyle": "solid",
        },
    },
    {
        "name": "Qudrat Academy - Blue Mastery",
        "icon": "🎓",
        "title": "Mastery Certificate",
        "description": "Recognizing complete mastery and expertise in AI tools",
        "design": {
            "backgroundColor": "#0a1929",
            "textColor": "#64b5f6",
            "borderColor": "#64b5f6",
            "borderStyle": "dashed",
        },
    },
    {
        "name": "Qudrat Academy - Purple Achievement",
        "icon": "⭐",
        "title": "Achievement Certificate",
        "description": "Celebrating successful completion of AI mastery path",
        "design": {
            "backgroundColor": "#1a0a2e",
            "textColor": "#b794f6",
            "borderColor": "#b794f6",
            "borderStyle": "dotted",
        },
    },
    {
        "name": "Qudrat Academy - Green Success",
        "icon": "✨",
        "title": "Certificate of Completion",
        "description": "Acknowledging successful completion of course challenges",
        "design": {
            "backgroundColor": "#0a1a0a",
            "textColor": "#4ade80",
            "borderColor": "#4ade80",
            "borderStyle": "solid",
        },
    },
]


@router.get("/certificate-templates")
async def list_templates(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        templates = await db.certificatetemplates.find().sort("createdAt", -1).to_list(length=None)
        return {"success": True, "data": serialize_many(templates)}
    except Exception as e:
        raise internal_error(e, "listing certificate templates")


@router.post("/certificate-templates", status_code=201)
async def create_template(payload: TemplateBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(payload, "Name, icon, and title are required", "name", "icon", "title")

    template = {
        "name": payload.name,
        "icon": payload.icon,
        "title": payload.title,
        "design": payload.design_document(),
        "isActive": payload.is_active if payload.is_active is not None else True,
    }
    if payload.description is not None:
        template["description"] = payload.description

    try:
        await insert_document(db.certificatetemplates, template)
        return {"success": True, "data": serialize_mongo(template)}
    except Exception as e:
        raise internal_error(e, "creating certificate template")


@router.post("/certificate-templates/seed", status_code=201)
async def seed_templates(db: AsyncIOMotorDatabase = Depends(get_db)):
    """Replace every template named like "Qudrat Academy" with the presets"""
    try:
        name_filter = {"name": {"$regex": PRESET_NAME_PATTERN, "$options": "i"}}
        removed = await db.certificatetemplates.delete_many(name_filter)

        now = utcnow()
        templates = [
            {**preset, "design": dict(preset["design"]), "isActive": True, "createdAt": now, "updatedAt": now}
            for preset in QUDRAT_PRESETS
        ]
        result = await db.certificatetemplates.insert_many(templates)
        for template, inserted_id in zip(templates, result.inserted_ids):
            template["_id"] = inserted_id

        logger.info(
            "Seeded %d certificate templates (replaced %d)",
            len(templates), removed.deleted_count,
        )
        return {
            "success": True,
            "message": f"Created {len(templates)} certificate templates",
            "data": serialize_many(templates),
        }
    except Exception as e:
        raise internal_error(e, "seeding certificate templates")


@router.get("/certificate-templates/{template_id}")
async def get_template(template_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        template = await find_by_id(db.certificatetemplates, template_id)
        if not template:
            raise HTTPException(status_code=404, detail="Certificate template not found")
        return {"success": True, "data": serialize_mongo(template)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching certificate template")


@router.put("/certificate-templates/{template_id}")
async def update_template(
    template_id: str,
    payload: TemplateBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    if "design" in updates:
        updates["design"] = payload.design_document()
    for field in ("name", "icon", "title", "isActive"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    try:
        template = await update_by_id(db.certificatetemplates, template_id, updates)
        if not template:
            raise HTTPException(status_code=404, detail="Certificate template not found")
        return {"success": True, "data": serialize_mongo(template)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating certificate template")


@router.delete("/certificate-templates/{template_id}")
async def delete_template(template_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.certificatetemplates, template_id):
            raise HTTPException(status_code=404, detail="Certificate template not found")
        return {"success": True, "message": "Certificate template deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting certificate template")
