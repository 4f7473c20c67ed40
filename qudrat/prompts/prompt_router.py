from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat import config
from qudrat.core.crud import delete_by_id, find_by_id, insert_document, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.prompts.generator import PromptGenerationError, generate_prompt, get_openai_client
from qudrat.prompts.models import GenerateRequest, PromptBody

router = APIRouter(tags=["Prompts"])


@router.get("/prompts")
async def list_prompts(
    tool: Optional[str] = None,
    category: Optional[str] = None,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if tool:
        query["tool"] = tool
    if category:
        query["category"] = category

    try:
        prompts = await db.prompts.find(query).sort("createdAt", -1).to_list(length=None)
        return {"success": True, "data": serialize_many(prompts)}
    except Exception as e:
        raise internal_error(e, "listing prompts")


@router.post("/prompts", status_code=201)
async def create_prompt(payload: PromptBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    require_fields(
        payload,
        "Category, prompt, tool, title, and subHeading are required",
        "category", "prompt", "tool", "title", "sub_heading",
    )

    prompt = {
        "category": payload.category,
        "prompt": payload.prompt,
        "tool": payload.tool,
        "title": payload.title,
        "subHeading": payload.sub_heading,
        "tags": payload.tags or [],
    }
    if payload.application:
        prompt["application"] = payload.application
    if payload.related_course_id:
        prompt["relatedCourseId"] = payload.related_course_id

    try:
        await insert_document(db.prompts, prompt)
        return {"success": True, "data": serialize_mongo(prompt)}
    except Exception as e:
        raise internal_error(e, "creating prompt")


@router.post("/prompts/generate")
async def generate(
    payload: GenerateRequest,
    client: httpx.AsyncClient = Depends(get_openai_client),
):
    if not config.OPENAI_API_KEY:
        raise HTTPException(status_code=500, detail="OPENAI_API_KEY is not set on the server")
    require_fields(payload, "description is required", "description")

    try:
        data = await generate_prompt(client, payload)
        return {"success": True, "data": data}
    except PromptGenerationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        raise internal_error(e, "generating prompt")


@router.get("/prompts/{prompt_id}")
async def get_prompt(prompt_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        prompt = await find_by_id(db.prompts, prompt_id)
        if not prompt:
            raise HTTPException(status_code=404, detail="Prompt not found")
        await populate(db, prompt, "relatedCourseId", "courses")
        return {"success": True, "data": serialize_mongo(prompt)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching prompt")


@router.put("/prompts/{prompt_id}")
async def update_prompt(
    prompt_id: str,
    payload: PromptBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    for field in ("category", "prompt", "tool", "title", "subHeading"):
        if field in updates and not updates[field]:
            updates.pop(field)

    try:
        prompt = await update_by_id(db.prompts, prompt_id, updates)
        if not prompt:
            raise HTTPException(status_code=404, detail="Prompt not found")
        return {"success": True, "data": serialize_mongo(prompt)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating prompt")


@router.delete("/prompts/{prompt_id}")
async def delete_prompt(prompt_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        if not await delete_by_id(db.prompts, prompt_id):
            raise HTTPException(status_code=404, detail="Prompt not found")
        return {"success": True, "message": "Prompt deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "deleting prompt")
