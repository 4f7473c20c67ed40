from datetime import datetime, timezone
from typing import Optional, Sequence

from bson import ObjectId
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorCollection

from qudrat.core.serialization import parse_object_id

# ==================== TIMESTAMPS ====================

BOTH_TIMESTAMPS = ("createdAt", "updatedAt")
CREATED_ONLY = ("createdAt",)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_update(data: dict, touch: bool = True) -> dict:
    """Turn a partial document into $set/$unset; None means remove the field"""
    to_set = {k: v for k, v in data.items() if v is not None}
    to_unset = {k: "" for k, v in data.items() if v is None}
    if touch:
        to_set["updatedAt"] = utcnow()
    update = {}
    if to_set:
        update["$set"] = to_set
    if to_unset:
        update["$unset"] = to_unset
    return update


# ==================== DOCUMENT CRUD ====================

async def insert_document(
    collection: AsyncIOMotorCollection,
    doc: dict,
    timestamps: Sequence[str] = BOTH_TIMESTAMPS,
) -> dict:
    now = utcnow()
    for field in timestamps:
        doc.setdefault(field, now)
    result = await collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


async def find_by_id(collection: AsyncIOMotorCollection, doc_id: str) -> Optional[dict]:
    oid = parse_object_id(doc_id)
    if oid is None:
        return None
    return await collection.find_one({"_id": oid})


async def update_by_id(
    collection: AsyncIOMotorCollection,
    doc_id: str,
    data: dict,
    touch: bool = True,
) -> Optional[dict]:
    """Apply a partial update and return the new document, or None if missing"""
    oid = parse_object_id(doc_id)
    if oid is None:
        return None
    update = build_update(data, touch=touch)
    if update:
        result = await collection.update_one({"_id": oid}, update)
        if result.matched_count == 0:
            return None
    return await collection.find_one({"_id": oid})


async def delete_by_id(collection: AsyncIOMotorCollection, doc_id: str) -> bool:
    oid = parse_object_id(doc_id)
    if oid is None:
        return False
    result = await collection.delete_one({"_id": oid})
    return result.deleted_count > 0


def object_id_filter(value: str, field: str) -> ObjectId:
    """Query-string reference filter; malformed ids are a client error"""
    oid = parse_object_id(value)
    if oid is None:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return oid
