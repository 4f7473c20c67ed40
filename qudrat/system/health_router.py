from typing import Optional

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat import config
from qudrat.core.database import get_db, get_db_or_none
from qudrat.core.errors import internal_error

router = APIRouter(tags=["System"])

# Collections counted on the dashboard overview
DASHBOARD_COLLECTIONS = ("courses", "challenges", "prompts", "users")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/api/status")
async def database_status(db: Optional[AsyncIOMotorDatabase] = Depends(get_db_or_none)):
    """Report database configuration and connectivity; never fails"""
    response = {
        "backend": "Running",
        "version": config.VERSION or "unknown",
        "database_url": "Set" if config.MONGODB_URI else "Not Set",
        "database_name": config.DB_NAME,
        "connection_status": "Not Connected",
        "collections": [],
    }

    if db is None:
        return response

    try:
        collections = await db.list_collection_names()
        response["connection_status"] = "Connected"
        response["collections"] = sorted(collections)
    except Exception as e:
        response["connection_status"] = f"Error: {str(e)[:50]}"

    return response


@router.get("/api/stats")
async def dashboard_stats(db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        counts = {}
        for collection in DASHBOARD_COLLECTIONS:
            counts[collection] = await db[collection].count_documents({})
        return {"success": True, "data": counts}
    except Exception as e:
        raise internal_error(e, "computing dashboard stats")
