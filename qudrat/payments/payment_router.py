from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from qudrat.core.crud import find_by_id, insert_document, object_id_filter, update_by_id
from qudrat.core.database import get_db
from qudrat.core.errors import internal_error, require_fields
from qudrat.core.pagination import Pagination, pagination_params
from qudrat.core.populate import populate
from qudrat.core.serialization import serialize_many, serialize_mongo
from qudrat.payments.models import PaymentBody, PaymentMethod, PaymentStatus

router = APIRouter(tags=["Payments"])


async def populate_payments(db: AsyncIOMotorDatabase, docs):
    await populate(db, docs, "userId", "users", fields="name email")
    await populate(db, docs, "courseId", "courses", fields="title heading")
    return docs


@router.get("/payments")
async def list_payments(
    user_id: Optional[str] = Query(None, alias="userId"),
    course_id: Optional[str] = Query(None, alias="courseId"),
    status: Optional[PaymentStatus] = None,
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    paging: Pagination = Depends(pagination_params(50)),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    query = {}
    if user_id:
        query["userId"] = object_id_filter(user_id, "userId")
    if course_id:
        query["courseId"] = object_id_filter(course_id, "courseId")
    if status:
        query["status"] = status.value
    if payment_method:
        query["paymentMethod"] = payment_method.value

    try:
        cursor = db.payments.find(query).sort("createdAt", -1).skip(paging.skip).limit(paging.limit)
        payments = await cursor.to_list(length=paging.limit)
        await populate_payments(db, payments)
        total = await db.payments.count_documents(query)
        return {
            "success": True,
            "data": serialize_many(payments),
            "pagination": paging.build(total),
        }
    except Exception as e:
        raise internal_error(e, "listing payments")


@router.post("/payments", status_code=201)
async def create_payment(payload: PaymentBody, db: AsyncIOMotorDatabase = Depends(get_db)):
    """Record a payment for tracking; the charge itself happens at the provider"""
    require_fields(
        payload,
        "UserId, amount, and paymentMethod are required",
        "user_id", "amount", "payment_method",
    )

    payment = {
        "userId": payload.user_id,
        "amount": payload.amount,
        "currency": payload.currency or "USD",
        "paymentMethod": payload.payment_method,
        "status": payload.status or PaymentStatus.PENDING.value,
    }
    for field, value in (
        ("courseId", payload.course_id),
        ("transactionId", payload.transaction_id),
        ("msisdn", payload.msisdn),
        ("requestId", payload.request_id),
        ("metadata", payload.metadata),
    ):
        if value is not None:
            payment[field] = value

    try:
        await insert_document(db.payments, payment)
        return {"success": True, "data": serialize_mongo(payment)}
    except Exception as e:
        raise internal_error(e, "creating payment")


@router.get("/payments/{payment_id}")
async def get_payment(payment_id: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    try:
        payment = await find_by_id(db.payments, payment_id)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        await populate_payments(db, payment)
        return {"success": True, "data": serialize_mongo(payment)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "fetching payment")


@router.put("/payments/{payment_id}")
async def update_payment(
    payment_id: str,
    payload: PaymentBody,
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    updates = payload.to_document()
    for field in ("userId", "amount", "paymentMethod", "status", "currency"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    try:
        payment = await update_by_id(db.payments, payment_id, updates)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        await populate_payments(db, payment)
        return {"success": True, "data": serialize_mongo(payment)}
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(e, "updating payment")
