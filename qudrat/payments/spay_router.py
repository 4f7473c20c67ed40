"""
SPay Simulator
Stand-in for the SPay carrier-billing provider. Every endpoint answers with
the provider envelope {responseMessage, status, responseCode, ...}; outcomes
that depend on the subscriber are randomized.

Response codes:
    1    success
    0    unexpected failure
    103  token missing
    104  required parameter missing
    105  invalid PIN
    106  invalid MSISDN
    111  insufficient balance
    117  not subscribed
"""

import base64
import logging
import random
import re
import string
import time
from datetime import timedelta
from typing import Optional, Type

from fastapi import APIRouter, Header, Request
from fastapi.responses import JSONResponse

from qudrat.core.crud import utcnow
from qudrat.payments.models import SPayLogin, SPayPayment, SPayPublicKeyRequest, SPayRequest, SPaySubscriber

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment/spay", tags=["SPay"])

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DUMMY_PUBLIC_KEY = "DUMMY_PUBLIC_KEY_FOR_TESTING"

MSISDN_RE = re.compile(r"\d{10,15}")
PIN_RE = re.compile(r"\d{4}")


def spay_response(message: str, status: bool, code: int, http_status: int = 200, **extra) -> JSONResponse:
    body = {"responseMessage": message, "status": status, "responseCode": code, **extra}
    return JSONResponse(body, status_code=http_status)


def spay_error(e: Exception, endpoint: str) -> JSONResponse:
    logger.exception("SPay %s failed: %s", endpoint, e)
    return spay_response(str(e) or "Unknown error", False, 0, http_status=500)


def missing_token() -> JSONResponse:
    return spay_response("Token not found, please login", False, 103, http_status=401)


def missing_params(message: str) -> JSONResponse:
    return spay_response(message, False, 104, http_status=400)


def format_date(delta: timedelta) -> str:
    return (utcnow() + delta).strftime(DATE_FORMAT)


async def read_payload(request: Request, model: Type[SPayRequest]) -> SPayRequest:
    # callers check the token before reading the body
    return model.model_validate(await request.json())


@router.post("/login")
async def login(request: Request):
    try:
        payload = await read_payload(request, SPayLogin)
        if not payload.login or not payload.password:
            return missing_params("Login and password are required")

        suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
        token = f"dummy_token_{int(time.time() * 1000)}_{suffix}"
        return spay_response(
            "OK", True, 1,
            token=token,
            expireDate=format_date(timedelta(hours=24)),
        )
    except Exception as e:
        return spay_error(e, "login")


@router.post("/get-public-key")
async def get_public_key(request: Request):
    try:
        payload = await read_payload(request, SPayPublicKeyRequest)
        if not payload.providerKey:
            return missing_params("Provider key is required")

        public_key = base64.b64encode(DUMMY_PUBLIC_KEY.encode()).decode()
        return spay_response("Successful", True, 1, publicKey=public_key)
    except Exception as e:
        return spay_error(e, "get-public-key")


# ==================== TOKEN-GUARDED ====================

@router.post("/check-subscription")
async def check_subscription(request: Request, token: Optional[str] = Header(None)):
    try:
        if not token:
            return missing_token()
        payload = await read_payload(request, SPaySubscriber)
        if not payload.msisdn or not payload.serviceCode:
            return missing_params("MSISDN and serviceCode are required")

        if random.random() > 0.5:
            return spay_response(
                "the subscriber is active", True, 1,
                endSubDate=format_date(timedelta(days=30)),
            )
        return spay_response(
            "this MSISDN is not subscribed to the service", False, 117,
            endSubDate=None,
        )
    except Exception as e:
        return spay_error(e, "check-subscription")


@router.post("/init-pay")
async def init_pay(request: Request, token: Optional[str] = Header(None)):
    try:
        if not token:
            return missing_token()
        payload = await read_payload(request, SPaySubscriber)
        if not payload.msisdn or not payload.serviceCode:
            return missing_params("MSISDN and serviceCode are required")
        if not MSISDN_RE.fullmatch(payload.msisdn):
            return spay_response("Please Check Your MSISDN Number", False, 106, http_status=400)

        return spay_response(
            "Payment request created successfully.", True, 1,
            requestId=random.randint(1, 100000),
            isSent=True,
        )
    except Exception as e:
        return spay_error(e, "init-pay")


@router.post("/payment")
async def execute_payment(request: Request, token: Optional[str] = Header(None)):
    try:
        if not token:
            return missing_token()
        payload = await read_payload(request, SPayPayment)
        if not payload.pin or not payload.requestId:
            return missing_params("PIN and requestId are required")
        if not PIN_RE.fullmatch(payload.pin):
            return spay_response("Pin code is invalid, enter a valid pin code.", False, 105, http_status=400)

        # roughly nine in ten payments go through
        if random.random() > 0.1:
            return spay_response("Successful", True, 1, isSent=True)
        return spay_response("Insufficient balance", False, 111, isSent=True)
    except Exception as e:
        return spay_error(e, "payment")


@router.post("/unsubscribe")
async def unsubscribe(request: Request, token: Optional[str] = Header(None)):
    try:
        if not token:
            return missing_token()
        payload = await read_payload(request, SPaySubscriber)
        if not payload.msisdn or not payload.serviceCode:
            return missing_params("MSISDN and serviceCode are required")

        return spay_response("Your Are UnSubscribe Successfully", True, 1, isSent=True)
    except Exception as e:
        return spay_error(e, "unsubscribe")
