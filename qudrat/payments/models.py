from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from qudrat.core.serialization import CamelModel, ObjectIdField


class PaymentMethod(str, Enum):
    SPAY = "spay"
    CARD = "card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    OTHER = "other"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentBody(CamelModel):
    user_id: ObjectIdField = None
    course_id: ObjectIdField = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    transaction_id: Optional[str] = None
    msisdn: Optional[str] = None  # SPay phone number
    request_id: Optional[str] = None  # SPay request id
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("transaction_id", "msisdn", "request_id", mode="before")
    @classmethod
    def numbers_as_text(cls, v):
        # SPay hands out numeric request ids; they are stored as strings
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


# ==================== SPAY ====================

class SPayRequest(BaseModel):
    # phone numbers and PINs may arrive as JSON numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)


class SPayLogin(SPayRequest):
    login: Optional[str] = None
    password: Optional[str] = None


class SPayPublicKeyRequest(SPayRequest):
    providerKey: Optional[str] = None


class SPaySubscriber(SPayRequest):
    msisdn: Optional[str] = None
    serviceCode: Optional[str] = None


class SPayPayment(SPayRequest):
    pin: Optional[str] = None
    requestId: Optional[Any] = None
