from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.payments.schemas import PaymentResult, PaymentVerify
from app.api.payments.service import PaymentVerificationError, PaystackService

router = APIRouter(prefix="/api/verify-paystack-payment", tags=["payments"])


@router.get("")
async def verification_status():
    return {
        "message": "PayStack verification API is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("", response_model=PaymentResult, response_model_exclude_none=True)
async def verify_payment(data: PaymentVerify, service: PaystackService = Depends(PaystackService)):
    try:
        verified = await service.verify(data)
    except PaymentVerificationError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())
    return PaymentResult(success=True, message="Payment verified successfully", data=verified)
