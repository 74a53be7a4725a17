import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends, status

from app.api.payments.schemas import PaymentVerify, VerifiedPayment
from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)


class PaymentVerificationError(Exception):
    """Verification did not go through, rendered as {success: false, ...}"""

    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class PaystackService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client

    async def verify(self, data: PaymentVerify) -> VerifiedPayment:
        """
        Checks a transaction with PayStack.
        Amounts come in minor units (kobo, cents).
        """
        if not data.reference or not data.plan_id:
            logger.error(f"Missing required fields: reference={data.reference} plan_id={data.plan_id}")
            raise PaymentVerificationError(status.HTTP_400_BAD_REQUEST, "Missing payment reference or plan ID")

        if not settings.PAYSTACK_SECRET_KEY:
            logger.error("PayStack secret key is not configured")
            raise PaymentVerificationError(status.HTTP_500_INTERNAL_SERVER_ERROR, "PayStack configuration error")

        try:
            res = await self.client.get(
                f"{settings.PAYSTACK_API_URL}/transaction/verify/{data.reference}",
                headers={
                    "Authorization": f"Bearer {settings.PAYSTACK_SECRET_KEY}",
                    "Content-Type": "application/json",
                },
            )
            payload: Dict[str, Any] = res.json()
            if not isinstance(payload, dict):
                raise ValueError(f"Unexpected PayStack response: {type(payload).__name__}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Payment verification error: {str(e)}")
            raise PaymentVerificationError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(e))

        message = payload.get("message")
        if res.is_error:
            logger.error(f"PayStack API error: status={res.status_code} data={payload}")
            raise PaymentVerificationError(
                status.HTTP_400_BAD_REQUEST,
                f"PayStack API error: {message or 'Unknown error'}",
                payload,
            )

        transaction = payload.get("data")
        if not isinstance(transaction, dict):
            transaction = {}
        if not payload.get("status") or transaction.get("status") != "success":
            logger.error(f"Payment status check failed: {payload.get('status')} {transaction.get('status')}")
            raise PaymentVerificationError(
                status.HTTP_400_BAD_REQUEST,
                f"Payment verification failed: {message or 'Payment was not successful'}",
                {
                    "paystackStatus": payload.get("status"),
                    "dataStatus": transaction.get("status"),
                    "message": message,
                },
            )

        customer = transaction.get("customer") or {}
        try:
            verified = VerifiedPayment(
                reference=data.reference,
                amount=(transaction.get("amount") or 0) / 100,
                currency=transaction.get("currency"),
                customer=customer.get("email") or "No email",
            )
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Malformed PayStack transaction: {str(e)}")
            raise PaymentVerificationError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(e))
        logger.info(f"Payment verified: {verified.reference} {verified.amount} {verified.currency}")
        return verified
