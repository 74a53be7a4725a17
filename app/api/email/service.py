import logging
from typing import Any, Optional

import httpx
from fastapi import Depends, HTTPException, status

from app.api.email.schemas import SendEmail
from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client

    @staticmethod
    def resolve_api_key(data: SendEmail) -> Optional[str]:
        if settings.RESEND_API_KEY:
            return settings.RESEND_API_KEY
        if settings.ALLOW_CLIENT_EMAIL_KEY:
            return data.api_key
        return None

    async def send(self, data: SendEmail) -> Any:
        if not data.to or not data.subject or not data.html:
            raise ValueError("Missing required fields")

        api_key = self.resolve_api_key(data)
        if not api_key:
            logger.error("Resend API key is not configured")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Email configuration error")

        try:
            res = await self.client.post(
                settings.RESEND_API_URL,
                headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
                json={
                    "from": settings.EMAIL_FROM,
                    "to": [data.to],
                    "subject": data.subject,
                    "html": data.html,
                },
            )
            if res.is_error:
                error_data = res.json()
                logger.error(f"Resend API error: {error_data}")
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail={"error": "Failed to send email", "details": error_data},
                )
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error sending email: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
