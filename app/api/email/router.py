from fastapi import APIRouter, Depends, HTTPException, status

from app.api.email.schemas import SendEmail
from app.api.email.service import EmailService

router = APIRouter(prefix="/api", tags=["email"])


@router.post("/send-email")
async def send_email(data: SendEmail, service: EmailService = Depends(EmailService)):
    """Transactional email through Resend"""
    try:
        result = await service.send(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "data": result}
