from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PaymentVerify(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reference: Optional[str] = Field(None, description="PayStack transaction reference")
    plan_id: Optional[str] = Field(None, description="Premium plan")


class VerifiedPayment(BaseModel):
    reference: str
    amount: float
    currency: Optional[str] = None
    customer: str


class PaymentResult(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[VerifiedPayment] = None
    details: Optional[Any] = None
