from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SendEmail(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    to: Optional[str] = Field(None, description="Recipient address")
    subject: Optional[str] = Field(None, description="Subject line")
    html: Optional[str] = Field(None, description="HTML body")
    # Only honoured when ALLOW_CLIENT_EMAIL_KEY is on and no server key is set
    api_key: Optional[str] = Field(None, description="Legacy caller supplied Resend key")
