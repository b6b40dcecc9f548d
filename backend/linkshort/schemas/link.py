from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class LinkCreate(BaseModel):
    """Schema for creating a new short link"""
    # Optional so a missing value reaches the service as InvalidUrl; wrong types are 400 via the app handler
    long_url: Optional[str] = Field(None, description="Original URL to shorten")
    code: Optional[str] = Field(None, description="Custom code; generated when empty")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LinkResponse(BaseModel):
    """Schema for link response"""
    code: str
    long_url: str
    clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime
    short_url: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(BaseModel):
    ok: bool
