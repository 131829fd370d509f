from datetime import datetime
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from shortlink_app.config import settings
from shortlink_app.utils.timeutils import as_utc


def build_short_url(short_id: str) -> str:
    """The one rule for public short URLs, shared by create and list"""
    return f"{settings.base_url.rstrip('/')}/{short_id}"


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    # Pydantic V2 style configuration
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class LinkCreate(CamelModel):
    original_url: str = Field(..., description="The original URL to be shortened")
    expires_at: Optional[datetime] = Field(None, description="When the link stops redirecting")
    alias: Optional[str] = Field(None, description="Custom short key (max 20 characters)")

    @field_validator("original_url")
    @classmethod
    def check_original_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("originalUrl is required")
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("originalUrl must be an absolute http(s) URL")
        return value

    @field_validator("alias")
    @classmethod
    def blank_alias_is_none(cls, value: Optional[str]) -> Optional[str]:
        # An empty alias means "generate one for me"
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("expires_at")
    @classmethod
    def expires_at_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class LinkCreated(CamelModel):
    """Response of a successful create"""
    id: str
    short_id: str

    @computed_field(alias="shortUrl")
    @property
    def short_url(self) -> str:
        return build_short_url(self.short_id)


class LinkInfo(CamelModel):
    original_url: str
    created_at: datetime
    click_count: int

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class LinkAnalytics(CamelModel):
    click_count: int
    last_five_ips: List[str]


class LinkSummary(CamelModel):
    """One row of the all-links listing"""
    id: str
    original_url: str
    short_id: str
    created_at: datetime
    click_count: int
    last_five_ips: List[str]

    @computed_field(alias="shortUrl")
    @property
    def short_url(self) -> str:
        return build_short_url(self.short_id)

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
