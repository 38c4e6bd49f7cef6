from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from src.domain.models import Window


class OpenViewRequest(BaseModel):
    agent_id: str = Field(..., min_length=1)
    range: Optional[str] = None
    # IANA zone of the viewer, e.g. "Europe/Berlin"; server local time if omitted
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"unknown timezone '{value}'") from None
        return value

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


class ChangeWindowRequest(BaseModel):
    range: str


class ViewResponse(BaseModel):
    view_id: str
    agent_id: str
    window: Window
