from pydantic import BaseModel, field_validator

from prayer_partner.schemas.fields import bounded_text
from prayer_partner.schemas.prayer_request import PrayerRequestResponse


class CategoryResponse(BaseModel):
    id: int
    title: str
    username: str
    prayer_requests: list[PrayerRequestResponse] = []

    model_config = {"from_attributes": True}


class CategoryWrite(BaseModel):
    title: str

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return bounded_text(value, "Category title must be between 1 and 70 characters.")
