from pydantic import BaseModel, field_validator

from prayer_partner.schemas.fields import bounded_text


class PrayerRequestResponse(BaseModel):
    id: int
    title: str
    category_id: int
    username: str
    answered: bool = False

    model_config = {"from_attributes": True}


class PrayerRequestCreate(BaseModel):
    title: str

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return bounded_text(value, "Prayer request must be between 1 and 70 characters.")


class PrayerRequestUpdate(BaseModel):
    title: str

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return bounded_text(value, "Prayer request title must be between 1 and 70 characters.")
