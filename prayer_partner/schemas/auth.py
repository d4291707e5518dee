from pydantic import BaseModel, field_validator

from prayer_partner.schemas.fields import bounded_text


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        return value.strip()


class CreateAccountRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        return bounded_text(value, "Username must be between 1 and 70 characters.")

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return bounded_text(value, "Password must be between 1 and 70 characters.", strip=False)


class EditAccountRequest(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return bounded_text(value, "Password must be between 1 and 70 characters.", strip=False)


class UserResponse(BaseModel):
    username: str
