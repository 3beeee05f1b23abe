from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

AVATAR_COLORS = ["bg-blue-400", "bg-pink-400", "bg-green-400", "bg-yellow-400"]


def _clean_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be blank")
    return v


class ProfileCreate(BaseModel):
    name: str | None = Field(
        default=None,
        max_length=50,
        description="Child's display name; defaults to 'Child N'",
    )
    avatar_color: str | None = Field(
        default=None, description="Avatar colour class; defaults by position"
    )
    date_of_birth: date | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _clean_name(v)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=50)
    avatar_color: str | None = None
    date_of_birth: date | None = Field(
        default=None, description="Send null to clear the date of birth"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("name cannot be null")
        return _clean_name(v)

    @field_validator("avatar_color")
    @classmethod
    def validate_avatar_color(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("avatar_color cannot be null")
        return v


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    name: str
    avatar_color: str
    date_of_birth: date | None = None
    created_at: datetime | None = None


class ProfileList(BaseModel):
    profiles: list[ProfileResponse]
    count: int
