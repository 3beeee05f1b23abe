import re
from datetime import date

from pydantic import BaseModel, Field, field_validator

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Medication(BaseModel):
    name: str = Field(min_length=1, description="Medication name, e.g. 'Ibuprofen'")
    dosage: str = Field(min_length=1, description="Free-text dosage, e.g. '5ml'")


class TemperatureReading(BaseModel):
    time: str = Field(description="Time of day the reading was taken (HH:MM, 24h)")
    value: float = Field(description="Body temperature reading, stored as entered")

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not _TIME_PATTERN.match(v):
            raise ValueError("time must be in HH:MM (24h) format")
        return v


class DailyLogContent(BaseModel):
    """The editable content of one day's log.

    ``None`` is accepted for every field and normalised to the empty value so
    "absent" and "empty" are indistinguishable downstream.
    """

    symptoms: list[str] = Field(
        default_factory=list,
        description="Free-text symptom labels, e.g. 'Fever', 'Cough'",
    )
    temperatures: list[TemperatureReading] = Field(default_factory=list)
    medications: list[Medication] = Field(default_factory=list)
    notes: str = Field(default="", description="Free-text notes for the day")

    @field_validator("symptoms", "temperatures", "medications", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v

    @field_validator("notes", mode="before")
    @classmethod
    def none_as_empty_string(cls, v):
        return "" if v is None else v


class DailyLog(DailyLogContent):
    date: date


class DailyLogList(BaseModel):
    logs: list[DailyLog]
    count: int
