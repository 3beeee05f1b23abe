from datetime import date

from pydantic import BaseModel, Field


class Episode(BaseModel):
    index: int = Field(description="0-based position in chronological order")
    start_date: date
    end_date: date = Field(description="Last sick date in the episode")
    duration: int = Field(
        description="Number of logged sick days in the episode (not the calendar span)"
    )
    dates: list[date]


class Stats(BaseModel):
    total_sick_days: int = 0
    episodes_count: int = 0
    average_duration: float = Field(
        default=0, description="Mean episode duration in days, one decimal place"
    )
    mean_time_between_illness: int = Field(
        default=0,
        description="Mean days between consecutive episode start dates; 0 with fewer than 2 episodes",
    )
    common_symptoms: dict[str, int] = Field(
        default_factory=dict,
        description="Symptom label → number of sick days it was logged on, first-seen order",
    )


class StatsResponse(BaseModel):
    profile_id: str
    stats: Stats
    episodes: list[Episode]
    top_symptom: str | None
