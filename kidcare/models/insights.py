from pydantic import BaseModel


class InsightResponse(BaseModel):
    profile_id: str
    insight: str


class DemoDataResponse(BaseModel):
    profile_id: str
    logs_written: int
