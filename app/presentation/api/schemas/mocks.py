from pydantic import BaseModel, Field


class GenerateDataPayload(BaseModel):
    users: int = Field(default=50, ge=0, le=1000)
    pets: int = Field(default=100, ge=0, le=1000)
