from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

class ZipLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # int and finite float instances only; strings, bools and Decimal are rejected
    latitude: float = Field(..., strict=True, allow_inf_nan=False)
    longitude: float = Field(..., strict=True, allow_inf_nan=False)

class InputRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    zip: ZipLocation

class OutputRecord(BaseModel):
    latitude: float
    longitude: float
    p: float = Field(..., ge=0, le=1)
    conversion: Literal["T", "F"]

class HealthResponse(BaseModel):
    status: str
