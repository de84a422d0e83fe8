from pydantic import BaseModel, Field


class NearbyRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    radius: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Search radius in kilometers"
    )


class NearbyResponse(BaseModel):
    count: int
    chargers: list[dict[str, object]]
