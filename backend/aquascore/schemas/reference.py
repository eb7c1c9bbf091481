from pydantic import BaseModel, Field


class TargetRangeRead(BaseModel):
    min: float
    max: float
    optimal_min: float
    optimal_max: float


class ProfileRead(BaseModel):
    id: str
    label: str
    description: str
    targets: dict[str, TargetRangeRead] = Field(default_factory=dict)
    weights: dict[str, float] = Field(default_factory=dict)


class ProfileListResponse(BaseModel):
    count: int
    items: list[ProfileRead] = Field(default_factory=list)


class MetricRead(BaseModel):
    key: str
    label: str
    unit: str
    derived: bool
    plausible_min: float | None = None
    plausible_max: float | None = None
    typical: str | None = None


class MetricListResponse(BaseModel):
    count: int
    items: list[MetricRead] = Field(default_factory=list)
