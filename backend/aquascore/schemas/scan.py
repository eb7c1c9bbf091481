from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from aquascore.core.config import settings
from aquascore.services.metrics import WaterAnalysisValues
from aquascore.services.profile_targets import ProfileId


class WaterAnalysisValuesPayload(BaseModel):
    """Hard input bounds. Wider than the plausibility ranges, which only warn."""

    ph: float | None = Field(default=None, ge=0, le=14)
    calcium: float | None = Field(default=None, ge=0, le=1500)
    magnesium: float | None = Field(default=None, ge=0, le=500)
    sodium: float | None = Field(default=None, ge=0, le=1000)
    potassium: float | None = Field(default=None, ge=0, le=500)
    chloride: float | None = Field(default=None, ge=0, le=1000)
    sulfate: float | None = Field(default=None, ge=0, le=3000)
    bicarbonate: float | None = Field(default=None, ge=0, le=3000)
    nitrate: float | None = Field(default=None, ge=0, le=200)
    total_dissolved_solids: float | None = Field(default=None, ge=0, le=5000)

    model_config = ConfigDict(allow_inf_nan=False)

    def to_values(self) -> WaterAnalysisValues:
        return WaterAnalysisValues.from_mapping(self.model_dump(exclude_none=True))

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class OcrScanRequest(BaseModel):
    text: str | None = Field(default=None, max_length=settings.ocr_text_max_length)
    profile: ProfileId = "standard"
    values: WaterAnalysisValuesPayload | None = None
    confidence: float | None = Field(default=None, ge=0, le=100)
    brand: str | None = Field(default=None, max_length=200)
    product_name: str | None = Field(default=None, max_length=200)
    barcode: str | None = Field(default=None, max_length=32)

    @field_validator("text", "brand", "product_name", "barcode", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def _require_text_or_values(self) -> "OcrScanRequest":
        text_length = len(self.text or "")
        has_values = self.values is not None and not self.values.is_empty()

        if 0 < text_length < settings.ocr_text_min_length:
            raise ValueError(f"Text muss mindestens {settings.ocr_text_min_length} Zeichen lang sein")
        if text_length == 0 and not has_values:
            raise ValueError("Es müssen entweder ein Etikett-Text oder Werte übergeben werden.")
        return self


class ScoreRequest(BaseModel):
    values: WaterAnalysisValuesPayload
    profiles: list[ProfileId] = Field(default_factory=lambda: ["standard"], min_length=1, max_length=6)


class MetricScoreRead(BaseModel):
    metric: str
    score: float
    raw_value: float
    weight: float
    explanation: str

    model_config = ConfigDict(from_attributes=True)


class DerivedMetricsRead(BaseModel):
    hardness: float | None = None
    hardness_class: str | None = None
    calcium_magnesium_ratio: float | None = None
    sodium_potassium_ratio: float | None = None
    taste_palatability: float | None = None
    buffer_capacity: float | None = None
    data_quality_score: float | None = None

    model_config = ConfigDict(from_attributes=True)


class InsightBadgeRead(BaseModel):
    id: str
    label: str
    description: str
    tone: str

    model_config = ConfigDict(from_attributes=True)


class SynergyInsightRead(BaseModel):
    id: str
    title: str
    description: str
    tone: str

    model_config = ConfigDict(from_attributes=True)


class ProfileFitRead(BaseModel):
    status: str
    reasons: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class WaterInsightsRead(BaseModel):
    badges: list[InsightBadgeRead] = Field(default_factory=list)
    synergies: list[SynergyInsightRead] = Field(default_factory=list)
    profile_fit: dict[str, ProfileFitRead] = Field(default_factory=dict)
    calcium_magnesium_ratio: float | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductInfoRead(BaseModel):
    brand: str | None = None
    product_name: str | None = None
    barcode: str | None = None


class ScanResultRead(BaseModel):
    id: str
    timestamp: datetime
    profile: str
    barcode: str | None = None
    product_info: ProductInfoRead | None = None
    confidence: float | None = None

    ocr_text_raw: str | None = None
    ocr_parsed_values: dict[str, float] = Field(default_factory=dict)
    user_overrides: dict[str, float] | None = None

    score: float
    low_data: bool
    missing_metrics: list[str] = Field(default_factory=list)
    metric_scores: dict[str, float] = Field(default_factory=dict)
    metric_details: list[MetricScoreRead] = Field(default_factory=list)
    derived_metrics: DerivedMetricsRead
    insights: WaterInsightsRead
    warnings: list[str] | None = None


class ProfileScoreRead(BaseModel):
    profile: str
    score: float
    low_data: bool
    metric_details: list[MetricScoreRead] = Field(default_factory=list)


class ScoreComparisonResponse(BaseModel):
    values: dict[str, float]
    results: list[ProfileScoreRead]
    warnings: list[str] | None = None
