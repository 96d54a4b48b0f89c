"""Pydantic models for detection results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .rules import BrandCategory, BrandPattern, ClickIdDefinition


class SignalType(str, Enum):
    """Kind of evidence behind a detection signal."""

    CLICK_ID = "click_id"        # Ad platform click identifier in the URL
    UTM_SOURCE = "utm_source"    # Explicit utm_source
    UTM_MEDIUM = "utm_medium"    # Explicit utm_medium
    DOMAIN = "domain"            # Hostname matched a brand
    PATTERN = "pattern"          # Generic pattern match


class ConfidenceLevel(str, Enum):
    """Coarse confidence tier for display."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DetectedClickId(BaseModel):
    """A known click identifier found in the URL."""

    model_config = ConfigDict(frozen=True)

    param: str  # Declared name, exact case (e.g., "ScCid")
    value: str
    definition: ClickIdDefinition


class DetectionSignal(BaseModel):
    """One weighted piece of evidence."""

    model_config = ConfigDict(frozen=True)

    type: SignalType
    description: str
    weight: float


class MatchedBrand(BaseModel):
    """Serializable summary of a matched brand pattern."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    category: BrandCategory
    icon: str
    recommendation: str
    click_id_params: list[str] = Field(default_factory=list)

    @classmethod
    def from_pattern(cls, brand: BrandPattern) -> "MatchedBrand":
        return cls(
            name=brand.name,
            display_name=brand.display_name,
            category=brand.category,
            icon=brand.icon,
            recommendation=brand.recommendation,
            click_id_params=list(brand.click_id_params),
        )


class DetectionResult(BaseModel):
    """Final verdict for one URL / UTM combination."""

    model_config = ConfigDict(frozen=True)

    # Source
    source: str = ""  # utm_source, else matched brand key
    source_display_name: str = "Unknown"

    # Medium
    medium: str = ""
    medium_display_name: str = "Unknown"
    is_paid: bool = False

    # Confidence
    confidence: int = 0  # 0-100
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW

    # Presentation
    icon: str = "❓"
    recommendation: str = ""

    # Evidence
    matched_brand: MatchedBrand | None = None
    detected_click_ids: list[DetectedClickId] = Field(default_factory=list)
    signals: list[DetectionSignal] = Field(default_factory=list)
    raw_utm_params: dict[str, str] = Field(default_factory=dict)


class UTMOverride(BaseModel):
    """Manually entered UTM fields. Omitted means absent, "" means cleared."""

    utm_source: str | None = None
    utm_medium: str | None = None
    utm_campaign: str | None = None
    utm_content: str | None = None
    utm_term: str | None = None


class DetectRequest(BaseModel):
    """Incoming detection request."""

    url: str | None = None
    utm: UTMOverride | None = None
