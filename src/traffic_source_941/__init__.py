"""
Traffic source detection for 941 Apps projects.

Usage:
    from traffic_source_941 import setup_detection

    detection = setup_detection()

    # Include API routes
    app.include_router(detection.router, prefix="/api/source")

    # Or call directly
    result = detection.detect("https://example.com/?utm_source=fb&fbclid=abc")
    result.source_display_name  # "Facebook"
"""

from .config import DetectorConfig, ScoringWeights
from .detector import SourceDetector, detect_source
from .formatting import format_confidence, get_confidence_class
from .models import (
    ConfidenceLevel,
    DetectedClickId,
    DetectionResult,
    DetectionSignal,
    MatchedBrand,
    SignalType,
)
from .routes import create_detection_router
from .rules import DEFAULT_RULES, BrandCategory, BrandPattern, ClickIdDefinition, RuleDataset
from .url_parser import ParsedURL, parse_url
from .utm import UTMParams

__version__ = "0.1.0"
__all__ = [
    "setup_detection", "detect_source", "SourceDetector",
    "DetectorConfig", "ScoringWeights",
    "DetectionResult", "DetectionSignal", "DetectedClickId", "MatchedBrand",
    "SignalType", "ConfidenceLevel",
    "RuleDataset", "BrandPattern", "BrandCategory", "ClickIdDefinition", "DEFAULT_RULES",
    "ParsedURL", "parse_url", "UTMParams",
    "format_confidence", "get_confidence_class",
]


class Detection:
    """Main detection interface for an application."""

    def __init__(
        self,
        rules: RuleDataset = None,
        config: DetectorConfig = None,
    ):
        self.detector = SourceDetector(rules=rules, config=config)
        self.router = create_detection_router(self.detector)

    def detect(self, url: str = None, utm=None) -> DetectionResult:
        """Detect the traffic source of a URL and/or manual UTM parameters."""
        return self.detector.detect(url, utm)


def setup_detection(
    rules: RuleDataset = None,
    config: DetectorConfig = None,
) -> Detection:
    """
    Set up source detection for an application.

    Args:
        rules: Rule dataset to match against. Defaults to the built-in
               brand, click ID and medium tables.
        config: Optional scoring, tier and paid-detection overrides

    Returns:
        Detection instance with router and detect()
    """
    return Detection(rules=rules, config=config)
