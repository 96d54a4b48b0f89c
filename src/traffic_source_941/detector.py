"""
Traffic source detection.

The single entry point: give it a URL and/or manually entered UTM
parameters, get back a DetectionResult describing where the visit came
from, whether it was paid, and how sure we are.

Design Principles:
- Never raises: every input, however broken, yields a well-formed result
- Stateless: the rule dataset and config are fixed at construction, so one
  detector can serve many threads
- Injected data: pass a custom RuleDataset to detect against other rules

Usage:
    from traffic_source_941 import detect_source

    result = detect_source("https://example.com/?utm_source=google&gclid=abc")
    result.source_display_name  # "Google"
    result.is_paid              # True
"""

import logging
from typing import Mapping

from .config import DetectorConfig
from .formatting import (
    UNKNOWN_ICON,
    UNKNOWN_RECOMMENDATION,
    generate_recommendation,
    get_icon,
    get_medium_display_name,
    get_source_display_name,
)
from .models import (
    ConfidenceLevel,
    DetectedClickId,
    DetectionResult,
    MatchedBrand,
    UTMOverride,
)
from .rules import DEFAULT_RULES, RuleDataset
from .scoring import (
    calculate_confidence,
    determine_paid_status,
    get_confidence_level,
    resolve_signals,
)
from .url_parser import parse_url
from .utm import UTMParams, merge_utm

logger = logging.getLogger(__name__)

UTMInput = UTMParams | UTMOverride | Mapping[str, str | None] | None


def _coerce_override(utm: UTMInput) -> UTMParams | None:
    """Accept overrides as UTMParams, a request model, or a utm_* dict."""
    if utm is None:
        return None
    if isinstance(utm, UTMParams):
        return utm
    if isinstance(utm, UTMOverride):
        return UTMParams.from_mapping(utm.model_dump(exclude_unset=True))
    return UTMParams.from_mapping(utm)


class SourceDetector:
    """Detects the marketing source of a visit from a URL and UTM parameters."""

    def __init__(
        self,
        rules: RuleDataset | None = None,
        config: DetectorConfig | None = None,
    ):
        self.rules = rules or DEFAULT_RULES
        self.config = config or DetectorConfig()

    def detect(self, url: str | None = None, utm: UTMInput = None) -> DetectionResult:
        """
        Analyze a URL and/or manual UTM parameters.

        Args:
            url: Raw URL as typed (scheme optional). Unparseable URLs are
                treated as if no URL was given.
            utm: Manual UTM overrides. Present fields win over the URL's,
                blank fields clear them.

        Returns:
            DetectionResult (the zero-confidence "unknown" result when
            nothing is detectable)
        """
        hostname: str | None = None
        click_ids: list[DetectedClickId] = []
        url_utm = UTMParams()

        if url and url.strip():
            parsed = parse_url(url, self.rules)
            if parsed:
                hostname = parsed.hostname
                click_ids = list(parsed.click_ids)
                url_utm = parsed.utm_params

        utm_params = merge_utm(url_utm, _coerce_override(utm))

        resolution = resolve_signals(
            utm_params, click_ids, hostname, self.rules, self.config.weights
        )

        if not resolution.signals:
            return DetectionResult(
                recommendation=UNKNOWN_RECOMMENDATION,
                icon=UNKNOWN_ICON,
                raw_utm_params=utm_params.to_dict(),
            )

        brand = resolution.brand
        source = utm_params.source or (brand.name if brand else "")
        medium = utm_params.medium or ""
        is_paid = determine_paid_status(
            medium, click_ids, self.rules, self.config.paid_medium_indicators
        )
        confidence = calculate_confidence(resolution.signals, self.config.weights)
        confidence_level: ConfidenceLevel = get_confidence_level(confidence, self.config)

        if medium:
            medium_display_name = get_medium_display_name(medium, is_paid, self.rules)
        else:
            medium_display_name = "Paid" if is_paid else "Unknown"

        result = DetectionResult(
            source=source,
            source_display_name=get_source_display_name(source, brand, self.rules),
            medium=medium,
            medium_display_name=medium_display_name,
            is_paid=is_paid,
            confidence=confidence,
            confidence_level=confidence_level,
            icon=get_icon(brand, is_paid),
            recommendation=generate_recommendation(brand, source, medium, is_paid, self.rules),
            matched_brand=MatchedBrand.from_pattern(brand) if brand else None,
            detected_click_ids=click_ids,
            signals=resolution.signals,
            raw_utm_params=utm_params.to_dict(),
        )

        logger.debug(
            f"Detected source={result.source!r} medium={result.medium!r} "
            f"paid={result.is_paid} confidence={result.confidence}"
        )
        return result


_default_detector = SourceDetector()


def detect_source(url: str | None = None, utm: UTMInput = None) -> DetectionResult:
    """
    Detect a traffic source using the default rule dataset.

    Examples:
        >>> detect_source("https://example.com/?utm_source=google&utm_medium=cpc&gclid=abc123").confidence_level
        <ConfidenceLevel.HIGH: 'high'>

        >>> detect_source("").confidence
        0
    """
    return _default_detector.detect(url, utm)
