"""
Signal aggregation and confidence scoring.

Each detection collects weighted signals from whatever evidence fired,
resolves a single brand, and sums the weights into a 0-100 confidence.

Brand Precedence:
1. utm_source matching a brand (explicit, most reliable)
2. First detected click ID
3. URL hostname (lowest priority, only tried when nothing else matched)

Confidence is the capped sum of signal weights, not an average: several
strong signals together saturate at 100.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence

from .brands import match_brand_by_click_id, match_brand_by_domain, match_brand_by_source
from .config import PAID_MEDIUM_INDICATORS, DetectorConfig, ScoringWeights
from .models import ConfidenceLevel, DetectedClickId, DetectionSignal, SignalType
from .rules import DEFAULT_RULES, BrandPattern, RuleDataset
from .utm import UTMParams


@dataclass
class SignalResolution:
    """Brand and evidence gathered for one detection call."""
    brand: BrandPattern | None = None
    signals: list[DetectionSignal] = field(default_factory=list)

    def add(self, type: SignalType, description: str, weight: float) -> None:
        self.signals.append(DetectionSignal(type=type, description=description, weight=weight))


def resolve_signals(
    utm: UTMParams,
    click_ids: Sequence[DetectedClickId],
    hostname: str | None,
    rules: RuleDataset = DEFAULT_RULES,
    weights: ScoringWeights | None = None
) -> SignalResolution:
    """
    Collect signals and resolve the brand for one detection.

    Args:
        utm: Merged UTM parameters (blanks already dropped)
        click_ids: Detected click IDs in dataset order
        hostname: URL hostname, if a URL was parsed
        rules: Dataset to match against
        weights: Signal weights (defaults to ScoringWeights())

    Returns:
        SignalResolution with the adopted brand (or None) and all signals
    """
    weights = weights or ScoringWeights()
    resolution = SignalResolution()

    # 1. utm_source
    if utm.source:
        source_brand = match_brand_by_source(utm.source, rules)
        if source_brand:
            resolution.add(
                SignalType.UTM_SOURCE,
                f"UTM source matches {source_brand.display_name}",
                weights.source_match,
            )
            resolution.brand = source_brand
        else:
            resolution.add(
                SignalType.UTM_SOURCE,
                f"UTM source present: {utm.source}",
                weights.source_present,
            )

    # 2. Click IDs (every one adds confidence, only the first can set brand)
    for click_id in click_ids:
        resolution.add(
            SignalType.CLICK_ID,
            f"{click_id.definition.display_name} click ID detected ({click_id.param})",
            click_id.definition.confidence * weights.click_id_factor,
        )

    if click_ids and resolution.brand is None:
        resolution.brand = match_brand_by_click_id(click_ids, rules)

    # 3. utm_medium
    if utm.medium:
        resolution.add(
            SignalType.UTM_MEDIUM,
            f"UTM medium present: {utm.medium}",
            weights.medium_present,
        )

    # 4. Domain (referrer-style fallback)
    if hostname and resolution.brand is None:
        domain_brand = match_brand_by_domain(hostname, rules)
        if domain_brand:
            resolution.add(
                SignalType.DOMAIN,
                f"Domain matches {domain_brand.display_name}",
                weights.domain_match,
            )
            resolution.brand = domain_brand

    return resolution


def calculate_confidence(
    signals: Sequence[DetectionSignal],
    weights: ScoringWeights | None = None
) -> int:
    """
    Sum signal weights into a 0-100 score.

    Rounds half up, then clamps. An empty signal list scores 0.
    """
    if not signals:
        return 0

    weights = weights or ScoringWeights()
    total = sum(signal.weight for signal in signals)
    confidence = math.floor(total / weights.max_weight * 100 + 0.5)
    return max(0, min(100, confidence))


def get_confidence_level(
    confidence: int,
    config: DetectorConfig | None = None
) -> ConfidenceLevel:
    """Bucket a confidence score: high >= 80, medium >= 50, else low."""
    config = config or DetectorConfig()
    if confidence >= config.high_threshold:
        return ConfidenceLevel.HIGH
    if confidence >= config.medium_threshold:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def determine_paid_status(
    medium: str | None,
    click_ids: Sequence[DetectedClickId],
    rules: RuleDataset = DEFAULT_RULES,
    paid_indicators: Sequence[str] = PAID_MEDIUM_INDICATORS
) -> bool:
    """
    Decide whether traffic is paid.

    Checked in order:
    1. Any click ID whose definition marks paid traffic (authoritative)
    2. The medium's category in the dataset
    3. Paid indicator substrings in the raw medium (cpc, ppc, cpm, ...)

    Defaults to unpaid, including when there is no medium at all.
    """
    for click_id in click_ids:
        if click_id.definition.is_paid:
            return True

    if not medium:
        return False

    category = rules.lookup_medium(medium)
    if category and category.is_paid:
        return True

    medium_lower = medium.lower()
    return any(indicator in medium_lower for indicator in paid_indicators)
