"""
Configuration for 941 traffic source detection.
"""
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# Substrings in utm_medium that mark traffic as paid
PAID_MEDIUM_INDICATORS = (
    "cpc",
    "ppc",
    "cpm",
    "paid",
    "cpa",
    "display",
    "retarget",
    "remarketing",
)


class InvalidWeightsError(ValueError):
    """Raised when scoring weights are negative or the denominator isn't positive."""
    pass


class InvalidThresholdError(ValueError):
    """Raised when confidence tier thresholds are out of order or out of range."""
    pass


@dataclass(frozen=True)
class ScoringWeights:
    """Signal weights used to build the confidence score.

    These are heuristic constants. The defaults reproduce the reference
    scoring; tune them per deployment if needed.

    Usage:
        weights = ScoringWeights(domain_match=30)
        config = DetectorConfig(weights=weights)
    """

    source_match: float = 35        # utm_source matched a known brand
    source_present: float = 20      # utm_source present but unrecognized
    click_id_factor: float = 0.4    # multiplied by the click ID's own confidence
    medium_present: float = 15      # utm_medium present (known or not)
    domain_match: float = 25        # hostname matched a known brand
    max_weight: float = 100         # normalization denominator

    def __post_init__(self):
        for name in ("source_match", "source_present", "click_id_factor",
                     "medium_present", "domain_match"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidWeightsError(
                    f"Weight '{name}' must not be negative. Got {value}."
                )
        if self.max_weight <= 0:
            raise InvalidWeightsError(
                f"max_weight must be positive. Got {self.max_weight}."
            )


@dataclass(frozen=True)
class DetectorConfig:
    """Configuration for a detector instance."""

    weights: ScoringWeights = field(default_factory=ScoringWeights)

    # Confidence tiers (inclusive lower bounds)
    high_threshold: int = 80
    medium_threshold: int = 50

    # Paid detection
    paid_medium_indicators: tuple[str, ...] = PAID_MEDIUM_INDICATORS

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_thresholds()
        self._validate_indicators()

    def _validate_thresholds(self) -> None:
        if not 0 <= self.medium_threshold <= self.high_threshold <= 100:
            raise InvalidThresholdError(
                f"Thresholds must satisfy 0 <= medium <= high <= 100. "
                f"Got medium={self.medium_threshold}, high={self.high_threshold}."
            )
        if self.medium_threshold == self.high_threshold:
            logger.warning(
                f"medium_threshold equals high_threshold ({self.high_threshold}); "
                f"no result will ever be rated medium"
            )

    def _validate_indicators(self) -> None:
        if any(not indicator.strip() for indicator in self.paid_medium_indicators):
            raise ValueError(
                "paid_medium_indicators must not contain blank entries; "
                "a blank indicator would mark every medium as paid."
            )
