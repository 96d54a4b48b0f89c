"""
Human-facing labels for detection results.

Turns resolved source/medium/brand into display names, an icon and a
recommendation sentence like "Google (Paid)" or "Email (Newsletter)".
"""

import re

from .models import ConfidenceLevel
from .rules import DEFAULT_RULES, BrandPattern, RuleDataset

PAID_ICON = "💰"
LINK_ICON = "🔗"
UNKNOWN_ICON = "❓"

UNKNOWN_RECOMMENDATION = "Unable to detect source. Please provide a URL or UTM parameters."

# Mediums that mean "no medium" and shouldn't be annotated
_EMPTY_MEDIUMS = {"none", "(none)"}

_WORD_START_REGEX = re.compile(r"\b\w", re.ASCII)

CONFIDENCE_CLASSES = {
    ConfidenceLevel.HIGH: "confidence-high",
    ConfidenceLevel.MEDIUM: "confidence-medium",
    ConfidenceLevel.LOW: "confidence-low",
}


def humanize(value: str) -> str:
    """
    Generate a readable label from a raw tracking value.

    Examples:
        >>> humanize("spring_sale-promo")
        'Spring Sale Promo'
    """
    spaced = re.sub(r"[-_]", " ", value)
    return _WORD_START_REGEX.sub(lambda m: m.group(0).upper(), spaced)


def get_source_display_name(
    source: str,
    brand: BrandPattern | None = None,
    rules: RuleDataset = DEFAULT_RULES
) -> str:
    """Brand name, else dataset normalization, else a humanized source."""
    if brand:
        return brand.display_name

    normalized = rules.source_normalizations.get(source.lower())
    if normalized:
        return normalized

    return humanize(source)


def get_medium_display_name(
    medium: str,
    is_paid: bool,
    rules: RuleDataset = DEFAULT_RULES
) -> str:
    """
    Dataset medium name, else a humanized medium.

    Unknown paid mediums are wrapped: "Paid (Paid Boost)".
    """
    category = rules.lookup_medium(medium)
    if category:
        return category.display_name

    formatted = humanize(medium)
    return f"Paid ({formatted})" if is_paid else formatted


def get_icon(brand: BrandPattern | None, is_paid: bool) -> str:
    """Brand icon, else a generic paid or link icon."""
    if brand and brand.icon:
        return brand.icon
    return PAID_ICON if is_paid else LINK_ICON


def generate_recommendation(
    brand: BrandPattern | None,
    source: str,
    medium: str,
    is_paid: bool,
    rules: RuleDataset = DEFAULT_RULES
) -> str:
    """
    Build the suggested label for this traffic.

    Examples:
        "Google (Paid)", "Email (Newsletter)", "Partner Site (Referral)"
    """
    parts: list[str] = []

    if brand:
        parts.append(brand.recommendation)
    elif source:
        parts.append(get_source_display_name(source, None, rules))
    else:
        parts.append("Unknown Source")

    if is_paid:
        parts.append("(Paid)")
    elif medium and medium.strip() and medium.lower() not in _EMPTY_MEDIUMS:
        medium_display = get_medium_display_name(medium, is_paid, rules)
        # Avoid redundant "(Direct)" suffixes
        if "direct" not in medium_display.lower():
            parts.append(f"({medium_display})")

    return " ".join(parts)


def format_confidence(confidence: int) -> str:
    """Format confidence as a percentage string."""
    return f"{confidence}%"


def get_confidence_class(level: ConfidenceLevel | str) -> str:
    """CSS class for a confidence level. Unknown levels render as low."""
    try:
        level = ConfidenceLevel(level)
    except ValueError:
        return CONFIDENCE_CLASSES[ConfidenceLevel.LOW]
    return CONFIDENCE_CLASSES[level]
