"""
Brand matching for source detection.

Three independent strategies, each returning at most one brand:
- by source: utm_source against each brand's source patterns
- by domain: URL hostname against each brand's domain patterns
- by click ID: the first detected click ID against each brand's params

All three walk the dataset in declared order and stop at the first hit.
They never rank candidates; the dataset's ordering decides specificity.
"""

import re
from typing import Sequence

from .models import DetectedClickId
from .rules import DEFAULT_RULES, BrandPattern, RuleDataset


def _first_match(
    value: str,
    brands: Sequence[BrandPattern],
    attr: str
) -> BrandPattern | None:
    for brand in brands:
        patterns: Sequence[re.Pattern] = getattr(brand, attr)
        for pattern in patterns:
            if pattern.search(value):
                return brand
    return None


def match_brand_by_source(
    source: str | None,
    rules: RuleDataset = DEFAULT_RULES
) -> BrandPattern | None:
    """
    Match a utm_source value against brand source patterns.

    Examples:
        >>> match_brand_by_source(" FB ").name
        'facebook'

        >>> match_brand_by_source("weekly-newsletter").name
        'email_generic'
    """
    if not source:
        return None
    normalized = source.strip().lower()
    if not normalized:
        return None
    return _first_match(normalized, rules.brands, "source_patterns")


def match_brand_by_domain(
    hostname: str | None,
    rules: RuleDataset = DEFAULT_RULES
) -> BrandPattern | None:
    """
    Match a hostname against brand domain patterns.

    Examples:
        >>> match_brand_by_domain("www.youtube.com").name
        'youtube'
    """
    if not hostname:
        return None
    return _first_match(hostname.lower(), rules.brands, "domain_patterns")


def match_brand_by_click_id(
    click_ids: Sequence[DetectedClickId],
    rules: RuleDataset = DEFAULT_RULES
) -> BrandPattern | None:
    """
    Match the primary (first) detected click ID to a brand.

    Only the first click ID is used; the detector's dataset ordering makes
    that choice deterministic. The param comparison is exact-case.
    """
    if not click_ids:
        return None

    primary = click_ids[0]
    for brand in rules.brands:
        if primary.param in brand.click_id_params:
            return brand

    return None
