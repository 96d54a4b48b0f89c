"""
UTM parameter handling for source detection.

UTM (Urchin Tracking Module) parameters are the industry standard for
tracking marketing campaigns. The detector reads them from the analyzed URL
and from manual overrides typed into the UI.

Standard UTM Parameters:
- utm_source: Where the traffic came from (e.g., "google", "newsletter")
- utm_medium: Marketing medium (e.g., "cpc", "email", "social")
- utm_campaign: Campaign name (e.g., "spring_sale", "product_launch")
- utm_content: Differentiates similar content/links (optional)
- utm_term: Paid search keywords (optional)

Presence vs. Blank:
A field set to None is absent. A field set to "" (or whitespace) is present
but blank, which matters for overrides: a blank override clears the value
taken from the URL. After merging, blank fields are dropped so nothing
downstream ever sees an empty string.
"""

from dataclasses import dataclass, fields
from typing import Mapping

# Field name -> query parameter name
UTM_KEYS = {
    "source": "utm_source",
    "medium": "utm_medium",
    "campaign": "utm_campaign",
    "content": "utm_content",
    "term": "utm_term",
}


@dataclass(frozen=True)
class UTMParams:
    """
    UTM parameters for one detection.

    All fields are optional - a URL may have some, all, or none.

    Attributes:
        source: Traffic source (utm_source)
        medium: Marketing medium (utm_medium)
        campaign: Campaign identifier (utm_campaign)
        content: Content variant (utm_content)
        term: Search keywords (utm_term)
    """
    source: str | None = None
    medium: str | None = None
    campaign: str | None = None
    content: str | None = None
    term: str | None = None

    @property
    def has_utm(self) -> bool:
        """Check if any UTM parameters are present."""
        return any(getattr(self, f.name) for f in fields(self))

    def to_dict(self) -> dict[str, str]:
        """Convert to a utm_* keyed dictionary, excluding absent values."""
        result = {}
        for name, key in UTM_KEYS.items():
            value = getattr(self, name)
            if value is not None:
                result[key] = value
        return result

    @classmethod
    def from_mapping(cls, values: Mapping[str, str | None] | None) -> "UTMParams":
        """
        Build from a utm_* keyed mapping (query params, JSON body, form data).

        Values are kept as given, blanks included, so an override can
        express "clear this field". Unknown keys are ignored.
        """
        if not values:
            return cls()
        return cls(**{
            name: values.get(key)
            for name, key in UTM_KEYS.items()
        })


def clean_param(value: str | None) -> str | None:
    """
    Clean a UTM parameter value.

    - Strip whitespace
    - Return None for empty strings

    Values are never shortened: brand patterns anchored at the end of the
    value (e.g. "mail$") must see the whole thing.
    """
    if not value:
        return None

    cleaned = value.strip()
    return cleaned if cleaned else None


def clean_utm(params: UTMParams) -> UTMParams:
    """Drop blank fields and trim the rest."""
    return UTMParams(**{
        name: clean_param(getattr(params, name))
        for name in UTM_KEYS
    })


def extract_utm(params: Mapping[str, str]) -> UTMParams:
    """
    Pull the five UTM fields out of a lowercased query parameter mapping.

    Absent and blank values are omitted.

    Examples:
        >>> extract_utm({"utm_source": "google", "utm_medium": " "})
        UTMParams(source='google', medium=None, campaign=None, ...)
    """
    return clean_utm(UTMParams.from_mapping(params))


def merge_utm(url_params: UTMParams, override: UTMParams | None = None) -> UTMParams:
    """
    Merge URL-derived UTM parameters with manual overrides.

    Override fields win whenever they are present (not None), even when
    blank. Blank results are then dropped, so a cleared override removes
    the URL value instead of leaving an empty string behind.

    Examples:
        >>> merge_utm(UTMParams(source="foo"), UTMParams(source="bar")).source
        'bar'
        >>> merge_utm(UTMParams(source="foo"), UTMParams(source="")).source is None
        True
    """
    if override is None:
        return clean_utm(url_params)

    merged = UTMParams(**{
        name: getattr(override, name) if getattr(override, name) is not None
        else getattr(url_params, name)
        for name in UTM_KEYS
    })
    return clean_utm(merged)
