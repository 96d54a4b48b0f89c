"""
Click ID detection.

Ad platforms append their own click identifier to every ad click (gclid,
msclkid, ttclid, ...). Finding one is the strongest single signal we have.

Lookup is case-insensitive: the dataset declares params in their usual case
("ScCid"), the URL parser lowercases query keys, and we compare lowercased.
When two definitions differ only in case, the first one declared wins and
the second is never reported, so one URL token is counted once.
"""

from typing import Mapping

from .models import DetectedClickId
from .rules import DEFAULT_RULES, RuleDataset


def detect_click_ids(
    params: Mapping[str, str],
    rules: RuleDataset = DEFAULT_RULES
) -> list[DetectedClickId]:
    """
    Find known click IDs in a lowercased parameter mapping.

    Args:
        params: Query parameters with lowercased keys
        rules: Dataset with click ID definitions

    Returns:
        Detected click IDs in dataset declaration order (not URL order)
    """
    detected: list[DetectedClickId] = []
    seen: set[str] = set()

    for definition in rules.click_ids:
        lookup_key = definition.param.lower()
        if lookup_key in seen:
            continue

        value = params.get(lookup_key)
        if value and value.strip():
            seen.add(lookup_key)
            detected.append(DetectedClickId(
                param=definition.param,
                value=value,
                definition=definition,
            ))

    return detected
