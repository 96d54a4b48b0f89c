"""
Detection routes for 941 traffic source detection.

Detection is pure computation, so these handlers do no I/O and never fail
on bad URLs; only malformed request bodies are rejected (422).
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Query

from ..detector import SourceDetector
from ..models import DetectionResult, DetectRequest, MatchedBrand, UTMOverride

logger = logging.getLogger(__name__)


def create_detection_router(detector: SourceDetector) -> APIRouter:
    """Create the detection router.

    Args:
        detector: Configured detector shared by all requests
    """
    router = APIRouter(tags=["detection"])

    # -------------------------------------------------------------------------
    # Detection
    # -------------------------------------------------------------------------

    @router.get("/detect", response_model=DetectionResult)
    async def detect_get(
        url: str | None = Query(None, description="URL to analyze (scheme optional)"),
        utm_source: str | None = Query(None, description="Override utm_source (empty clears)"),
        utm_medium: str | None = Query(None, description="Override utm_medium (empty clears)"),
        utm_campaign: str | None = Query(None, description="Override utm_campaign (empty clears)"),
        utm_content: str | None = Query(None, description="Override utm_content (empty clears)"),
        utm_term: str | None = Query(None, description="Override utm_term (empty clears)"),
    ):
        """Detect a traffic source from query parameters."""
        override = {
            "utm_source": utm_source,
            "utm_medium": utm_medium,
            "utm_campaign": utm_campaign,
            "utm_content": utm_content,
            "utm_term": utm_term,
        }
        return detector.detect(url, override)

    @router.post("/detect", response_model=DetectionResult)
    async def detect_post(body: DetectRequest):
        """Detect a traffic source from a JSON body."""
        utm: UTMOverride | None = body.utm
        return detector.detect(body.url, utm)

    # -------------------------------------------------------------------------
    # Rule Introspection
    # -------------------------------------------------------------------------

    @router.get("/rules/brands", response_model=list[MatchedBrand])
    async def list_brands():
        """Known brands in match priority order."""
        return [MatchedBrand.from_pattern(brand) for brand in detector.rules.brands]

    @router.get("/rules/click-ids")
    async def list_click_ids():
        """Known click ID definitions in detection order."""
        return [asdict(definition) for definition in detector.rules.click_ids]

    logger.debug(
        f"Detection router created with {len(detector.rules.brands)} brands "
        f"and {len(detector.rules.click_ids)} click IDs"
    )
    return router
