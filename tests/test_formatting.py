"""Tests for display names, icons and recommendations."""

import pytest

from traffic_source_941.formatting import (
    LINK_ICON,
    PAID_ICON,
    format_confidence,
    generate_recommendation,
    get_confidence_class,
    get_icon,
    get_medium_display_name,
    get_source_display_name,
    humanize,
)
from traffic_source_941.models import ConfidenceLevel
from traffic_source_941.rules import DEFAULT_RULES


def _brand(name):
    return next(b for b in DEFAULT_RULES.brands if b.name == name)


class TestDisplayNames:
    """Test source and medium display names."""

    def test_humanize(self):
        assert humanize("spring_sale-promo") == "Spring Sale Promo"
        assert humanize("already Fine") == "Already Fine"

    def test_source_uses_brand(self):
        assert get_source_display_name("whatever", _brand("google")) == "Google"

    def test_source_normalization_table(self):
        assert get_source_display_name("IG") == "Instagram"
        assert get_source_display_name("msn") == "Bing/Microsoft"

    def test_source_fallback(self):
        assert get_source_display_name("partner_site") == "Partner Site"

    @pytest.mark.parametrize("medium,expected", [
        ("cpc", "Paid Search (CPC)"),
        ("Paid-Social", "Paid Social"),
        ("email_marketing", "Email Marketing"),
        ("(none)", "Direct"),
        ("none", "Direct/None"),
    ])
    def test_medium_table(self, medium, expected):
        assert get_medium_display_name(medium, is_paid=False) == expected

    def test_unknown_medium(self):
        assert get_medium_display_name("boosted_post", is_paid=False) == "Boosted Post"
        assert get_medium_display_name("boosted_post", is_paid=True) == "Paid (Boosted Post)"


class TestRecommendation:
    """Test recommendation sentences."""

    def test_brand_paid(self):
        assert generate_recommendation(_brand("google"), "google", "cpc", True) == "Google (Paid)"

    def test_brand_with_medium(self):
        rec = generate_recommendation(_brand("mailchimp"), "mailchimp", "newsletter", False)
        assert rec == "Email (Mailchimp) (Newsletter)"

    def test_source_without_brand(self):
        rec = generate_recommendation(None, "partner_site", "referral", False)
        assert rec == "Partner Site (Referral)"

    @pytest.mark.parametrize("medium", ["none", "(none)", "direct", "", "   "])
    def test_no_medium_annotation(self, medium):
        assert generate_recommendation(None, "my-blog", medium, False) == "My Blog"

    def test_unknown_source(self):
        assert generate_recommendation(None, "", "email", False) == "Unknown Source (Email)"
        assert generate_recommendation(None, "", "", False) == "Unknown Source"


class TestPresentationHelpers:
    """Test icon and confidence helpers."""

    def test_icons(self):
        assert get_icon(_brand("facebook"), is_paid=True) == "📘"
        assert get_icon(None, is_paid=True) == PAID_ICON
        assert get_icon(None, is_paid=False) == LINK_ICON

    def test_format_confidence(self):
        assert format_confidence(85) == "85%"
        assert format_confidence(0) == "0%"

    def test_confidence_classes(self):
        assert get_confidence_class(ConfidenceLevel.HIGH) == "confidence-high"
        assert get_confidence_class("medium") == "confidence-medium"
        assert get_confidence_class("low") == "confidence-low"
        assert get_confidence_class("bogus") == "confidence-low"
