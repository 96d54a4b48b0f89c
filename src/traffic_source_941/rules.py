"""
Rule dataset for traffic source detection.

The detection engine never hardcodes platforms. Everything it knows about
ad networks, brands and mediums lives in a `RuleDataset`, which is built
once and handed to the detector. The tables in this module are the default
dataset; tests and embedding applications can build their own.

Dataset Contract:
- Order matters: brands are tried in declared order and matching stops at
  the first hit, so specific brands (Instagram) must come before generic
  ones (Meta, email_generic).
- Patterns are regular expressions matched with `search`, so anchored
  (`^fb$`) and unanchored (`newsletter`) patterns can be mixed freely.
- Click ID params are case-sensitive as they appear in URLs. The detector
  looks them up case-insensitively, but brand association uses the exact
  declared name.
- The engine does not validate the dataset. Duplicate keys or dangling
  click ID references are the data maintainer's problem.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class BrandCategory(str, Enum):
    """Brand grouping for display."""

    SOCIAL = "social"
    SEARCH = "search"
    EMAIL = "email"
    AFFILIATE = "affiliate"
    DISPLAY = "display"
    VIDEO = "video"
    MESSAGING = "messaging"
    OTHER = "other"


@dataclass(frozen=True)
class ClickIdDefinition:
    """
    A known advertising click identifier.

    Attributes:
        param: Query parameter name, case as it appears in URLs (e.g., "gclid")
        platform: Owning platform key (e.g., "google")
        display_name: Human-readable platform name
        confidence: How strongly this token identifies the platform (0-100)
        is_paid: Whether its presence proves paid traffic
    """
    param: str
    platform: str
    display_name: str
    confidence: int
    is_paid: bool


@dataclass(frozen=True)
class BrandPattern:
    """
    A traffic source brand and the patterns that identify it.

    Attributes:
        name: Unique lowercase key (e.g., "facebook")
        display_name: Human-readable name
        category: Brand grouping
        source_patterns: Matched against utm_source
        medium_patterns: Mediums this brand typically uses
        click_id_params: Click ID params (exact case) attributed to this brand
        domain_patterns: Matched against the URL hostname
        icon: Emoji shown next to the result
        recommendation: Curated label suggested to the user
    """
    name: str
    display_name: str
    category: BrandCategory
    source_patterns: tuple[re.Pattern, ...] = ()
    medium_patterns: tuple[re.Pattern, ...] = ()
    click_id_params: tuple[str, ...] = ()
    domain_patterns: tuple[re.Pattern, ...] = ()
    icon: str = "🔗"
    recommendation: str = ""


@dataclass(frozen=True)
class MediumCategory:
    """Display name and paid flag for a utm_medium value."""
    display_name: str
    is_paid: bool


@dataclass(frozen=True)
class RuleDataset:
    """
    Immutable bundle of everything the detector matches against.

    Mappings are wrapped read-only so a dataset can be shared between
    threads and detector instances.
    """
    click_ids: tuple[ClickIdDefinition, ...]
    brands: tuple[BrandPattern, ...]
    medium_categories: Mapping[str, MediumCategory] = field(default_factory=dict)
    source_normalizations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "click_ids", tuple(self.click_ids))
        object.__setattr__(self, "brands", tuple(self.brands))
        object.__setattr__(
            self, "medium_categories", MappingProxyType(dict(self.medium_categories))
        )
        object.__setattr__(
            self, "source_normalizations", MappingProxyType(dict(self.source_normalizations))
        )

    def lookup_medium(self, medium: str) -> MediumCategory | None:
        """
        Find the category for a medium.

        Tries the form with hyphens/underscores stripped first, then the
        plain lowercased form (so both "paid-social" and "paidsocial" hit).
        """
        lowered = medium.lower()
        stripped = re.sub(r"[-_]", "", lowered)
        return self.medium_categories.get(stripped) or self.medium_categories.get(lowered)


def compile_patterns(*patterns: str) -> tuple[re.Pattern, ...]:
    """Compile case-insensitive patterns, preserving order."""
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


_p = compile_patterns


# =============================================================================
# CLICK ID DATABASE
# =============================================================================
# Confidence: 95 for definitive ad platform tokens, 80-90 for ambiguous ones.

CLICK_ID_DEFINITIONS: tuple[ClickIdDefinition, ...] = (
    # Google Ads ecosystem
    ClickIdDefinition("gclid", "google", "Google Ads", 95, True),
    ClickIdDefinition("gad_source", "google", "Google Ads", 90, True),
    ClickIdDefinition("gbraid", "google", "Google Ads (iOS App)", 95, True),
    ClickIdDefinition("wbraid", "google", "Google Ads (iOS Web)", 95, True),
    ClickIdDefinition("dclid", "google", "Google Display & Video 360", 95, True),

    # Meta (also appended to organic shares)
    ClickIdDefinition("fbclid", "meta", "Facebook/Meta", 85, False),

    # Microsoft/Bing
    ClickIdDefinition("msclkid", "microsoft", "Microsoft Ads", 95, True),

    # TikTok
    ClickIdDefinition("ttclid", "tiktok", "TikTok Ads", 95, True),

    # LinkedIn
    ClickIdDefinition("li_fat_id", "linkedin", "LinkedIn Ads", 95, True),

    # Twitter/X
    ClickIdDefinition("twclid", "twitter", "Twitter/X Ads", 95, True),

    # Snapchat (both spellings seen in the wild)
    ClickIdDefinition("sccid", "snapchat", "Snapchat Ads", 95, True),
    ClickIdDefinition("ScCid", "snapchat", "Snapchat Ads", 95, True),

    # Reddit
    ClickIdDefinition("rdt_cid", "reddit", "Reddit Ads", 95, True),

    # Pinterest
    ClickIdDefinition("epik", "pinterest", "Pinterest", 80, False),

    # Yahoo/Verizon Media
    ClickIdDefinition("vmcid", "yahoo", "Yahoo Ads", 95, True),

    # Yandex
    ClickIdDefinition("yclid", "yandex", "Yandex Direct", 95, True),
    ClickIdDefinition("ymclid", "yandex", "Yandex Market", 95, True),

    # Affiliate networks
    ClickIdDefinition("irclickid", "impact", "Impact Radius Affiliate", 90, True),
    ClickIdDefinition("aff_id", "affiliate", "Affiliate Network", 85, True),
    ClickIdDefinition("affiliate_id", "affiliate", "Affiliate Network", 85, True),
    ClickIdDefinition("clickid", "affiliate", "Affiliate/Tracking", 80, True),
)


# =============================================================================
# BRAND PATTERN DATABASE
# =============================================================================
# Specific brands first. Instagram and Meta share fbclid with Facebook, so
# a bare fbclid resolves to Facebook.

_PAID_SOCIAL_MEDIUMS = (r"social", r"paid[-_]?social", r"cpc", r"cpm")

BRAND_PATTERNS: tuple[BrandPattern, ...] = (
    # Social Media Platforms
    BrandPattern(
        name="facebook",
        display_name="Facebook",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^facebook$", r"^fb$", r"^facebook\.com$", r"^m\.facebook\.com$", r"^l\.facebook\.com$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS, r"paid"),
        click_id_params=("fbclid",),
        domain_patterns=_p(r"facebook\.com", r"fb\.com", r"fb\.me"),
        icon="📘",
        recommendation="Facebook",
    ),
    BrandPattern(
        name="instagram",
        display_name="Instagram",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^instagram$", r"^ig$", r"^instagram\.com$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("fbclid",),
        domain_patterns=_p(r"instagram\.com", r"instagr\.am"),
        icon="📷",
        recommendation="Instagram",
    ),
    BrandPattern(
        name="meta",
        display_name="Meta (Facebook/Instagram)",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^meta$", r"^meta\.com$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("fbclid",),
        domain_patterns=_p(r"meta\.com"),
        icon="🔵",
        recommendation="Meta (Facebook or Instagram)",
    ),
    BrandPattern(
        name="tiktok",
        display_name="TikTok",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^tiktok$", r"^tiktok\.com$", r"^tt$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS, r"video"),
        click_id_params=("ttclid",),
        domain_patterns=_p(r"tiktok\.com", r"vm\.tiktok\.com"),
        icon="🎵",
        recommendation="TikTok",
    ),
    BrandPattern(
        name="linkedin",
        display_name="LinkedIn",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^linkedin$", r"^linkedin\.com$", r"^lnkd\.in$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("li_fat_id",),
        domain_patterns=_p(r"linkedin\.com", r"lnkd\.in"),
        icon="💼",
        recommendation="LinkedIn",
    ),
    BrandPattern(
        name="twitter",
        display_name="Twitter/X",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^twitter$", r"^x$", r"^twitter\.com$", r"^x\.com$", r"^t\.co$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("twclid",),
        domain_patterns=_p(r"twitter\.com", r"x\.com", r"t\.co"),
        icon="🐦",
        recommendation="Twitter/X",
    ),
    BrandPattern(
        name="pinterest",
        display_name="Pinterest",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^pinterest$", r"^pinterest\.com$", r"^pin$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("epik",),
        domain_patterns=_p(r"pinterest\.com", r"pin\.it"),
        icon="📌",
        recommendation="Pinterest",
    ),
    BrandPattern(
        name="snapchat",
        display_name="Snapchat",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^snapchat$", r"^snap$", r"^snapchat\.com$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS),
        click_id_params=("sccid", "ScCid"),
        domain_patterns=_p(r"snapchat\.com"),
        icon="👻",
        recommendation="Snapchat",
    ),
    BrandPattern(
        name="reddit",
        display_name="Reddit",
        category=BrandCategory.SOCIAL,
        source_patterns=_p(r"^reddit$", r"^reddit\.com$"),
        medium_patterns=_p(*_PAID_SOCIAL_MEDIUMS, r"referral"),
        click_id_params=("rdt_cid",),
        domain_patterns=_p(r"reddit\.com", r"redd\.it"),
        icon="🤖",
        recommendation="Reddit",
    ),
    BrandPattern(
        name="youtube",
        display_name="YouTube",
        category=BrandCategory.VIDEO,
        source_patterns=_p(r"^youtube$", r"^youtube\.com$", r"^yt$", r"^youtu\.be$"),
        medium_patterns=_p(r"video", r"social", r"cpc", r"cpm", r"referral"),
        click_id_params=("gclid",),
        domain_patterns=_p(r"youtube\.com", r"youtu\.be"),
        icon="▶️",
        recommendation="YouTube",
    ),

    # Search Engines
    BrandPattern(
        name="google",
        display_name="Google",
        category=BrandCategory.SEARCH,
        source_patterns=_p(r"^google$", r"^google\.com$", r"^google\.[a-z]{2,}$"),
        medium_patterns=_p(r"organic", r"cpc", r"ppc", r"paid", r"search"),
        click_id_params=("gclid", "gad_source", "gbraid", "wbraid", "dclid"),
        domain_patterns=_p(r"google\."),
        icon="🔍",
        recommendation="Google",
    ),
    BrandPattern(
        name="bing",
        display_name="Bing/Microsoft",
        category=BrandCategory.SEARCH,
        source_patterns=_p(r"^bing$", r"^bing\.com$", r"^microsoft$"),
        medium_patterns=_p(r"organic", r"cpc", r"ppc", r"paid", r"search"),
        click_id_params=("msclkid",),
        domain_patterns=_p(r"bing\.com"),
        icon="🔎",
        recommendation="Bing",
    ),
    BrandPattern(
        name="yahoo",
        display_name="Yahoo",
        category=BrandCategory.SEARCH,
        source_patterns=_p(r"^yahoo$", r"^yahoo\.com$", r"^verizon$"),
        medium_patterns=_p(r"organic", r"cpc", r"search", r"native"),
        click_id_params=("vmcid",),
        domain_patterns=_p(r"yahoo\.com", r"search\.yahoo"),
        icon="🟣",
        recommendation="Yahoo",
    ),
    BrandPattern(
        name="duckduckgo",
        display_name="DuckDuckGo",
        category=BrandCategory.SEARCH,
        source_patterns=_p(r"^duckduckgo$", r"^ddg$", r"^duckduckgo\.com$"),
        medium_patterns=_p(r"organic", r"search"),
        domain_patterns=_p(r"duckduckgo\.com"),
        icon="🦆",
        recommendation="DuckDuckGo",
    ),
    BrandPattern(
        name="yandex",
        display_name="Yandex",
        category=BrandCategory.SEARCH,
        source_patterns=_p(r"^yandex$", r"^yandex\.com$", r"^yandex\.ru$"),
        medium_patterns=_p(r"organic", r"cpc", r"search"),
        click_id_params=("yclid",),
        domain_patterns=_p(r"yandex\."),
        icon="🔴",
        recommendation="Yandex",
    ),

    # Email Platforms
    BrandPattern(
        name="mailchimp",
        display_name="Mailchimp",
        category=BrandCategory.EMAIL,
        source_patterns=_p(r"^mailchimp$", r"^mc$"),
        medium_patterns=_p(r"email", r"newsletter"),
        domain_patterns=_p(r"mailchimp\.com", r"list-manage\.com"),
        icon="📧",
        recommendation="Email (Mailchimp)",
    ),
    BrandPattern(
        name="hubspot",
        display_name="HubSpot",
        category=BrandCategory.EMAIL,
        source_patterns=_p(r"^hubspot$", r"^hs$"),
        medium_patterns=_p(r"email", r"newsletter", r"marketing"),
        domain_patterns=_p(r"hubspot\.com", r"hs-analytics"),
        icon="🧡",
        recommendation="Email (HubSpot)",
    ),
    BrandPattern(
        name="klaviyo",
        display_name="Klaviyo",
        category=BrandCategory.EMAIL,
        source_patterns=_p(r"^klaviyo$"),
        medium_patterns=_p(r"email", r"newsletter"),
        domain_patterns=_p(r"klaviyo\.com"),
        icon="💚",
        recommendation="Email (Klaviyo)",
    ),
    BrandPattern(
        name="sendgrid",
        display_name="SendGrid",
        category=BrandCategory.EMAIL,
        source_patterns=_p(r"^sendgrid$"),
        medium_patterns=_p(r"email", r"newsletter", r"transactional"),
        domain_patterns=_p(r"sendgrid\.net"),
        icon="📨",
        recommendation="Email (SendGrid)",
    ),
    BrandPattern(
        name="email_generic",
        display_name="Email",
        category=BrandCategory.EMAIL,
        source_patterns=_p(r"email", r"newsletter", r"mail$", r"^e[-_]?mail$"),
        medium_patterns=_p(r"email", r"newsletter", r"e[-_]?mail"),
        icon="✉️",
        recommendation="Email",
    ),

    # Messaging Platforms
    BrandPattern(
        name="whatsapp",
        display_name="WhatsApp",
        category=BrandCategory.MESSAGING,
        source_patterns=_p(r"^whatsapp$", r"^wa$"),
        medium_patterns=_p(r"social", r"messaging", r"chat"),
        domain_patterns=_p(r"whatsapp\.com", r"wa\.me"),
        icon="💬",
        recommendation="WhatsApp",
    ),
    BrandPattern(
        name="telegram",
        display_name="Telegram",
        category=BrandCategory.MESSAGING,
        source_patterns=_p(r"^telegram$", r"^tg$"),
        medium_patterns=_p(r"social", r"messaging", r"chat"),
        domain_patterns=_p(r"telegram\.org", r"t\.me"),
        icon="📱",
        recommendation="Telegram",
    ),

    # Affiliate/Referral
    BrandPattern(
        name="affiliate_generic",
        display_name="Affiliate",
        category=BrandCategory.AFFILIATE,
        source_patterns=_p(r"affiliate", r"partner", r"referral"),
        medium_patterns=_p(r"affiliate", r"partner", r"referral", r"cpa"),
        click_id_params=("irclickid", "aff_id", "affiliate_id"),
        icon="🤝",
        recommendation="Affiliate/Partner",
    ),

    # Display Advertising
    BrandPattern(
        name="display_generic",
        display_name="Display Advertising",
        category=BrandCategory.DISPLAY,
        source_patterns=_p(r"display", r"banner", r"programmatic"),
        medium_patterns=_p(r"display", r"banner", r"cpm", r"programmatic"),
        click_id_params=("dclid",),
        icon="🖼️",
        recommendation="Display Advertising",
    ),
)


# =============================================================================
# MEDIUM CATEGORIES
# =============================================================================
# Keys are lowercase. Lookups try the hyphen/underscore-stripped form first.

MEDIUM_CATEGORIES: dict[str, MediumCategory] = {
    # Paid search
    "paidsearch": MediumCategory("Paid Search", True),
    "cpc": MediumCategory("Paid Search (CPC)", True),
    "ppc": MediumCategory("Paid Search (PPC)", True),
    "search": MediumCategory("Search", False),  # Could be organic or paid

    # Paid social
    "paidsocial": MediumCategory("Paid Social", True),
    "paid-social": MediumCategory("Paid Social", True),
    "paid_social": MediumCategory("Paid Social", True),

    # Paid display
    "display": MediumCategory("Display Advertising", True),
    "cpm": MediumCategory("Paid Display (CPM)", True),
    "banner": MediumCategory("Banner Advertising", True),
    "programmatic": MediumCategory("Programmatic Display", True),

    # Video
    "video": MediumCategory("Video Advertising", True),
    "paid-video": MediumCategory("Paid Video", True),
    "paid_video": MediumCategory("Paid Video", True),

    # Retargeting
    "retargeting": MediumCategory("Retargeting", True),
    "remarketing": MediumCategory("Remarketing", True),

    # Affiliate
    "affiliate": MediumCategory("Affiliate", True),
    "cpa": MediumCategory("Affiliate (CPA)", True),
    "partner": MediumCategory("Partner", True),

    # Generic paid
    "paid": MediumCategory("Paid", True),

    # Organic
    "organic": MediumCategory("Organic Search", False),
    "social": MediumCategory("Organic Social", False),

    # Email
    "email": MediumCategory("Email", False),
    "newsletter": MediumCategory("Newsletter", False),
    "email-marketing": MediumCategory("Email Marketing", False),
    "email_marketing": MediumCategory("Email Marketing", False),

    # Referral/Direct
    "referral": MediumCategory("Referral", False),
    "direct": MediumCategory("Direct", False),
    "none": MediumCategory("Direct/None", False),
    "(none)": MediumCategory("Direct", False),
    "(not set)": MediumCategory("Not Set", False),

    # Content
    "content": MediumCategory("Content Marketing", False),
    "blog": MediumCategory("Blog", False),
    "pr": MediumCategory("Public Relations", False),
}


# =============================================================================
# SOURCE NORMALIZATIONS
# =============================================================================
# Abbreviated or alternate utm_source values -> canonical display names.

SOURCE_NORMALIZATIONS: dict[str, str] = {
    # Social media
    "fb": "Facebook",
    "facebook": "Facebook",
    "ig": "Instagram",
    "instagram": "Instagram",
    "tt": "TikTok",
    "tiktok": "TikTok",
    "tw": "Twitter/X",
    "twitter": "Twitter/X",
    "x": "Twitter/X",
    "li": "LinkedIn",
    "linkedin": "LinkedIn",
    "pin": "Pinterest",
    "pinterest": "Pinterest",
    "snap": "Snapchat",
    "snapchat": "Snapchat",
    "reddit": "Reddit",

    # Video
    "yt": "YouTube",
    "youtube": "YouTube",

    # Search engines
    "ggl": "Google",
    "google": "Google",
    "bing": "Bing",
    "msn": "Bing/Microsoft",
    "ddg": "DuckDuckGo",
    "duckduckgo": "DuckDuckGo",
    "yahoo": "Yahoo",
    "yandex": "Yandex",

    # Messaging
    "wa": "WhatsApp",
    "whatsapp": "WhatsApp",
    "tg": "Telegram",
    "telegram": "Telegram",

    # Email
    "mc": "Mailchimp",
    "mailchimp": "Mailchimp",
    "hs": "HubSpot",
    "hubspot": "HubSpot",
    "klaviyo": "Klaviyo",
    "sendgrid": "SendGrid",
}


DEFAULT_RULES = RuleDataset(
    click_ids=CLICK_ID_DEFINITIONS,
    brands=BRAND_PATTERNS,
    medium_categories=MEDIUM_CATEGORIES,
    source_normalizations=SOURCE_NORMALIZATIONS,
)
