"""Domain enumerations for the sponsorship pricing calculator."""

from enum import IntEnum, StrEnum


class DeliveryType(StrEnum):
    """Whether the deal is for published content or in-person presence."""

    CONTENT = "content"
    EVENT = "event"


class DeliverableFormat(StrEnum):
    """Content formats that can be quantified in a deal."""

    REELS = "reels"
    POSTS = "posts"
    STORIES = "stories"


class CalculatorFormat(StrEnum):
    """Single-value legacy label describing the deliverable mix."""

    REELS = "reels"
    POSTS = "posts"
    STORIES = "stories"
    PACKAGE = "package"
    EVENT = "event"


class Exclusivity(StrEnum):
    NONE = "none"
    DAYS_7 = "7d"
    DAYS_15 = "15d"
    DAYS_30 = "30d"


class UsageRights(StrEnum):
    ORGANIC = "organic"
    PAID_MEDIA = "paid_media"
    GLOBAL = "global"


class PaidMediaDuration(StrEnum):
    DAYS_7 = "7d"
    DAYS_15 = "15d"
    DAYS_30 = "30d"
    DAYS_90 = "90d"
    DAYS_180 = "180d"
    DAYS_365 = "365d"


class BrandSize(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ImageRisk(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StrategicGain(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContentModel(StrEnum):
    """Whether content runs on the creator's profile or is delivered white-label."""

    STANDARD = "standard"
    UGC_WHITELABEL = "ugc_whitelabel"


class Complexity(StrEnum):
    SIMPLE = "simple"
    SCRIPTED = "scripted"
    PROFESSIONAL = "professional"


class Authority(StrEnum):
    STANDARD = "standard"
    RISING = "rising"
    AUTHORITY = "authority"
    CELEBRITY = "celebrity"


class Seasonality(StrEnum):
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"


class EventDuration(IntEnum):
    """Supported event presence durations, in hours."""

    TWO_HOURS = 2
    FOUR_HOURS = 4
    EIGHT_HOURS = 8


class TravelTier(StrEnum):
    LOCAL = "local"
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class ConfidenceBand(StrEnum):
    """Coarse classification of the evidence behind a calibration factor."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LinkQuality(StrEnum):
    HIGH = "high"
    MIXED = "mixed"
    LOW = "low"


class CpmSource(StrEnum):
    """Where the segment baseline CPM came from."""

    SEED = "seed"
    DYNAMIC = "dynamic"


class WindowBucket(StrEnum):
    """Lookback bucket used when querying historical deal insights."""

    LAST_30D = "last30d"
    LAST_90D = "last90d"
    ALL = "all"


class ProposalPricingSource(StrEnum):
    """Where the tiers attached to a brand proposal came from."""

    CALCULATOR = "calculator_core_v1"
    FALLBACK = "fallback"
