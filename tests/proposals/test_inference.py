"""Tests for inferring calculator params from proposal deliverables."""

from __future__ import annotations

import pytest

from publicalc.domain.models import (
    EventDetails,
    FormatQuantities,
    NormalizedCalculatorParams,
)
from publicalc.domain.types import (
    Authority,
    DeliverableFormat,
    DeliveryType,
    EventDuration,
    TravelTier,
    UsageRights,
)
from publicalc.pricing.normalizer import normalize_params
from publicalc.proposals.inference import (
    FORMAT_TOKENS,
    build_conservative_params,
    count_by_tokens,
    infer_delivery_type,
    infer_format_quantities,
)


class TestCountByTokens:
    @pytest.mark.parametrize(
        ("line", "fmt", "expected"),
        [
            ("2 reels", DeliverableFormat.REELS, 2),
            ("1 reel and 2 videos", DeliverableFormat.REELS, 3),
            ("a reel", DeliverableFormat.REELS, 1),
            ("3 stories", DeliverableFormat.STORIES, 3),
            ("one story", DeliverableFormat.STORIES, 1),
            ("1 feed post", DeliverableFormat.POSTS, 1),
            ("2 carousels", DeliverableFormat.POSTS, 2),
            ("0 reels", DeliverableFormat.REELS, 1),
            ("unboxing", DeliverableFormat.REELS, 0),
        ],
        ids=[
            "explicit",
            "summed_synonyms",
            "bare_mention",
            "stories",
            "single_story",
            "feed",
            "carousel",
            "zero_count_falls_back_to_mention",
            "no_match",
        ],
    )
    def test_counts(self, line: str, fmt: DeliverableFormat, expected: int):
        assert count_by_tokens(line, FORMAT_TOKENS[fmt]) == expected


class TestInferDeliveryType:
    @pytest.mark.parametrize(
        "line",
        ["Event appearance", "keynote talk", "Live coverage of launch", "host the panel"],
    )
    def test_event_keywords(self, line: str):
        assert infer_delivery_type([line]) == DeliveryType.EVENT

    def test_content_by_default(self):
        assert infer_delivery_type(["2 reels"]) == DeliveryType.CONTENT

    def test_latest_event_carries_over(self):
        assert infer_delivery_type(["2 reels"], "event") == DeliveryType.EVENT


class TestInferFormatQuantities:
    def test_sums_across_lines(self):
        result = infer_format_quantities(["2 Reels", "  ", "3 stories", "1 post"])
        assert result == FormatQuantities(reels=2, posts=1, stories=3)

    def test_clamped_to_calculator_bound(self):
        assert infer_format_quantities(["30 reels"]) == FormatQuantities(reels=20)


class TestBuildConservativeParams:
    """Tests for the full mapping."""

    def test_content_proposal_without_history(self):
        mapping = build_conservative_params(["2 reels + 3 stories"])

        params = mapping.params
        assert params.delivery_type == "content"
        assert params.format == "package"
        assert params.format_quantities == {"reels": 2, "posts": 0, "stories": 3}
        assert params.usage_rights == "organic"
        assert params.paid_media_duration is None
        assert params.complexity == "scripted"
        assert mapping.resolved_defaults == [
            "exclusivity_default_none",
            "usage_rights_default_organic",
            "complexity_default_scripted",
            "authority_default_standard",
            "seasonality_default_normal",
            "brand_size_default_medium",
            "image_risk_default_medium",
            "strategic_gain_default_low",
            "content_model_default_standard",
            "event_duration_default_4h",
            "event_travel_default_local",
        ]

    def test_no_recognizable_deliverables_defaults_to_one_reel(self):
        mapping = build_conservative_params(["brand integration"])
        assert mapping.params.format_quantities == {"reels": 1, "posts": 0, "stories": 0}
        assert "format_quantities_default_1_reel" in mapping.resolved_defaults

    def test_quantities_from_latest(self):
        mapping = build_conservative_params(
            ["brand integration"], {"format_quantities": {"posts": 2}}
        )
        assert mapping.params.format_quantities == {"reels": 0, "posts": 2, "stories": 0}
        assert "format_quantities_from_latest" in mapping.resolved_defaults

    def test_latest_terms_reused(self):
        latest = {
            "exclusivity": "15d",
            "usage_rights": "paid_media",
            "authority": "celebrity",
            "repost_tiktok": True,
            "allow_strategic_waiver": "yes",
        }
        mapping = build_conservative_params(["1 reel"], latest)

        assert mapping.params.exclusivity == "15d"
        assert mapping.params.usage_rights == "paid_media"
        assert mapping.params.paid_media_duration == "30d"
        assert mapping.params.authority == "celebrity"
        assert mapping.params.repost_tiktok is True
        assert mapping.params.allow_strategic_waiver is False
        assert "exclusivity_default_none" not in mapping.resolved_defaults
        assert "paid_media_duration_default_30d" in mapping.resolved_defaults

    def test_latest_normalized_params_accepted(self):
        latest = NormalizedCalculatorParams(
            delivery_type=DeliveryType.EVENT,
            usage_rights=UsageRights.ORGANIC,
            authority=Authority.RISING,
            event_details=EventDetails(
                duration_hours=EventDuration.EIGHT_HOURS,
                travel_tier=TravelTier.DOMESTIC,
                hotel_nights=15,
            ),
        )
        mapping = build_conservative_params(["2 stories"], latest)

        params = mapping.params
        assert params.delivery_type == "event"
        assert params.format == "event"
        assert params.event_coverage_quantities == {"reels": 0, "posts": 0, "stories": 2}
        assert params.event_details == {
            "duration_hours": 8,
            "travel_tier": "domestic",
            "hotel_nights": 10,
        }
        assert params.authority == "rising"
        assert "event_duration_default_4h" not in mapping.resolved_defaults
        assert "event_travel_default_local" not in mapping.resolved_defaults

    def test_event_proposal(self):
        mapping = build_conservative_params(["Event appearance with 2 stories of coverage"])
        assert mapping.params.delivery_type == "event"
        assert mapping.params.format_quantities == {"reels": 0, "posts": 0, "stories": 0}
        assert mapping.params.event_coverage_quantities == {"reels": 0, "posts": 0, "stories": 2}

    def test_output_normalizes_cleanly(self):
        mapping = build_conservative_params(["2 reels", "1 carousel"])
        normalized = normalize_params(mapping.params)
        assert normalized.format_quantities == FormatQuantities(reels=2, posts=1)
        assert normalized.legacy_package_mode is False
