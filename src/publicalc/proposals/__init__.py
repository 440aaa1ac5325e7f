"""Proposal-to-calculator parameter inference and pricing."""

from publicalc.proposals.inference import (
    ConservativeMapping,
    build_conservative_params,
    count_by_tokens,
    infer_delivery_type,
    infer_format_quantities,
)
from publicalc.proposals.pricing import (
    ProposalPricingContext,
    resolve_proposal_pricing,
)

__all__ = [
    "ConservativeMapping",
    "ProposalPricingContext",
    "build_conservative_params",
    "count_by_tokens",
    "infer_delivery_type",
    "infer_format_quantities",
    "resolve_proposal_pricing",
]
