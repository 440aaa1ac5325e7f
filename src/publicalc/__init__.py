"""Deterministic sponsorship-pricing engine for content creators."""
