"""Draw statistics."""

from .frequency import FrequencyReport, expected_shares, simulate_draws

__all__ = ["FrequencyReport", "expected_shares", "simulate_draws"]
