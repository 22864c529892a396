"""Static simulation configuration constants."""

from __future__ import annotations

from dataclasses import dataclass

GOALKEEPER = "GK"
DEFENDER = "DEF"
MIDFIELDER = "MID"
FORWARD = "FWD"

STARTING_ELEVEN = 11
FORM_SWING = 3
MIN_RATING = 1
MAX_RATING = 99

# Slot counts per role; each template fields exactly one goalkeeper.
FORMATIONS: dict[str, dict[str, int]] = {
    "4-5-1": {GOALKEEPER: 1, DEFENDER: 4, MIDFIELDER: 5, FORWARD: 1},
    "4-3-3": {GOALKEEPER: 1, DEFENDER: 4, MIDFIELDER: 3, FORWARD: 3},
}


@dataclass(frozen=True, slots=True)
class MatchSettings:
    injury_rate: float = 0.002
    penalty_rate: float = 0.0038
    penalty_conversion: float = 0.76
    base_goal_chance: float = 0.020
    goal_ratio_exponent: float = 2.5
    home_advantage: float = 1.1
    chance_rate: float = 0.015
    card_rate: float = 0.035
    straight_red_rate: float = 0.03
    defending_side_card_bias: float = 0.6
    first_half_stoppage_max: int = 2
    second_half_stoppage_max: int = 5
    min_subs: int = 3
    max_subs: int = 5
    # (last minute inclusive, probability) steps; stoppage uses its own rate.
    substitution_ramp: tuple[tuple[int, float], ...] = (
        (59, 0.015),
        (70, 0.04),
        (80, 0.08),
        (90, 0.15),
    )
    stoppage_substitution_rate: float = 0.40

    def substitution_probability(self, minute: int, extra_minute: int = 0) -> float:
        if minute >= 90 and extra_minute > 0:
            return self.stoppage_substitution_rate
        for last_minute, probability in self.substitution_ramp:
            if minute <= last_minute:
                return probability
        return self.substitution_ramp[-1][1]


DEFAULT_MATCH_SETTINGS = MatchSettings()
