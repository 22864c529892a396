from __future__ import annotations

import random
from typing import Collection, Sequence

from .config import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER
from .models import Player

GOAL = "goal"
CHANCE = "chance"
CARD = "card"
DEFENDER_FOUL = "defender"
INJURY = "injury"

SCORING_WEIGHTS: dict[str, float] = {FORWARD: 12.0, MIDFIELDER: 6.0, DEFENDER: 1.0, GOALKEEPER: 0.0}
FOUL_WEIGHTS: dict[str, float] = {DEFENDER: 10.0, MIDFIELDER: 6.0, FORWARD: 2.0, GOALKEEPER: 0.5}
INJURY_WEIGHTS: dict[str, float] = {DEFENDER: 1.0, MIDFIELDER: 1.0, FORWARD: 1.0, GOALKEEPER: 0.5}
DESPERATE_KEEPER_WEIGHT = 0.5


def selection_weight(player: Player, purpose: str, desperate: bool = False) -> float:
    if purpose in (GOAL, CHANCE):
        base = SCORING_WEIGHTS.get(player.position, 0.0)
        if player.position == GOALKEEPER and desperate:
            base = DESPERATE_KEEPER_WEIGHT
        # Cubic in match rating, normalised to 50.
        return base * (player.match_rating / 50) ** 3
    if purpose in (CARD, DEFENDER_FOUL):
        return FOUL_WEIGHTS.get(player.position, 1.0)
    if purpose == INJURY:
        return INJURY_WEIGHTS.get(player.position, 1.0)
    raise ValueError(f"Unknown selection purpose '{purpose}'")


def select_player(
    candidates: Sequence[Player],
    purpose: str,
    rng: random.Random,
    excluded_ids: Collection[str] = (),
    desperate: bool = False,
) -> Player:
    """Roulette-wheel pick of one player, weighted by role and purpose.

    Players whose id is in ``excluded_ids`` are skipped. When nobody is left,
    or every remaining weight is zero, the first candidate standing is
    returned instead of failing.
    """
    if not candidates:
        raise ValueError("No players available for weighted selection.")

    remaining = [p for p in candidates if p.player_id not in excluded_ids]
    if not remaining:
        return candidates[0]

    weights = [selection_weight(p, purpose, desperate=desperate) for p in remaining]
    total = sum(weights)
    if total <= 0:
        return remaining[0]

    roll = rng.random() * total
    chosen = remaining[0]
    for player, weight in zip(remaining, weights):
        if weight <= 0:
            continue
        chosen = player
        roll -= weight
        if roll <= 0:
            break
    return chosen
