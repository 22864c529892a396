from __future__ import annotations

import logging
import random
from typing import Iterable

from .models import Match

_log = logging.getLogger(__name__)


def _fixture(round_idx: int, home_id: str, away_id: str) -> Match:
    return Match(
        match_id=f"R{round_idx}-{home_id}-{away_id}",
        home_team_id=home_id,
        away_team_id=away_id,
        week=round_idx + 1,
    )


def _first_half_weeks(pivot: str | None, rotating: list[str | None]) -> list[list[Match]]:
    """Build one full round-robin with the circle method.

    ``None`` marks the bye slot for odd leagues; fixtures against it are dropped.
    """
    rounds = len(rotating)
    weeks: list[list[Match]] = []

    for round_idx in range(rounds):
        week_matches: list[Match] = []

        opponent = rotating[0]
        if pivot is not None and opponent is not None:
            # Pivot alternates venue every round.
            if round_idx % 2 == 0:
                week_matches.append(_fixture(round_idx, pivot, opponent))
            else:
                week_matches.append(_fixture(round_idx, opponent, pivot))

        for idx in range(1, (len(rotating) + 1) // 2):
            first = rotating[idx]
            second = rotating[len(rotating) - idx]
            if first is None or second is None:
                continue
            if idx % 2 == 0:
                week_matches.append(_fixture(round_idx, first, second))
            else:
                week_matches.append(_fixture(round_idx, second, first))

        weeks.append(week_matches)
        rotating = [*rotating[1:], rotating[0]]

    return weeks


def generate_schedule(team_ids: Iterable[str], rng: random.Random | None = None) -> list[list[Match]]:
    """Double round-robin calendar: every pair meets once at each venue.

    Returns ``2 * (N - 1)`` weeks for an even league of N teams, or ``2 * N``
    weeks when N is odd (one team rests each week). The second half mirrors
    the first with venues swapped.
    """
    ids = list(team_ids)
    if len(ids) < 2:
        return []
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate team ids in schedule input.")

    rng = rng or random.Random()
    slots: list[str | None] = list(ids)
    if len(slots) % 2 == 1:
        slots.append(None)

    rng.shuffle(slots)
    pivot = slots[0]
    rotating = slots[1:]
    rounds = len(rotating)

    first_half = _first_half_weeks(pivot, rotating)
    second_half = [
        [_fixture(week_idx + rounds, m.away_team_id, m.home_team_id) for m in week]
        for week_idx, week in enumerate(first_half)
    ]
    weeks = first_half + second_half

    validate_schedule(weeks, ids)
    _log.debug("Scheduled %d teams over %d weeks (%d fixtures).", len(ids), len(weeks), sum(len(w) for w in weeks))
    return weeks


def validate_schedule(weeks: list[list[Match]], team_ids: Iterable[str]) -> None:
    """Raise ``ValueError`` if a calendar breaks the double round-robin balance."""
    ids = list(team_ids)
    known = set(ids)
    slot_count = len(ids) + (len(ids) % 2)
    expected_weeks = 2 * (slot_count - 1) if len(ids) >= 2 else 0
    if len(weeks) != expected_weeks:
        raise ValueError(f"Invalid schedule: {len(weeks)} weeks for {len(ids)} teams, expected {expected_weeks}.")

    seen: set[tuple[str, str]] = set()
    for week_number, week in enumerate(weeks, start=1):
        playing: set[str] = set()
        for match in week:
            home, away = match.home_team_id, match.away_team_id
            if home == away:
                raise ValueError(f"Invalid schedule: {home} plays itself in week {week_number}.")
            if home not in known or away not in known:
                raise ValueError(f"Invalid schedule: unknown team in {home} v {away}, week {week_number}.")
            if home in playing or away in playing:
                raise ValueError(f"Invalid schedule: duplicate team assignment in week {week_number}.")
            if match.week != week_number:
                raise ValueError(f"Invalid schedule: {match.match_id} filed under week {week_number}.")
            if (home, away) in seen:
                raise ValueError(f"Invalid schedule: {home} hosts {away} more than once.")
            playing.update((home, away))
            seen.add((home, away))

    expected_fixtures = len(ids) * (len(ids) - 1)
    if len(seen) != expected_fixtures:
        raise ValueError(f"Invalid schedule: {len(seen)} fixtures, expected {expected_fixtures}.")


def flatten_schedule(weeks: Iterable[list[Match]]) -> list[Match]:
    return [match for week in weeks for match in week]
