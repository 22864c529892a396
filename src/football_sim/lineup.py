from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace

from .config import (
    DEFENDER,
    FORM_SWING,
    FORMATIONS,
    FORWARD,
    GOALKEEPER,
    MAX_RATING,
    MIDFIELDER,
    MIN_RATING,
    STARTING_ELEVEN,
)
from .models import Lineup, Player, Team

_log = logging.getLogger(__name__)


def _with_form(player: Player, rng: random.Random) -> Player:
    # Day-of-match form; the squad's own Player objects are left untouched.
    swing = rng.randint(-FORM_SWING, FORM_SWING)
    effective = max(MIN_RATING, min(MAX_RATING, player.rating + swing))
    return replace(player, effective_rating=effective)


def build_lineup(team: Team, rng: random.Random | None = None) -> Lineup:
    """Pick a starting eleven and an ordered bench for one match.

    Suspended and injured players are left out. Each role in the drawn
    formation is filled by effective rating; short roles are padded from the
    best remaining outfield players, and with no fit goalkeeper the weakest
    outfield player goes in goal as a goalkeeper.
    """
    rng = rng or random.Random()
    eligible = team.available_players()
    if not eligible:
        _log.warning("%s has no eligible players; fielding the full squad.", team.name)
        eligible = list(team.players)

    rated = [_with_form(p, rng) for p in eligible]
    formation = rng.choice(tuple(FORMATIONS))
    slots = FORMATIONS[formation]

    ranked = sorted(rated, key=lambda p: p.match_rating, reverse=True)
    keepers = [p for p in ranked if p.is_goalkeeper]
    outfield = [p for p in ranked if not p.is_goalkeeper]

    starting: list[Player] = []
    if keepers:
        starting.append(keepers[0])
    elif outfield:
        stand_in = replace(outfield[-1], position=GOALKEEPER)
        _log.warning("%s has no fit goalkeeper; %s goes in goal.", team.name, stand_in.name)
        starting.append(stand_in)
    taken = {p.player_id for p in starting}

    for role in (DEFENDER, MIDFIELDER, FORWARD):
        picks = [p for p in outfield if p.position == role and p.player_id not in taken][: slots.get(role, 0)]
        starting.extend(picks)
        taken.update(p.player_id for p in picks)

    short = STARTING_ELEVEN - len(starting)
    if short > 0:
        padding = [p for p in outfield if p.player_id not in taken][:short]
        starting.extend(padding)
        taken.update(p.player_id for p in padding)

    bench = [p for p in ranked if p.player_id not in taken]
    return Lineup(starting=starting, bench=bench, formation=formation)


@dataclass(slots=True)
class RosterState:
    """Who is on the pitch, on the bench and gone for one side during a match."""

    team_id: str
    on_pitch: list[Player]
    bench: list[Player]
    excluded: set[str] = field(default_factory=set)
    booked: set[str] = field(default_factory=set)
    subbed_on: set[str] = field(default_factory=set)
    subs_used: int = 0

    @classmethod
    def from_lineup(cls, team_id: str, lineup: Lineup) -> RosterState:
        return cls(team_id=team_id, on_pitch=list(lineup.starting), bench=list(lineup.bench))

    @property
    def active_count(self) -> int:
        return len(self.on_pitch)

    @property
    def active_multiplier(self) -> float:
        return self.active_count / STARTING_ELEVEN

    def can_substitute(self, max_subs: int) -> bool:
        return self.subs_used < max_subs and bool(self.bench)

    def replacement_for(self, player: Player) -> Player | None:
        for candidate in self.bench:
            if candidate.position == player.position:
                return candidate
        return self.bench[0] if self.bench else None

    def substitute(self, player_off: Player, player_on: Player) -> Player:
        """Swap ``player_on`` in for ``player_off`` and return who took the place.

        An outfield player replacing a goalkeeper takes over in goal.
        """
        if player_off.is_goalkeeper and not player_on.is_goalkeeper:
            player_on = replace(player_on, position=GOALKEEPER)
        idx = next(i for i, p in enumerate(self.on_pitch) if p.player_id == player_off.player_id)
        self.on_pitch[idx] = player_on
        self.bench = [p for p in self.bench if p.player_id != player_on.player_id]
        self.subbed_on.add(player_on.player_id)
        self.subs_used += 1
        return player_on

    def send_off(self, player: Player) -> None:
        self.on_pitch = [p for p in self.on_pitch if p.player_id != player.player_id]
        self.excluded.add(player.player_id)

    def book(self, player: Player) -> bool:
        """Record a yellow card; True when the player was already booked."""
        if player.player_id in self.booked:
            return True
        self.booked.add(player.player_id)
        return False
