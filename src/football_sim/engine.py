from __future__ import annotations

import logging
import random
from typing import Iterator

from . import commentary
from .config import DEFAULT_MATCH_SETTINGS, MatchSettings
from .lineup import RosterState, build_lineup
from .models import (
    RED,
    YELLOW,
    CardEvent,
    CommentaryEvent,
    GoalEvent,
    InjuryEvent,
    Match,
    MatchEvent,
    PenaltyAwardEvent,
    PenaltyMissEvent,
    Player,
    PlayerRef,
    SubstitutionEvent,
    Team,
    WhistleEvent,
)
from .selection import CARD, CHANCE, DEFENDER_FOUL, GOAL, INJURY, select_player

_log = logging.getLogger(__name__)

KICKOFF = "kickoff"
FIRST_HALF = "first-half"
STOPPAGE_BOARD = "stoppage-board"
FIRST_HALF_STOPPAGE = "first-half-stoppage"
HALF_TIME = "half-time"
RESTART = "restart"
SECOND_HALF = "second-half"
SECOND_HALF_STOPPAGE = "second-half-stoppage"
FULL_TIME = "full-time"

PLAYING_PHASES = {FIRST_HALF, FIRST_HALF_STOPPAGE, SECOND_HALF, SECOND_HALF_STOPPAGE}


def match_clock(first_half_stoppage: int, second_half_stoppage: int) -> Iterator[tuple[str, int, int]]:
    """Yield ``(phase, minute, extra_minute)`` for every tick of a match, in order."""
    yield (KICKOFF, 1, 0)
    for minute in range(2, 46):
        yield (FIRST_HALF, minute, 0)
    if first_half_stoppage > 0:
        yield (STOPPAGE_BOARD, 45, 0)
        for extra in range(1, first_half_stoppage + 1):
            yield (FIRST_HALF_STOPPAGE, 45, extra)
    yield (HALF_TIME, 45, first_half_stoppage)
    yield (RESTART, 46, 0)
    for minute in range(47, 91):
        yield (SECOND_HALF, minute, 0)
    if second_half_stoppage > 0:
        yield (STOPPAGE_BOARD, 90, 0)
        for extra in range(1, second_half_stoppage + 1):
            yield (SECOND_HALF_STOPPAGE, 90, extra)
    yield (FULL_TIME, 90, second_half_stoppage)


class _MatchSimulation:
    def __init__(
        self,
        home: Team,
        away: Team,
        week: int,
        match_id: str,
        rng: random.Random,
        settings: MatchSettings,
    ) -> None:
        self.home = home
        self.away = away
        self.week = week
        self.match_id = match_id
        self.rng = rng
        self.settings = settings

        self.max_subs = rng.randint(settings.min_subs, settings.max_subs)
        self.first_half_stoppage = rng.randint(0, settings.first_half_stoppage_max)
        self.second_half_stoppage = rng.randint(0, settings.second_half_stoppage_max)

        self.home_lineup = build_lineup(home, rng)
        self.away_lineup = build_lineup(away, rng)
        self.rosters = {
            home.team_id: RosterState.from_lineup(home.team_id, self.home_lineup),
            away.team_id: RosterState.from_lineup(away.team_id, self.away_lineup),
        }
        self.score = {home.team_id: 0, away.team_id: 0}
        self.possession = {home.team_id: 0, away.team_id: 0}
        self.events: list[MatchEvent] = []

    def run(self) -> Match:
        for phase, minute, extra in match_clock(self.first_half_stoppage, self.second_half_stoppage):
            if phase in PLAYING_PHASES:
                self._tick(minute, extra)
            elif phase == KICKOFF:
                self._whistle(minute, extra, commentary.KICKOFF_TEXT)
            elif phase == RESTART:
                self._whistle(minute, extra, commentary.SECOND_HALF_TEXT)
            elif phase == STOPPAGE_BOARD:
                added = self.first_half_stoppage if minute == 45 else self.second_half_stoppage
                self._whistle(minute, extra, commentary.STOPPAGE_TEXT.format(minutes=added))
            elif phase == HALF_TIME:
                self._whistle(minute, extra, commentary.HALF_TIME_TEXT)
            elif phase == FULL_TIME:
                self._whistle(minute, extra, commentary.FULL_TIME_TEXT, important=True)

        match = Match(
            match_id=self.match_id,
            home_team_id=self.home.team_id,
            away_team_id=self.away.team_id,
            week=self.week,
            home_score=self.score[self.home.team_id],
            away_score=self.score[self.away.team_id],
            played=True,
            events=self.events,
            first_half_stoppage=self.first_half_stoppage,
            second_half_stoppage=self.second_half_stoppage,
            home_lineup=self.home_lineup,
            away_lineup=self.away_lineup,
            max_subs=self.max_subs,
            home_possession_ticks=self.possession[self.home.team_id],
            away_possession_ticks=self.possession[self.away.team_id],
        )
        _log.debug(
            "Week %d: %s %d-%d %s (%d events)",
            self.week,
            self.home.name,
            match.home_score,
            match.away_score,
            self.away.name,
            len(self.events),
        )
        return match

    # -- helpers -----------------------------------------------------------

    def _whistle(self, minute: int, extra: int, text: str, important: bool = False) -> None:
        self.events.append(WhistleEvent(minute=minute, extra_minute=extra, text=text, is_important=important))

    def _opponent(self, team: Team) -> Team:
        return self.away if team is self.home else self.home

    def _pick(self, team: Team, purpose: str, desperate: bool = False) -> Player | None:
        roster = self.rosters[team.team_id]
        if not roster.on_pitch:
            return None
        return select_player(roster.on_pitch, purpose, self.rng, excluded_ids=roster.excluded, desperate=desperate)

    def _is_desperate(self, team: Team, minute: int) -> bool:
        deficit = self.score[self._opponent(team).team_id] - self.score[team.team_id]
        return minute >= 90 and deficit == 1

    def _strength(self, team: Team) -> float:
        multiplier = self.rosters[team.team_id].active_multiplier
        value = (team.midfield ** 2 + team.defense ** 1.5 + team.attack ** 1.5) * multiplier
        if team is self.home:
            value *= self.settings.home_advantage
        return value

    def _goal_probability(self, attacking: Team) -> float:
        defending = self._opponent(attacking)
        attack = attacking.attack * self.rosters[attacking.team_id].active_multiplier
        defense = defending.defense * self.rosters[defending.team_id].active_multiplier
        if defense <= 0:
            ratio = 1.0 if attack <= 0 else 2.0
        else:
            ratio = attack / defense
        probability = self.settings.base_goal_chance * ratio ** self.settings.goal_ratio_exponent
        if attacking is self.home:
            probability *= self.settings.home_advantage
        return probability

    # -- tick --------------------------------------------------------------

    def _tick(self, minute: int, extra: int) -> None:
        for team in (self.home, self.away):
            if self._check_injury(team, minute, extra):
                return
        for team in (self.home, self.away):
            if self._try_substitution(team, minute, extra):
                return

        attacking = self._roll_possession()
        if self.rng.random() < self.settings.penalty_rate:
            if self._penalty(attacking, minute, extra):
                return
        self._attack(attacking, minute, extra)
        self._discipline(attacking, minute, extra)

    def _check_injury(self, team: Team, minute: int, extra: int) -> bool:
        if self.rng.random() >= self.settings.injury_rate:
            return False
        injured = self._pick(team, INJURY)
        if injured is None:
            return False
        roster = self.rosters[team.team_id]
        replacement = roster.replacement_for(injured) if roster.can_substitute(self.max_subs) else None
        lines = commentary.INJURY_LINES if replacement is not None else commentary.INJURY_NO_SUB_LINES
        self.events.append(
            InjuryEvent(
                minute=minute,
                extra_minute=extra,
                text=commentary.render(lines, self.rng, player=injured.name, team=team.name),
                team_id=team.team_id,
                player_id=injured.player_id,
                player_name=injured.name,
            )
        )
        if replacement is None:
            # Down a player for the rest of the match; no card is recorded.
            roster.send_off(injured)
            return True
        self._substitute(team, injured, replacement, minute, extra, forced=True)
        return True

    def _try_substitution(self, team: Team, minute: int, extra: int) -> bool:
        roster = self.rosters[team.team_id]
        if not roster.can_substitute(self.max_subs):
            return False
        if self.rng.random() >= self.settings.substitution_probability(minute, extra):
            return False
        outfield = [p for p in roster.on_pitch if not p.is_goalkeeper and p.player_id not in roster.excluded]
        if not outfield:
            return False
        booked = [p for p in outfield if p.player_id in roster.booked]
        booked_fresh = [p for p in booked if p.player_id not in roster.subbed_on]
        fresh = [p for p in outfield if p.player_id not in roster.subbed_on]
        pool = booked_fresh or booked or fresh or outfield
        player_off = self.rng.choice(pool)
        player_on = roster.replacement_for(player_off)
        if player_on is None:
            return False
        self._substitute(team, player_off, player_on, minute, extra)
        return True

    def _substitute(
        self,
        team: Team,
        player_off: Player,
        player_on: Player,
        minute: int,
        extra: int,
        forced: bool = False,
    ) -> None:
        self.rosters[team.team_id].substitute(player_off, player_on)
        self.events.append(
            SubstitutionEvent(
                minute=minute,
                extra_minute=extra,
                text=commentary.render(
                    commentary.SUBSTITUTION_LINES,
                    self.rng,
                    team=team.name,
                    on=player_on.name,
                    off=player_off.name,
                ),
                team_id=team.team_id,
                player_on=PlayerRef.of(player_on),
                player_off=PlayerRef.of(player_off),
                forced=forced,
            )
        )

    def _roll_possession(self) -> Team:
        home_strength = self._strength(self.home)
        away_strength = self._strength(self.away)
        total = home_strength + away_strength
        home_share = home_strength / total if total > 0 else 0.5
        attacking = self.home if self.rng.random() < home_share else self.away
        self.possession[attacking.team_id] += 1
        return attacking

    def _score(self, team: Team, scorer: Player, minute: int, extra: int, text: str, penalty: bool = False) -> None:
        self.score[team.team_id] += 1
        self.events.append(
            GoalEvent(
                minute=minute,
                extra_minute=extra,
                text=text,
                is_important=True,
                team_id=team.team_id,
                player_id=scorer.player_id,
                player_name=scorer.name,
                penalty=penalty,
            )
        )

    def _penalty(self, attacking: Team, minute: int, extra: int) -> bool:
        defending = self._opponent(attacking)
        taker = self._pick(attacking, GOAL, desperate=self._is_desperate(attacking, minute))
        fouler = self._pick(defending, DEFENDER_FOUL)
        if taker is None or fouler is None:
            return False
        self.events.append(
            PenaltyAwardEvent(
                minute=minute,
                extra_minute=extra,
                text=commentary.render(
                    commentary.PENALTY_AWARD_LINES, self.rng, player=taker.name, other=fouler.name
                ),
                is_important=True,
                team_id=attacking.team_id,
                taker=PlayerRef.of(taker),
                fouler=PlayerRef.of(fouler),
            )
        )
        if self.rng.random() < self.settings.penalty_conversion:
            text = commentary.render(commentary.PENALTY_GOAL_LINES, self.rng, player=taker.name)
            self._score(attacking, taker, minute, extra, text, penalty=True)
        else:
            self.events.append(
                PenaltyMissEvent(
                    minute=minute,
                    extra_minute=extra,
                    text=commentary.render(commentary.PENALTY_MISS_LINES, self.rng, player=taker.name),
                    is_important=True,
                    team_id=attacking.team_id,
                    player_id=taker.player_id,
                    player_name=taker.name,
                )
            )
        return True

    def _attack(self, attacking: Team, minute: int, extra: int) -> None:
        desperate = self._is_desperate(attacking, minute)
        if self.rng.random() < self._goal_probability(attacking):
            scorer = self._pick(attacking, GOAL, desperate=desperate)
            if scorer is not None:
                text = commentary.render(commentary.GOAL_LINES, self.rng, player=scorer.name)
                self._score(attacking, scorer, minute, extra, text)
            return
        if self.rng.random() < self.settings.chance_rate:
            shooter = self._pick(attacking, CHANCE, desperate=desperate)
            if shooter is None:
                return
            self.events.append(
                CommentaryEvent(
                    minute=minute,
                    extra_minute=extra,
                    text=commentary.render(commentary.CHANCE_LINES, self.rng, player=shooter.name),
                    team_id=attacking.team_id,
                    player_id=shooter.player_id,
                    player_name=shooter.name,
                )
            )

    def _discipline(self, attacking: Team, minute: int, extra: int) -> None:
        if self.rng.random() >= self.settings.card_rate:
            return
        defending = self._opponent(attacking)
        team = defending if self.rng.random() < self.settings.defending_side_card_bias else attacking
        offender = self._pick(team, CARD)
        if offender is None:
            return
        roster = self.rosters[team.team_id]

        second_yellow = False
        if self.rng.random() < self.settings.straight_red_rate:
            card = RED
            lines = commentary.RED_CARD_LINES
        elif roster.book(offender):
            card = RED
            second_yellow = True
            lines = commentary.SECOND_YELLOW_LINES
        else:
            card = YELLOW
            lines = commentary.YELLOW_CARD_LINES

        if card == RED:
            roster.send_off(offender)
        self.events.append(
            CardEvent(
                minute=minute,
                extra_minute=extra,
                text=commentary.render(lines, self.rng, player=offender.name),
                is_important=True,
                team_id=team.team_id,
                player_id=offender.player_id,
                player_name=offender.name,
                card=card,
                second_yellow=second_yellow,
            )
        )


def simulate_match(
    home: Team,
    away: Team,
    week: int,
    match_id: str | None = None,
    rng: random.Random | None = None,
    settings: MatchSettings | None = None,
) -> Match:
    """Play one fixture minute by minute and return the finished match.

    The two teams are read, never modified: lineups carry copies of the
    players, and every per-match counter lives in the returned ``Match``.
    Pass a seeded ``rng`` to make the result reproducible.
    """
    if home.team_id == away.team_id:
        raise ValueError(f"{home.name} cannot play against itself.")
    for team in (home, away):
        if not team.players:
            raise ValueError(f"{team.name} has no players to field.")
    simulation = _MatchSimulation(
        home=home,
        away=away,
        week=week,
        match_id=match_id or f"{home.team_id}-{away.team_id}-{week}",
        rng=rng or random.Random(),
        settings=settings or DEFAULT_MATCH_SETTINGS,
    )
    return simulation.run()
