from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar

from .config import GOALKEEPER

YELLOW = "yellow"
RED = "red"


@dataclass(slots=True)
class Player:
    player_id: str
    name: str
    position: str
    rating: int
    age: int = 25
    effective_rating: int | None = None
    goals: int = 0
    assists: int = 0
    matches_played: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    suspension_matches_remaining: int = 0
    injury_weeks_remaining: int = 0

    @property
    def is_available(self) -> bool:
        return self.suspension_matches_remaining <= 0 and self.injury_weeks_remaining <= 0

    @property
    def match_rating(self) -> int:
        if self.effective_rating is None:
            return self.rating
        return self.effective_rating

    @property
    def is_goalkeeper(self) -> bool:
        return self.position == GOALKEEPER


@dataclass(slots=True)
class Team:
    team_id: str
    name: str
    attack: float = 70.0
    midfield: float = 70.0
    defense: float = 70.0
    league: str = "Independent"
    players: list[Player] = field(default_factory=list)
    points: int = 0
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0

    MAX_SQUAD_SIZE: ClassVar[int] = 30

    def __post_init__(self) -> None:
        if len(self.players) > self.MAX_SQUAD_SIZE:
            raise ValueError(f"{self.name} squad exceeds max of {self.MAX_SQUAD_SIZE}.")

    @property
    def goal_diff(self) -> int:
        return self.goals_for - self.goals_against

    def available_players(self) -> list[Player]:
        return [p for p in self.players if p.is_available]


@dataclass(slots=True)
class Lineup:
    starting: list[Player]
    bench: list[Player]
    formation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "formation": self.formation,
            "starting": [asdict(p) for p in self.starting],
            "bench": [asdict(p) for p in self.bench],
        }


@dataclass(frozen=True, slots=True)
class PlayerRef:
    player_id: str
    name: str

    @classmethod
    def of(cls, player: Player) -> PlayerRef:
        return cls(player_id=player.player_id, name=player.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchEvent:
    minute: int
    extra_minute: int = 0
    text: str = ""
    is_important: bool = False

    kind: ClassVar[str] = "event"

    @property
    def clock(self) -> tuple[int, int]:
        return (self.minute, self.extra_minute)


@dataclass(frozen=True, slots=True, kw_only=True)
class WhistleEvent(MatchEvent):
    kind: ClassVar[str] = "whistle"


@dataclass(frozen=True, slots=True, kw_only=True)
class CommentaryEvent(MatchEvent):
    team_id: str
    player_id: str
    player_name: str

    kind: ClassVar[str] = "commentary"


@dataclass(frozen=True, slots=True, kw_only=True)
class GoalEvent(MatchEvent):
    team_id: str
    player_id: str
    player_name: str
    penalty: bool = False

    kind: ClassVar[str] = "goal"


@dataclass(frozen=True, slots=True, kw_only=True)
class CardEvent(MatchEvent):
    team_id: str
    player_id: str
    player_name: str
    card: str
    second_yellow: bool = False

    kind: ClassVar[str] = "card"


@dataclass(frozen=True, slots=True, kw_only=True)
class SubstitutionEvent(MatchEvent):
    team_id: str
    player_on: PlayerRef
    player_off: PlayerRef
    forced: bool = False

    kind: ClassVar[str] = "substitution"


@dataclass(frozen=True, slots=True, kw_only=True)
class PenaltyAwardEvent(MatchEvent):
    team_id: str
    taker: PlayerRef
    fouler: PlayerRef

    kind: ClassVar[str] = "penalty-award"


@dataclass(frozen=True, slots=True, kw_only=True)
class PenaltyMissEvent(MatchEvent):
    team_id: str
    player_id: str
    player_name: str

    kind: ClassVar[str] = "penalty-miss"


@dataclass(frozen=True, slots=True, kw_only=True)
class InjuryEvent(MatchEvent):
    team_id: str
    player_id: str
    player_name: str

    kind: ClassVar[str] = "injury"


def event_to_dict(event: MatchEvent) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": event.kind,
        "minute": event.minute,
        "extra_minute": event.extra_minute,
        "text": event.text,
        "is_important": event.is_important,
    }
    match event:
        case WhistleEvent():
            pass
        case GoalEvent(team_id=team_id, player_id=player_id, player_name=player_name, penalty=penalty):
            payload.update(team_id=team_id, player_id=player_id, player_name=player_name, penalty=penalty)
        case CardEvent(team_id=team_id, player_id=player_id, player_name=player_name, card=card, second_yellow=second):
            payload.update(
                team_id=team_id,
                player_id=player_id,
                player_name=player_name,
                card=card,
                second_yellow=second,
            )
        case SubstitutionEvent(team_id=team_id, player_on=on, player_off=off, forced=forced):
            payload.update(
                team_id=team_id,
                player_on={"player_id": on.player_id, "name": on.name},
                player_off={"player_id": off.player_id, "name": off.name},
                forced=forced,
            )
        case PenaltyAwardEvent(team_id=team_id, taker=taker, fouler=fouler):
            payload.update(
                team_id=team_id,
                taker={"player_id": taker.player_id, "name": taker.name},
                fouler={"player_id": fouler.player_id, "name": fouler.name},
            )
        case CommentaryEvent(team_id=team_id, player_id=player_id, player_name=player_name) | PenaltyMissEvent(
            team_id=team_id, player_id=player_id, player_name=player_name
        ) | InjuryEvent(team_id=team_id, player_id=player_id, player_name=player_name):
            payload.update(team_id=team_id, player_id=player_id, player_name=player_name)
        case _:
            raise TypeError(f"Unsupported match event: {event!r}")
    return payload


def event_actor_ids(event: MatchEvent) -> tuple[str, ...]:
    """Ids of the players acting in an event (incoming player for substitutions)."""
    match event:
        case GoalEvent(player_id=player_id) | CardEvent(player_id=player_id) | PenaltyMissEvent(
            player_id=player_id
        ) | InjuryEvent(player_id=player_id) | CommentaryEvent(player_id=player_id):
            return (player_id,)
        case SubstitutionEvent(player_on=on):
            return (on.player_id,)
        case PenaltyAwardEvent(taker=taker, fouler=fouler):
            return (taker.player_id, fouler.player_id)
        case _:
            return ()


@dataclass(slots=True)
class Match:
    match_id: str
    home_team_id: str
    away_team_id: str
    week: int
    home_score: int = 0
    away_score: int = 0
    played: bool = False
    events: list[MatchEvent] = field(default_factory=list)
    first_half_stoppage: int = 0
    second_half_stoppage: int = 0
    home_lineup: Lineup | None = None
    away_lineup: Lineup | None = None
    max_subs: int = 0
    home_possession_ticks: int = 0
    away_possession_ticks: int = 0

    @property
    def home_possession(self) -> float:
        total = self.home_possession_ticks + self.away_possession_ticks
        if total <= 0:
            return 0.5
        return self.home_possession_ticks / total

    def to_dict(self) -> dict[str, Any]:
        return {
            "match_id": self.match_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "week": self.week,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "played": self.played,
            "events": [event_to_dict(e) for e in self.events],
            "first_half_stoppage": self.first_half_stoppage,
            "second_half_stoppage": self.second_half_stoppage,
            "home_lineup": self.home_lineup.to_dict() if self.home_lineup else None,
            "away_lineup": self.away_lineup.to_dict() if self.away_lineup else None,
            "max_subs": self.max_subs,
            "home_possession": round(self.home_possession, 4),
        }
