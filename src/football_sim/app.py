from __future__ import annotations

import random

from .config import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER
from .models import Match, Player, Team
from .names import NameGenerator

MIN_GENERATED_RATING = 55
MAX_GENERATED_RATING = 88

# (role, squad slots, which team axis seeds the role's ratings)
SQUAD_PLAN: tuple[tuple[str, int, str], ...] = (
    (GOALKEEPER, 3, "defense"),
    (DEFENDER, 8, "defense"),
    (MIDFIELDER, 8, "midfield"),
    (FORWARD, 6, "attack"),
)

SERIE_A_CLUBS: tuple[tuple[str, str, int, int, int], ...] = (
    ("INT", "Inter", 93, 91, 90),
    ("MIL", "Milan", 89, 86, 85),
    ("JUV", "Juventus", 87, 88, 88),
    ("NAP", "Napoli", 89, 86, 85),
    ("ATA", "Atalanta", 88, 86, 83),
    ("ROM", "Roma", 85, 84, 83),
    ("LAZ", "Lazio", 85, 84, 83),
    ("FIO", "Fiorentina", 84, 83, 82),
    ("BOL", "Bologna", 80, 81, 80),
    ("TOR", "Torino", 79, 79, 80),
    ("UDI", "Udinese", 78, 76, 77),
    ("EMP", "Empoli", 75, 76, 76),
    ("VER", "Verona", 75, 74, 75),
    ("COM", "Como", 78, 77, 76),
    ("PAR", "Parma", 77, 76, 75),
    ("CAG", "Cagliari", 75, 75, 74),
    ("GEN", "Genoa", 76, 77, 77),
    ("MON", "Monza", 76, 77, 76),
    ("LEC", "Lecce", 75, 75, 75),
    ("VEN", "Venezia", 74, 74, 73),
)


def _squad_baseline(axis_rating: float) -> float:
    # Team axes describe the stars; filler players sit below them.
    if axis_rating >= 90:
        return axis_rating - 13
    if axis_rating >= 85:
        return axis_rating - 10
    if axis_rating >= 80:
        return axis_rating - 7
    return axis_rating - 4


def build_squad(
    team_id: str,
    attack: float,
    midfield: float,
    defense: float,
    rng: random.Random,
    name_gen: NameGenerator,
) -> list[Player]:
    axes = {"attack": attack, "midfield": midfield, "defense": defense}
    squad: list[Player] = []
    for role, count, axis in SQUAD_PLAN:
        baseline = _squad_baseline(axes[axis])
        for idx in range(count):
            rating = int(baseline + rng.uniform(-6.0, 6.0))
            squad.append(
                Player(
                    player_id=f"{team_id}-{role}-{idx}",
                    name=name_gen.next_name(),
                    position=role,
                    rating=max(MIN_GENERATED_RATING, min(MAX_GENERATED_RATING, rating)),
                    age=rng.randint(17, 37),
                )
            )
    squad.sort(key=lambda p: p.rating, reverse=True)
    return squad


def build_team(
    team_id: str,
    name: str,
    attack: float,
    midfield: float,
    defense: float,
    league: str = "Independent",
    name_gen: NameGenerator | None = None,
) -> Team:
    rng = random.Random(f"{team_id}:{attack:.1f}:{midfield:.1f}:{defense:.1f}")
    name_gen = name_gen or NameGenerator(seed=team_id)
    return Team(
        team_id=team_id,
        name=name,
        attack=attack,
        midfield=midfield,
        defense=defense,
        league=league,
        players=build_squad(team_id, attack, midfield, defense, rng, name_gen),
    )


def build_default_teams() -> list[Team]:
    name_gen = NameGenerator(seed=7)
    return [
        build_team(team_id, name, attack, midfield, defense, league="Serie A", name_gen=name_gen)
        for team_id, name, attack, midfield, defense in SERIE_A_CLUBS
    ]


def _clock(minute: int, extra_minute: int) -> str:
    if extra_minute > 0:
        return f"{minute}+{extra_minute}'"
    return f"{minute}'"


def format_match_report(match: Match, home: Team, away: Team, important_only: bool = False) -> str:
    lines = [f"Week {match.week}: {home.name} {match.home_score}-{match.away_score} {away.name}"]
    if match.home_lineup and match.away_lineup:
        lines.append(f"Formations: {match.home_lineup.formation} v {match.away_lineup.formation}")
    lines.append(f"Possession: {match.home_possession:.0%} - {1 - match.home_possession:.0%}")
    for event in match.events:
        if important_only and not event.is_important:
            continue
        lines.append(f"{_clock(event.minute, event.extra_minute):>7} {event.kind:<13} {event.text}")
    return "\n".join(lines)
