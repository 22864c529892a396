import random

from football_sim.app import build_default_teams, format_match_report
from football_sim.engine import simulate_match


def test_default_league_size() -> None:
    teams = build_default_teams()
    assert len(teams) == 20
    assert len({team.team_id for team in teams}) == 20
    assert all(team.league == "Serie A" for team in teams)


def test_squad_shape_and_ratings() -> None:
    teams = build_default_teams()
    for team in teams:
        assert len(team.players) == 25
        positions = [p.position for p in team.players]
        assert positions.count("GK") == 3
        assert positions.count("DEF") == 8
        assert positions.count("MID") == 8
        assert positions.count("FWD") == 6
        assert all(55 <= p.rating <= 88 for p in team.players)
        ratings = [p.rating for p in team.players]
        assert ratings == sorted(ratings, reverse=True)


def test_player_names_and_ids_are_league_unique() -> None:
    teams = build_default_teams()
    names = [player.name for team in teams for player in team.players]
    ids = [player.player_id for team in teams for player in team.players]
    assert len(names) == len(set(names))
    assert len(ids) == len(set(ids))


def test_default_teams_are_reproducible() -> None:
    assert build_default_teams() == build_default_teams()


def test_match_report_lists_timeline() -> None:
    teams = build_default_teams()
    home, away = teams[0], teams[1]
    match = simulate_match(home, away, week=4, rng=random.Random(19))
    report = format_match_report(match, home, away)
    lines = report.splitlines()
    assert lines[0] == f"Week 4: {home.name} {match.home_score}-{match.away_score} {away.name}"
    assert lines[1].startswith("Formations: ")
    assert len(lines) == 3 + len(match.events)
    assert "Full time!" in lines[-1]
    short = format_match_report(match, home, away, important_only=True)
    assert len(short.splitlines()) < len(lines)
