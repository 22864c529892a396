import random
from collections import Counter

from football_sim.app import build_team
from football_sim.config import FORM_SWING, FORMATIONS
from football_sim.lineup import RosterState, build_lineup
from football_sim.models import Player, Team


def _team() -> Team:
    return build_team("TST", "Testers", 80, 80, 80)


def _player(player_id: str, position: str, rating: int = 70, **kwargs) -> Player:
    return Player(player_id=player_id, name=f"Player {player_id}", position=position, rating=rating, **kwargs)


def test_starting_eleven_follows_formation() -> None:
    team = _team()
    for seed in range(10):
        lineup = build_lineup(team, random.Random(seed))
        assert len(lineup.starting) == 11
        assert len(lineup.bench) == len(team.players) - 11
        assert lineup.starting[0].position == "GK"
        assert lineup.formation in FORMATIONS
        roles = Counter(p.position for p in lineup.starting)
        assert dict(roles) == {k: v for k, v in FORMATIONS[lineup.formation].items() if v}


def test_best_players_start_in_each_role() -> None:
    lineup = build_lineup(_team(), random.Random(4))
    for role in ("GK", "DEF", "MID", "FWD"):
        starters = [p.match_rating for p in lineup.starting if p.position == role]
        benched = [p.match_rating for p in lineup.bench if p.position == role]
        if starters and benched:
            assert min(starters) >= max(benched)


def test_bench_sorted_by_effective_rating() -> None:
    lineup = build_lineup(_team(), random.Random(2))
    ratings = [p.match_rating for p in lineup.bench]
    assert ratings == sorted(ratings, reverse=True)


def test_form_stays_within_swing_and_squad_is_untouched() -> None:
    team = _team()
    lineup = build_lineup(team, random.Random(7))
    for player in lineup.starting + lineup.bench:
        assert player.effective_rating is not None
        assert abs(player.effective_rating - player.rating) <= FORM_SWING
    assert all(p.effective_rating is None for p in team.players)


def test_suspended_and_injured_players_left_out() -> None:
    team = _team()
    team.players[0].suspension_matches_remaining = 1
    team.players[1].injury_weeks_remaining = 3
    unavailable = {team.players[0].player_id, team.players[1].player_id}
    lineup = build_lineup(team, random.Random(1))
    picked = {p.player_id for p in lineup.starting + lineup.bench}
    assert not picked & unavailable
    assert len(picked) == len(team.players) - 2


def test_no_goalkeeper_promotes_weakest_outfielder() -> None:
    team = _team()
    for player in team.players:
        if player.position == "GK":
            player.injury_weeks_remaining = 2
    lineup = build_lineup(team, random.Random(3))
    keeper = lineup.starting[0]
    assert keeper.position == "GK"
    assert keeper.is_goalkeeper
    everyone = lineup.starting + lineup.bench
    assert keeper.match_rating == min(p.match_rating for p in everyone)
    original = next(p for p in team.players if p.player_id == keeper.player_id)
    assert original.position != "GK"
    assert sum(1 for p in lineup.starting if p.is_goalkeeper) == 1


def test_short_roles_padded_from_outfield() -> None:
    players = [_player("gk", "GK")] + [_player(f"d{i}", "DEF", rating=60 + i) for i in range(12)]
    team = Team(team_id="DEF", name="All Defenders", players=players)
    lineup = build_lineup(team, random.Random(6))
    assert len(lineup.starting) == 11
    assert lineup.starting[0].player_id == "gk"
    assert len(lineup.bench) == 2


def test_tiny_squad_fields_everyone() -> None:
    players = [_player("gk", "GK"), _player("m1", "MID"), _player("f1", "FWD")]
    team = Team(team_id="TNY", name="Tiny", players=players)
    lineup = build_lineup(team, random.Random(1))
    assert [p.player_id for p in lineup.starting][0] == "gk"
    assert len(lineup.starting) == 3
    assert lineup.bench == []


def test_fully_unavailable_squad_still_fields_a_side() -> None:
    team = _team()
    for player in team.players:
        player.suspension_matches_remaining = 1
    lineup = build_lineup(team, random.Random(1))
    assert len(lineup.starting) == 11


def test_roster_state_transitions() -> None:
    starting = [_player("gk", "GK"), _player("d1", "DEF"), _player("m1", "MID")]
    bench = [_player("m2", "MID", rating=80), _player("d2", "DEF", rating=75)]
    roster = RosterState(team_id="X", on_pitch=list(starting), bench=list(bench))

    replacement = roster.replacement_for(starting[1])
    assert replacement is not None and replacement.player_id == "d2"
    roster.substitute(starting[1], replacement)
    assert [p.player_id for p in roster.on_pitch] == ["gk", "d2", "m1"]
    assert [p.player_id for p in roster.bench] == ["m2"]
    assert roster.subs_used == 1
    assert "d2" in roster.subbed_on
    assert roster.can_substitute(max_subs=3)
    assert not roster.can_substitute(max_subs=1)

    assert roster.book(starting[2]) is False
    assert roster.book(starting[2]) is True
    roster.send_off(starting[2])
    assert roster.active_count == 2
    assert roster.active_multiplier == 2 / 11
    assert "m1" in roster.excluded


def test_replacement_falls_back_to_top_of_bench() -> None:
    roster = RosterState(
        team_id="X",
        on_pitch=[_player("f1", "FWD")],
        bench=[_player("m2", "MID"), _player("d2", "DEF")],
    )
    replacement = roster.replacement_for(roster.on_pitch[0])
    assert replacement is not None and replacement.player_id == "m2"
    empty = RosterState(team_id="Y", on_pitch=[_player("f1", "FWD")], bench=[])
    assert empty.replacement_for(empty.on_pitch[0]) is None


def test_outfielder_replacing_keeper_takes_over_in_goal() -> None:
    roster = RosterState(
        team_id="X",
        on_pitch=[_player("gk", "GK"), _player("d1", "DEF")],
        bench=[_player("m2", "MID"), _player("f2", "FWD")],
    )
    keeper = roster.on_pitch[0]
    replacement = roster.replacement_for(keeper)
    assert replacement is not None and replacement.player_id == "m2"
    placed = roster.substitute(keeper, replacement)
    assert placed.player_id == "m2"
    assert placed.is_goalkeeper
    assert roster.on_pitch[0] is placed
    assert replacement.position == "MID"

    outfield = roster.substitute(roster.on_pitch[1], roster.bench[0])
    assert outfield.position == "FWD"
