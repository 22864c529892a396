from __future__ import annotations

import logging
import random
from threading import Lock
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .app import build_default_teams, format_match_report
from .engine import simulate_match
from .models import Match, Team
from .schedule import generate_schedule

_log = logging.getLogger(__name__)


class ScheduleRequest(BaseModel):
    team_ids: list[str] | None = None
    seed: int | None = None


class SimulateRequest(BaseModel):
    home_team_id: str
    away_team_id: str
    week: int = 1
    seed: int | None = None


class SimService:
    def __init__(self, teams: list[Team] | None = None, seed: int | None = None) -> None:
        self.teams = teams if teams is not None else build_default_teams()
        self._rng = random.Random(seed)
        self.weeks: list[list[Match]] = []
        self.current_week = 0
        self._lock = Lock()

    def _team(self, team_id: str) -> Team:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        raise HTTPException(status_code=404, detail=f"Team '{team_id}' not found")

    def teams_summary(self) -> list[dict[str, Any]]:
        return [
            {
                "team_id": team.team_id,
                "name": team.name,
                "league": team.league,
                "attack": team.attack,
                "midfield": team.midfield,
                "defense": team.defense,
                "available_players": len(team.available_players()),
            }
            for team in self.teams
        ]

    def schedule(self) -> dict[str, Any]:
        return {
            "current_week": self.current_week,
            "weeks": [[match.to_dict() for match in week] for week in self.weeks],
        }

    def new_schedule(self, team_ids: list[str] | None = None, seed: int | None = None) -> dict[str, Any]:
        ids = team_ids if team_ids is not None else [team.team_id for team in self.teams]
        for team_id in ids:
            self._team(team_id)
        rng = random.Random(seed) if seed is not None else self._rng
        try:
            self.weeks = generate_schedule(ids, rng=rng)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        self.current_week = 0
        _log.info("New schedule: %d teams, %d weeks", len(ids), len(self.weeks))
        return self.schedule()

    def advance(self) -> dict[str, Any]:
        if not self.weeks:
            raise HTTPException(status_code=400, detail="No schedule generated")
        if self.current_week >= len(self.weeks):
            return {"complete": True, "week": self.current_week, "results": []}

        week = self.weeks[self.current_week]
        results: list[Match] = []
        for idx, fixture in enumerate(week):
            played = simulate_match(
                self._team(fixture.home_team_id),
                self._team(fixture.away_team_id),
                fixture.week,
                match_id=fixture.match_id,
                rng=self._rng,
            )
            week[idx] = played
            results.append(played)
        self.current_week += 1
        _log.info("Simulated week %d (%d matches)", self.current_week, len(results))
        return {
            "complete": self.current_week >= len(self.weeks),
            "week": self.current_week,
            "results": [match.to_dict() for match in results],
        }

    def simulate(self, home_team_id: str, away_team_id: str, week: int, seed: int | None = None) -> dict[str, Any]:
        home = self._team(home_team_id)
        away = self._team(away_team_id)
        rng = random.Random(seed) if seed is not None else self._rng
        try:
            match = simulate_match(home, away, week, rng=rng)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        payload = match.to_dict()
        payload["report"] = format_match_report(match, home, away, important_only=True)
        return payload


service = SimService()
app = FastAPI(title="Football League Simulator API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/teams")
def teams() -> list[dict[str, Any]]:
    with service._lock:
        return service.teams_summary()


@app.get("/api/schedule")
def schedule() -> dict[str, Any]:
    with service._lock:
        return service.schedule()


@app.post("/api/schedule")
def new_schedule(payload: ScheduleRequest) -> dict[str, Any]:
    with service._lock:
        return service.new_schedule(team_ids=payload.team_ids, seed=payload.seed)


@app.post("/api/advance")
def advance() -> dict[str, Any]:
    with service._lock:
        return service.advance()


@app.post("/api/simulate")
def simulate(payload: SimulateRequest) -> dict[str, Any]:
    with service._lock:
        return service.simulate(
            home_team_id=payload.home_team_id,
            away_team_id=payload.away_team_id,
            week=payload.week,
            seed=payload.seed,
        )
