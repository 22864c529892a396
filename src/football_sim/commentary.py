from __future__ import annotations

import random

GOAL_LINES = [
    "{player} lets fly from twenty-five yards and it flies in!",
    "{player} climbs highest at the far post and heads it home!",
    "A flowing team move is finished off by {player} with a simple tap-in.",
    "{player} skips past two challenges and slots it into the bottom corner!",
    "A mix-up at the back lets {player} nip in and score!",
    "{player} meets it on the volley and rifles it into the roof of the net!",
    "{player} spots the keeper off his line and chips him. Sublime.",
]

PENALTY_AWARD_LINES = [
    "PENALTY! {other} brings down {player} inside the box and the referee points to the spot.",
    "Handball! {other} blocks it with an arm. Penalty given!",
    "A clumsy challenge from {other} on {player}. That is a clear penalty!",
    "The whistle goes: {other} hauls {player} down in the area. Spot kick!",
]

PENALTY_GOAL_LINES = [
    "{player} sends the keeper the wrong way. Coolly done.",
    "{player} smashes the penalty into the top corner!",
    "Nerves of steel from {player}, who rolls the penalty home.",
    "The keeper gets a glove to it but {player}'s penalty has too much power!",
]

PENALTY_MISS_LINES = [
    "SAVED! The keeper reads it and denies {player}!",
    "MISSED! {player} drags the penalty wide of the post!",
    "OFF THE BAR! {player} goes for power and hits the woodwork!",
    "A poor penalty from {player}, straight at the goalkeeper.",
]

CHANCE_LINES = [
    "{player} hits the post! So close!",
    "Superb save from the keeper to keep out {player}!",
    "{player} fires just wide of the upright.",
    "A last-ditch tackle stops {player} from pulling the trigger.",
]

YELLOW_CARD_LINES = [
    "A late challenge from {player} and the referee shows yellow.",
    "{player} tugs an opponent's shirt. Cynical, and booked.",
    "{player} argues with the referee and goes into the book.",
    "A reckless slide tackle from {player} earns a yellow card.",
]

SECOND_YELLOW_LINES = [
    "That is a second yellow for {player}! Off he goes!",
    "{player} was already on a booking and fouls again. Second yellow, RED CARD!",
    "Foolish from {player}, already booked. He takes an early bath.",
]

RED_CARD_LINES = [
    "{player} goes in with both feet! Straight red card!",
    "Shameful behaviour from {player}. The referee has no choice: red card!",
    "{player} denies a clear goalscoring opportunity and is sent off!",
    "Violent conduct from {player} off the ball. Straight red!",
]

SUBSTITUTION_LINES = [
    "Substitution for {team}: {on} replaces {off}.",
    "{team} make a change, {off} makes way for {on}.",
    "Fresh legs for {team} as {on} comes on for {off}.",
    "A tactical switch: {on} enters the fray in place of {off}.",
]

INJURY_LINES = [
    "{player} is down and clutching a hamstring. The physio is on.",
    "{player} cannot continue after that knock.",
    "Bad news for {team}: {player} is hurt and signals to the bench.",
]

INJURY_NO_SUB_LINES = [
    "{team} have no changes left and must play on without {player}.",
]

KICKOFF_TEXT = "The referee blows the whistle and we are underway!"
SECOND_HALF_TEXT = "The second half begins."
STOPPAGE_TEXT = "{minutes} minutes of stoppage time indicated."
HALF_TIME_TEXT = "Half-time whistle."
FULL_TIME_TEXT = "Full time! The referee ends the match."


def render(lines: list[str], rng: random.Random, **names: str) -> str:
    return rng.choice(lines).format(**names)
