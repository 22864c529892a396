from __future__ import annotations

import random

FIRST_NAMES = [
    "Alessandro", "Lorenzo", "Mattia", "Francesco", "Leonardo", "Andrea", "Riccardo", "Gabriele", "Tommaso", "Antonio",
    "Marco", "Giuseppe", "Davide", "Federico", "Michele", "Giovanni", "Roberto", "Simone", "Luca", "Stefano",
    "Dario", "Paolo", "Vincenzo", "Enrico", "Pietro", "Emanuele", "Fabio", "Nicola", "Salvatore", "Cristian",
    "James", "Harry", "Jack", "Oliver", "George", "Charlie", "Thomas", "William", "Alfie", "Joshua",
    "Callum", "Declan", "Kieran", "Lewis", "Mason", "Owen", "Reece", "Ryan", "Tyler", "Connor",
]

LAST_NAMES = [
    "Rossi", "Russo", "Ferrari", "Esposito", "Bianchi", "Romano", "Colombo", "Ricci", "Marino", "Greco",
    "Bruno", "Gallo", "Conti", "De Luca", "Mancini", "Costa", "Giordano", "Rizzo", "Lombardi", "Moretti",
    "Barbieri", "Fontana", "Santoro", "Mariani", "Rinaldi", "Caruso", "Ferrara", "Galli", "Martini", "Leone",
    "Smith", "Jones", "Taylor", "Brown", "Williams", "Wilson", "Johnson", "Davies", "Robinson", "Wright",
    "Thompson", "Evans", "Walker", "White", "Roberts", "Green", "Hall", "Wood", "Jackson", "Clarke",
]


class NameGenerator:
    def __init__(self, seed: int | str | None = None) -> None:
        self._rng = random.Random(seed)
        self._used: set[str] = set()
        self._pool = [f"{first} {last}" for first in FIRST_NAMES for last in LAST_NAMES]
        self._rng.shuffle(self._pool)
        self._idx = 0

    def next_name(self) -> str:
        while self._idx < len(self._pool):
            name = self._pool[self._idx]
            self._idx += 1
            if name not in self._used:
                self._used.add(name)
                return name

        suffix = 2
        while True:
            base = self._pool[self._rng.randrange(0, len(self._pool))]
            candidate = f"{base} {suffix}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate
            suffix += 1
