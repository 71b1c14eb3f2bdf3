"""
Placeholder computer opponent: plays a random legal path.

Pure function of the legal paths and the random source, so tests can make it deterministic with a seeded `random.Random`.
"""

import random
from typing import Sequence

from src.checkers.moves import Path
from src.core.exceptions import GameStateError


def choose_move(legal_paths: Sequence[Path], rng: random.Random) -> Path:
    if not legal_paths:
        raise GameStateError("Cannot choose a move: there are no legal paths.")
    return rng.choice(list(legal_paths))
