"""
Générateurs d'ids de blocs — stratégie injectable.
Un générateur est un simple callable sans argument qui retourne un BlockId.
"""
import itertools
import random
import time
from typing import Callable, Optional

from ..blocks import BlockId

IdGenerator = Callable[[], BlockId]


class TimestampIdGenerator:
    """
    Production : millisecondes courantes + suffixe aléatoire dans [0, 1).
    Même forme que les ids déjà stockés (ex : 1718000000000.4321).
    """

    def __init__(self, clock: Callable[[], float] = time.time, rng: Optional[random.Random] = None):
        self._clock = clock
        self._rng = rng or random.Random()

    def __call__(self) -> float:
        return int(self._clock() * 1000) + self._rng.random()


class SequentialIdGenerator:
    """
    Tests : séquence déterministe.

        >>> gen = SequentialIdGenerator("b")
        >>> gen(), gen()
        ('b1', 'b2')

    Avec prefix=None, retourne des int (1, 2, 3…).
    """

    def __init__(self, prefix: Optional[str] = "b", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> BlockId:
        n = next(self._counter)
        return n if self.prefix is None else f"{self.prefix}{n}"
