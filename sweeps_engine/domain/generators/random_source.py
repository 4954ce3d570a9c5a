"""Randomness source injected into every outcome generator"""
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource(ABC):
    """Port for uniform floats in [0, 1); all other draws derive from next()"""

    @abstractmethod
    def next(self) -> float:
        pass

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]"""
        return low + min(int(self.next() * (high - low + 1)), high - low)

    def uniform(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.randint(0, len(items) - 1)]

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        """k distinct items drawn without replacement"""
        if k > len(population):
            raise ValueError(f"Sample of {k} exceeds population of {len(population)}")
        pool = list(population)
        picked = []
        for _ in range(k):
            picked.append(pool.pop(self.randint(0, len(pool) - 1)))
        return picked


class SystemRandomSource(RandomSource):
    """Pseudo-random source; pass a seed for replayable sequences"""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random()
