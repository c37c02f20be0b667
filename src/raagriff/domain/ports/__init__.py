"""Domain ports (interfaces) for dependency inversion."""

from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


# Hey future me - random.Random already satisfies this protocol, so production
# code just passes random.Random() (or the module-level SystemRandom) and tests pass
# random.Random(seed) or a tiny fake that returns a scripted sequence.
@runtime_checkable
class RandomSource(Protocol):
    """Uniform random source used by the shuffle and sampling heuristics."""

    def random(self) -> float:
        """Return a float uniformly drawn from [0.0, 1.0)."""
        ...

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        """Return k unique elements chosen from population."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        ...


__all__ = ["RandomSource"]
