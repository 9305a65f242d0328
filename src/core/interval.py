# src/core/interval.py
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, order=True)
class Interval:
    """
    Замкнутый диапазон позиций токенов [start, end].
    Всегда строится из индексов узлов через Interval.span.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Invalid interval: {self.start}-{self.end}")

    @classmethod
    def span(cls, index_groups: Iterable[Iterable[int]]) -> "Interval":
        """Минимальный интервал, покрывающий все переданные наборы индексов."""
        indices = [i for group in index_groups for i in group]
        if not indices:
            raise ValueError("Cannot span an empty set of indices")
        return cls(min(indices), max(indices))

    def __contains__(self, index: int) -> bool:
        return self.start <= index <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1

    def superset(self, indices: Iterable[int]) -> bool:
        return all(i in self for i in indices)

    def intersects(self, other: "Interval") -> bool:
        return self.start <= other.end and other.start <= self.end

    def borders(self, other: "Interval") -> bool:
        # Соседние, но не пересекающиеся
        return self.end + 1 == other.start or other.end + 1 == self.start

    def __repr__(self):
        return f"[{self.start}, {self.end}]"
