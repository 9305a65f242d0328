# src/core/data_structures.py
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from src.config import PROPER_NOUN_POSTAGS
from src.core.interval import Interval


class Direction(str, Enum):
    """Направление обхода ребра относительно текущего узла."""
    UP = "up"  # к вершине (governor)
    DOWN = "down"  # к зависимому (dependent)


class DependencyNode(BaseModel):
    """
    Узел графа зависимостей: токен (или многотокенная единица).
    Узлы неизменяемы и упорядочены по индексам, поэтому множество узлов
    всегда можно отрендерить в порядке чтения.
    """
    model_config = ConfigDict(frozen=True)

    text: str  # текст токена(ов) как в предложении
    postag: str  # PTB (XPOS) если есть, иначе UPOS
    indices: Tuple[int, ...]  # 1-based позиции токенов в предложении
    lemma: str = "_"

    @model_validator(mode='after')
    def check_indices(self):
        if not self.indices:
            raise ValueError(f"Node '{self.text}' must cover at least one token index")
        if list(self.indices) != sorted(set(self.indices)):
            raise ValueError(f"Indices of node '{self.text}' must be ordered and unique: {self.indices}")
        return self

    @property
    def is_proper_noun(self) -> bool:
        return self.postag in PROPER_NOUN_POSTAGS

    @property
    def span(self) -> Interval:
        return Interval.span([self.indices])

    def __lt__(self, other: "DependencyNode") -> bool:
        return (self.indices, self.text) < (other.indices, other.text)

    def __repr__(self):
        return f"DependencyNode('{self.text}', {self.postag}, {list(self.indices)})"


class DependencyEdge(BaseModel):
    """Направленное ребро governor -> dependent с меткой отношения (nsubj, dobj, ...)."""
    model_config = ConfigDict(frozen=True)

    source: DependencyNode
    dest: DependencyNode
    label: str

    def __repr__(self):
        return f"{self.source.text} -{self.label}-> {self.dest.text}"
