# src/extraction/models.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, Optional, Tuple

from src.core.data_structures import DependencyEdge, DependencyNode
from src.core.interfaces import BaseLemmatizer
from src.core.interval import Interval
from src.lemmatizers import relation_lemmas


def nodes_to_string(nodes: Iterable[DependencyNode]) -> str:
    return " ".join(node.text for node in nodes)


@dataclass(frozen=True)
class Part:
    """
    Часть извлечения: упорядоченные по индексу узлы без повторов и их текст.
    """
    nodes: Tuple[DependencyNode, ...]
    text: str

    @classmethod
    def of(cls, nodes: Iterable[DependencyNode], text: Optional[str] = None) -> "Part":
        ordered = tuple(sorted(set(nodes)))
        return cls(ordered, text if text is not None else nodes_to_string(ordered))

    @property
    def span(self) -> Interval:
        return Interval.span(n.indices for n in self.nodes)

    def __repr__(self):
        return f"Part('{self.text}')"


@dataclass(frozen=True)
class ClausalComponent:
    """Придаточное при отношении: "John said" для "John said that ..."."""
    rel: Part
    arg: Part

    @property
    def text(self) -> str:
        return self.arg.text + " " + self.rel.text


@dataclass(frozen=True)
class AdverbialModifier:
    contents: Part

    @property
    def text(self) -> str:
        return self.contents.text


class Extraction(ABC):
    """
    Извлечение (arg1; rel; arg2).

    Равенство и хеш определяются только по трём текстам, поэтому извлечения
    из разных сопоставлений и даже разных графов с одинаковым текстом равны.
    """

    def __init__(self, rel_lemmas: AbstractSet[str]):
        self._rel_lemmas = frozenset(rel_lemmas)

    @property
    @abstractmethod
    def arg1_text(self) -> str:
        pass

    @property
    @abstractmethod
    def rel_text(self) -> str:
        pass

    @property
    @abstractmethod
    def arg2_text(self) -> str:
        pass

    @abstractmethod
    def replace_relation(self, relation: str) -> "Extraction":
        pass

    @property
    def rel_lemmas(self) -> FrozenSet[str]:
        return self._rel_lemmas

    @property
    def texts(self) -> Tuple[str, str, str]:
        return self.arg1_text, self.rel_text, self.arg2_text

    def soft_match(self, other: "Extraction") -> bool:
        """
        Нестрогое совпадение: аргументы вложены друг в друга (в любую сторону),
        наборы лемм отношения равны.
        """
        return ((other.arg1_text in self.arg1_text or self.arg1_text in other.arg1_text)
                and self.rel_lemmas == other.rel_lemmas
                and (other.arg2_text in self.arg2_text or self.arg2_text in other.arg2_text))

    def __eq__(self, other):
        if not isinstance(other, Extraction):
            return NotImplemented
        return self.texts == other.texts

    def __hash__(self):
        return hash(self.texts)

    def __str__(self):
        return "(" + "; ".join(self.texts) + ")"


class SimpleExtraction(Extraction):
    """Минимальный вариант: только три строки."""

    def __init__(self, arg1_text: str, rel_text: str, arg2_text: str,
                 rel_lemmas: Optional[AbstractSet[str]] = None,
                 lemmatizer: Optional[BaseLemmatizer] = None):
        if rel_lemmas is None:
            rel_lemmas = relation_lemmas(rel_text, lemmatizer)
        super().__init__(rel_lemmas)
        self._arg1_text = arg1_text
        self._rel_text = rel_text
        self._arg2_text = arg2_text
        self._lemmatizer = lemmatizer

    @property
    def arg1_text(self) -> str:
        return self._arg1_text

    @property
    def rel_text(self) -> str:
        return self._rel_text

    @property
    def arg2_text(self) -> str:
        return self._arg2_text

    def replace_relation(self, relation: str) -> "SimpleExtraction":
        return SimpleExtraction(self.arg1_text, relation, self.arg2_text, lemmatizer=self._lemmatizer)

    def __repr__(self):
        return f"SimpleExtraction{self}"


class DetailedExtraction(Extraction):
    """
    Полный вариант: части с узлами графа, исходное сопоставление и экстрактор,
    опционально придаточное и обстоятельственный модификатор.
    """

    def __init__(self, extractor, match, arg1: Part, rel: Part, arg2: Part,
                 clausal: Optional[ClausalComponent] = None,
                 modifier: Optional[AdverbialModifier] = None,
                 lemmatizer: Optional[BaseLemmatizer] = None):
        super().__init__(relation_lemmas(rel.text, lemmatizer))
        self._extractor = extractor
        self._match = match
        self._arg1 = arg1
        self._rel = rel
        self._arg2 = arg2
        self._clausal = clausal
        self._modifier = modifier
        self._lemmatizer = lemmatizer

    @property
    def extractor(self):
        return self._extractor

    @property
    def match(self):
        return self._match

    @property
    def arg1(self) -> Part:
        return self._arg1

    @property
    def rel(self) -> Part:
        return self._rel

    @property
    def arg2(self) -> Part:
        return self._arg2

    @property
    def clausal(self) -> Optional[ClausalComponent]:
        return self._clausal

    @property
    def modifier(self) -> Optional[AdverbialModifier]:
        return self._modifier

    @property
    def arg1_text(self) -> str:
        return self._arg1.text

    @property
    def rel_text(self) -> str:
        return self._rel.text

    @property
    def arg2_text(self) -> str:
        return self._arg2.text

    @property
    def nodes(self) -> Tuple[DependencyNode, ...]:
        return tuple(sorted(set(self._arg1.nodes + self._rel.nodes + self._arg2.nodes)))

    @property
    def edges(self) -> Tuple[DependencyEdge, ...]:
        return tuple(self._match.edges)

    def replace_relation(self, relation: str) -> "DetailedExtraction":
        return DetailedExtraction(self._extractor, self._match, self._arg1,
                                  Part(self._rel.nodes, relation), self._arg2,
                                  clausal=self._clausal, modifier=self._modifier,
                                  lemmatizer=self._lemmatizer)

    def __repr__(self):
        return f"DetailedExtraction{self}"
