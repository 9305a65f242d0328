# src/extraction/detectors.py
from typing import AbstractSet, Optional, Union

from src.config import ADVERBIAL_CLAUSE_LABEL, CLAUSE_PATTERN
from src.core.data_structures import DependencyNode, Direction
from src.core.interval import Interval
from src.extraction.expanders import expand_argument, expand_relation
from src.extraction.models import AdverbialModifier, ClausalComponent, Part
from src.graph import DependencyGraph
from src.pattern import DependencyPattern

_CLAUSE_PATTERN = DependencyPattern.deserialize(CLAUSE_PATTERN)


def clausal_component(graph: DependencyGraph, node: DependencyNode,
                      until: AbstractSet[DependencyNode],
                      pattern: Union[str, DependencyPattern, None] = None) -> Optional[ClausalComponent]:
    """
    Атрибуция ("John said that ..."): шаблон с якорем в узле отношения.
    Применяется, только если найдено ровно одно сопоставление.
    """
    if pattern is None:
        pattern = _CLAUSE_PATTERN
    elif isinstance(pattern, str):
        pattern = DependencyPattern.deserialize(pattern)

    matches = pattern.apply(graph, node)
    if len(matches) != 1:
        return None

    rel = matches[0]["rel"]
    arg = matches[0]["arg"]

    expanded_rel = expand_relation(graph, rel, frozenset(until) | {arg})
    expanded_arg = expand_argument(graph, arg, frozenset(until) | {rel})
    return ClausalComponent(expanded_rel, Part.of(expanded_arg))


def adverbial_modifier(graph: DependencyGraph, node: DependencyNode) -> Optional[AdverbialModifier]:
    """Обстоятельственное придаточное (advcl) целиком, включая всё между его узлами."""
    neighbors = graph.neighbors(
        node, lambda d: d.direction == Direction.DOWN and d.label == ADVERBIAL_CLAUSE_LABEL
    )
    if not neighbors:
        return None

    nodes = set()
    for neighbor in neighbors:
        nodes |= graph.inferiors(neighbor)

    span = Interval.span(n.indices for n in nodes)
    return AdverbialModifier(Part.of(graph.nodes_in(span)))
