# src/expansions.py
"""
Примитивы раскрытия узла по графу зависимостей.

Все функции чистые: граф не меняется, множество `until`/`without`
(узлы, уже занятые другими ролями) передаётся явно.
"""
from typing import AbstractSet, Callable, FrozenSet, List, Tuple

from src.core.data_structures import DependencyEdge, DependencyNode, Direction
from src.core.interval import Interval
from src.graph import DependencyGraph

NodeGroup = Tuple[DependencyNode, ...]


def _until_bounds(graph: DependencyGraph, node: DependencyNode, until: AbstractSet[DependencyNode]) -> Interval:
    """Диапазон вокруг узла до ближайших занятых узлов слева и справа (не включая их)."""
    start, end = graph.nodes[0].indices[0], graph.nodes[-1].indices[-1]
    for other in until:
        if other == node:
            continue
        if other.indices[-1] < node.indices[0]:
            start = max(start, other.indices[-1] + 1)
        elif other.indices[0] > node.indices[-1]:
            end = min(end, other.indices[0] - 1)
    return Interval(start, end)


def expand(graph: DependencyGraph, node: DependencyNode,
           until: AbstractSet[DependencyNode], labels: AbstractSet[str]) -> NodeGroup:
    """
    Раскрывает узел вниз по рёбрам с метками из labels.

    Слева и справа от узла берутся потомки до первого занятого узла,
    после чего выбираются все узлы графа внутри полученного диапазона
    (так возвращаются служебные токены вроде "of", свёрнутые в prep_of).
    """
    bounds = _until_bounds(graph, node, until)
    inferiors = sorted(graph.inferiors(node, lambda e: e.label in labels))
    position = inferiors.index(node)

    taken = [node]
    for other in reversed(inferiors[:position]):
        if other in until or not bounds.superset(other.indices):
            break
        taken.append(other)
    for other in inferiors[position + 1:]:
        if other in until or not bounds.superset(other.indices):
            break
        taken.append(other)

    span = Interval.span(n.indices for n in taken)
    return graph.nodes_in(span)


def components(graph: DependencyGraph, node: DependencyNode, labels: AbstractSet[str],
               without: AbstractSet[DependencyNode], nested: bool) -> List[NodeGroup]:
    """
    Поддеревья, висящие на узле по рёбрам с метками из labels.

    Поддерево отбрасывается целиком, если задевает узел из without.
    При nested=False не спускаемся в вложенный компонент с той же меткой.
    """
    across = graph.neighbors(node, lambda d: d.direction == Direction.DOWN and d.label in labels)

    def inside(edge: DependencyEdge) -> bool:
        # не переходим по сочинению обратно на другой стартовый узел
        if edge.label.startswith("conj") and edge.dest in across:
            return False
        # не выходим из компонента обратно в исходный узел
        if edge.dest == node:
            return False
        return nested or edge.label not in labels

    groups = []
    for start in sorted(across):
        inferiors = graph.inferiors(start, inside)
        if not without.isdisjoint(inferiors):
            continue
        span = Interval.span(n.indices for n in inferiors)
        groups.append(graph.nodes_in(span))
    return groups


def _blocked(anchor: DependencyNode, group: NodeGroup, without: AbstractSet[DependencyNode]) -> bool:
    """Есть ли занятый узел между якорем и группой."""
    group_span = Interval.span(n.indices for n in group)
    anchor_span = anchor.span
    if group_span.end < anchor_span.start:
        gap_start, gap_end = group_span.end + 1, anchor_span.start - 1
    elif group_span.start > anchor_span.end:
        gap_start, gap_end = anchor_span.end + 1, group_span.start - 1
    else:
        return False
    if gap_end < gap_start:
        return False
    gap = Interval(gap_start, gap_end)
    return any(gap.intersects(other.span) for other in without)


def augment(graph: DependencyGraph, node: DependencyNode, without: AbstractSet[DependencyNode],
            pred: Callable[[DependencyEdge], bool], anchor: DependencyNode = None) -> List[NodeGroup]:
    """
    Группы служебных зависимых узла (каждая - зависимый со своими потомками по pred).

    Группа сохраняется, только если между ней и anchor (по умолчанию - сам узел)
    нет занятых узлов.
    """
    anchor = anchor if anchor is not None else node
    groups = []
    for child in sorted(graph.successors(node, pred)):
        if child in without:
            continue
        members: FrozenSet[DependencyNode] = frozenset(
            n for n in graph.inferiors(child, pred) if n not in without and n != anchor
        )
        group = tuple(sorted(members))
        if not group or _blocked(anchor, group, without):
            continue
        groups.append(group)
    return groups
