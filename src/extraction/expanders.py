# src/extraction/expanders.py
from typing import AbstractSet, List

from src.config import (
    ADVERB_MODIFIER_LABEL, ADVERB_POSTAG, ARGUMENT_CLAUSE_LABELS, ARGUMENT_EXPANSION_LABELS,
    CONJUNCTION_LABELS, COPULA_LABEL, DIRECT_OBJECT_LABEL, INDIRECT_OBJECT_LABEL,
    RELATION_ATTACHMENT_LABELS, WH_PRONOUN_POSTAG,
)
from src.core.data_structures import DependencyEdge, DependencyNode
from src.core.interval import Interval
from src.expansions import NodeGroup, augment, components, expand
from src.extraction.models import Part, nodes_to_string
from src.graph import DependencyGraph


def expand_argument(graph: DependencyGraph, node: DependencyNode,
                    until: AbstractSet[DependencyNode]) -> NodeGroup:
    """
    Раскрывает вершину аргумента до полной группы.

    При сочинении ("meat and cheese") раскрывается каждый конъюнкт, а затем
    берутся все узлы в объединённом диапазоне - так в группу попадают
    запятые и "and", не зависящие ни от одного конъюнкта.
    """

    def expand_node(head: DependencyNode) -> NodeGroup:
        expansion = expand(graph, head, until, ARGUMENT_EXPANSION_LABELS)
        if any(n.is_proper_noun for n in expansion):
            return expansion
        clauses = components(graph, head, ARGUMENT_CLAUSE_LABELS, until, nested=False)
        return tuple(sorted(set(expansion).union(*clauses)))

    conjuncts = graph.connected(node, lambda d: d.label in CONJUNCTION_LABELS)

    if len(conjuncts) == 1:
        return expand_node(node)

    flat = [n for conjunct in sorted(conjuncts) for n in expand_node(conjunct)]
    span = Interval.span(n.indices for n in flat)
    return graph.nodes_in(span)


def expand_relation(graph: DependencyGraph, node: DependencyNode,
                    until: AbstractSet[DependencyNode]) -> Part:
    """
    Раскрывает узел отношения: вспомогательные глаголы, связка, частицы,
    наречия, модификаторы реляционных существительных и (если оно
    единственное) прямое/косвенное дополнение.
    """
    # Дополнение присоединяем, только если такое ребро ровно одно.
    # Если оно уже занято аргументом, его отсечёт until.
    incident = graph.edges(node)
    attach_labels = set()
    if sum(1 for e in incident if e.label == DIRECT_OBJECT_LABEL) == 1:
        attach_labels.add(DIRECT_OBJECT_LABEL)
    if sum(1 for e in incident if e.label == INDIRECT_OBJECT_LABEL) == 1:
        attach_labels.add(INDIRECT_OBJECT_LABEL)

    def pred(edge: DependencyEdge) -> bool:
        # сам узел отношения повторно не добавляем
        if edge.dest == node:
            return False
        if edge.label == ADVERB_MODIFIER_LABEL and edge.dest.postag == ADVERB_POSTAG:
            return True
        return edge.label in RELATION_ATTACHMENT_LABELS

    # "He is the *best* president of the USA"
    noun_expansion = expand(graph, node, until, ARGUMENT_EXPANSION_LABELS)

    # модификаторы связки висят на другом узле: "he *will* be the president"
    copulas = sorted(graph.predecessors(node, lambda e: e.label == COPULA_LABEL))
    copula_groups = augment(graph, copulas[0], until, pred, anchor=node) if copulas else []

    # метка может уже попасть в noun_expansion, если глагольное ребро
    # идёт между двумя именными метками
    attached = [tuple(n for n in group if n not in noun_expansion)
                for group in augment(graph, node, until, pred)]
    objects = components(graph, node, attach_labels, until, nested=True)

    groups: List[NodeGroup] = list(copula_groups) + [
        group for group in [noun_expansion] + attached + objects
        if group and not (len(group) == 1 and group[0].postag == WH_PRONOUN_POSTAG)
    ]
    if not groups:
        groups = [(node,)]

    ordered = sorted(groups, key=lambda group: Interval.span(n.indices for n in group))
    text = " ".join(nodes_to_string(group) for group in ordered)
    return Part.of((n for group in groups for n in group), text)
