# src/pattern.py
"""
Минимальный движок шаблонов зависимостей: линейная цепочка узлов и рёбер.

    {old} <ccomp< {rel} >nsubj> {arg}

`{a} >l> {b}` - a управляет b по метке l; `{a} <l< {b}` - b управляет a.
Альтернативы меток: `>dobj|iobj>`.
"""
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Tuple

from src.core.data_structures import DependencyEdge, DependencyNode, Direction
from src.errors import PatternSyntaxError
from src.graph import DependencyGraph

_CAPTURE_RE = re.compile(r"^\{(\w+)\}$")
_EDGE_RE = re.compile(r"^([<>])([^<>\s]+)\1$")


@dataclass(frozen=True)
class EdgeStep:
    labels: FrozenSet[str]
    direction: Direction  # DOWN: левый узел управляет правым

    def __str__(self):
        arrow = ">" if self.direction == Direction.DOWN else "<"
        return f"{arrow}{'|'.join(sorted(self.labels))}{arrow}"


@dataclass(frozen=True)
class Match:
    """
    Результат сопоставления шаблона: роль -> узел графа,
    плюс путь из рёбер (bipath) в порядке шаблона.
    """
    node_groups: Mapping[str, DependencyNode]
    edges: Tuple[DependencyEdge, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # копия только для чтения: извлечения держат ссылку на сопоставление
        object.__setattr__(self, "node_groups", MappingProxyType(dict(self.node_groups)))
        object.__setattr__(self, "edges", tuple(self.edges))

    def __hash__(self):
        return hash((tuple(self.node_groups.items()), self.edges))

    def __getitem__(self, role: str) -> DependencyNode:
        return self.node_groups[role]

    def __str__(self):
        groups = ", ".join(f"{role}={node.text}" for role, node in self.node_groups.items())
        return f"Match({groups})"


class DependencyPattern:
    def __init__(self, captures: List[str], steps: List[EdgeStep]):
        if len(captures) != len(steps) + 1:
            raise PatternSyntaxError("Pattern must alternate node captures and edges")
        if len(set(captures)) != len(captures):
            raise PatternSyntaxError(f"Duplicate capture names: {captures}")
        self.captures = captures
        self.steps = steps

    @classmethod
    def deserialize(cls, string: str) -> "DependencyPattern":
        captures, steps = [], []
        for i, piece in enumerate(string.split()):
            if i % 2 == 0:
                m = _CAPTURE_RE.match(piece)
                if not m:
                    raise PatternSyntaxError(f"Expected node capture at '{piece}' in: {string}")
                captures.append(m.group(1))
            else:
                m = _EDGE_RE.match(piece)
                if not m:
                    raise PatternSyntaxError(f"Expected edge at '{piece}' in: {string}")
                direction = Direction.DOWN if m.group(1) == ">" else Direction.UP
                steps.append(EdgeStep(frozenset(m.group(2).split("|")), direction))
        if not captures:
            raise PatternSyntaxError("Empty pattern")
        return cls(captures, steps)

    def apply(self, graph: DependencyGraph, anchor: Optional[DependencyNode] = None) -> List[Match]:
        """Все сопоставления цепочки; при anchor первый узел шаблона фиксирован."""
        starts = [anchor] if anchor is not None else list(graph.nodes)
        matches = []
        for start in starts:
            self._extend(graph, [start], [], matches)
        return matches

    def _extend(self, graph, nodes, path, matches):
        if len(nodes) == len(self.captures):
            matches.append(Match(dict(zip(self.captures, nodes)), tuple(path)))
            return

        step = self.steps[len(path)]
        current = nodes[-1]
        for dedge in sorted(graph.dedges(current), key=lambda d: d.end):
            if dedge.direction != step.direction or dedge.label not in step.labels:
                continue
            # узлы в одном сопоставлении не повторяются
            if dedge.end in nodes:
                continue
            self._extend(graph, nodes + [dedge.end], path + [dedge.edge], matches)

    def __str__(self):
        pieces = [f"{{{self.captures[0]}}}"]
        for step, capture in zip(self.steps, self.captures[1:]):
            pieces += [str(step), f"{{{capture}}}"]
        return " ".join(pieces)
