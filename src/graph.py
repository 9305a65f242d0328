# src/graph.py
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx
from conllu.models import TokenList

from src.core.data_structures import DependencyEdge, DependencyNode, Direction
from src.core.interval import Interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectedEdge:
    """Ребро, увиденное из конкретного узла: вниз (к зависимому) или вверх (к вершине)."""
    edge: DependencyEdge
    direction: Direction

    @property
    def label(self) -> str:
        return self.edge.label

    @property
    def start(self) -> DependencyNode:
        return self.edge.source if self.direction == Direction.DOWN else self.edge.dest

    @property
    def end(self) -> DependencyNode:
        return self.edge.dest if self.direction == Direction.DOWN else self.edge.source


EdgePredicate = Callable[[DependencyEdge], bool]
DirectedEdgePredicate = Callable[[DirectedEdge], bool]


def _any_edge(_edge) -> bool:
    return True


class DependencyGraph:
    """
    Граф зависимостей одного предложения (только для чтения).
    Узлы хранятся по индексу токена, рёбра - в MultiDiGraph с меткой в качестве ключа.
    """

    def __init__(self, nodes: Iterable[DependencyNode], edges: Iterable[DependencyEdge], text: str = ""):
        self.text = text
        self._graph = nx.MultiDiGraph()
        self._by_index: Dict[int, DependencyNode] = {}

        for node in nodes:
            key = node.indices[0]
            if key in self._by_index:
                raise ValueError(f"Duplicate node index {key}: '{node.text}'")
            self._by_index[key] = node
            self._graph.add_node(key)

        for edge in edges:
            source, dest = edge.source.indices[0], edge.dest.indices[0]
            if source not in self._by_index or dest not in self._by_index:
                raise ValueError(f"Edge {edge!r} references a node outside the graph")
            self._graph.add_edge(source, dest, key=edge.label, edge=edge)

        self._nodes = tuple(sorted(self._by_index.values()))

    @classmethod
    def from_conllu(cls, sentence: TokenList) -> "DependencyGraph":
        """
        Строит граф из предложения CoNLL-U.
        Метки берутся из колонки DEPS (collapsed/enhanced: prep_of, conj_and),
        если она заполнена, иначе из HEAD/DEPREL.
        """
        # Мульти-токены (1-2) и пустые узлы (1.1) пропускаем
        valid_tokens = [t for t in sentence if isinstance(t['id'], int)]

        nodes = {}
        for t in valid_tokens:
            postag = t.get('xpos') or t.get('upos') or "_"
            nodes[t['id']] = DependencyNode(
                text=t['form'],
                postag=postag,
                indices=(t['id'],),
                lemma=t.get('lemma') or "_"
            )

        edges = []
        for t in valid_tokens:
            for head, label in cls._token_arcs(t):
                if head == 0:
                    continue
                if head not in nodes:
                    raise ValueError(f"Token {t['id']}: HEAD {head} ссылается на несуществующий ID")
                edges.append(DependencyEdge(source=nodes[head], dest=nodes[t['id']], label=label))

        logger.debug(f"Graph for sentence {sentence.metadata.get('sent_id', 'UNKNOWN')}: "
                     f"{len(nodes)} nodes, {len(edges)} edges")
        return cls(nodes.values(), edges, text=sentence.metadata.get('text', ""))

    @staticmethod
    def _token_arcs(token) -> List[Tuple[int, str]]:
        deps = token.get('deps')
        if isinstance(deps, list) and deps:
            # Головы-пустые узлы имеют id-кортеж, их пропускаем
            return [(head, label) for label, head in deps if isinstance(head, int)]
        head = token.get('head')
        if head is None:
            return []
        return [(head, token['deprel'])]

    # --- базовый доступ ---

    @property
    def nodes(self) -> Tuple[DependencyNode, ...]:
        return self._nodes

    def node(self, index: int) -> DependencyNode:
        return self._by_index[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __contains__(self, node: DependencyNode) -> bool:
        return self._by_index.get(node.indices[0]) == node

    def _key(self, node: DependencyNode) -> int:
        key = node.indices[0]
        if self._by_index.get(key) != node:
            raise KeyError(f"Node {node!r} is not part of this graph")
        return key

    def edges(self, node: Optional[DependencyNode] = None) -> List[DependencyEdge]:
        """Все рёбра графа, либо все рёбра, инцидентные узлу (входящие и исходящие)."""
        if node is None:
            return [data['edge'] for _, _, data in self._graph.edges(data=True)]
        return [d.edge for d in self.dedges(node)]

    def dedges(self, node: DependencyNode) -> List[DirectedEdge]:
        key = self._key(node)
        down = [DirectedEdge(data['edge'], Direction.DOWN)
                for _, _, data in self._graph.out_edges(key, data=True)]
        up = [DirectedEdge(data['edge'], Direction.UP)
              for _, _, data in self._graph.in_edges(key, data=True)]
        return down + up

    # --- запросы по соседям ---

    def neighbors(self, node: DependencyNode, predicate: DirectedEdgePredicate = _any_edge) -> Set[DependencyNode]:
        return {d.end for d in self.dedges(node) if predicate(d)}

    def successors(self, node: DependencyNode, predicate: EdgePredicate = _any_edge) -> Set[DependencyNode]:
        return {d.end for d in self.dedges(node) if d.direction == Direction.DOWN and predicate(d.edge)}

    def predecessors(self, node: DependencyNode, predicate: EdgePredicate = _any_edge) -> Set[DependencyNode]:
        return {d.end for d in self.dedges(node) if d.direction == Direction.UP and predicate(d.edge)}

    def inferiors(self, node: DependencyNode, predicate: EdgePredicate = _any_edge) -> Set[DependencyNode]:
        """Транзитивное замыкание вниз по рёбрам, прошедшим фильтр (включая сам узел)."""
        key = self._key(node)
        keys = nx.descendants(self._edge_view(predicate), key) | {key}
        return {self._by_index[k] for k in keys}

    def connected(self, node: DependencyNode, predicate: EdgePredicate = _any_edge) -> Set[DependencyNode]:
        """Компонента связности узла по отфильтрованным рёбрам без учёта направления."""
        key = self._key(node)
        undirected = self._edge_view(predicate).to_undirected(as_view=True)
        return {self._by_index[k] for k in nx.node_connected_component(undirected, key)}

    def _edge_view(self, predicate: EdgePredicate) -> nx.MultiDiGraph:
        """Представление графа, в котором остались только рёбра, прошедшие фильтр."""
        def keep(source: int, dest: int, label: str) -> bool:
            return predicate(self._graph.edges[source, dest, label]['edge'])

        return nx.subgraph_view(self._graph, filter_edge=keep)

    def nodes_in(self, interval: Interval) -> Tuple[DependencyNode, ...]:
        """Все узлы, индексы которых целиком лежат в интервале."""
        return tuple(n for n in self._nodes if interval.superset(n.indices))

    def lemmas(self) -> Dict[str, str]:
        """Словоформа -> лемма по колонке LEMMA (пропуски "_" не попадают)."""
        return {n.text: n.lemma for n in self._nodes if n.lemma and n.lemma != "_"}

    def __repr__(self):
        return f"DependencyGraph({' '.join(n.text for n in self._nodes)!r})"
