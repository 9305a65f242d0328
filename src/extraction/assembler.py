# src/extraction/assembler.py
import logging
from typing import Optional

from src.core.interfaces import BaseLemmatizer
from src.core.interval import Interval
from src.errors import InvalidMatchError
from src.extraction.detectors import adverbial_modifier, clausal_component
from src.extraction.expanders import expand_argument, expand_relation
from src.extraction.models import DetailedExtraction, Part, nodes_to_string
from src.graph import DependencyGraph
from src.lemmatizers import GraphLemmatizer
from src.pattern import Match

logger = logging.getLogger(__name__)


def from_match(graph: DependencyGraph, match: Match, extractor=None, expand: bool = True,
               lemmatizer: Optional[BaseLemmatizer] = None) -> Optional[DetailedExtraction]:
    """
    Собирает извлечение из сопоставления ролей.

    Нет arg1, arg2 или rel* - InvalidMatchError (ошибка вызывающего кода).
    Пересекающиеся аргументы - None: такое извлечение просто не применимо.
    """
    groups = match.node_groups

    rels = [node for role, node in sorted(groups.items()) if role.startswith("rel")]
    if not rels:
        raise InvalidMatchError("rel", match)
    if "arg1" not in groups:
        raise InvalidMatchError("arg1", match)
    if "arg2" not in groups:
        raise InvalidMatchError("arg2", match)
    arg1, arg2 = groups["arg1"], groups["arg2"]

    if expand:
        expanded_arg1 = expand_argument(graph, arg1, frozenset(rels))
        expanded_arg2 = expand_argument(graph, arg2, frozenset(rels))
        claimed = frozenset(expanded_arg1) | frozenset(expanded_arg2)
        expansions = [expand_relation(graph, rel, claimed) for rel in rels]
        rel_part = Part.of((n for e in expansions for n in e.nodes), " ".join(e.text for e in expansions))
    else:
        expanded_arg1, expanded_arg2 = (arg1,), (arg2,)
        rel_part = Part.of(rels, nodes_to_string(rels))

    nodes = frozenset(expanded_arg1) | frozenset(expanded_arg2) | frozenset(rel_part.nodes)
    clausal = next((c for c in (clausal_component(graph, rel, nodes) for rel in rels) if c is not None), None)
    modifier = next((m for m in (adverbial_modifier(graph, rel) for rel in rels) if m is not None), None)

    arg1_span = Interval.span(n.indices for n in expanded_arg1)
    arg2_span = Interval.span(n.indices for n in expanded_arg2)
    if arg1_span.intersects(arg2_span):
        logger.debug(f"invalid: arguments overlap: {nodes_to_string(expanded_arg1)}, "
                     f"{nodes_to_string(expanded_arg2)}")
        return None

    return DetailedExtraction(
        extractor, match,
        Part.of(expanded_arg1), rel_part, Part.of(expanded_arg2),
        clausal=clausal, modifier=modifier,
        lemmatizer=lemmatizer or GraphLemmatizer(graph)
    )
