# src/extractor.py
import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from conllu.models import TokenList

from src.core.interfaces import BaseLemmatizer
from src.extraction import DetailedExtraction, from_match
from src.graph import DependencyGraph
from src.pattern import DependencyPattern

logger = logging.getLogger(__name__)


class PatternExtractor:
    """
    Экстрактор по одному шаблону: шаблон -> сопоставления -> извлечения.
    Сопоставления без валидного извлечения (пересекающиеся аргументы) пропускаются.
    """

    def __init__(self, pattern: Union[str, DependencyPattern], expand: bool = True,
                 lemmatizer: Optional[BaseLemmatizer] = None):
        if isinstance(pattern, str):
            pattern = DependencyPattern.deserialize(pattern)
        self.pattern = pattern
        self.expand = expand
        self.lemmatizer = lemmatizer

    def extract(self, graph: DependencyGraph) -> List[DetailedExtraction]:
        extractions = []
        seen = set()
        for match in self.pattern.apply(graph):
            extraction = from_match(graph, match, self, expand=self.expand, lemmatizer=self.lemmatizer)
            if extraction is None or extraction in seen:
                continue
            seen.add(extraction)
            extractions.append(extraction)
        return extractions

    def extract_corpus(self, sentences: Iterable[TokenList]) -> Iterator[Tuple[str, DetailedExtraction]]:
        """
        Потоковая обработка предложений CoNLL-U.
        Предложение, для которого не строится граф, логируется и пропускается.
        """
        count = 0
        for i, sentence in enumerate(sentences, 1):
            sent_id = sentence.metadata.get('sent_id', str(i))
            try:
                graph = DependencyGraph.from_conllu(sentence)
            except ValueError as e:
                logger.warning(f"Skipped sentence {sent_id}: {e}")
                continue

            for extraction in self.extract(graph):
                count += 1
                yield sent_id, extraction

        logger.info(f"Pattern '{self.pattern}': {count} extractions")

    def __str__(self):
        return f"PatternExtractor({self.pattern})"
