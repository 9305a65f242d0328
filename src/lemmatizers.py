# src/lemmatizers.py
import logging
from typing import Dict, FrozenSet, Optional

from src.config import LEMMA_BLACKLIST, SPACY_MODEL
from src.core.interfaces import BaseLemmatizer

logger = logging.getLogger(__name__)


class LookupLemmatizer(BaseLemmatizer):
    """Лемма по словарю словоформ; неизвестная форма возвращается в нижнем регистре."""

    def __init__(self, lemmas: Optional[Dict[str, str]] = None):
        self.lemmas = dict(lemmas or {})

    def lemmatize(self, token: str) -> str:
        lemma = self.lemmas.get(token) or self.lemmas.get(token.lower())
        return (lemma or token).lower()


class GraphLemmatizer(LookupLemmatizer):
    """
    Леммы из колонки LEMMA того же предложения CoNLL-U.
    Парсер уже лемматизировал токены, повторно модель не грузим.
    """

    def __init__(self, graph):
        super().__init__(graph.lemmas())


class SpacyLemmatizer(BaseLemmatizer):
    """
    Лемматизатор на spaCy (опциональная зависимость, extra "spacy").
    """

    def __init__(self, model: str = SPACY_MODEL):
        import spacy

        self.logger = logging.getLogger(__name__)
        self.nlp = spacy.load(model, disable=["parser", "ner"])
        self._cache: Dict[str, str] = {}
        self.logger.info(f"SpacyLemmatizer initialized with '{model}'.")

    def lemmatize(self, token: str) -> str:
        if token not in self._cache:
            doc = self.nlp(token)
            self._cache[token] = (doc[0].lemma_ if len(doc) else token).lower()
        return self._cache[token]


def relation_lemmas(rel_text: str, lemmatizer: Optional[BaseLemmatizer] = None) -> FrozenSet[str]:
    """Набор лемм отношения: по пробелам, в нижнем регистре, без стоп-лемм."""
    lemmatizer = lemmatizer or LookupLemmatizer()
    lemmas = {lemmatizer.lemmatize(token).lower() for token in rel_text.split(" ") if token}
    return frozenset(lemmas - LEMMA_BLACKLIST)
