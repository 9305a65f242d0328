from pathlib import Path

# Определение базовых путей относительно корня проекта
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "config"
PATTERNS_PATH = CONFIG_DIR / "patterns.yaml"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Метки, по которым аргумент "дорастает" от вершины до полной именной группы
ARGUMENT_EXPANSION_LABELS = frozenset({
    "det", "prep_of", "amod", "num", "number", "nn", "poss", "quantmod", "neg"
})

# Придаточные при аргументе (подключаются целым поддеревом).
# Не подключаются, если в раскрытии уже есть имя собственное.
ARGUMENT_CLAUSE_LABELS = frozenset({
    "rcmod", "infmod", "partmod", "ref", "prepc_of"
})

# Сочинение: and / or
CONJUNCTION_LABELS = frozenset({"conj_and", "conj_or"})

# Служебные зависимые предиката: вспомогательные глаголы, связка, частицы
RELATION_ATTACHMENT_LABELS = frozenset({"aux", "cop", "auxpass", "prt"})
ADVERB_MODIFIER_LABEL = "advmod"
ADVERB_POSTAG = "RB"
COPULA_LABEL = "cop"

# Дополнения присоединяются к отношению только если такое ребро ровно одно
DIRECT_OBJECT_LABEL = "dobj"
INDIRECT_OBJECT_LABEL = "iobj"

ADVERBIAL_CLAUSE_LABEL = "advcl"

# Одиночные wh-местоимения (who/whom) не несут смысла в составе отношения
WH_PRONOUN_POSTAG = "WP"

PROPER_NOUN_POSTAGS = frozenset({"NNP", "NNPS", "PROPN"})

# "X said that ..." - атрибуция. Условные придаточные используют тот же шаблон.
CLAUSE_PATTERN = "{old} <ccomp< {rel} >nsubj> {arg}"

# Леммы-связки, которые не учитываются в наборе лемм отношения
LEMMA_BLACKLIST = frozenset({
    "be", "for", "in", "than", "up", "as", "to", "at", "on", "by", "with", "from", "like", "of"
})

# Модель spaCy для SpacyLemmatizer (опционально)
SPACY_MODEL = "en_core_web_sm"
