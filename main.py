import argparse
import logging

import yaml
from rich.console import Console
from rich.table import Table

import src.config as config
from src.extractor import PatternExtractor
from src.ingestion.loader import ConlluLoader

# Настройка логирования
logging.basicConfig(level=logging.INFO, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

console = Console()


def load_config(path=config.PATTERNS_PATH):
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


def main():
    parser = argparse.ArgumentParser(description="Извлечение отношений из графов зависимостей (CoNLL-U).")
    parser.add_argument("conllu", nargs="+", help="Файлы CoNLL-U")
    parser.add_argument("--patterns", default=str(config.PATTERNS_PATH), help="YAML с шаблонами")
    parser.add_argument("--minimal", action="store_true", help="Без раскрытия: только вершины ролей")
    args = parser.parse_args()

    cfg = load_config(args.patterns)
    expand = cfg.get("expand", True) and not args.minimal
    extractors = [PatternExtractor(p, expand=expand) for p in cfg["patterns"]]
    logger.info(f"Loaded {len(extractors)} patterns from {args.patterns}")

    # Предложения читаем один раз, шаблоны применяем к каждому
    loader = ConlluLoader(strict=cfg.get("strict_validation", False))
    sentences = list(loader.load_stream(args.conllu))
    logger.info(f"Loaded {len(sentences)} sentences")

    table = Table(title="Extractions")
    for column in ("sent_id", "arg1", "rel", "arg2", "clausal", "modifier"):
        table.add_column(column)

    total = 0
    for extractor in extractors:
        for sent_id, ex in extractor.extract_corpus(sentences):
            table.add_row(
                sent_id, ex.arg1_text, ex.rel_text, ex.arg2_text,
                ex.clausal.text if ex.clausal else "",
                ex.modifier.text if ex.modifier else ""
            )
            total += 1

    console.print(table)
    logger.info(f"Done: {total} extractions")


if __name__ == "__main__":
    main()
