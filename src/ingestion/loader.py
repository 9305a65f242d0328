# src/ingestion/loader.py
import logging
from pathlib import Path
from typing import Generator, List, Union

from conllu import TokenList, parse_incr

from src.ingestion.validators import DataValidator

logger = logging.getLogger(__name__)


class ConlluLoader:
    """Потоковое чтение предложений CoNLL-U с валидацией."""

    def __init__(self, strict: bool = True):
        self.strict_validation = strict

    def load_stream(self, file_paths: List[Union[str, Path]]) -> Generator[TokenList, None, None]:
        """
        Потоковый генератор валидированных предложений.
        """
        for fp in map(Path, file_paths):
            logger.info(f"Parsing file: {fp.name}")
            with open(fp, "r", encoding="utf-8") as f:
                # parse_incr читает файл лениво
                for token_list in parse_incr(f):
                    val_res = DataValidator.validate_sentence(token_list, strict=self.strict_validation)

                    if val_res.is_valid:
                        yield token_list
                    else:
                        # Логируем, но не падаем
                        sid = token_list.metadata.get('sent_id', 'UNKNOWN')
                        logger.warning(f"Skipped invalid sentence {sid} in {fp.name}: {val_res.errors}")
