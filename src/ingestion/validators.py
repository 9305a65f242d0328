# src/ingestion/validators.py
from conllu import TokenList
from typing import List
import logging

logger = logging.getLogger(__name__)


class ValidationResult:
    """DTO для результатов валидации."""

    def __init__(self, is_valid: bool, errors: List[str]):
        self.is_valid = is_valid
        self.errors = errors


class DataValidator:
    """
    Валидатор предложений CoNLL-U перед построением графа зависимостей.
    Проверяет FORM, ссылки HEAD/DEPS и число корней.
    """

    @staticmethod
    def validate_sentence(token_list: TokenList, strict: bool = True) -> ValidationResult:
        errors = []

        # Мульти-словные токены (1-2) и пустые узлы (1.1) в граф не попадают
        tokens = [t for t in token_list if isinstance(t['id'], int)]
        ids = {t['id'] for t in tokens}

        if not tokens:
            errors.append("ERROR: Предложение без токенов")

        roots = 0
        for token in tokens:
            token_id = token['id']

            if not token['form']:
                errors.append(f"Token {token_id}: Пустое поле FORM")

            head = token['head']
            if head == 0:
                roots += 1
            elif isinstance(head, int) and head not in ids:
                errors.append(f"Token {token_id}: HEAD {head} ссылается на несуществующий ID")

            # В DEPS головы могут быть пустыми узлами (кортежи) - их не проверяем
            deps = token.get('deps')
            if isinstance(deps, list):
                for label, dep_head in deps:
                    if isinstance(dep_head, int) and dep_head != 0 and dep_head not in ids:
                        errors.append(f"Token {token_id}: DEPS {dep_head}:{label} ссылается на несуществующий ID")

        # Корень должен быть ровно один; в lenient режиме допускаем "мусор"
        if roots != 1 and strict:
            errors.append(f"ERROR: Найдено {roots} корней (ожидается 1)")

        return ValidationResult(len(errors) == 0, errors)
