# src/errors.py


class InvalidMatchError(ValueError):
    """
    Некорректное сопоставление ролей (ошибка вызывающего кода):
    нет arg1, arg2 или ни одной роли rel*.
    """

    def __init__(self, role: str, match):
        self.role = role
        self.match = match
        super().__init__(f"no {role}: {match}")


class PatternSyntaxError(ValueError):
    """Строка шаблона не разбирается."""
