# src/core/interfaces.py
from abc import ABC, abstractmethod


class BaseLemmatizer(ABC):
    @abstractmethod
    def lemmatize(self, token: str) -> str:
        """
        Принимает словоформу.
        Возвращает лемму (для набора лемм отношения).
        """
        pass
