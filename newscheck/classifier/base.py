from abc import ABC, abstractmethod
from typing import Literal
from pydantic import BaseModel


class VerdictResult(BaseModel):
    verdict: Literal["real", "fake"]
    reason: str


class BaseVerdictClassifier(ABC):
    @abstractmethod
    def classify(self, title: str, content: str) -> VerdictResult:
        pass
