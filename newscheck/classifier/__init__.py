from typing import Iterable, Optional

from .base import BaseVerdictClassifier, VerdictResult
from .random_classifier import RandomVerdictClassifier


def build_classifier(
    provider: str,
    model_name: str = "",
    fake_labels: Optional[Iterable[str]] = None,
) -> BaseVerdictClassifier:
    if provider == "random":
        return RandomVerdictClassifier()
    if provider == "model":
        from .model_classifier import ModelVerdictClassifier
        return ModelVerdictClassifier(model_name, fake_labels=fake_labels)
    raise ValueError(f"VERDICT_PROVIDER desconhecido: {provider!r}")


__all__ = ["BaseVerdictClassifier", "VerdictResult", "RandomVerdictClassifier", "build_classifier"]
