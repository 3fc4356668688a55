import random
from typing import Dict, List, Optional

from .base import BaseVerdictClassifier, VerdictResult

REASONS: Dict[str, List[str]] = {
    "real": [
        "Multiple credible sources corroborate this information.",
        "Content aligns with verified factual data.",
        "Source has established credibility and fact-checking history.",
    ],
    "fake": [
        "No credible sources found to support these claims.",
        "Contains misleading or out-of-context information.",
        "Source lacks verification and established credibility.",
    ],
}


class RandomVerdictClassifier(BaseVerdictClassifier):
    """
    Veredito simulado: sorteia real/fake e uma das razões prontas.
    O conteúdo é ignorado; serve de placeholder até plugar um modelo real.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def classify(self, title: str, content: str) -> VerdictResult:
        verdict = self.rng.choice(["real", "fake"])
        return VerdictResult(verdict=verdict, reason=self.rng.choice(REASONS[verdict]))
