from typing import Callable, Iterable, Optional

from .base import BaseVerdictClassifier, VerdictResult

# rótulos nomeados usados pelos modelos de fake news do Hub;
# modelos com LABEL_0/LABEL_1 genéricos precisam configurar VERDICT_FAKE_LABELS
DEFAULT_FAKE_LABELS = ("fake", "false", "unreliable")


def _load_pipeline(model_name: str) -> Callable:
    # torch/transformers só carregam quando o provedor "model" é usado
    import torch
    from transformers import pipeline

    device = 0 if torch.cuda.is_available() else -1
    return pipeline("text-classification", model=model_name, device=device)


class ModelVerdictClassifier(BaseVerdictClassifier):
    """
    Veredito via pipeline de text-classification do Hugging Face.
    O rótulo do modelo é comparado com `fake_labels`; qualquer outro vira real.
    A confiança do modelo vai na razão.
    """

    def __init__(
        self,
        model_name: str,
        fake_labels: Optional[Iterable[str]] = None,
        pipe: Optional[Callable] = None,
    ):
        self.model_name = model_name
        self.fake_labels = {l.strip().lower() for l in (fake_labels or DEFAULT_FAKE_LABELS) if l.strip()}
        self.pipe = pipe or _load_pipeline(model_name)

    def classify(self, title: str, content: str) -> VerdictResult:
        text = f"{title.strip()}. {content.strip()}"
        out = self.pipe(text, truncation=True, max_length=512)[0]
        label = str(out["label"]).lower()
        score = float(out["score"])
        verdict = "fake" if label in self.fake_labels else "real"
        reason = f"Model {self.model_name} classified this as {verdict} ({score:.0%} confidence)."
        return VerdictResult(verdict=verdict, reason=reason)
