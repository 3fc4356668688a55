import os
from typing import List
from dotenv import load_dotenv

# Carrega variáveis do .env
load_dotenv(override=True)

DB_PATH = os.getenv(
    "NEWSCHECK_DB_PATH",
    os.path.join(os.path.dirname(__file__), "storage", "data", "newscheck_db.json"),
)

VERDICT_PROVIDER = os.getenv("VERDICT_PROVIDER", "random")    # "random" ou "model"
VERDICT_MODEL_NAME = os.getenv("VERDICT_MODEL_NAME", "hamzab/roberta-fake-news-classification")
# rótulos do modelo que significam "fake" (ex.: "label_0" p/ modelos com rótulos genéricos)
VERDICT_FAKE_LABELS = os.getenv("VERDICT_FAKE_LABELS", "fake,false,unreliable").split(",")

CLASSIFY_INTERVAL_MINUTES = int(os.getenv("CLASSIFY_INTERVAL_MINUTES", "15"))  # retry de veredito pendente

SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "720"))  # 30 dias

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def allowed_origins() -> List[str]:
    raw = os.getenv("ALLOWED_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]
