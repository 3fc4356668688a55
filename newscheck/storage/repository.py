import os, json
import logging
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel

from newscheck.config import DB_PATH

logger = logging.getLogger(__name__)

COLLECTIONS = ("categories", "news", "users", "accounts", "sessions", "admins")

db_lock = Lock()

Db = Dict[str, List[Dict[str, Any]]]
M = TypeVar("M", bound=BaseModel)


def _empty_db() -> Db:
    return {name: [] for name in COLLECTIONS}


def load_db() -> Db:
    if not os.path.exists(DB_PATH):
        return _empty_db()
    try:
        with open(DB_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, ValueError):
        logger.warning("%s está vazio ou corrompido. Recriando do zero.", DB_PATH)
        return _empty_db()
    if not isinstance(raw, dict):
        logger.warning("%s em formato inesperado. Recriando do zero.", DB_PATH)
        return _empty_db()
    db = _empty_db()
    for name in COLLECTIONS:
        db[name] = list(raw.get(name) or [])
    return db


def save_db(db: Db):
    os.makedirs(os.path.dirname(os.path.abspath(DB_PATH)), exist_ok=True)
    tmp_path = f"{DB_PATH}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(db, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, DB_PATH)


def snapshot() -> Db:
    """Leitura consistente (sem gravar)."""
    with db_lock:
        return load_db()


@contextmanager
def transaction() -> Iterator[Db]:
    """
    Carrega o banco sob o lock global e grava ao final.
    Se o bloco levantar exceção nada é gravado: cada request é atômico.
    """
    with db_lock:
        db = load_db()
        yield db
        save_db(db)


# ---------- Helpers por coleção ----------

def find_all(db: Db, collection: str, model: Type[M], **match: Any) -> List[M]:
    return [
        model(**doc) for doc in db[collection]
        if all(doc.get(k) == v for k, v in match.items())
    ]


def find_one(db: Db, collection: str, model: Type[M], **match: Any) -> Optional[M]:
    for doc in db[collection]:
        if all(doc.get(k) == v for k, v in match.items()):
            return model(**doc)
    return None


def insert(db: Db, collection: str, item: BaseModel) -> BaseModel:
    db[collection].append(item.model_dump())
    return item


def patch(db: Db, collection: str, doc_id: str, **fields: Any) -> bool:
    for doc in db[collection]:
        if doc.get("id") == doc_id:
            doc.update(fields)
            return True
    return False


def delete(db: Db, collection: str, **match: Any) -> int:
    before = len(db[collection])
    db[collection] = [
        doc for doc in db[collection]
        if not all(doc.get(k) == v for k, v in match.items())
    ]
    return before - len(db[collection])
