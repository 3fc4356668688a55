import logging
from typing import List

from newscheck.storage import repository as repo
from newscheck.storage.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Politics", "politics", "🏛️", "#3B82F6"),
    ("Technology", "technology", "💻", "#8B5CF6"),
    ("Health", "health", "🏥", "#10B981"),
    ("Science", "science", "🔬", "#F59E0B"),
    ("Entertainment", "entertainment", "🎬", "#EC4899"),
    ("Sports", "sports", "⚽", "#EF4444"),
    ("Business", "business", "📈", "#6366F1"),
    ("World", "world", "🌍", "#14B8A6"),
]


def list_categories() -> List[Category]:
    return repo.find_all(repo.snapshot(), "categories", Category)


def seed_categories() -> int:
    """Insere as categorias fixas apenas se o banco ainda não tiver nenhuma."""
    with repo.transaction() as db:
        if db["categories"]:
            return 0
        for name, slug, icon, color in DEFAULT_CATEGORIES:
            repo.insert(db, "categories", Category(name=name, slug=slug, icon=icon, color=color))
    logger.info("Categorias padrão criadas (%d).", len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)
