import logging
import uuid
from typing import List, Optional

from newscheck.classifier import BaseVerdictClassifier, VerdictResult
from newscheck.services.errors import NotFoundError
from newscheck.services.users import is_admin, require_admin, require_user
from newscheck.storage import repository as repo
from newscheck.storage.models import AdminNewsCreate, NewsItem, NewsSubmission
from newscheck.utils.tz_utils import now_iso

logger = logging.getLogger(__name__)


def _newest_first(items: List[NewsItem]) -> List[NewsItem]:
    # reversed + sort estável: empates de timestamp mantêm o mais recente inserido na frente
    return sorted(reversed(items), key=lambda n: n.submitted_at, reverse=True)


def _run_classifier(classifier: BaseVerdictClassifier, title: str, content: str) -> Optional[VerdictResult]:
    try:
        return classifier.classify(title, content)
    except Exception as e:
        logger.warning("Falha no veredito automático (%s); item fica pendente.", e)
        return None


def list_verified(category: Optional[str] = None) -> List[NewsItem]:
    items = repo.find_all(repo.snapshot(), "news", NewsItem, is_manually_verified=True)
    if category and category != "all":
        items = [n for n in items if n.category == category]
    return _newest_first(items)


def list_pending(caller: Optional[str]) -> List[NewsItem]:
    db = repo.snapshot()
    if not caller or not is_admin(db, caller):
        return []
    return _newest_first(repo.find_all(db, "news", NewsItem, is_manually_verified=False))


def get_news(caller: Optional[str], news_id: str) -> NewsItem:
    db = repo.snapshot()
    item = repo.find_one(db, "news", NewsItem, id=news_id)
    # pendentes só são visíveis para admins
    if not item or (not item.is_manually_verified and not (caller and is_admin(db, caller))):
        raise NotFoundError("News not found")
    return item


def submit(caller: Optional[str], payload: NewsSubmission, classifier: BaseVerdictClassifier) -> str:
    user_id = require_user(caller)
    result = _run_classifier(classifier, payload.title, payload.content)
    now = now_iso()
    item = NewsItem(
        id=str(uuid.uuid4()),
        **payload.model_dump(),
        submitted_by=user_id,
        submitted_at=now,
        ai_verdict=result.verdict if result else "pending",
        ai_reason=result.reason if result else None,
        ai_verified_at=now if result else None,
        is_manually_verified=False,
    )
    with repo.transaction() as db:
        repo.insert(db, "news", item)
    logger.info("Notícia submetida %s (%s) veredito=%s", item.id, item.category, item.ai_verdict)
    return item.id


def admin_create(caller: Optional[str], payload: AdminNewsCreate) -> str:
    now = now_iso()
    with repo.transaction() as db:
        user_id = require_admin(db, caller)
        item = NewsItem(
            id=str(uuid.uuid4()),
            **payload.model_dump(exclude={"verdict", "reason"}),
            submitted_by=user_id,
            submitted_at=now,
            ai_verdict=payload.verdict,
            ai_reason=payload.reason,
            ai_verified_at=now,
            is_manually_verified=True,
            manual_verdict=payload.verdict,
            verified_by=user_id,
            verified_at=now,
        )
        repo.insert(db, "news", item)
    logger.info("Notícia criada por admin %s: %s", user_id, item.id)
    return item.id


def verify(caller: Optional[str], news_id: str, verdict: str) -> NewsItem:
    """Admin confirma o veredito; re-verificar sobrescreve veredito/verificador/data."""
    with repo.transaction() as db:
        user_id = require_admin(db, caller)
        found = repo.patch(
            db, "news", news_id,
            is_manually_verified=True,
            manual_verdict=verdict,
            verified_by=user_id,
            verified_at=now_iso(),
        )
        if not found:
            raise NotFoundError("News not found")
        item = repo.find_one(db, "news", NewsItem, id=news_id)
    logger.info("Notícia %s verificada como %s por %s", news_id, verdict, user_id)
    return item


def delete_news(caller: Optional[str], news_id: str):
    with repo.transaction() as db:
        user_id = require_admin(db, caller)
        if not repo.delete(db, "news", id=news_id):
            raise NotFoundError("News not found")
    logger.info("Notícia %s removida por %s", news_id, user_id)


def classify_pending_verdicts(classifier: BaseVerdictClassifier) -> int:
    """
    Reprocessa itens com ai_verdict == "pending" (falha do provedor na submissão).
    Retorna quantos foram atualizados.
    """
    pending = repo.find_all(repo.snapshot(), "news", NewsItem, ai_verdict="pending")
    if not pending:
        logger.debug("Nenhum veredito pendente.")
        return 0

    logger.info("Reprocessando %d vereditos pendentes.", len(pending))
    updated = 0
    for item in pending:
        result = _run_classifier(classifier, item.title, item.content)
        if not result:
            continue
        with repo.transaction() as db:
            # item pode ter sido removido ou já reprocessado no meio tempo
            current = repo.find_one(db, "news", NewsItem, id=item.id)
            if not current or current.ai_verdict != "pending":
                continue
            repo.patch(
                db, "news", item.id,
                ai_verdict=result.verdict,
                ai_reason=result.reason,
                ai_verified_at=now_iso(),
            )
            updated += 1
    return updated
