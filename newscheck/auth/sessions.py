"""
Contas, sessões e resolução do chamador.

Substitui a biblioteca de autenticação do app original: contas por senha
(account id == email), login anônimo e tokens opacos de sessão.
"""
import hashlib
import hmac
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from newscheck import config
from newscheck.services.errors import ConflictError, NotAuthenticatedError
from newscheck.storage import repository as repo
from newscheck.storage.models import Account, Session, User
from newscheck.utils.tz_utils import now_iso, parse_iso

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 200_000

SESSION_TTL = timedelta(hours=config.SESSION_TTL_HOURS)


def _hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), _PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def _check_password(password: str, secret: str) -> bool:
    salt, _, _ = secret.partition("$")
    return hmac.compare_digest(_hash_password(password, salt), secret)


def _is_expired(session: Session, now: datetime) -> bool:
    created = parse_iso(session.created_at)
    return created is None or now - created > SESSION_TTL


def _prune_expired(db: repo.Db):
    """Remove sessões vencidas e usuários anônimos que ficaram sem sessão nem notícias."""
    now = datetime.now(timezone.utc)
    expired = [s.token for s in repo.find_all(db, "sessions", Session) if _is_expired(s, now)]
    for token in expired:
        repo.delete(db, "sessions", token=token)
    if not expired:
        return

    live = {doc["user_id"] for doc in db["sessions"]}
    authors = {doc.get("submitted_by") for doc in db["news"]} | {doc.get("user_id") for doc in db["admins"]}
    orphans = [
        u.id for u in repo.find_all(db, "users", User, is_anonymous=True)
        if u.id not in live and u.id not in authors
    ]
    for user_id in orphans:
        repo.delete(db, "users", id=user_id)
    logger.info("Sessões expiradas removidas: %d (anônimos órfãos: %d)", len(expired), len(orphans))


def _open_session(db: repo.Db, user_id: str) -> str:
    _prune_expired(db)
    token = secrets.token_urlsafe(32)
    repo.insert(db, "sessions", Session(token=token, user_id=user_id, created_at=now_iso()))
    return token


def sign_up(email: str, password: str, name: Optional[str] = None) -> str:
    email = email.strip().lower()
    with repo.transaction() as db:
        if repo.find_one(db, "accounts", Account, provider="password", provider_account_id=email):
            raise ConflictError("Could not create account")
        user = User(id=str(uuid.uuid4()), name=name, email=email, created_at=now_iso())
        repo.insert(db, "users", user)
        repo.insert(db, "accounts", Account(
            user_id=user.id,
            provider_account_id=email,
            secret=_hash_password(password),
        ))
        token = _open_session(db, user.id)
    logger.info("Nova conta criada: %s", user.id)
    return token


def sign_in(email: str, password: str) -> str:
    email = email.strip().lower()
    with repo.transaction() as db:
        account = repo.find_one(db, "accounts", Account, provider="password", provider_account_id=email)
        if not account or not _check_password(password, account.secret):
            raise NotAuthenticatedError("Invalid credentials")
        return _open_session(db, account.user_id)


def sign_in_anonymous() -> str:
    with repo.transaction() as db:
        user = User(id=str(uuid.uuid4()), is_anonymous=True, created_at=now_iso())
        repo.insert(db, "users", user)
        return _open_session(db, user.id)


def sign_out(token: str) -> bool:
    with repo.transaction() as db:
        return repo.delete(db, "sessions", token=token) > 0


def resolve_caller(token: Optional[str]) -> Optional[str]:
    """Token -> user id (ou None quando não há sessão válida)."""
    if not token:
        return None
    db = repo.snapshot()
    session = repo.find_one(db, "sessions", Session, token=token)
    if not session or _is_expired(session, datetime.now(timezone.utc)):
        return None
    return session.user_id
