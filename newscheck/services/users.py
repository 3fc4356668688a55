import logging
from typing import Optional

from newscheck.services.errors import (
    ConflictError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
)
from newscheck.storage import repository as repo
from newscheck.storage.models import Account, Admin, CurrentUser, User
from newscheck.utils.tz_utils import now_iso

logger = logging.getLogger(__name__)


def is_admin(db: repo.Db, user_id: str) -> bool:
    return repo.find_one(db, "admins", Admin, user_id=user_id) is not None


def require_user(caller: Optional[str]) -> str:
    if not caller:
        raise NotAuthenticatedError()
    return caller


def require_admin(db: repo.Db, caller: Optional[str]) -> str:
    user_id = require_user(caller)
    if not is_admin(db, user_id):
        raise NotAuthorizedError()
    return user_id


def current_user(caller: Optional[str]) -> Optional[CurrentUser]:
    if not caller:
        return None
    db = repo.snapshot()
    user = repo.find_one(db, "users", User, id=caller)
    if not user:
        return None
    return CurrentUser(**user.model_dump(), is_admin=is_admin(db, caller))


def init_first_admin(caller: Optional[str]) -> bool:
    """Primeiro chamador vira admin; depois disso sempre False."""
    user_id = require_user(caller)
    with repo.transaction() as db:
        if db["admins"]:
            return False
        repo.insert(db, "admins", Admin(user_id=user_id, added_at=now_iso()))
    logger.info("Primeiro admin definido: %s", user_id)
    return True


def make_admin(caller: Optional[str], email: str) -> str:
    user_id = require_user(caller)
    with repo.transaction() as db:
        # sem admins ainda: qualquer usuário autenticado pode conceder
        if db["admins"] and not is_admin(db, user_id):
            raise NotAuthorizedError()

        account = repo.find_one(db, "accounts", Account, provider_account_id=email.strip().lower())
        if not account:
            raise NotFoundError("User not found")
        if is_admin(db, account.user_id):
            raise ConflictError("User is already an admin")

        repo.insert(db, "admins", Admin(user_id=account.user_id, added_at=now_iso()))
    logger.info("Admin concedido a %s por %s", account.user_id, user_id)
    return account.user_id
