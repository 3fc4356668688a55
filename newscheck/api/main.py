import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from newscheck import config
from newscheck.auth import sessions
from newscheck.classifier import build_classifier
from newscheck.services import categories as categories_service
from newscheck.services import news as news_service
from newscheck.services import users as users_service
from newscheck.services.errors import NewsCheckError, NotAuthenticatedError
from newscheck.storage.models import (
    AdminNewsCreate,
    Credentials,
    MakeAdminRequest,
    NewsSubmission,
    SignInRequest,
    VerifyRequest,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

classifier = build_classifier(config.VERDICT_PROVIDER, config.VERDICT_MODEL_NAME, config.VERDICT_FAKE_LABELS)

# Scheduler com configurações para evitar empilhamento de jobs
scheduler = BackgroundScheduler(
    job_defaults={
        "coalesce": True,         # junta execuções atrasadas
        "max_instances": 1,       # não roda dois iguais ao mesmo tempo
        "misfire_grace_time": 30, # 30s de tolerância
    }
)


def classify_pending_job():
    n = news_service.classify_pending_verdicts(classifier)
    if n:
        logger.info("Vereditos pendentes atualizados: %d", n)


@asynccontextmanager
async def lifespan(app: FastAPI):
    categories_service.seed_categories()
    scheduler.add_job(classify_pending_job, "interval", minutes=config.CLASSIFY_INTERVAL_MINUTES, id="classify_pending")
    scheduler.start()
    yield
    scheduler.shutdown(wait=False)


#%% APP

app = FastAPI(title="NewsCheck", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=512)


@app.exception_handler(NewsCheckError)
async def newscheck_error_handler(request: Request, exc: NewsCheckError):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=exc.status_code, content={"status": "error", "error": str(exc)})


def get_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def get_caller(token: Optional[str] = Depends(get_token)) -> Optional[str]:
    return sessions.resolve_caller(token)


def ok(data=None):
    return {"status": "success", "data": data}


@app.get("/health")
def health():
    return {"status": "ok", "ts": int(time.time())}


# ---------- Auth ----------

@app.post("/auth/signup")
def signup(creds: Credentials):
    return ok({"token": sessions.sign_up(creds.email, creds.password, creds.name)})


@app.post("/auth/signin")
def signin(creds: SignInRequest):
    return ok({"token": sessions.sign_in(creds.email, creds.password)})


@app.post("/auth/anonymous")
def signin_anonymous():
    return ok({"token": sessions.sign_in_anonymous()})


@app.post("/auth/signout")
def signout(token: Optional[str] = Depends(get_token)):
    if not token:
        raise NotAuthenticatedError()
    sessions.sign_out(token)
    return ok()


# ---------- Categories ----------

@app.get("/categories")
def get_categories():
    return ok([c.model_dump() for c in categories_service.list_categories()])


@app.post("/categories/seed")
def seed_categories(caller: Optional[str] = Depends(get_caller)):
    users_service.require_user(caller)
    return ok({"inserted": categories_service.seed_categories()})


# ---------- News ----------

@app.get("/news")
def news_verified(category: Optional[str] = None):
    return ok([n.model_dump() for n in news_service.list_verified(category)])


@app.get("/news/pending")
def news_pending(caller: Optional[str] = Depends(get_caller)):
    return ok([n.model_dump() for n in news_service.list_pending(caller)])


@app.get("/news/{news_id}")
def news_detail(news_id: str, caller: Optional[str] = Depends(get_caller)):
    return ok(news_service.get_news(caller, news_id).model_dump())


@app.post("/news")
def news_submit(payload: NewsSubmission, caller: Optional[str] = Depends(get_caller)):
    return ok({"id": news_service.submit(caller, payload, classifier)})


@app.post("/news/admin")
def news_admin_create(payload: AdminNewsCreate, caller: Optional[str] = Depends(get_caller)):
    return ok({"id": news_service.admin_create(caller, payload)})


@app.post("/news/{news_id}/verify")
def news_verify(news_id: str, payload: VerifyRequest, caller: Optional[str] = Depends(get_caller)):
    return ok(news_service.verify(caller, news_id, payload.verdict).model_dump())


@app.delete("/news/{news_id}")
def news_delete(news_id: str, caller: Optional[str] = Depends(get_caller)):
    news_service.delete_news(caller, news_id)
    return ok()


# ---------- Users ----------

@app.get("/users/me")
def users_me(caller: Optional[str] = Depends(get_caller)):
    user = users_service.current_user(caller)
    return ok(user.model_dump() if user else None)


@app.post("/users/admins")
def users_make_admin(payload: MakeAdminRequest, caller: Optional[str] = Depends(get_caller)):
    return ok({"user_id": users_service.make_admin(caller, payload.email)})


@app.post("/users/admins/init")
def users_init_first_admin(caller: Optional[str] = Depends(get_caller)):
    return ok({"created": users_service.init_first_admin(caller)})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("newscheck.api.main:app", host="0.0.0.0", port=8000, reload=True)
