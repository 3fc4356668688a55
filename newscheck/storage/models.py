from typing import Literal, Optional
from pydantic import BaseModel, Field

Verdict = Literal["real", "fake"]
AiVerdict = Literal["real", "fake", "pending"]


class Category(BaseModel):
    name: str
    slug: str  # único
    icon: str
    color: str


class NewsItem(BaseModel):
    id: str
    title: str
    content: str
    source_url: Optional[str] = None
    image_url: Optional[str] = None
    category: str  # slug da categoria
    submitted_by: str
    submitted_at: str
    # veredito automático
    ai_verdict: Optional[AiVerdict] = None
    ai_reason: Optional[str] = None
    ai_verified_at: Optional[str] = None
    # verificação manual (admin) -> controla visibilidade no feed
    is_manually_verified: bool = False
    manual_verdict: Optional[Verdict] = None
    verified_by: Optional[str] = None
    verified_at: Optional[str] = None


class User(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    is_anonymous: bool = False
    created_at: str


class Account(BaseModel):
    user_id: str
    provider: str = "password"
    provider_account_id: str  # email no fluxo de senha
    secret: str  # "salt$hash"


class Session(BaseModel):
    token: str
    user_id: str
    created_at: str


class Admin(BaseModel):
    user_id: str
    added_at: str


# ---------- Payloads da API ----------

class NewsSubmission(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    source_url: Optional[str] = None
    category: str = Field(..., min_length=1)
    image_url: Optional[str] = None


class AdminNewsCreate(NewsSubmission):
    verdict: Verdict
    reason: str = Field(..., min_length=1)


class VerifyRequest(BaseModel):
    verdict: Verdict


class MakeAdminRequest(BaseModel):
    email: str = Field(..., min_length=1)


class Credentials(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=8)
    name: Optional[str] = None


class SignInRequest(BaseModel):
    # sem regra de tamanho: senha errada deve dar 401, não 422
    email: str
    password: str


class CurrentUser(User):
    is_admin: bool = False
