# newscheck/tests/conftest.py
import random
import pytest

from newscheck.classifier import RandomVerdictClassifier


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    # Redireciona o DB para arquivo temporário vazio
    from newscheck.storage import repository as repo
    db_file = tmp_path / "newscheck_db.json"
    monkeypatch.setattr(repo, "DB_PATH", str(db_file), raising=True)
    return str(db_file)


@pytest.fixture()
def classifier():
    return RandomVerdictClassifier(rng=random.Random(42))


@pytest.fixture()
def app(monkeypatch, temp_db, classifier):
    from newscheck.api import main as api_main

    # scheduler.start/shutdown: no-op
    class DummyScheduler:
        def add_job(self, *a, **k): pass
        def start(self): pass
        def shutdown(self, wait=False): pass
    monkeypatch.setattr(api_main, "scheduler", DummyScheduler(), raising=True)

    # veredito determinístico p/ testes
    monkeypatch.setattr(api_main, "classifier", classifier, raising=True)

    return api_main.app


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient
    # Usa contexto para garantir lifespan mas com patches aplicados
    with TestClient(app) as c:
        yield c


def _signup(client, email):
    r = client.post("/auth/signup", json={"email": email, "password": "password123"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}


@pytest.fixture()
def admin_headers(client):
    headers = _signup(client, "admin@example.com")
    r = client.post("/users/admins/init", headers=headers)
    assert r.json()["data"]["created"] is True
    return headers


@pytest.fixture()
def user_headers(client):
    return _signup(client, "user@example.com")


# ---------- helpers p/ testes de serviço (sem HTTP) ----------

@pytest.fixture()
def make_user(temp_db):
    from newscheck.auth import sessions

    def _make(email):
        token = sessions.sign_up(email, "password123")
        return sessions.resolve_caller(token)
    return _make
