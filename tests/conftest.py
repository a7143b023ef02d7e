"""
Fixtures compartilhadas entre todos os testes.
"""

import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


# ---------------------------------------------------------------------------
# Chaves RSA geradas em memória, uma vez por sessão de testes
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def key_document(rsa_private_key) -> dict:
    """Documento no formato do key.json."""
    return {
        "secret": rsa_private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode(),
        "public": rsa_private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode(),
    }


# ---------------------------------------------------------------------------
# Ambiente isolado
# `autouse=True` garante que nenhum teste herde o DEBUG do shell
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)


# ---------------------------------------------------------------------------
# Servidor e usuários em disco
# ---------------------------------------------------------------------------


@pytest.fixture
def write_server(tmp_path):
    """Factory que grava um server.json em tmp_path."""

    def _write(**overrides) -> dict:
        cfg = {
            "host": "social.test",
            "prefix": "/fed",
            "dbglevel": 2,
            "max_timeline_entries": 128,
        }
        cfg.update(overrides)
        (tmp_path / "user").mkdir(exist_ok=True)
        (tmp_path / "server.json").write_text(json.dumps(cfg))
        return cfg

    return _write


@pytest.fixture
def make_server(write_server, tmp_path):
    """Factory que grava o server.json e retorna o ServerConfig aberto."""
    from fedstore.config import open_server

    def _make(**overrides):
        write_server(**overrides)
        return open_server(tmp_path)

    return _make


@pytest.fixture
def server(make_server):
    return make_server()


@pytest.fixture
def make_user_tree(tmp_path, key_document):
    """Factory que cria a árvore em disco de um usuário local."""

    def _make(uid: str = "testuser", config: dict | None = None, key: dict | None = None):
        user_dir = tmp_path / "user" / uid
        for sub in ("followers", "timeline", "local"):
            (user_dir / sub).mkdir(parents=True, exist_ok=True)
        (user_dir / "user.json").write_text(
            json.dumps(config or {"uid": uid, "name": "Test User"})
        )
        (user_dir / "key.json").write_text(json.dumps(key or key_document))
        return user_dir

    return _make


@pytest.fixture
def make_user(server, make_user_tree):
    from fedstore.users import open_user

    def _make(uid: str = "testuser", srv=None):
        make_user_tree(uid)
        return open_user(srv or server, uid)

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def remote_actor_url() -> str:
    return "https://mastodon.social/users/fulano"
