"""
fedstore/users.py

Identidade dos usuários locais.

Um usuário só é válido se o uid passa na checagem de sintaxe e se
`user.json` e `key.json` existem e parseiam. `open_user()` nunca devolve
um registro parcial: ou retorna tudo, ou levanta o erro correspondente.
"""

import logging
from pathlib import Path
from typing import Iterator

from fedstore.config import ServerConfig
from fedstore.errors import (
    InvalidUserId,
    UserConfigInvalid,
    UserConfigMissing,
    UserKeyInvalid,
    UserKeyMissing,
)
from fedstore.log import UserLogAdapter
from fedstore.naming import validate_uid
from fedstore.storage import load_json, scan

log = logging.getLogger(__name__)

USER_FILE = "user.json"
KEY_FILE = "key.json"


class UserRecord:
    def __init__(self, server: ServerConfig, uid: str, config: dict, key: dict):
        self.server = server
        self.uid = uid
        self.basedir = str(server.users_dir / uid)
        self.config = config
        self.key = key
        self.actor = f"{server.baseurl}/{uid}"
        self.log = UserLogAdapter(
            logging.getLogger("fedstore.user"), uid, self.basedir, server.dbglevel
        )

    @property
    def path(self) -> Path:
        return Path(self.basedir)

    def close(self) -> None:
        """Libera todos os campos juntos."""
        self.uid = None
        self.basedir = None
        self.config = None
        self.key = None
        self.actor = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<UserRecord uid={self.uid!r}>"


def _load(path: Path, missing, invalid):
    try:
        return load_json(path)
    except OSError:
        log.warning(f"error opening '{path}'")
        raise missing(path)
    except ValueError:
        log.warning(f"cannot parse '{path}'")
        raise invalid(path)


def open_user(server: ServerConfig, uid: str) -> UserRecord:
    """
    Abre um usuário local. Carrega `user.json` e depois `key.json`,
    parando na primeira falha.
    """
    if not validate_uid(uid):
        log.warning(f"invalid user '{uid}'")
        raise InvalidUserId(uid)

    basedir = server.users_dir / uid

    config = _load(basedir / USER_FILE, UserConfigMissing, UserConfigInvalid)
    key = _load(basedir / KEY_FILE, UserKeyMissing, UserKeyInvalid)

    return UserRecord(server, uid, config, key)


def user_list(server: ServerConfig) -> Iterator[str]:
    """
    Ids dos usuários, na ordem de enumeração do sistema de arquivos.
    Não valida os nomes; `open_user()` valida de novo.
    """
    for path in scan(server.users_dir, "*"):
        if path.is_dir():
            yield path.name
