"""
fedstore/followers.py

Followers remotos de um usuário local, um arquivo JSON por actor.

A existência do arquivo É o predicado "é follower": não há flag separada.
Adicionar de novo o mesmo actor sobrescreve o arquivo.
"""

from pathlib import Path
from typing import Iterator

from fedstore.errors import Status
from fedstore.naming import JSON_SUFFIX, name_for
from fedstore.storage import mtime, read_json, scan, write_json

FOLLOWERS_DIR = "followers"


class FollowerStore:
    def __init__(self, user):
        self.user = user
        self.directory = user.path / FOLLOWERS_DIR

    def filename(self, actor: str) -> Path:
        return self.directory / f"{name_for(actor)}{JSON_SUFFIX}"

    def add(self, actor: str, document: dict) -> Status:
        fn = self.filename(actor)
        status = Status.CREATED

        try:
            write_json(fn, document)
        except OSError as e:
            self.user.log.error(f"follower_add {actor}: {e}")
            status = Status.WRITE_FAILED

        self.user.log.trace(2, f"follower_add {actor} {fn}")

        return status

    def remove(self, actor: str) -> Status:
        """Garante que o arquivo não existe. Sempre retorna OK."""
        fn = self.filename(actor)

        try:
            fn.unlink(missing_ok=True)
        except OSError as e:
            self.user.log.warning(f"follower_del {actor}: {e}")

        self.user.log.trace(2, f"follower_del {actor} {fn}")

        return Status.OK

    def exists(self, actor: str) -> bool:
        return mtime(self.filename(actor)) != 0.0

    def list(self) -> Iterator[dict]:
        for fn in scan(self.directory, f"*{JSON_SUFFIX}"):
            document = read_json(fn)
            if document is not None:
                yield document
